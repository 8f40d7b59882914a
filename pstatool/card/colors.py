"""Language color registry backed by the bundled ``langs.yml`` table."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Dict, Mapping

import yaml

from ..config import ConfigError

DEFAULT_COLOR = "#cccccc"
_ASSET_PACKAGE = "pstatool.assets"
_ASSET_NAME = "langs.yml"


@dataclass(frozen=True)
class ColorRegistry:
    """Immutable language name to color lookup with a fixed fallback."""

    colors: Mapping[str, str] = field(default_factory=dict)
    default: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    @classmethod
    def load(cls, text: str) -> "ColorRegistry":
        """Parse a YAML table of ``Name: {color: ...}`` records.

        Records without a color are skipped. Anything that is not a YAML
        mapping raises :class:`ConfigError`; the table ships with the package,
        so a failure here means a broken build rather than bad user input.
        """
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse language colors: {exc}") from exc
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigError("Language color table must contain a mapping at the root")

        colors: Dict[str, str] = {}
        for name, record in parsed.items():
            color = _color_of(record)
            if color is not None:
                colors[str(name)] = color
        return cls(colors=colors)

    def resolve(self, name: str) -> str:
        return self.colors.get(name, self.default)

    def __contains__(self, name: object) -> bool:
        return name in self.colors

    def __len__(self) -> int:
        return len(self.colors)


@lru_cache(maxsize=1)
def load_default_registry() -> ColorRegistry:
    """Load the bundled color table once per process."""
    try:
        text = resources.files(_ASSET_PACKAGE).joinpath(_ASSET_NAME).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read bundled {_ASSET_NAME}: {exc}") from exc
    return ColorRegistry.load(text)


def _color_of(record: Any) -> str | None:
    if not isinstance(record, dict):
        return None
    color = record.get("color")
    if isinstance(color, str) and color.strip():
        return color.strip()
    return None


__all__ = ["ColorRegistry", "DEFAULT_COLOR", "load_default_registry"]
