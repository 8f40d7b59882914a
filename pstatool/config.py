"""Configuration loading for pstatool (pstatool.yml plus environment overrides)."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = "pstatool.yml"

DEFAULT_IGNORED_DIRS: Sequence[str] = ("target", ".idea", ".git", ".build")
DEFAULT_IGNORED_LANGS: Sequence[str] = (
    "JSON",
    "Markdown",
    "Maven",
    "Properties",
    "SVG",
    "TOML",
    "XML",
    "YAML",
)


class ConfigError(RuntimeError):
    """Raised when a configuration file or bundled asset cannot be parsed."""


@dataclass
class Settings:
    """Runtime settings for the card generation pipeline."""

    db_path: Path = Path("pstatool.db")
    svg_folder: Path = Path("output")
    temp_folder: Path = Path("tmp")
    ignored_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_DIRS))
    ignored_langs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_LANGS))
    interval_hours: Optional[float] = None


def load_settings(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from disk, then apply environment variable overrides.

    A missing file yields the defaults. ``ignored_dirs`` and ``ignored_langs``
    in the file extend the built-in lists rather than replacing them.
    """
    env = os.environ if environ is None else environ
    settings = Settings()
    base = Path.cwd()

    if config_path is not None:
        config_file = _resolve_config_path(config_path)
        base = config_file.parent
        if config_file.exists():
            data = _read_config(config_file)
            _apply_file_values(settings, data, base)

    db_path = _as_str(env.get("DB_PATH"))
    if db_path:
        settings.db_path = Path(db_path).expanduser()
    svg_folder = _as_str(env.get("SVG_FOLDER"))
    if svg_folder:
        settings.svg_folder = Path(svg_folder).expanduser()
    temp_folder = _as_str(env.get("TEMP_FOLDER"))
    if temp_folder:
        settings.temp_folder = Path(temp_folder).expanduser()
    interval = _as_float(env.get("INTERVAL"))
    if interval is not None:
        settings.interval_hours = check_interval(interval, "INTERVAL")

    return settings


def check_interval(hours: float, source: str) -> float:
    """Reject repeat intervals that would make the run loop spin or stall."""
    if not math.isfinite(hours) or hours <= 0:
        raise ConfigError(f"{source} must be a positive number of hours, got {hours}")
    return hours


def merge_unique(*groups: Sequence[str]) -> List[str]:
    """Concatenate string groups, trimming items and keeping first occurrences."""
    merged: List[str] = []
    seen: set[str] = set()
    for group in groups:
        for item in group:
            value = item.strip()
            if not value or value in seen:
                continue
            seen.add(value)
            merged.append(value)
    return merged


def _apply_file_values(settings: Settings, data: Dict[str, Any], base: Path) -> None:
    for key in ("db_path", "svg_folder", "temp_folder"):
        value = _as_str(data.get(key))
        if value:
            setattr(settings, key, _resolve_relative(base, value))

    settings.ignored_dirs = merge_unique(settings.ignored_dirs, _as_str_list(data.get("ignored_dirs")))
    settings.ignored_langs = merge_unique(
        settings.ignored_langs, _as_str_list(data.get("ignored_langs"))
    )

    interval = _as_float(data.get("interval_hours"))
    if interval is not None:
        settings.interval_hours = check_interval(interval, "interval_hours")


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _resolve_relative(base: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part for part in value.split(",")]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_IGNORED_DIRS",
    "DEFAULT_IGNORED_LANGS",
    "Settings",
    "check_interval",
    "load_settings",
    "merge_unique",
]
