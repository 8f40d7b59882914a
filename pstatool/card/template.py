"""Placeholder substitution into the bundled SVG card template."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import Dict, Mapping, Set
from xml.sax.saxutils import escape

from ..config import ConfigError
from ..models import CardFragments

HEADER = "#header#"
SUBHEADER = "#subheader#"
BAR_RECTS = "#bar_rects#"
LEFT_BLOCK = "#left_block#"
RIGHT_BLOCK = "#right_block#"
PLACEHOLDERS = (HEADER, SUBHEADER, BAR_RECTS, LEFT_BLOCK, RIGHT_BLOCK)

EMPTY_BAR = "<svg><!-- No code found --></svg>"

_ASSET_PACKAGE = "pstatool.assets"
_ASSET_NAME = "template.svg"
_PLACEHOLDER_PATTERN = re.compile("|".join(re.escape(token) for token in PLACEHOLDERS))


@dataclass(frozen=True)
class CardTemplate:
    """Fixed template text with ``#name#`` placeholder tokens."""

    text: str

    def substitute(self, values: Mapping[str, str]) -> str:
        """Replace the first occurrence of each token in a single pass.

        Later occurrences and tokens without a value stay verbatim, and text
        coming from ``values`` is never scanned for further tokens.
        """
        used: Set[str] = set()

        def _replace(match: re.Match[str]) -> str:
            token = match.group(0)
            if token in used or token not in values:
                return token
            used.add(token)
            return values[token]

        return _PLACEHOLDER_PATTERN.sub(_replace, self.text)

    def render(self, title: str, fragments: CardFragments) -> str:
        values: Dict[str, str] = {
            HEADER: escape(f"Stats for {title}"),
            SUBHEADER: f"{fragments.total_lines} lines of code in {fragments.total_files} files",
            BAR_RECTS: fragments.bar,
            LEFT_BLOCK: fragments.left_block,
            RIGHT_BLOCK: fragments.right_block,
        }
        return self.substitute(values)


@lru_cache(maxsize=1)
def load_default_template() -> CardTemplate:
    """Read the bundled template once per process."""
    try:
        text = resources.files(_ASSET_PACKAGE).joinpath(_ASSET_NAME).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read bundled {_ASSET_NAME}: {exc}") from exc
    return CardTemplate(text)


__all__ = [
    "BAR_RECTS",
    "CardTemplate",
    "EMPTY_BAR",
    "HEADER",
    "LEFT_BLOCK",
    "PLACEHOLDERS",
    "RIGHT_BLOCK",
    "SUBHEADER",
    "load_default_template",
]
