"""Core data models shared across pstatool components."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

SUM_KEY = "SUM"


@dataclass(frozen=True)
class LanguageStats:
    """Per-language counts reported by cloc."""

    files: int
    blank: int
    comment: int
    code: int

    @property
    def total_lines(self) -> int:
        return self.blank + self.comment + self.code

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LanguageStats":
        """Build stats from a cloc language record, clamping negatives to zero."""
        return cls(
            files=_count(payload.get("nFiles", payload.get("files"))),
            blank=_count(payload.get("blank")),
            comment=_count(payload.get("comment")),
            code=_count(payload.get("code")),
        )


@dataclass(frozen=True)
class ClocHeader:
    """Tool metadata carried through untouched."""

    cloc_url: Optional[str] = None
    cloc_version: Optional[str] = None
    elapsed_seconds: Optional[float] = None
    n_files: Optional[int] = None
    n_lines: Optional[int] = None
    files_per_second: Optional[float] = None
    lines_per_second: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "ClocHeader":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            cloc_url=_as_str(payload.get("cloc_url")),
            cloc_version=_as_str(payload.get("cloc_version")),
            elapsed_seconds=_as_float(payload.get("elapsed_seconds")),
            n_files=_as_int(payload.get("n_files")),
            n_lines=_as_int(payload.get("n_lines")),
            files_per_second=_as_float(payload.get("files_per_second")),
            lines_per_second=_as_float(payload.get("lines_per_second")),
        )


@dataclass
class ClocData:
    """Parsed cloc output: header plus the per-language mapping."""

    header: ClocHeader = field(default_factory=ClocHeader)
    languages: Dict[str, LanguageStats] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ClocData":
        """Parse the top-level object printed by ``cloc --json``.

        Every key except ``header`` is a language record. The synthetic
        ``SUM`` entry is dropped regardless of case.
        """
        header = ClocHeader.from_dict(payload.get("header"))
        languages: Dict[str, LanguageStats] = {}
        for name, record in payload.items():
            if name == "header" or is_sum_key(name):
                continue
            if not isinstance(name, str) or not name or not isinstance(record, Mapping):
                continue
            languages[name] = LanguageStats.from_dict(record)
        return cls(header=header, languages=languages)


@dataclass(frozen=True)
class RankedLanguage:
    """A language's share of the project after ranking."""

    name: str
    total_lines: int
    percent: float
    width: float


@dataclass(frozen=True)
class CardFragments:
    """Markup fragments substituted into the card template."""

    total_lines: int
    total_files: int
    bar: str
    left_block: str
    right_block: str


@dataclass
class Project:
    """A tracked repository from the project roster."""

    github_user: str
    project_name: str
    title: str
    ignored_dirs: Optional[str] = None
    ignored_langs: Optional[str] = None


def is_sum_key(name: object) -> bool:
    return isinstance(name, str) and name.upper() == SUM_KEY


def _count(value: Any) -> int:
    number = _as_int(value)
    if number is None or number < 0:
        return 0
    return number


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    # JSON parsers accept Infinity and NaN; cloc never reports them.
    return number if math.isfinite(number) else None
