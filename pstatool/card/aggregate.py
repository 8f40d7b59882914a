"""Reduce cloc output into totals and a ranked language list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, TypeVar

from ..models import ClocData, RankedLanguage, is_sum_key

TOP_N = 6
CANVAS_WIDTH = 250.0

T = TypeVar("T")


@dataclass(frozen=True)
class StatsSummary:
    """Totals over every language plus the full ranking.

    ``ranking`` covers all languages so that the percentages can be checked
    against the whole project; ``entries`` is the part that gets drawn.
    """

    total_lines: int
    total_files: int
    ranking: Tuple[RankedLanguage, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.total_lines == 0

    @property
    def entries(self) -> Tuple[RankedLanguage, ...]:
        return self.ranking[:TOP_N]


EMPTY_SUMMARY = StatsSummary(total_lines=0, total_files=0)


def aggregate(cloc: ClocData) -> StatsSummary:
    """Compute totals, percentages and bar widths for every language.

    Languages are ordered by total lines descending; equal totals are ordered
    by name so that the output does not depend on mapping order. A project
    with no lines at all collapses to :data:`EMPTY_SUMMARY`, file count
    included.
    """
    languages = [
        (name, stats)
        for name, stats in cloc.languages.items()
        if not is_sum_key(name)
    ]
    total_lines = sum(stats.total_lines for _, stats in languages)
    total_files = sum(stats.files for _, stats in languages)

    if total_lines == 0:
        return EMPTY_SUMMARY

    ranked: List[RankedLanguage] = []
    for name, stats in languages:
        percent = stats.total_lines / total_lines * 100.0
        ranked.append(
            RankedLanguage(
                name=name,
                total_lines=stats.total_lines,
                percent=percent,
                width=percent / 100.0 * CANVAS_WIDTH,
            )
        )
    ranked.sort(key=lambda entry: (-entry.total_lines, entry.name))

    return StatsSummary(
        total_lines=total_lines,
        total_files=total_files,
        ranking=tuple(ranked),
    )


def partition_columns(entries: Sequence[T]) -> Tuple[List[T], List[T]]:
    """Split ranked items into (left, right) columns by even/odd position."""
    left: List[T] = []
    right: List[T] = []
    for index, entry in enumerate(entries):
        (left if index % 2 == 0 else right).append(entry)
    return left, right


__all__ = [
    "CANVAS_WIDTH",
    "EMPTY_SUMMARY",
    "StatsSummary",
    "TOP_N",
    "aggregate",
    "partition_columns",
]
