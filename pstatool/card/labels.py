"""Two-column legend layout for the ranked languages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple
from xml.sax.saxutils import escape

from ..models import RankedLanguage
from .aggregate import partition_columns
from .colors import ColorRegistry

ROW_HEIGHT = 25
BASE_DELAY_MS = 450
STEP_DELAY_MS = 150


@dataclass(frozen=True)
class LabelRow:
    """A legend row: swatch, name and share, positioned within its column."""

    name: str
    percent: float
    color: str
    delay_ms: int
    offset: int


def stagger_delay(rank: int) -> int:
    # Cycles every three ranks, giving a wave across both columns.
    return BASE_DELAY_MS + (rank % 3) * STEP_DELAY_MS


def layout_labels(
    entries: Sequence[RankedLanguage], registry: ColorRegistry
) -> Tuple[List[LabelRow], List[LabelRow]]:
    """Assign each entry to a column and compute its offset and delay.

    Even ranks go left and odd ranks go right. Offsets count rows within the
    column, while the animation delay follows the global rank.
    """
    left, right = partition_columns(list(enumerate(entries)))
    return _column_rows(left, registry), _column_rows(right, registry)


def _column_rows(
    ranked: Sequence[Tuple[int, RankedLanguage]], registry: ColorRegistry
) -> List[LabelRow]:
    return [
        LabelRow(
            name=entry.name,
            percent=entry.percent,
            color=registry.resolve(entry.name),
            delay_ms=stagger_delay(rank),
            offset=position * ROW_HEIGHT,
        )
        for position, (rank, entry) in enumerate(ranked)
    ]


def format_row(row: LabelRow) -> str:
    label = (
        f'<g class="stagger" style="animation-delay: {row.delay_ms}ms">\n'
        f'    <circle cx="5" cy="6" r="5" fill="{row.color}"/>\n'
        f'    <text x="15" y="10" class="lang-name">{escape(row.name)} {row.percent:.2f}%</text>\n'
        f"</g>"
    )
    return f'<g transform="translate(0, {row.offset})">{label}</g>'


def format_column(rows: Sequence[LabelRow]) -> str:
    return "\n".join(format_row(row) for row in rows)


def render_labels(
    entries: Sequence[RankedLanguage], registry: ColorRegistry
) -> Tuple[str, str]:
    left, right = layout_labels(entries, registry)
    return format_column(left), format_column(right)


__all__ = [
    "BASE_DELAY_MS",
    "LabelRow",
    "ROW_HEIGHT",
    "STEP_DELAY_MS",
    "format_column",
    "format_row",
    "layout_labels",
    "render_labels",
    "stagger_delay",
]
