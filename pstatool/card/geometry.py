"""Stacked bar layout for the ranked languages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models import RankedLanguage
from .colors import ColorRegistry

BAR_HEIGHT = 8


@dataclass(frozen=True)
class BarSegment:
    """One colored slice of the language bar."""

    name: str
    x: float
    width: float
    color: str

    @property
    def end(self) -> float:
        return self.x + self.width


def layout_bar(entries: Sequence[RankedLanguage], registry: ColorRegistry) -> List[BarSegment]:
    """Place segments left to right with no gaps, starting at x = 0."""
    segments: List[BarSegment] = []
    cumulative_x = 0.0
    for entry in entries:
        segments.append(
            BarSegment(
                name=entry.name,
                x=cumulative_x,
                width=entry.width,
                color=registry.resolve(entry.name),
            )
        )
        cumulative_x += entry.width
    return segments


def format_segment(segment: BarSegment) -> str:
    return (
        f'<rect mask="url(#rect-mask)" x="{segment.x:.2f}" y="0" '
        f'width="{segment.width:.2f}" height="{BAR_HEIGHT}" fill="{segment.color}"/>'
    )


def render_bar(entries: Sequence[RankedLanguage], registry: ColorRegistry) -> str:
    return "".join(format_segment(segment) for segment in layout_bar(entries, registry))


__all__ = ["BAR_HEIGHT", "BarSegment", "format_segment", "layout_bar", "render_bar"]
