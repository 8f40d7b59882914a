"""Stats card pipeline: aggregate cloc output and render the SVG card."""

from __future__ import annotations

from ..models import CardFragments, ClocData
from .aggregate import CANVAS_WIDTH, TOP_N, StatsSummary, aggregate, partition_columns
from .colors import DEFAULT_COLOR, ColorRegistry, load_default_registry
from .geometry import BarSegment, layout_bar, render_bar
from .labels import LabelRow, layout_labels, render_labels
from .template import EMPTY_BAR, CardTemplate, load_default_template


def build_fragments(summary: StatsSummary, registry: ColorRegistry) -> CardFragments:
    """Turn a summary into the markup pieces the template expects."""
    if summary.is_empty:
        return CardFragments(
            total_lines=0,
            total_files=0,
            bar=EMPTY_BAR,
            left_block="",
            right_block="",
        )
    left, right = render_labels(summary.entries, registry)
    return CardFragments(
        total_lines=summary.total_lines,
        total_files=summary.total_files,
        bar=render_bar(summary.entries, registry),
        left_block=left,
        right_block=right,
    )


def render_card(
    title: str,
    cloc: ClocData,
    *,
    registry: ColorRegistry | None = None,
    template: CardTemplate | None = None,
) -> str:
    """Render the complete SVG card for a project.

    The bundled color table and template are used unless explicit values are
    given.
    """
    if registry is None:
        registry = load_default_registry()
    if template is None:
        template = load_default_template()
    fragments = build_fragments(aggregate(cloc), registry)
    return template.render(title, fragments)


__all__ = [
    "BarSegment",
    "CANVAS_WIDTH",
    "CardTemplate",
    "ColorRegistry",
    "DEFAULT_COLOR",
    "EMPTY_BAR",
    "LabelRow",
    "StatsSummary",
    "TOP_N",
    "aggregate",
    "build_fragments",
    "layout_bar",
    "layout_labels",
    "load_default_registry",
    "load_default_template",
    "partition_columns",
    "render_bar",
    "render_card",
    "render_labels",
]
