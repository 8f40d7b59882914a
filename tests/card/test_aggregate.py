"""Tests for the stats aggregator."""

from __future__ import annotations

import random

import pytest

from pstatool.card.aggregate import (
    CANVAS_WIDTH,
    EMPTY_SUMMARY,
    TOP_N,
    aggregate,
    partition_columns,
)
from pstatool.models import LanguageStats
from tests._fixtures.cloc_builder import build_cloc, lines


def test_aggregate_go_and_typescript() -> None:
    cloc = build_cloc({"Go": (2, 5, 3, 92), "TS": (1, 1, 1, 8)})

    summary = aggregate(cloc)

    assert summary.total_lines == 110
    assert summary.total_files == 3
    go, ts = summary.entries
    assert go.name == "Go"
    assert go.percent == pytest.approx(90.909, abs=0.001)
    assert go.width == pytest.approx(227.27, abs=0.01)
    assert ts.name == "TS"
    assert ts.percent == pytest.approx(9.091, abs=0.001)
    assert ts.width == pytest.approx(22.73, abs=0.01)


def test_aggregate_empty_mapping_returns_empty_summary() -> None:
    summary = aggregate(build_cloc({}))
    assert summary is EMPTY_SUMMARY
    assert summary.is_empty
    assert summary.entries == ()


def test_aggregate_zero_lines_ignores_file_count() -> None:
    summary = aggregate(build_cloc({"Go": (4, 0, 0, 0), "Rust": (2, 0, 0, 0)}))
    assert summary == EMPTY_SUMMARY
    assert summary.total_files == 0


def test_aggregate_truncates_to_top_six_but_totals_everything() -> None:
    counts = {f"Lang{index}": lines(100 * (index + 1), files=index + 1) for index in range(8)}

    summary = aggregate(build_cloc(counts))

    assert len(summary.entries) == TOP_N
    assert len(summary.ranking) == 8
    assert summary.total_lines == sum(100 * (index + 1) for index in range(8))
    assert summary.total_files == sum(index + 1 for index in range(8))
    assert [entry.name for entry in summary.entries] == [
        "Lang7",
        "Lang6",
        "Lang5",
        "Lang4",
        "Lang3",
        "Lang2",
    ]
    assert sum(entry.percent for entry in summary.entries) < 100


def test_aggregate_breaks_ties_by_name() -> None:
    cloc = build_cloc({"Zig": lines(10), "Ada": lines(10), "Go": lines(50), "Lua": lines(10)})
    summary = aggregate(cloc)
    assert [entry.name for entry in summary.entries] == ["Go", "Ada", "Lua", "Zig"]


def test_aggregate_strips_sum_entry() -> None:
    cloc = build_cloc({"Go": lines(30), "Rust": lines(10)})
    cloc.languages["sum"] = LanguageStats(files=2, blank=0, comment=0, code=40)

    summary = aggregate(cloc)

    assert summary.total_lines == 40
    assert [entry.name for entry in summary.ranking] == ["Go", "Rust"]


def test_aggregate_keeps_zero_line_languages_last() -> None:
    summary = aggregate(build_cloc({"Go": lines(10), "Empty": (3, 0, 0, 0)}))
    assert summary.total_files == 4
    assert summary.ranking[-1].name == "Empty"
    assert summary.ranking[-1].percent == 0
    assert summary.ranking[-1].width == 0


@pytest.mark.parametrize("seed", range(20))
def test_aggregate_properties_hold_for_random_input(seed: int) -> None:
    rng = random.Random(seed)
    counts = {
        f"L{index}": (rng.randint(0, 5), rng.randint(0, 50), rng.randint(0, 50), rng.randint(0, 500))
        for index in range(rng.randint(1, 12))
    }
    counts["Anchor"] = lines(1)

    summary = aggregate(build_cloc(counts))

    assert sum(entry.percent for entry in summary.ranking) == pytest.approx(100, abs=0.01)
    assert len(summary.entries) <= TOP_N
    for current, following in zip(summary.entries, summary.entries[1:]):
        assert current.total_lines >= following.total_lines
        assert current.percent >= following.percent
    for entry in summary.ranking:
        assert 0 <= entry.width <= CANVAS_WIDTH


def test_aggregate_is_independent_of_mapping_order() -> None:
    counts = {"Go": lines(10), "Rust": lines(10), "C": lines(5), "Lua": lines(10)}
    forward = aggregate(build_cloc(counts))
    backward = aggregate(build_cloc(dict(reversed(list(counts.items())))))
    assert forward == backward


def test_partition_columns_alternates_by_rank() -> None:
    left, right = partition_columns(["a", "b", "c", "d", "e"])
    assert left == ["a", "c", "e"]
    assert right == ["b", "d"]


def test_partition_columns_handles_empty_input() -> None:
    assert partition_columns([]) == ([], [])
