"""Tests for cloc report models."""

from __future__ import annotations

import json

from pstatool.models import ClocData, LanguageStats


CLOC_REPORT = {
    "header": {
        "cloc_url": "github.com/AlDanial/cloc",
        "cloc_version": "1.98",
        "elapsed_seconds": 0.05,
        "n_files": 5,
        "n_lines": 150,
        "files_per_second": 100.0,
        "lines_per_second": 3000.0,
    },
    "Rust": {"nFiles": 3, "blank": 10, "comment": 5, "code": 100},
    "TOML": {"nFiles": 2, "blank": 1, "comment": 0, "code": 34},
    "SUM": {"blank": 11, "comment": 5, "code": 134, "nFiles": 5},
}


def test_language_stats_total_lines() -> None:
    stats = LanguageStats(files=1, blank=2, comment=3, code=4)
    assert stats.total_lines == 9


def test_from_dict_parses_header_and_languages() -> None:
    data = ClocData.from_dict(CLOC_REPORT)

    assert data.header.cloc_version == "1.98"
    assert data.header.n_files == 5
    assert set(data.languages) == {"Rust", "TOML"}
    assert data.languages["Rust"] == LanguageStats(files=3, blank=10, comment=5, code=100)


def test_from_dict_drops_sum_in_any_case() -> None:
    data = ClocData.from_dict({"Go": {"nFiles": 1, "code": 1}, "sum": {"nFiles": 1, "code": 1}})
    assert list(data.languages) == ["Go"]


def test_from_dict_clamps_negative_and_missing_counts() -> None:
    data = ClocData.from_dict({"Go": {"nFiles": -2, "blank": -1, "code": "12"}})
    assert data.languages["Go"] == LanguageStats(files=0, blank=0, comment=0, code=12)


def test_from_dict_skips_non_mapping_records() -> None:
    data = ClocData.from_dict({"header": "nonsense", "Go": 12, "Lua": {"nFiles": 1, "code": 3}})
    assert list(data.languages) == ["Lua"]
    assert data.header.cloc_version is None


def test_from_dict_treats_non_finite_counts_as_zero() -> None:
    data = ClocData.from_dict(
        {"Go": {"nFiles": float("inf"), "blank": float("nan"), "comment": "inf", "code": 7}}
    )
    assert data.languages["Go"] == LanguageStats(files=0, blank=0, comment=0, code=7)


def test_from_dict_drops_non_finite_header_values() -> None:
    data = ClocData.from_dict(
        json.loads(
            '{"header": {"n_files": Infinity, "n_lines": NaN, "elapsed_seconds": -Infinity,'
            ' "files_per_second": "nan", "cloc_version": "1.98"},'
            ' "Go": {"nFiles": 1, "code": 3}}'
        )
    )

    assert data.header.n_files is None
    assert data.header.n_lines is None
    assert data.header.elapsed_seconds is None
    assert data.header.files_per_second is None
    assert data.header.cloc_version == "1.98"
    assert data.languages["Go"].total_lines == 3
