"""Tests for the cloc runner and configuration."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path

import pytest

from pstatool.cloc import (
    ClocConfig,
    ClocError,
    ClocRunner,
    build_command,
    create_cloc_config,
    parse_report,
)
from pstatool.config import Settings
from pstatool.models import Project


def _project(**overrides: object) -> Project:
    values = {
        "github_user": "wdudokvanheel",
        "project_name": "chip8",
        "title": "Chip 8 Emu",
    }
    values.update(overrides)
    return Project(**values)  # type: ignore[arg-type]


def test_create_cloc_config_merges_project_lists(tmp_path: Path) -> None:
    project = _project(ignored_dirs="testa, testb", ignored_langs="Swift,Rust,")

    config = create_cloc_config(project, tmp_path)

    assert config.path == tmp_path
    assert "Properties" in config.ignored_langs
    assert "TOML" in config.ignored_langs
    assert "Swift" in config.ignored_langs
    assert "Rust" in config.ignored_langs
    assert "HTML" not in config.ignored_langs
    assert "" not in config.ignored_langs
    assert "testa" in config.ignored_dirs
    assert "testb" in config.ignored_dirs
    assert "testc" not in config.ignored_dirs


def test_create_cloc_config_deduplicates(tmp_path: Path) -> None:
    project = _project(ignored_dirs="target,.idea,extra")
    config = create_cloc_config(project, tmp_path)
    assert config.ignored_dirs == ["target", ".idea", ".git", ".build", "extra"]


def test_create_cloc_config_uses_settings_lists(tmp_path: Path) -> None:
    settings = Settings(ignored_dirs=["vendor"], ignored_langs=[])
    config = create_cloc_config(_project(ignored_langs="Lua"), tmp_path, settings)
    assert config.ignored_dirs == ["vendor"]
    assert config.ignored_langs == ["Lua"]


def test_build_command_includes_exclusions(tmp_path: Path) -> None:
    config = ClocConfig(path=tmp_path, ignored_dirs=["target", ".git"], ignored_langs=["TOML"])
    assert build_command(config) == [
        "cloc",
        "--json",
        "--exclude-lang=TOML",
        "--exclude-dir=target,.git",
        str(tmp_path),
    ]


def test_build_command_omits_empty_exclusions(tmp_path: Path) -> None:
    assert build_command(ClocConfig(path=tmp_path)) == ["cloc", "--json", str(tmp_path)]


def test_runner_parses_report_and_strips_sum(tmp_path: Path) -> None:
    calls: list[list[str]] = []
    report = {
        "header": {"cloc_version": "1.98"},
        "Rust": {"nFiles": 2, "blank": 1, "comment": 1, "code": 10},
        "SUM": {"nFiles": 2, "blank": 1, "comment": 1, "code": 10},
    }

    def runner(args):  # type: ignore[no-untyped-def]
        calls.append(list(args))
        return json.dumps(report)

    data = ClocRunner(runner=runner).run(ClocConfig(path=tmp_path))

    assert calls == [["cloc", "--json", str(tmp_path)]]
    assert list(data.languages) == ["Rust"]
    assert data.languages["Rust"].total_lines == 12


def test_runner_wraps_process_failures(tmp_path: Path) -> None:
    def runner(args):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(2, list(args), stderr="cloc: bad option\n")

    with pytest.raises(ClocError, match="bad option"):
        ClocRunner(runner=runner).run(ClocConfig(path=tmp_path))


def test_runner_wraps_missing_executable(tmp_path: Path) -> None:
    def runner(args):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("cloc")

    with pytest.raises(ClocError):
        ClocRunner(runner=runner).run(ClocConfig(path=tmp_path))


def test_parse_report_handles_empty_output() -> None:
    assert parse_report("   \n").languages == {}


def test_parse_report_rejects_invalid_json() -> None:
    with pytest.raises(ClocError):
        parse_report("not json")
    with pytest.raises(ClocError):
        parse_report("[1, 2]")
