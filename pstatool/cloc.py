"""Invoke the ``cloc`` line counter and parse its JSON report."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .config import DEFAULT_IGNORED_DIRS, DEFAULT_IGNORED_LANGS, Settings, merge_unique
from .logging import get_logger
from .models import ClocData, Project


class ClocError(RuntimeError):
    """Raised when cloc fails or prints something that is not a cloc report."""


@dataclass
class ClocConfig:
    """Target directory and exclusions for a single cloc run."""

    path: Path
    ignored_dirs: List[str] = field(default_factory=list)
    ignored_langs: List[str] = field(default_factory=list)


def create_cloc_config(
    project: Project, path: Path, settings: Optional[Settings] = None
) -> ClocConfig:
    """Combine the global exclusions with the project's own comma-separated lists."""
    base_dirs: Sequence[str] = settings.ignored_dirs if settings else DEFAULT_IGNORED_DIRS
    base_langs: Sequence[str] = settings.ignored_langs if settings else DEFAULT_IGNORED_LANGS
    return ClocConfig(
        path=path,
        ignored_dirs=merge_unique(base_dirs, _split_list(project.ignored_dirs)),
        ignored_langs=merge_unique(base_langs, _split_list(project.ignored_langs)),
    )


def build_command(config: ClocConfig, executable: str = "cloc") -> List[str]:
    args = [executable, "--json"]
    if config.ignored_langs:
        args.append(f"--exclude-lang={','.join(config.ignored_langs)}")
    if config.ignored_dirs:
        args.append(f"--exclude-dir={','.join(config.ignored_dirs)}")
    args.append(str(config.path))
    return args


def parse_report(output: str) -> ClocData:
    """Parse ``cloc --json`` stdout. An empty report means no files were counted."""
    if not output.strip():
        return ClocData()
    try:
        payload = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ClocError(f"cloc produced invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ClocError("cloc report must be a JSON object")
    return ClocData.from_dict(payload)


class ClocRunner:
    """Runs cloc through an injectable command runner."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        executable: str = "cloc",
    ) -> None:
        self._runner = runner or self._default_runner
        self._executable = executable
        self.logger = get_logger("cloc")

    def run(self, config: ClocConfig) -> ClocData:
        args = build_command(config, self._executable)
        self.logger.debug("Running cloc: %s", " ".join(args))
        try:
            output = self._runner(args)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise ClocError(f"cloc failed: {_describe(exc)}") from exc
        data = parse_report(output)
        self.logger.debug("cloc reported %d languages", len(data.languages))
        return data

    @staticmethod
    def _default_runner(args: Iterable[str]) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _describe(exc: Exception) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = exc.stderr.strip() if isinstance(exc.stderr, str) else ""
        return stderr or f"exit status {exc.returncode}"
    return str(exc)


__all__ = [
    "ClocConfig",
    "ClocError",
    "ClocRunner",
    "build_command",
    "create_cloc_config",
    "parse_report",
]
