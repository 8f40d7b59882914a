"""Shallow repository checkout for line counting."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterable

from ..logging import get_logger

GITHUB_URL = "https://github.com/{user}/{project}.git"


class CloneError(RuntimeError):
    """Raised when a repository cannot be checked out."""


def repo_url(user: str, project: str) -> str:
    return GITHUB_URL.format(user=user, project=project)


class Cloner:
    """Fetches the tip of a branch without history."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def clone(self, url: str, dest: Path, *, branch: str = "main") -> Path:
        """Check out ``branch`` of ``url`` into ``dest`` with depth 1.

        Anything left at ``dest`` by an interrupted run is removed first.
        """
        try:
            if dest.is_dir() and not dest.is_symlink():
                self.logger.debug("Removing stale checkout at %s", dest)
                shutil.rmtree(dest)
            elif dest.exists() or dest.is_symlink():
                self.logger.debug("Removing stale file at %s", dest)
                dest.unlink()
            dest.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CloneError(f"Unable to prepare checkout at {dest}: {exc}") from exc

        args = [
            "git",
            "clone",
            "--depth",
            "1",
            "--single-branch",
            "--branch",
            branch,
            url,
            str(dest),
        ]
        self.logger.debug("Cloning %s (%s) into %s", url, branch, dest)
        try:
            self._runner(args, cwd=dest.parent)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise CloneError(f"Failed to clone {url}: {exc}") from exc
        return dest

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["CloneError", "Cloner", "repo_url"]
