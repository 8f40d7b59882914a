"""Pipeline orchestration: clone, count, render, write and persist."""

from __future__ import annotations

import shutil
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .card import ColorRegistry, CardTemplate, render_card
from .cloc import ClocError, ClocRunner, create_cloc_config
from .config import Settings
from .git import CloneError, Cloner, repo_url
from .logging import get_logger
from .models import Project
from .stores import ProjectStore


@dataclass
class ProjectOutcome:
    """Result of processing a single roster entry."""

    project: Project
    svg_path: Optional[Path] = None
    saved: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def write_card(folder: Path, user: str, project_name: str, contents: str) -> Path:
    """Write ``<folder>/<user>/<project_name>.svg``, replacing any previous card."""
    subfolder = folder / user
    subfolder.mkdir(parents=True, exist_ok=True)
    svg_file = subfolder / f"{project_name}.svg"
    svg_file.write_text(contents, encoding="utf-8")
    return svg_file


class Orchestrator:
    """Runs the card pipeline for every project on the roster."""

    def __init__(
        self,
        settings: Settings,
        *,
        store: ProjectStore | None = None,
        cloner: Cloner | None = None,
        cloc_runner: ClocRunner | None = None,
        registry: ColorRegistry | None = None,
        template: CardTemplate | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.cloner = cloner or Cloner()
        self.cloc_runner = cloc_runner or ClocRunner()
        self.registry = registry
        self.template = template
        self.logger = get_logger("orchestrator")

    def process_all_projects(self) -> List[ProjectOutcome]:
        if self.store is None:
            raise RuntimeError("A project store is required to process the roster")
        projects = self.store.get_all_projects()
        self.logger.info("Updating %d projects", len(projects))
        outcomes = [self.process_project(project) for project in projects]
        failed = sum(1 for outcome in outcomes if not outcome.ok)
        if failed:
            self.logger.warning("%d of %d projects failed", failed, len(outcomes))
        return outcomes

    def process_project(self, project: Project) -> ProjectOutcome:
        """Clone, count and render one project.

        Errors are logged and recorded on the outcome so one broken
        repository does not stop the rest of the roster. The temporary
        checkout is always removed.
        """
        outcome = ProjectOutcome(project=project)
        label = f"{project.github_user}/{project.project_name}"
        checkout = self.settings.temp_folder / project.project_name

        try:
            self.logger.debug("Cloning project %s", label)
            try:
                self.cloner.clone(repo_url(project.github_user, project.project_name), checkout)
            except CloneError as exc:
                self.logger.error("Failed to clone repository %s: %s", label, exc)
                outcome.error = str(exc)
                return outcome

            config = create_cloc_config(project, checkout, self.settings)
            try:
                cloc_data = self.cloc_runner.run(config)
            except ClocError as exc:
                self.logger.error("Failed to count lines for %s: %s", label, exc)
                outcome.error = str(exc)
                return outcome

            self.logger.debug("Generating SVG file for %s", label)
            svg = render_card(
                project.title,
                cloc_data,
                registry=self.registry,
                template=self.template,
            )
            try:
                outcome.svg_path = write_card(
                    self.settings.svg_folder, project.github_user, project.project_name, svg
                )
            except OSError as exc:
                self.logger.error("Failed to write card for %s: %s", label, exc)
                outcome.error = str(exc)

            if self.store is not None:
                self.logger.debug("Saving stats to database for %s", label)
                try:
                    self.store.save_project_stats(
                        project.github_user, project.project_name, cloc_data
                    )
                    outcome.saved = True
                except sqlite3.Error as exc:
                    self.logger.error("Failed to save project %s to database: %s", label, exc)
                    outcome.error = outcome.error or str(exc)
        finally:
            self._cleanup(checkout)

        self.logger.info("Processed project %s", label)
        return outcome

    def _cleanup(self, checkout: Path) -> None:
        if not checkout.exists():
            return
        try:
            shutil.rmtree(checkout)
        except OSError as exc:
            self.logger.error("Failed to remove temp folder %s: %s", checkout, exc)


__all__ = ["Orchestrator", "ProjectOutcome", "write_card"]
