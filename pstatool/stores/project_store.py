"""SQLite-backed project roster and latest language statistics."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..logging import get_logger
from ..models import ClocData, Project, is_sum_key

_SCHEMA = """
CREATE TABLE IF NOT EXISTS project (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user TEXT NOT NULL,
    project_name TEXT NOT NULL,
    title TEXT NOT NULL,
    ignored_dirs TEXT NULL,
    ignored_langs TEXT NULL,
    UNIQUE (user, project_name)
);

CREATE TABLE IF NOT EXISTS project_language_stat (
    project_id INTEGER NOT NULL REFERENCES project(id) ON DELETE CASCADE,
    language TEXT NOT NULL,
    files INTEGER NOT NULL,
    total_lines INTEGER NOT NULL,
    PRIMARY KEY (project_id, language)
);
"""


class ProjectStore:
    """Stores the project roster and the most recent stats per project."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.logger = get_logger("store")

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=5.0)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def init(self) -> None:
        """Create the database file and tables if they do not exist yet."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with closing(self.connect()) as conn:
            conn.executescript(_SCHEMA)

    def add_project(self, project: Project) -> int:
        """Insert a project or update its title and exclusions. Returns the row id."""
        with closing(self.connect()) as conn, conn:
            conn.execute(
                "INSERT INTO project(user, project_name, title, ignored_dirs, ignored_langs) "
                "VALUES(?, ?, ?, ?, ?) "
                "ON CONFLICT(user, project_name) DO UPDATE SET "
                "title = excluded.title, "
                "ignored_dirs = excluded.ignored_dirs, "
                "ignored_langs = excluded.ignored_langs",
                (
                    project.github_user,
                    project.project_name,
                    project.title,
                    project.ignored_dirs,
                    project.ignored_langs,
                ),
            )
            row = conn.execute(
                "SELECT id FROM project WHERE user = ? AND project_name = ?",
                (project.github_user, project.project_name),
            ).fetchone()
        return int(row["id"])

    def get_all_projects(self) -> List[Project]:
        with closing(self.connect()) as conn:
            rows = conn.execute(
                "SELECT user, project_name, title, ignored_dirs, ignored_langs "
                "FROM project ORDER BY id"
            ).fetchall()
        return [_project_from_row(row) for row in rows]

    def save_project_stats(self, user: str, project_name: str, cloc: ClocData) -> None:
        """Replace the stored stats for a project in one transaction.

        Projects that are not on the roster yet are created with their name
        as the title.
        """
        languages = [
            (language, stats)
            for language, stats in cloc.languages.items()
            if not is_sum_key(language)
        ]
        with closing(self.connect()) as conn, conn:
            row = conn.execute(
                "SELECT id FROM project WHERE user = ? AND project_name = ?",
                (user, project_name),
            ).fetchone()
            if row is None:
                cursor = conn.execute(
                    "INSERT INTO project(user, project_name, title) VALUES(?, ?, ?)",
                    (user, project_name, project_name),
                )
                project_id = cursor.lastrowid
            else:
                project_id = row["id"]

            conn.execute(
                "DELETE FROM project_language_stat WHERE project_id = ?",
                (project_id,),
            )
            conn.executemany(
                "INSERT INTO project_language_stat(project_id, language, files, total_lines) "
                "VALUES(?, ?, ?, ?)",
                [
                    (project_id, language, stats.files, stats.total_lines)
                    for language, stats in languages
                ],
            )
        self.logger.debug(
            "Saved %d language rows for %s/%s", len(languages), user, project_name
        )

    def get_project_stats(self, user: str, project_name: str) -> Dict[str, Tuple[int, int]]:
        """Return ``language -> (files, total_lines)`` for a project."""
        with closing(self.connect()) as conn:
            rows = conn.execute(
                "SELECT s.language, s.files, s.total_lines "
                "FROM project_language_stat AS s "
                "JOIN project AS p ON p.id = s.project_id "
                "WHERE p.user = ? AND p.project_name = ? "
                "ORDER BY s.language",
                (user, project_name),
            ).fetchall()
        return {row["language"]: (row["files"], row["total_lines"]) for row in rows}

    def find_project(self, user: str, project_name: str) -> Optional[Project]:
        with closing(self.connect()) as conn:
            row = conn.execute(
                "SELECT user, project_name, title, ignored_dirs, ignored_langs "
                "FROM project WHERE user = ? AND project_name = ?",
                (user, project_name),
            ).fetchone()
        return _project_from_row(row) if row is not None else None


def _project_from_row(row: sqlite3.Row) -> Project:
    return Project(
        github_user=row["user"],
        project_name=row["project_name"],
        title=row["title"],
        ignored_dirs=row["ignored_dirs"],
        ignored_langs=row["ignored_langs"],
    )


__all__ = ["ProjectStore"]
