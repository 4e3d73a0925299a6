"""SQLite-backed storage of per-project context."""

from __future__ import annotations

import os
import sqlite3

from .constants import DB_FILENAME
from .types import ProjectContext

_SCHEMA = """
CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_path TEXT UNIQUE NOT NULL,
    project_type TEXT,
    commit_style TEXT,
    last_analyzed TEXT NOT NULL,
    readme_content TEXT
)
"""


class ProjectContextStore:
    def __init__(self, home: str) -> None:
        os.makedirs(home, exist_ok=True)
        self.db_path = os.path.join(home, DB_FILENAME)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute(_SCHEMA)
        self._conn.commit()

    def save(self, context: ProjectContext) -> None:
        self._conn.execute(
            """
            INSERT OR REPLACE INTO projects
                (project_path, project_type, commit_style, last_analyzed, readme_content)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                context.project_path,
                context.project_type,
                context.commit_style,
                context.last_analyzed,
                context.readme_content,
            ),
        )
        self._conn.commit()

    def get(self, project_path: str) -> ProjectContext | None:
        row = self._conn.execute(
            "SELECT * FROM projects WHERE project_path = ?", (project_path,)
        ).fetchone()
        if row is None:
            return None
        return ProjectContext(
            id=row["id"],
            project_path=row["project_path"],
            project_type=row["project_type"],
            commit_style=row["commit_style"],
            last_analyzed=row["last_analyzed"],
            readme_content=row["readme_content"],
        )

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> ProjectContextStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
