"""
SQLite implementation for GenFS project storage.
"""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import Any

from genfs.databases.base import BaseProjectStore
from genfs.types import Project


class SQLiteProjectStore(BaseProjectStore):
    """SQLite-based project storage for GenFS."""

    def __init__(self, db_path: str | None = None):
        """
        Initialize SQLite project store.

        Args:
            db_path: Path to SQLite database file. None for in-memory database.
        """
        self.db_path = db_path or ":memory:"
        self.conn: sqlite3.Connection | None = None

    def initialize(self) -> None:
        """Initialize the database schema."""
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        """Create database tables if they don't exist."""
        assert self.conn is not None

        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS projects (
                project_id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL DEFAULT '',
                messages TEXT NOT NULL DEFAULT '[]',
                data TEXT NOT NULL DEFAULT '{}',
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_projects_user ON projects(user_id, updated_at DESC)"
        )

        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "SQLiteProjectStore":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _row_to_project(self, row: sqlite3.Row) -> Project:
        """Convert a database row to a Project."""
        return Project(
            project_id=row["project_id"],
            user_id=row["user_id"],
            name=row["name"],
            messages=json.loads(row["messages"]),
            data=json.loads(row["data"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create_project(self, project: Project) -> None:
        """Create a new project."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO projects (
                project_id, user_id, name, messages, data, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                project.project_id,
                project.user_id,
                project.name,
                json.dumps(project.messages),
                json.dumps(project.data),
                project.created_at,
                project.updated_at,
            ),
        )
        self.conn.commit()

    def get_project(self, project_id: str, user_id: str) -> Project | None:
        """Get a project owned by ``user_id``."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            "SELECT * FROM projects WHERE project_id = ? AND user_id = ?",
            (project_id, user_id),
        )
        row = cursor.fetchone()

        if row is None:
            return None

        return self._row_to_project(row)

    def update_project(
        self,
        project_id: str,
        user_id: str,
        messages: list[dict[str, Any]],
        data: dict[str, dict[str, Any]],
    ) -> bool:
        """Replace a project's messages and serialized file tree."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            UPDATE projects
            SET messages = ?, data = ?, updated_at = ?
            WHERE project_id = ? AND user_id = ?
            """,
            (
                json.dumps(messages),
                json.dumps(data),
                time.time(),
                project_id,
                user_id,
            ),
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def list_projects(self, user_id: str, limit: int = 50) -> list[Project]:
        """List a user's projects, most recently updated first."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT * FROM projects
            WHERE user_id = ?
            ORDER BY updated_at DESC
            LIMIT ?
            """,
            (user_id, limit),
        )

        return [self._row_to_project(row) for row in cursor.fetchall()]

    def delete_project(self, project_id: str, user_id: str) -> bool:
        """Delete a project."""
        assert self.conn is not None

        cursor = self.conn.cursor()
        cursor.execute(
            "DELETE FROM projects WHERE project_id = ? AND user_id = ?",
            (project_id, user_id),
        )
        self.conn.commit()
        return cursor.rowcount > 0
