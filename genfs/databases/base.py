"""
Abstract base class for GenFS project stores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from genfs.types import Project


class BaseProjectStore(ABC):
    """Abstract base class for project persistence backends."""

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the database schema."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the database connection."""
        pass

    @abstractmethod
    def create_project(self, project: Project) -> None:
        """Create a new project."""
        pass

    @abstractmethod
    def get_project(self, project_id: str, user_id: str) -> Project | None:
        """Get a project owned by ``user_id``."""
        pass

    @abstractmethod
    def update_project(
        self,
        project_id: str,
        user_id: str,
        messages: list[dict[str, Any]],
        data: dict[str, dict[str, Any]],
    ) -> bool:
        """
        Replace a project's messages and serialized file tree.

        Only a project owned by ``user_id`` is updated.

        Returns:
            True if a project was updated.
        """
        pass

    @abstractmethod
    def list_projects(self, user_id: str, limit: int = 50) -> list[Project]:
        """List a user's projects, most recently updated first."""
        pass

    @abstractmethod
    def delete_project(self, project_id: str, user_id: str) -> bool:
        """Delete a project. Returns True if deleted."""
        pass
