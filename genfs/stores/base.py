"""
Abstract base class for GenFS node stores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from genfs.types import FileNode


class BaseNodeStore(ABC):
    """Abstract base class for the flat path -> FileNode mapping."""

    @abstractmethod
    def get(self, path: str) -> FileNode | None:
        """Get the node stored at exactly ``path``."""
        pass

    @abstractmethod
    def put(self, path: str, node: FileNode) -> None:
        """Insert or overwrite the node at ``path``."""
        pass

    @abstractmethod
    def remove_subtree(self, path: str) -> int:
        """
        Remove the node at ``path`` and every node nested beneath it.

        Args:
            path: Normalized path.

        Returns:
            Number of nodes removed.

        Raises:
            NotFoundError: If neither the path nor any descendant exists.
        """
        pass

    @abstractmethod
    def list_under(self, path: str) -> Iterable[str]:
        """
        Lazily iterate the paths nested beneath ``path``, in insertion order.

        The returned iterable can be iterated more than once.
        """
        pass

    @abstractmethod
    def items(self) -> Iterator[tuple[str, FileNode]]:
        """Iterate all (path, node) pairs in insertion order."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every node."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.get(path) is not None

    def has_descendants(self, path: str) -> bool:
        """Check whether any node is nested beneath ``path``."""
        for _ in self.list_under(path):
            return True
        return False
