"""
In-memory node store backed by a single insertion-ordered dict.
"""

from __future__ import annotations

from collections.abc import Iterator

from genfs import paths
from genfs.errors import NotFoundError
from genfs.stores.base import BaseNodeStore
from genfs.types import FileNode


class SubtreeView:
    """Restartable lazy view over the paths nested beneath a directory."""

    def __init__(self, nodes: dict[str, FileNode], root: str):
        self._nodes = nodes
        self.root = root

    def __iter__(self) -> Iterator[str]:
        # Snapshot the keys so callers may mutate the store while iterating.
        for path in list(self._nodes):
            if paths.is_under(path, self.root):
                yield path


class InMemoryNodeStore(BaseNodeStore):
    """Node store keeping every FileNode in one dict keyed by absolute path."""

    def __init__(self):
        self._nodes: dict[str, FileNode] = {}

    def get(self, path: str) -> FileNode | None:
        return self._nodes.get(path)

    def put(self, path: str, node: FileNode) -> None:
        node.path = path
        self._nodes[path] = node

    def remove_subtree(self, path: str) -> int:
        doomed = list(self.list_under(path))
        if path in self._nodes:
            doomed.append(path)

        if not doomed:
            raise NotFoundError(f"Path not found: {path}", path)

        for doomed_path in doomed:
            del self._nodes[doomed_path]
        return len(doomed)

    def list_under(self, path: str) -> SubtreeView:
        return SubtreeView(self._nodes, path)

    def items(self) -> Iterator[tuple[str, FileNode]]:
        return iter(list(self._nodes.items()))

    def clear(self) -> None:
        self._nodes.clear()

    def __len__(self) -> int:
        return len(self._nodes)
