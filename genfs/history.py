"""
Per-file edit history for undo support.

Each file owns an independent stack of prior contents. A snapshot is pushed
right before a mutating edit and popped by undo.
"""

from __future__ import annotations

from genfs.errors import NoHistoryError
from genfs.types import EditSnapshot


class EditHistory:
    """Mapping from path to a stack of EditSnapshots (newest last)."""

    def __init__(self):
        self._stacks: dict[str, list[EditSnapshot]] = {}

    def push(self, path: str, prior_content: str) -> EditSnapshot:
        snapshot = EditSnapshot(path=path, content=prior_content)
        self._stacks.setdefault(path, []).append(snapshot)
        return snapshot

    def pop(self, path: str) -> str:
        """
        Remove and return the most recent prior content for ``path``.

        Raises:
            NoHistoryError: If the file has no recorded edits.
        """
        stack = self._stacks.get(path)
        if not stack:
            raise NoHistoryError(f"No edit history for {path}", path)

        snapshot = stack.pop()
        if not stack:
            del self._stacks[path]
        return snapshot.content

    def snapshots(self, path: str) -> list[EditSnapshot]:
        """Snapshots for ``path``, most recent first."""
        return list(reversed(self._stacks.get(path, [])))

    def depth(self, path: str) -> int:
        return len(self._stacks.get(path, []))

    def discard(self, path: str) -> None:
        self._stacks.pop(path, None)

    def move(self, old_path: str, new_path: str) -> None:
        """Carry the history of ``old_path`` over to ``new_path``."""
        stack = self._stacks.pop(old_path, None)
        if stack is None:
            return
        for snapshot in stack:
            snapshot.path = new_path
        self._stacks[new_path] = stack

    def clear(self) -> None:
        self._stacks.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._stacks
