"""
VirtualFileSystem - the in-memory file tree an agent builds through tool calls.

The tree is a flat mapping from absolute path to FileNode. Hierarchy (listing,
subtree delete, subtree rename) is derived from path prefixes. Every mutating
text edit records the file's prior content so it can be undone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from genfs import paths
from genfs.config import GenFSConfig
from genfs.errors import (
    AlreadyExistsError,
    AmbiguousMatchError,
    InvalidLineError,
    InvalidNodeError,
    InvalidPathError,
    NoMatchError,
    NotFoundError,
)
from genfs.history import EditHistory
from genfs.stores.base import BaseNodeStore
from genfs.stores.memory_store import InMemoryNodeStore
from genfs.types import FileNode, NodeType, VFSLog

logger = logging.getLogger(__name__)


class VirtualFileSystem:
    """
    In-memory file tree with text editing, undo and flat (de)serialization.

    One instance belongs to one session; it is not safe for concurrent
    mutation.
    """

    def __init__(
        self,
        config: GenFSConfig | None = None,
        store: BaseNodeStore | None = None,
        history: EditHistory | None = None,
    ):
        """
        Initialize an empty VirtualFileSystem.

        Args:
            config: GenFS configuration. Uses defaults if not provided.
            store: Custom node store implementation.
            history: Custom edit history.
        """
        self.config = config or GenFSConfig()
        self.store = store or InMemoryNodeStore()
        self.history = history or EditHistory()
        self._logs: list[VFSLog] = []

    @classmethod
    def from_nodes(
        cls,
        nodes: Mapping[str, Any],
        config: GenFSConfig | None = None,
    ) -> "VirtualFileSystem":
        """Build a VirtualFileSystem from a serialized node map."""
        fs = cls(config=config)
        fs.deserialize_from_nodes(nodes)
        return fs

    def _debug_log(self, message: str) -> None:
        """Log a debug message if debug mode is enabled."""
        if self.config.debug:
            logger.debug("[GenFS DEBUG] %s", message)

    # =========================================================================
    # Queries
    # =========================================================================

    def exists(self, path: str) -> bool:
        path = paths.normalize(path)
        return path == paths.ROOT or path in self.store or self.store.has_descendants(path)

    def is_file(self, path: str) -> bool:
        node = self.store.get(paths.normalize(path))
        return node is not None and node.is_file

    def is_directory(self, path: str) -> bool:
        path = paths.normalize(path)
        if path == paths.ROOT:
            return True
        node = self.store.get(path)
        if node is not None:
            return node.is_directory
        return self.store.has_descendants(path)

    def read(self, path: str) -> str:
        """Return the full content of a file."""
        return self._require_file(paths.normalize(path)).content or ""

    def list_directory(self, path: str = "/") -> list[FileNode]:
        """
        List the immediate children of a directory.

        Directories that only exist implicitly (as a prefix of a deeper path)
        are reported as directory nodes.

        Raises:
            NotFoundError: If the path does not exist or is a file.
        """
        path = paths.normalize(path)
        if not self.is_directory(path):
            if self.is_file(path):
                raise NotFoundError(f"Path is a file, not a directory: {path}", path)
            raise NotFoundError(f"Directory not found: {path}", path)

        children: dict[str, FileNode] = {}
        for child_path in self.store.list_under(path):
            relative = child_path[len(path):].lstrip("/")
            name = relative.split("/", 1)[0]
            direct = paths.join(path, name)
            if direct in children:
                continue
            node = self.store.get(direct)
            children[direct] = node if node is not None else FileNode.directory(direct)
        return list(children.values())

    def get_logs(
        self, limit: int | None = None, path_filter: str | None = None
    ) -> list[VFSLog]:
        """Get operation log entries, oldest first."""
        logs = self._logs
        if path_filter is not None:
            logs = [log for log in logs if log.path.startswith(path_filter)]
        if limit is not None:
            logs = logs[-limit:]
        return list(logs)

    # =========================================================================
    # Text editing
    # =========================================================================

    def create(self, path: str, content: str = "") -> FileNode:
        """
        Create a file, or overwrite an existing one with undo support.

        Missing ancestor directories are created.

        Raises:
            InvalidPathError: If the path is malformed, is the root, or an
                ancestor is a file.
            AlreadyExistsError: If a directory exists at the path.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise InvalidPathError("Cannot create a file at the root", path)
        self._check_ancestors_not_files(path)

        existing = self.store.get(path)
        if existing is not None and existing.is_file:
            self.history.push(path, existing.content or "")
            existing.content = content
            self._log_operation("overwrite", path, {"size": len(content)})
            return existing

        if existing is not None or self.store.has_descendants(path):
            raise AlreadyExistsError(f"Path is a directory: {path}", path)

        self._ensure_ancestors(path)
        node = FileNode.file(path, content)
        self.store.put(path, node)
        self._log_operation("create", path, {"size": len(content)})
        return node

    def view(self, path: str, view_range: list[int] | tuple[int, int] | None = None) -> str:
        """
        View a file's content or a directory's immediate children.

        Args:
            path: Path to view.
            view_range: Optional 1-based inclusive ``[start, end]`` line range
                for files. ``end`` of ``-1`` or omitted means end of file. Out-of-range
                values are clamped.

        Returns:
            The (sliced) file content, or a listing with one ``[DIR] name``
            or ``[FILE] name`` line per child.

        Raises:
            NotFoundError: If nothing exists at the path.
            InvalidLineError: If ``view_range`` is not one or two integers.
        """
        path = paths.normalize(path)
        node = self.store.get(path)

        if node is not None and node.is_file:
            content = node.content or ""
            if view_range is None:
                return content
            return self._slice_lines(content, view_range)

        if not self.is_directory(path):
            raise NotFoundError(f"File not found: {path}", path)

        children = self.list_directory(path)
        if not children:
            return "(empty directory)"
        return "\n".join(
            f"[{'DIR' if child.is_directory else 'FILE'}] {child.name}"
            for child in children
        )

    def str_replace(self, path: str, old_str: str, new_str: str) -> FileNode:
        """
        Replace the single occurrence of ``old_str`` with ``new_str``.

        Raises:
            NotFoundError: If the file does not exist.
            NoMatchError: If ``old_str`` is empty or does not occur.
            AmbiguousMatchError: If ``old_str`` occurs more than once.
        """
        path = paths.normalize(path)
        node = self._require_file(path)
        content = node.content or ""

        if not old_str:
            raise NoMatchError("old_str must not be empty", path)

        count = content.count(old_str)
        if count == 0:
            raise NoMatchError(
                f"String not found in file. The exact string to replace was not found in {path}. "
                "Make sure you're using the exact text including whitespace.",
                path,
            )
        if count > 1:
            raise AmbiguousMatchError(
                f"String appears {count} times in {path}. Please provide a more unique string "
                "that includes surrounding context to ensure only one match.",
                path,
                count=count,
            )

        self.history.push(path, content)
        node.content = content.replace(old_str, new_str, 1)
        self._log_operation(
            "str_replace",
            path,
            {"old_length": len(old_str), "new_length": len(new_str)},
        )
        return node

    def insert(self, path: str, insert_line: int, new_str: str) -> FileNode:
        """
        Insert ``new_str`` as new line(s) after line ``insert_line``.

        ``0`` inserts at the beginning of the file; ``line_count`` appends. A
        trailing newline terminates the last line and is kept after the insert.

        Raises:
            NotFoundError: If the file does not exist.
            InvalidLineError: If ``insert_line`` is outside ``[0, line_count]``.
        """
        path = paths.normalize(path)
        node = self._require_file(path)
        content = node.content or ""
        terminated = content.endswith("\n")
        body = content[:-1] if terminated else content
        lines = body.split("\n") if content else []

        if (
            not isinstance(insert_line, int)
            or isinstance(insert_line, bool)
            or not 0 <= insert_line <= len(lines)
        ):
            raise InvalidLineError(
                f"Invalid insert_line {insert_line!r}: must be between 0 and {len(lines)}",
                path,
            )

        self.history.push(path, content)
        new_lines = new_str.split("\n")
        node.content = "\n".join(lines[:insert_line] + new_lines + lines[insert_line:])
        if terminated:
            node.content += "\n"
        self._log_operation(
            "insert", path, {"insert_line": insert_line, "lines": len(new_lines)}
        )
        return node

    def undo_edit(self, path: str) -> FileNode:
        """
        Restore the content the file had before its most recent edit.

        Raises:
            NotFoundError: If the file does not exist.
            NoHistoryError: If there is no edit to undo.
        """
        path = paths.normalize(path)
        node = self._require_file(path)
        node.content = self.history.pop(path)
        self._log_operation(
            "undo_edit", path, {"remaining": self.history.depth(path)}
        )
        return node

    # =========================================================================
    # File management
    # =========================================================================

    def rename(self, path: str, new_path: str) -> int:
        """
        Move a file or directory (with everything beneath it) to ``new_path``.

        Edit history moves with each file.

        Returns:
            Number of nodes moved.

        Raises:
            NotFoundError: If the source does not exist.
            InvalidPathError: If either path is malformed or the root, or the
                destination lies inside the source.
            AlreadyExistsError: If the destination is occupied and
                ``overwrite_on_rename`` is off.
        """
        src = paths.normalize(path)
        dst = paths.normalize(new_path)

        if src == paths.ROOT or dst == paths.ROOT:
            raise InvalidPathError("Cannot rename the root directory", src)
        if not self.exists(src):
            raise NotFoundError(f"Source not found: {src}", src)
        if src == dst:
            return 0
        if paths.is_under(dst, src):
            raise InvalidPathError(
                f"Cannot move {src} into itself ({dst})", dst
            )
        self._check_ancestors_not_files(dst)

        if self.exists(dst):
            if not self.config.tools.overwrite_on_rename:
                raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
            if paths.is_under(src, dst):
                raise InvalidPathError(
                    f"Cannot replace {dst}: it contains the source {src}", dst
                )
            self._remove(dst)

        moved_paths = [src] if src in self.store else []
        moved_paths.extend(self.store.list_under(src))
        moved = [(old, self.store.get(old)) for old in moved_paths]
        self.store.remove_subtree(src)

        self._ensure_ancestors(dst)
        for old, node in moved:
            target = paths.rebase(old, src, dst)
            self.store.put(target, node)
            self.history.move(old, target)

        self._log_operation("rename", src, {"destination": dst, "moved": len(moved)})
        return len(moved)

    def delete(self, path: str) -> int:
        """
        Delete a file or a directory with its whole subtree.

        Returns:
            Number of nodes removed.

        Raises:
            NotFoundError: If nothing exists at the path.
            InvalidPathError: If the path is malformed or the root.
        """
        path = paths.normalize(path)
        if path == paths.ROOT:
            raise InvalidPathError("Cannot delete the root directory", path)

        removed = self._remove(path)
        self._log_operation("delete", path, {"removed": removed})
        return removed

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self) -> dict[str, dict[str, Any]]:
        """
        Flatten the tree into ``{path: {"type": ..., "content"?: ...}}``.

        Edit history is not included.
        """
        return {path: node.to_dict() for path, node in self.store.items()}

    def deserialize_from_nodes(self, nodes: Mapping[str, Any]) -> None:
        """
        Replace the whole tree with nodes built from a flat mapping.

        Every entry is validated before anything is replaced, so a malformed
        entry leaves the current tree untouched. Edit history starts empty.

        Args:
            nodes: Mapping from absolute path to a record with ``type``
                (``"file"`` or ``"directory"``) and, for files, ``content``.
                FileNode instances are accepted as records too.

        Raises:
            InvalidPathError: If a key is not a valid path, two keys normalize
                to the same path, or a node is nested under a file.
            InvalidNodeError: If a record is malformed.
        """
        if not isinstance(nodes, Mapping):
            raise InvalidNodeError(
                f"Expected a mapping of path to node, got {type(nodes).__name__}"
            )

        built: dict[str, FileNode] = {}
        for raw_path, record in nodes.items():
            path = paths.normalize(raw_path)
            node = self._node_from_record(path, record)
            if path == paths.ROOT:
                if node.is_file:
                    raise InvalidPathError("The root cannot be a file", path)
                continue
            if path in built:
                raise InvalidPathError(f"Duplicate path after normalization: {path}", path)
            built[path] = node

        for path in built:
            for ancestor in paths.ancestors(path):
                parent = built.get(ancestor)
                if parent is not None and parent.is_file:
                    raise InvalidPathError(
                        f"{path} is nested under the file {ancestor}", path
                    )

        self.store.clear()
        self.history.clear()
        for path, node in built.items():
            self.store.put(path, node)

        self._log_operation("deserialize", paths.ROOT, {"nodes": len(built)})

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _require_file(self, path: str) -> FileNode:
        node = self.store.get(path)
        if node is not None and node.is_file:
            return node
        if self.is_directory(path):
            raise NotFoundError(f"Path is a directory, not a file: {path}", path)
        raise NotFoundError(f"File not found: {path}", path)

    def _check_ancestors_not_files(self, path: str) -> None:
        for ancestor in paths.ancestors(path):
            node = self.store.get(ancestor)
            if node is not None and node.is_file:
                raise InvalidPathError(f"Parent path is a file: {ancestor}", path)

    def _ensure_ancestors(self, path: str) -> None:
        for ancestor in paths.ancestors(path):
            if self.store.get(ancestor) is None:
                self.store.put(ancestor, FileNode.directory(ancestor))

    def _remove(self, path: str) -> int:
        removed_paths = [path] if path in self.store else []
        removed_paths.extend(self.store.list_under(path))
        count = self.store.remove_subtree(path)
        for removed in removed_paths:
            self.history.discard(removed)
        return count

    def _slice_lines(self, content: str, view_range: Any) -> str:
        if (
            not isinstance(view_range, (list, tuple))
            or len(view_range) not in (1, 2)
            or not all(
                isinstance(v, int) and not isinstance(v, bool) for v in view_range
            )
        ):
            raise InvalidLineError(
                f"view_range must be [start] or [start, end] integers, got {view_range!r}"
            )

        lines = content.split("\n")
        total_lines = len(lines)
        start_line = view_range[0]
        end_line = view_range[1] if len(view_range) == 2 else -1

        # Clamp to valid range (1-indexed, inclusive)
        start = max(1, start_line)
        end = total_lines if end_line < 0 else min(end_line, total_lines)
        if start > end:
            return ""
        return "\n".join(lines[start - 1 : end])

    def _node_from_record(self, path: str, record: Any) -> FileNode:
        if isinstance(record, FileNode):
            return FileNode(path=path, node_type=record.node_type, content=record.content)

        if not isinstance(record, Mapping):
            raise InvalidNodeError(
                f"Node record for {path} must be a mapping, got {type(record).__name__}",
                path,
            )

        raw_type = record.get("type", record.get("node_type"))
        if raw_type is None:
            raw_type = NodeType.FILE.value if "content" in record else NodeType.DIRECTORY.value
        try:
            node_type = NodeType(raw_type)
        except ValueError as e:
            raise InvalidNodeError(
                f"Unknown node type for {path}: {raw_type!r}", path
            ) from e

        if node_type == NodeType.DIRECTORY:
            return FileNode.directory(path)

        content = record.get("content")
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise InvalidNodeError(
                f"File content for {path} must be text, got {type(content).__name__}",
                path,
            )
        return FileNode.file(path, content)

    def _log_operation(
        self,
        operation: str,
        path: str,
        details: dict | None = None,
    ) -> None:
        """Log a VirtualFileSystem operation."""
        self._debug_log(f"{operation} {path} {details or {}}")
        if not self.config.auto_log:
            return
        self._logs.append(VFSLog.create(operation=operation, path=path, details=details))
