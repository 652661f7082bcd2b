"""
The ``str_replace_editor`` tool: create, view and edit text files.

Commands:
- ``create``: create a file (or overwrite one, undoable) with ``file_text``
- ``view``: show a file's content (optionally a ``view_range``) or list a directory
- ``str_replace``: replace the unique occurrence of ``old_str`` with ``new_str``
- ``insert``: insert ``new_str`` after line ``insert_line`` (0 = beginning)
- ``undo_edit``: revert the most recent edit to a file
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from genfs.tools.base import BaseFileTool, invalid_arguments_result
from genfs.types import ToolResult


class EditorCommand(str, Enum):
    """Commands understood by the text editor tool."""

    CREATE = "create"
    VIEW = "view"
    STR_REPLACE = "str_replace"
    INSERT = "insert"
    UNDO_EDIT = "undo_edit"


class StrReplaceEditorInput(BaseModel):
    """Input schema for the text editor tool."""

    command: Literal["create", "view", "str_replace", "insert", "undo_edit"] = Field(
        description="The command to run: create, view, str_replace, insert or undo_edit."
    )
    path: str = Field(
        description="Absolute path to the file or directory (e.g., '/App.jsx', '/components/Button.jsx')."
    )
    file_text: Optional[str] = Field(
        default=None,
        description="Required for create: the full content of the file.",
    )
    old_str: Optional[str] = Field(
        default=None,
        description="Required for str_replace: the exact text to replace. Must appear exactly once in the file.",
    )
    new_str: Optional[str] = Field(
        default=None,
        description="For str_replace: the replacement text (defaults to empty). Required for insert: the text to insert.",
    )
    insert_line: Optional[int] = Field(
        default=None,
        description="Required for insert: insert after this line number (0 inserts at the beginning).",
    )
    view_range: Optional[list[int]] = Field(
        default=None,
        description="Optional for view: 1-indexed inclusive [start_line, end_line]. Use -1 as end_line, or omit it, to read to the end.",
    )


class StrReplaceEditorTool(BaseFileTool):
    """Text editor tool over a VirtualFileSystem."""

    name = "str_replace_editor"
    description = (
        "View, create and edit text files in the virtual file system. "
        "'create' writes a whole file (overwriting an existing one), 'view' shows a file or lists a directory, "
        "'str_replace' replaces a unique snippet (include enough context to make old_str unique), "
        "'insert' adds lines after a given line, and 'undo_edit' reverts the last edit to a file."
    )
    args_schema = StrReplaceEditorInput
    commands = EditorCommand

    def _build_handlers(self) -> dict[EditorCommand, Callable[[StrReplaceEditorInput], ToolResult]]:
        return {
            EditorCommand.CREATE: self._create,
            EditorCommand.VIEW: self._view,
            EditorCommand.STR_REPLACE: self._str_replace,
            EditorCommand.INSERT: self._insert,
            EditorCommand.UNDO_EDIT: self._undo_edit,
        }

    def _create(self, args: StrReplaceEditorInput) -> ToolResult:
        content = args.file_text or ""
        existed = self.vfs.is_file(args.path)
        node = self.vfs.create(args.path, content)
        verb = "Overwrote" if existed else "Created"
        return ToolResult(
            status="success",
            message=f"{verb} file: {node.path}",
            data={"path": node.path, "size": len(content)},
        )

    def _view(self, args: StrReplaceEditorInput) -> ToolResult:
        content = self.vfs.view(args.path, args.view_range)

        if self.vfs.config.tools.include_line_numbers and self.vfs.is_file(args.path):
            start = max(1, args.view_range[0]) if args.view_range else 1
            lines = content.split("\n")
            width = len(str(start + len(lines) - 1))
            content = "\n".join(
                f"{i + start:>{width}}\t{line}" for i, line in enumerate(lines)
            )

        return ToolResult(
            status="success",
            message=f"Viewed {args.path}",
            data={"content": content},
        )

    def _str_replace(self, args: StrReplaceEditorInput) -> ToolResult:
        if args.old_str is None:
            return invalid_arguments_result("old_str is required for str_replace")

        node = self.vfs.str_replace(args.path, args.old_str, args.new_str or "")
        return ToolResult(
            status="success",
            message=f"Replaced text in {node.path}",
            data={"path": node.path},
        )

    def _insert(self, args: StrReplaceEditorInput) -> ToolResult:
        if args.insert_line is None:
            return invalid_arguments_result("insert_line is required for insert")
        if args.new_str is None:
            return invalid_arguments_result("new_str is required for insert")

        node = self.vfs.insert(args.path, args.insert_line, args.new_str)
        return ToolResult(
            status="success",
            message=f"Inserted text after line {args.insert_line} in {node.path}",
            data={"path": node.path, "line_count": node.line_count},
        )

    def _undo_edit(self, args: StrReplaceEditorInput) -> ToolResult:
        node = self.vfs.undo_edit(args.path)
        return ToolResult(
            status="success",
            message=f"Undid last edit to {node.path}",
            data={"path": node.path, "remaining_undos": self.vfs.history.depth(node.path)},
        )
