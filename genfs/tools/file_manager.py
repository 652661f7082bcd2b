"""
The ``file_manager`` tool: rename and delete files or directories.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from genfs.tools.base import BaseFileTool, invalid_arguments_result
from genfs.types import ToolResult


class FileManagerCommand(str, Enum):
    """Commands understood by the file manager tool."""

    RENAME = "rename"
    DELETE = "delete"


class FileManagerInput(BaseModel):
    """Input schema for the file manager tool."""

    command: Literal["rename", "delete"] = Field(
        description="The operation to perform: rename or delete."
    )
    path: str = Field(description="Absolute path of the file or directory to act on.")
    new_path: Optional[str] = Field(
        default=None,
        description="Required for rename: the new absolute path. Directories are moved with all their contents.",
    )


class FileManagerTool(BaseFileTool):
    """Rename/delete tool over a VirtualFileSystem."""

    name = "file_manager"
    description = (
        "Rename (move) or delete files and directories in the virtual file system. "
        "Directories are renamed or deleted together with everything inside them."
    )
    args_schema = FileManagerInput
    commands = FileManagerCommand

    def _build_handlers(self) -> dict[FileManagerCommand, Callable[[FileManagerInput], ToolResult]]:
        return {
            FileManagerCommand.RENAME: self._rename,
            FileManagerCommand.DELETE: self._delete,
        }

    def _rename(self, args: FileManagerInput) -> ToolResult:
        if not args.new_path:
            return invalid_arguments_result("new_path is required for rename")

        moved = self.vfs.rename(args.path, args.new_path)
        return ToolResult(
            status="success",
            message=f"Renamed {args.path} to {args.new_path}",
            data={"path": args.path, "new_path": args.new_path, "moved": moved},
        )

    def _delete(self, args: FileManagerInput) -> ToolResult:
        removed = self.vfs.delete(args.path)
        return ToolResult(
            status="success",
            message=f"Deleted {args.path}",
            data={"path": args.path, "removed": removed},
        )
