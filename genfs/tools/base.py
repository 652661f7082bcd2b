"""
Base classes for GenFS tool definitions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from genfs.errors import ErrorKind, VFSError
from genfs.types import ToolResult
from genfs.vfs import VirtualFileSystem


def error_result(error: VFSError) -> ToolResult:
    """Convert a VirtualFileSystem failure into an error ToolResult."""
    data = {"path": error.path} if error.path else None
    return ToolResult(
        status="error",
        message=error.message,
        data=data,
        error=error.kind.value,
    )


def invalid_arguments_result(message: str) -> ToolResult:
    return ToolResult(
        status="error",
        message=message,
        error=ErrorKind.INVALID_ARGUMENTS.value,
    )


def format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err["loc"]) or "arguments"
        parts.append(f"{location}: {err['msg']}")
    return "Invalid arguments - " + "; ".join(parts)


class BaseFileTool(ABC):
    """
    A command-dispatching tool operating on a VirtualFileSystem.

    Subclasses declare the command enum and the pydantic input schema, and
    map every command to exactly one handler. Failures never propagate out
    of ``execute``; they come back as error ToolResults.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    args_schema: ClassVar[type[BaseModel]]
    commands: ClassVar[type[Enum]]

    def __init__(self, vfs: VirtualFileSystem, name: str | None = None):
        """
        Initialize the tool.

        Args:
            vfs: The VirtualFileSystem instance to operate on.
            name: Override for the tool name exposed to the agent.
        """
        self.vfs = vfs
        if name is not None:
            self.name = name
        self._handlers = self._build_handlers()

        missing = [command.value for command in self.commands if command not in self._handlers]
        if missing:
            raise TypeError(
                f"{type(self).__name__} has no handler for commands: {', '.join(missing)}"
            )

    @abstractmethod
    def _build_handlers(self) -> dict[Any, Callable[[Any], ToolResult]]:
        """Map each command to the handler implementing it."""
        pass

    def execute(self, arguments: Mapping[str, Any] | None) -> ToolResult:
        """
        Validate the arguments, dispatch on ``command`` and return the result.

        Args:
            arguments: Raw tool-call arguments from the agent.

        Returns:
            ToolResult describing success or the failure.
        """
        if arguments is not None and not isinstance(arguments, Mapping):
            return invalid_arguments_result(
                f"Arguments must be an object, got {type(arguments).__name__}"
            )
        try:
            args = self.args_schema.model_validate(dict(arguments or {}))
        except ValidationError as e:
            return invalid_arguments_result(format_validation_error(e))

        command = self.commands(args.command)
        try:
            return self._handlers[command](args)
        except VFSError as e:
            return error_result(e)

    def run(self, **kwargs: Any) -> str:
        """Execute with keyword arguments and return the JSON result."""
        return self.execute(kwargs).to_json()


class BaseToolProvider(ABC):
    """Abstract base class for tool providers that generate agent-specific tool definitions."""

    def __init__(self, vfs: VirtualFileSystem):
        """
        Initialize the tool provider.

        Args:
            vfs: The VirtualFileSystem instance to operate on.
        """
        from genfs.tools.file_manager import FileManagerTool
        from genfs.tools.str_replace import StrReplaceEditorTool

        self.vfs = vfs
        tool_config = vfs.config.tools
        self.editor = StrReplaceEditorTool(vfs, name=tool_config.editor_tool_name)
        self.file_manager = FileManagerTool(vfs, name=tool_config.file_manager_tool_name)

    @property
    def file_tools(self) -> dict[str, BaseFileTool]:
        return {self.editor.name: self.editor, self.file_manager.name: self.file_manager}

    @abstractmethod
    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions in the format expected by the target agent framework.

        Returns:
            List of tool definitions.
        """
        pass

    @abstractmethod
    def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call and return the result.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Tool arguments.

        Returns:
            String result to return to the agent.
        """
        pass
