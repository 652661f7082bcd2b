"""
OpenAI-compatible tool definitions for the GenFS editing tools.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from genfs.tools.base import BaseToolProvider
from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)


class OpenAIToolProvider(BaseToolProvider):
    """OpenAI function calling compatible tool provider for GenFS."""

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Get OpenAI function calling compatible tool definitions."""
        return [
            # Text editor
            {
                "type": "function",
                "function": {
                    "name": self.editor.name,
                    "description": self.editor.description,
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "command": {
                                "type": "string",
                                "enum": ["create", "view", "str_replace", "insert", "undo_edit"],
                                "description": "The command to run.",
                            },
                            "path": {
                                "type": "string",
                                "description": "Absolute path to the file or directory (e.g., '/App.jsx').",
                            },
                            "file_text": {
                                "type": "string",
                                "description": "Required for create: the full content of the file.",
                            },
                            "old_str": {
                                "type": "string",
                                "description": "Required for str_replace: the exact text to replace. Must appear exactly once in the file.",
                            },
                            "new_str": {
                                "type": "string",
                                "description": "For str_replace: the replacement text. Required for insert: the text to insert.",
                            },
                            "insert_line": {
                                "type": "integer",
                                "description": "Required for insert: insert after this line number (0 inserts at the beginning).",
                            },
                            "view_range": {
                                "type": "array",
                                "items": {"type": "integer"},
                                "description": "Optional for view: 1-indexed inclusive [start_line, end_line]. Use -1 as end_line, or omit it, to read to the end.",
                            },
                        },
                        "required": ["command", "path"],
                    },
                },
            },
            # File manager
            {
                "type": "function",
                "function": {
                    "name": self.file_manager.name,
                    "description": self.file_manager.description,
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "command": {
                                "type": "string",
                                "enum": ["rename", "delete"],
                                "description": "The operation to perform.",
                            },
                            "path": {
                                "type": "string",
                                "description": "Absolute path of the file or directory to act on.",
                            },
                            "new_path": {
                                "type": "string",
                                "description": "Required for rename: the new absolute path.",
                            },
                        },
                        "required": ["command", "path"],
                    },
                },
            },
        ]

    def execute_tool(self, tool_name: str, arguments: dict[str, Any]) -> str:
        """
        Execute a tool call and return the result as JSON string.

        Args:
            tool_name: Name of the tool.
            arguments: Tool arguments.

        Returns:
            JSON string result.
        """
        tool = self.file_tools.get(tool_name)
        if tool is None:
            return json.dumps({
                "status": "error",
                "message": f"Unknown tool: {tool_name}",
            })

        try:
            return tool.execute(arguments).to_json()
        except Exception as e:
            logger.exception("Tool %s failed", tool_name)
            return json.dumps({
                "status": "error",
                "message": f"Tool execution failed: {str(e)}",
            })


def get_openai_tools(vfs: VirtualFileSystem) -> list[dict[str, Any]]:
    """
    Convenience function to get OpenAI-compatible tool definitions.

    Args:
        vfs: The VirtualFileSystem instance.

    Returns:
        List of tool definitions for OpenAI function calling.
    """
    provider = OpenAIToolProvider(vfs)
    return provider.get_tool_definitions()


def execute_openai_tool(
    vfs: VirtualFileSystem,
    tool_name: str,
    arguments: dict[str, Any],
) -> str:
    """
    Convenience function to execute an OpenAI tool call.

    Args:
        vfs: The VirtualFileSystem instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        JSON string result.
    """
    provider = OpenAIToolProvider(vfs)
    return provider.execute_tool(tool_name, arguments)
