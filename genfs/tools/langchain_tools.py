"""
LangChain-compatible tool definitions for the GenFS editing tools.

Example usage:
    from genfs import VirtualFileSystem
    from genfs.tools.langchain_tools import get_langchain_tools

    vfs = VirtualFileSystem()
    tools = get_langchain_tools(vfs)
    model = init_chat_model("anthropic:claude-sonnet-4-20250514").bind_tools(tools)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from genfs.tools.base import BaseToolProvider

if TYPE_CHECKING:
    from langchain_core.tools import BaseTool

    from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)


class LangChainToolProvider(BaseToolProvider):
    """LangChain-compatible tool provider for GenFS."""

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get tool definitions as dictionaries (for compatibility with base class).

        For LangChain usage, prefer get_tools() which returns actual Tool objects.
        """
        tools = self.get_tools()
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "args_schema": tool.args_schema,
            }
            for tool in tools
        ]

    def get_tools(self) -> list[BaseTool]:
        """
        Get LangChain Tool objects for use with agents.

        Returns:
            List of LangChain StructuredTool instances.
        """
        from langchain_core.tools import StructuredTool

        return [
            StructuredTool.from_function(
                func=tool.run,
                name=tool.name,
                description=tool.description,
                args_schema=tool.args_schema,
            )
            for tool in self.file_tools.values()
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
            return json.dumps(
                {
                    "status": "error",
                    "message": f"Unknown tool: {tool_name}",
                }
            )

        try:
            return tool.execute(arguments).to_json()
        except Exception as e:
            logger.exception("Tool %s failed", tool_name)
            return json.dumps(
                {
                    "status": "error",
                    "message": f"Tool execution failed: {str(e)}",
                }
            )


def get_langchain_tools(vfs: VirtualFileSystem) -> list[BaseTool]:
    """
    Convenience function to get LangChain-compatible tools for a VirtualFileSystem.

    Args:
        vfs: The VirtualFileSystem instance.

    Returns:
        List of LangChain StructuredTool instances for use with agents.
    """
    provider = LangChainToolProvider(vfs)
    return provider.get_tools()


def execute_langchain_tool(
    vfs: VirtualFileSystem,
    tool_name: str,
    arguments: dict[str, Any],
) -> str:
    """
    Convenience function to execute a LangChain tool call.

    Args:
        vfs: The VirtualFileSystem instance.
        tool_name: Name of the tool.
        arguments: Tool arguments.

    Returns:
        JSON string result.
    """
    provider = LangChainToolProvider(vfs)
    return provider.execute_tool(tool_name, arguments)
