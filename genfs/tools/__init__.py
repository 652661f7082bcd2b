"""Tool surface for GenFS agent integration."""

from genfs.tools.base import BaseFileTool, BaseToolProvider
from genfs.tools.display import get_tool_display_message, is_tool_invocation_complete
from genfs.tools.file_manager import FileManagerCommand, FileManagerInput, FileManagerTool
from genfs.tools.langchain_tools import (
    LangChainToolProvider,
    execute_langchain_tool,
    get_langchain_tools,
)
from genfs.tools.openai_tools import (
    OpenAIToolProvider,
    execute_openai_tool,
    get_openai_tools,
)
from genfs.tools.str_replace import EditorCommand, StrReplaceEditorInput, StrReplaceEditorTool

__all__ = [
    "BaseFileTool",
    "BaseToolProvider",
    # Adapters
    "StrReplaceEditorTool",
    "StrReplaceEditorInput",
    "EditorCommand",
    "FileManagerTool",
    "FileManagerInput",
    "FileManagerCommand",
    # Display
    "get_tool_display_message",
    "is_tool_invocation_complete",
    # OpenAI
    "OpenAIToolProvider",
    "get_openai_tools",
    "execute_openai_tool",
    # LangChain
    "LangChainToolProvider",
    "get_langchain_tools",
    "execute_langchain_tool",
]
