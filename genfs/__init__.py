"""
GenFS - an in-memory virtual file system for LLM code-generation agents.

An agent builds and edits a project through two tools, ``str_replace_editor``
(create, view, str_replace, insert, undo_edit) and ``file_manager`` (rename,
delete). The tree round-trips through a flat ``{path: node}`` map so it can be
sent by a client and persisted between turns.

Direct Usage:
    from genfs import VirtualFileSystem

    vfs = VirtualFileSystem()
    vfs.create("/App.jsx", "export default function App() {}")
    vfs.str_replace("/App.jsx", "App()", "App(props)")
    data = vfs.serialize()

Agent Usage:
    from genfs import VirtualFileSystem, get_openai_tools, execute_openai_tool

    vfs = VirtualFileSystem.from_nodes(data)
    tools = get_openai_tools(vfs)
    result = execute_openai_tool(
        vfs, "str_replace_editor", {"command": "view", "path": "/App.jsx"}
    )
"""

from genfs.config import GenFSConfig
from genfs.errors import (
    AlreadyExistsError,
    AmbiguousMatchError,
    ErrorKind,
    InvalidLineError,
    InvalidNodeError,
    InvalidPathError,
    NoHistoryError,
    NoMatchError,
    NotFoundError,
    VFSError,
)
from genfs.prompts import GENERATION_PROMPT, get_generation_prompt
from genfs.tools import (
    execute_openai_tool,
    get_tool_display_message,
    get_openai_tools,
    is_tool_invocation_complete,
)
from genfs.types import EditSnapshot, FileNode, NodeType, Project, ToolResult, VFSLog
from genfs.vfs import VirtualFileSystem

__version__ = "0.0.1"

__all__ = [
    # Core classes
    "VirtualFileSystem",
    "GenFSConfig",
    # Tool helpers
    "get_openai_tools",
    "execute_openai_tool",
    "get_tool_display_message",
    "is_tool_invocation_complete",
    # Prompts
    "GENERATION_PROMPT",
    "get_generation_prompt",
    # Entity types
    "FileNode",
    "NodeType",
    "EditSnapshot",
    "VFSLog",
    "Project",
    "ToolResult",
    # Errors
    "ErrorKind",
    "VFSError",
    "InvalidPathError",
    "NotFoundError",
    "NoMatchError",
    "AmbiguousMatchError",
    "InvalidLineError",
    "AlreadyExistsError",
    "NoHistoryError",
    "InvalidNodeError",
]
