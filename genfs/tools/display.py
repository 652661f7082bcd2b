"""
Human-readable labels for tool invocations shown while an agent works.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# command -> (label with path, label without path)
_EDITOR_LABELS = {
    "create": ("Creating {path}", "Creating file"),
    "str_replace": ("Editing {path}", "Editing file"),
    "insert": ("Editing {path}", "Editing file"),
    "view": ("Viewing {path}", "Viewing file"),
    "undo_edit": ("Undoing edit to {path}", "Undoing edit"),
}

_FILE_MANAGER_LABELS = {
    "rename": ("Renaming {path}", "Renaming file"),
    "delete": ("Deleting {path}", "Deleting file"),
}


def get_tool_display_message(tool_name: str, args: Mapping[str, Any] | None) -> str:
    """
    Describe a tool call in a few words, e.g. ``"Creating /App.jsx"``.

    Falls back to a generic phrase when ``path`` is missing, and to the tool
    name itself for unknown tools, unknown commands or empty arguments.
    """
    args = args or {}
    command = args.get("command")
    path = args.get("path")

    if tool_name == "str_replace_editor":
        labels = _EDITOR_LABELS
    elif tool_name == "file_manager":
        labels = _FILE_MANAGER_LABELS
        new_path = args.get("new_path")
        if command == "rename" and path and new_path:
            return f"Renaming {path} to {new_path}"
    else:
        return tool_name

    if not isinstance(command, str) or command not in labels:
        return tool_name

    with_path, without_path = labels[command]
    return with_path.format(path=path) if path else without_path


def is_tool_invocation_complete(state: str, result: Any) -> bool:
    """A tool invocation is complete once it is in the result state with a result."""
    return state == "result" and result is not None
