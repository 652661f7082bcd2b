"""
Core types for GenFS - the in-memory file tree edited by LLM tool calls.
"""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal


class NodeType(str, Enum):
    """Type of node in the virtual file tree."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class FileNode:
    """A single file or directory entry, keyed by its absolute path."""

    path: str
    node_type: NodeType
    content: str | None = None

    @classmethod
    def file(cls, path: str, content: str = "") -> "FileNode":
        return cls(path=path, node_type=NodeType.FILE, content=content)

    @classmethod
    def directory(cls, path: str) -> "FileNode":
        return cls(path=path, node_type=NodeType.DIRECTORY)

    @property
    def is_file(self) -> bool:
        return self.node_type == NodeType.FILE

    @property
    def is_directory(self) -> bool:
        return self.node_type == NodeType.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def line_count(self) -> int:
        if not self.content:
            return 0
        # a trailing newline ends the last line rather than starting a new one
        return self.content.count("\n") + (0 if self.content.endswith("\n") else 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the flat storage record (without the path key)."""
        if self.is_file:
            return {"type": self.node_type.value, "content": self.content or ""}
        return {"type": self.node_type.value}


@dataclass
class EditSnapshot:
    """Content of a file as it was right before one mutating edit."""

    path: str
    content: str
    timestamp: float = field(default_factory=time.time)


@dataclass
class VFSLog:
    """Log entry for a virtual file system operation."""

    timestamp: float
    operation: str
    path: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        operation: str,
        path: str,
        details: dict[str, Any] | None = None,
    ) -> "VFSLog":
        return cls(
            timestamp=time.time(),
            operation=operation,
            path=path,
            details=details or {},
        )


@dataclass
class Project:
    """A persisted project: the chat transcript plus the serialized file tree."""

    project_id: str
    user_id: str
    name: str
    messages: list[dict[str, Any]] = field(default_factory=list)
    data: dict[str, dict[str, Any]] = field(default_factory=dict)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    @classmethod
    def create(
        cls,
        user_id: str,
        name: str,
        messages: list[dict[str, Any]] | None = None,
        data: dict[str, dict[str, Any]] | None = None,
    ) -> "Project":
        """Create a new project with a generated UUID."""
        now = time.time()
        return cls(
            project_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            messages=messages or [],
            data=data or {},
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "project_id": self.project_id,
            "user_id": self.user_id,
            "name": self.name,
            "messages": self.messages,
            "data": self.data,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create from dictionary (JSON deserialization)."""
        return cls(
            project_id=data["project_id"],
            user_id=data["user_id"],
            name=data.get("name", ""),
            messages=data.get("messages", []),
            data=data.get("data", {}),
            created_at=data.get("created_at", time.time()),
            updated_at=data.get("updated_at", time.time()),
        )


# Tool result types for agent responses
ToolResultStatus = Literal["success", "error"]


@dataclass
class ToolResult:
    """Standard result format for GenFS tool operations."""

    status: ToolResultStatus
    message: str
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
