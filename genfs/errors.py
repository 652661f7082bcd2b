"""
Error types for GenFS operations.

Every failure raised by the virtual file system carries an ``ErrorKind`` so the
tool adapters can turn it into a structured result the agent can react to.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kind of failure reported back to the agent."""

    INVALID_PATH = "InvalidPath"
    NOT_FOUND = "NotFound"
    NO_MATCH = "NoMatch"
    AMBIGUOUS_MATCH = "AmbiguousMatch"
    INVALID_LINE = "InvalidLine"
    ALREADY_EXISTS = "AlreadyExists"
    NO_HISTORY = "NoHistory"
    INVALID_NODE = "InvalidNode"
    INVALID_ARGUMENTS = "InvalidArguments"


class VFSError(Exception):
    """Base class for all virtual file system errors."""

    kind: ErrorKind

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidPathError(VFSError, ValueError):
    """Path is empty, relative, escapes the root, or conflicts with the tree shape."""

    kind = ErrorKind.INVALID_PATH


class NotFoundError(VFSError, FileNotFoundError):
    """No file or directory exists at the path."""

    kind = ErrorKind.NOT_FOUND


class NoMatchError(VFSError, LookupError):
    """The string to replace does not occur in the file."""

    kind = ErrorKind.NO_MATCH


class AmbiguousMatchError(VFSError, LookupError):
    """The string to replace occurs more than once in the file."""

    kind = ErrorKind.AMBIGUOUS_MATCH

    def __init__(self, message: str, path: str | None = None, count: int = 0):
        super().__init__(message, path)
        self.count = count


class InvalidLineError(VFSError, IndexError):
    """Insert position is outside the file's line range."""

    kind = ErrorKind.INVALID_LINE


class AlreadyExistsError(VFSError, FileExistsError):
    """Target path is already occupied."""

    kind = ErrorKind.ALREADY_EXISTS


class NoHistoryError(VFSError, LookupError):
    """There is no prior edit to undo."""

    kind = ErrorKind.NO_HISTORY


class InvalidNodeError(VFSError, ValueError):
    """A serialized node record cannot be turned into a FileNode."""

    kind = ErrorKind.INVALID_NODE
