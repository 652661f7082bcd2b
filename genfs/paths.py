"""
Path resolution for the virtual file tree.

All paths are absolute, ``/``-rooted strings. Nothing here touches the tree.
"""

from __future__ import annotations

from genfs.errors import InvalidPathError

ROOT = "/"


def normalize(path: str) -> str:
    """
    Normalize an absolute virtual path.

    Collapses duplicate slashes, drops ``.`` segments and strips a trailing
    slash (except for the root itself).

    Raises:
        InvalidPathError: If the path is empty, relative, or contains a ``..``
            segment.
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"Path must be a string, got {type(path).__name__}")

    if not path:
        raise InvalidPathError("Path must not be empty", path)

    if not path.startswith("/"):
        raise InvalidPathError(
            f"Path must be absolute (start with '/'): {path}", path
        )

    segments = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidPathError(f"Path traversal not allowed: {path}", path)
        segments.append(segment)

    return "/" + "/".join(segments)


def parent(path: str) -> str | None:
    """Get the parent directory of a normalized path (``None`` for the root)."""
    if path == ROOT:
        return None
    head = path.rsplit("/", 1)[0]
    return head or ROOT


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def join(directory: str, name: str) -> str:
    return f"/{name}" if directory == ROOT else f"{directory}/{name}"


def ancestors(path: str) -> list[str]:
    """All proper ancestors of a path, outermost first, excluding the root."""
    result = []
    current = parent(path)
    while current is not None and current != ROOT:
        result.append(current)
        current = parent(current)
    result.reverse()
    return result


def is_under(path: str, root: str) -> bool:
    """True if ``path`` is strictly nested beneath ``root``."""
    if root == ROOT:
        return path != ROOT
    return path.startswith(root + "/")


def rebase(path: str, old_root: str, new_root: str) -> str:
    """Rewrite the ``old_root`` prefix of ``path`` to ``new_root``."""
    if path == old_root:
        return new_root
    return new_root + path[len(old_root):]
