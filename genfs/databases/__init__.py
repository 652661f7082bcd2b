"""Database backends for GenFS project storage."""

from genfs.databases.base import BaseProjectStore
from genfs.databases.sqlite_db import SQLiteProjectStore

__all__ = ["BaseProjectStore", "SQLiteProjectStore"]
