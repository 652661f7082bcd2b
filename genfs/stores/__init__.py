"""Node store implementations for GenFS."""

from genfs.stores.base import BaseNodeStore
from genfs.stores.memory_store import InMemoryNodeStore, SubtreeView

__all__ = ["BaseNodeStore", "InMemoryNodeStore", "SubtreeView"]
