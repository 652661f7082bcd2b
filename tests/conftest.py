from __future__ import annotations

from collections.abc import Iterator

import pytest

from genfs.config import GenFSConfig, ToolConfig
from genfs.databases import SQLiteProjectStore
from genfs.vfs import VirtualFileSystem


@pytest.fixture
def vfs() -> VirtualFileSystem:
    """Return an empty file system with default configuration."""
    return VirtualFileSystem()


@pytest.fixture
def app_vfs() -> VirtualFileSystem:
    """Return a small project tree with a nested component directory."""
    fs = VirtualFileSystem()
    fs.create("/App.jsx", "import Button from '@/components/Button';\nexport default App;")
    fs.create("/components/Button.jsx", "export default function Button() {}")
    fs.create("/components/ui/Card.jsx", "export const Card = () => null;")
    return fs


@pytest.fixture
def overwrite_vfs() -> VirtualFileSystem:
    """Return a file system whose renames may replace the destination."""
    config = GenFSConfig(tools=ToolConfig(overwrite_on_rename=True))
    return VirtualFileSystem(config=config)


@pytest.fixture
def project_store() -> Iterator[SQLiteProjectStore]:
    """Return an initialized in-memory project store."""
    store = SQLiteProjectStore()
    store.initialize()
    yield store
    store.close()
