"""Tests for the in-memory node store."""

from __future__ import annotations

import pytest

from genfs.errors import NotFoundError
from genfs.stores import InMemoryNodeStore
from genfs.types import FileNode


@pytest.fixture
def store() -> InMemoryNodeStore:
    store = InMemoryNodeStore()
    store.put("/src", FileNode.directory("/src"))
    store.put("/src/App.jsx", FileNode.file("/src/App.jsx", "app"))
    store.put("/src/ui/Card.jsx", FileNode.file("/src/ui/Card.jsx", "card"))
    store.put("/srcx.jsx", FileNode.file("/srcx.jsx", "sibling"))
    return store


def test_put_sets_node_path() -> None:
    store = InMemoryNodeStore()
    node = FileNode.file("/old.jsx", "x")
    store.put("/new.jsx", node)
    assert store.get("/new.jsx") is node
    assert node.path == "/new.jsx"


def test_contains_and_len(store: InMemoryNodeStore) -> None:
    assert "/src/App.jsx" in store
    assert "/missing" not in store
    assert 42 not in store
    assert len(store) == 4


def test_list_under_is_prefix_exact(store: InMemoryNodeStore) -> None:
    assert list(store.list_under("/src")) == ["/src/App.jsx", "/src/ui/Card.jsx"]


def test_list_under_is_restartable(store: InMemoryNodeStore) -> None:
    view = store.list_under("/src")
    assert list(view) == list(view)


def test_list_under_tolerates_mutation(store: InMemoryNodeStore) -> None:
    for path in store.list_under("/src"):
        store.remove_subtree(path)
    assert not store.has_descendants("/src")
    assert "/src" in store


def test_has_descendants(store: InMemoryNodeStore) -> None:
    assert store.has_descendants("/src")
    assert store.has_descendants("/src/ui")
    assert not store.has_descendants("/src/App.jsx")


def test_remove_subtree(store: InMemoryNodeStore) -> None:
    assert store.remove_subtree("/src") == 3
    assert [path for path, _ in store.items()] == ["/srcx.jsx"]


def test_remove_implicit_directory(store: InMemoryNodeStore) -> None:
    assert store.remove_subtree("/src/ui") == 1
    assert "/src/ui/Card.jsx" not in store


def test_remove_missing_raises(store: InMemoryNodeStore) -> None:
    with pytest.raises(NotFoundError):
        store.remove_subtree("/nope")


def test_clear(store: InMemoryNodeStore) -> None:
    store.clear()
    assert len(store) == 0
