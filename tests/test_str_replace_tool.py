"""Tests for the str_replace_editor tool adapter."""

from __future__ import annotations

import json

import pytest

from genfs.config import GenFSConfig, ToolConfig
from genfs.tools import EditorCommand, StrReplaceEditorTool
from genfs.vfs import VirtualFileSystem


@pytest.fixture
def editor(vfs: VirtualFileSystem) -> StrReplaceEditorTool:
    return StrReplaceEditorTool(vfs)


class TestCommands:
    def test_create(self, editor: StrReplaceEditorTool) -> None:
        result = editor.execute({"command": "create", "path": "/App.jsx", "file_text": "hi"})
        assert result.ok
        assert result.message == "Created file: /App.jsx"
        assert result.data == {"path": "/App.jsx", "size": 2}

    def test_create_overwrite_message(self, editor: StrReplaceEditorTool) -> None:
        editor.execute({"command": "create", "path": "/App.jsx", "file_text": "one"})
        result = editor.execute({"command": "create", "path": "/App.jsx", "file_text": "two"})
        assert result.message == "Overwrote file: /App.jsx"

    def test_create_without_text_makes_empty_file(self, editor: StrReplaceEditorTool) -> None:
        editor.execute({"command": "create", "path": "/empty.txt"})
        assert editor.vfs.view("/empty.txt") == ""

    def test_view_file(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "a\nb\nc")
        result = editor.execute({"command": "view", "path": "/App.jsx", "view_range": [2, 3]})
        assert result.data == {"content": "b\nc"}

    def test_view_directory(self, app_vfs: VirtualFileSystem) -> None:
        editor = StrReplaceEditorTool(app_vfs)
        result = editor.execute({"command": "view", "path": "/"})
        assert result.data["content"] == "[FILE] App.jsx\n[DIR] components"

    def test_view_with_line_numbers(self) -> None:
        config = GenFSConfig(tools=ToolConfig(include_line_numbers=True))
        fs = VirtualFileSystem(config=config)
        fs.create("/f.txt", "\n".join(f"line {i}" for i in range(1, 11)))
        editor = StrReplaceEditorTool(fs)
        result = editor.execute({"command": "view", "path": "/f.txt", "view_range": [9, -1]})
        assert result.data["content"] == " 9\tline 9\n10\tline 10"

    def test_view_range_start_only(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "a\nb\nc")
        result = editor.execute({"command": "view", "path": "/App.jsx", "view_range": [2]})
        assert result.data == {"content": "b\nc"}

    def test_view_start_only_with_line_numbers(self) -> None:
        config = GenFSConfig(tools=ToolConfig(include_line_numbers=True))
        fs = VirtualFileSystem(config=config)
        fs.create("/f.txt", "a\nb\nc")
        result = StrReplaceEditorTool(fs).execute(
            {"command": "view", "path": "/f.txt", "view_range": [2]}
        )
        assert result.data["content"] == "2\tb\n3\tc"

    def test_str_replace(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "hello world")
        result = editor.execute(
            {"command": "str_replace", "path": "/App.jsx", "old_str": "world", "new_str": "there"}
        )
        assert result.ok
        assert editor.vfs.view("/App.jsx") == "hello there"

    def test_str_replace_defaults_to_deletion(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "keep drop")
        editor.execute({"command": "str_replace", "path": "/App.jsx", "old_str": " drop"})
        assert editor.vfs.view("/App.jsx") == "keep"

    def test_insert(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "a\nc")
        result = editor.execute(
            {"command": "insert", "path": "/App.jsx", "insert_line": 1, "new_str": "b"}
        )
        assert result.data == {"path": "/App.jsx", "line_count": 3}

    def test_undo_edit(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "A")
        editor.execute({"command": "str_replace", "path": "/App.jsx", "old_str": "A", "new_str": "B"})
        result = editor.execute({"command": "undo_edit", "path": "/App.jsx"})
        assert result.data == {"path": "/App.jsx", "remaining_undos": 0}
        assert editor.vfs.view("/App.jsx") == "A"


class TestErrors:
    def test_ambiguous_match(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "x x")
        result = editor.execute(
            {"command": "str_replace", "path": "/App.jsx", "old_str": "x", "new_str": "y"}
        )
        assert result.status == "error"
        assert result.error == "AmbiguousMatch"
        assert result.data == {"path": "/App.jsx"}
        assert "2 times" in result.message

    def test_no_match(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "x")
        result = editor.execute(
            {"command": "str_replace", "path": "/App.jsx", "old_str": "z", "new_str": "y"}
        )
        assert result.error == "NoMatch"

    def test_not_found(self, editor: StrReplaceEditorTool) -> None:
        result = editor.execute({"command": "view", "path": "/nope.jsx"})
        assert result.error == "NotFound"

    def test_no_history(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "x")
        result = editor.execute({"command": "undo_edit", "path": "/App.jsx"})
        assert result.error == "NoHistory"

    def test_invalid_line(self, editor: StrReplaceEditorTool) -> None:
        editor.vfs.create("/App.jsx", "x")
        result = editor.execute(
            {"command": "insert", "path": "/App.jsx", "insert_line": 5, "new_str": "y"}
        )
        assert result.error == "InvalidLine"

    def test_invalid_path(self, editor: StrReplaceEditorTool) -> None:
        result = editor.execute({"command": "create", "path": "App.jsx", "file_text": ""})
        assert result.error == "InvalidPath"

    @pytest.mark.parametrize(
        "arguments",
        [
            {"command": "delete", "path": "/App.jsx"},
            {"command": "view"},
            {"path": "/App.jsx"},
            {"command": "insert", "path": "/App.jsx", "new_str": "x"},
            {"command": "insert", "path": "/App.jsx", "insert_line": 0},
            {"command": "str_replace", "path": "/App.jsx", "new_str": "x"},
        ],
    )
    def test_invalid_arguments(self, editor: StrReplaceEditorTool, arguments: dict) -> None:
        editor.vfs.create("/App.jsx", "x")
        result = editor.execute(arguments)
        assert result.status == "error"
        assert result.error == "InvalidArguments"
        assert editor.vfs.view("/App.jsx") == "x"

    def test_none_arguments(self, editor: StrReplaceEditorTool) -> None:
        assert editor.execute(None).error == "InvalidArguments"

    @pytest.mark.parametrize("arguments", ["view /", ["view", "/"], 42])
    def test_non_mapping_arguments(self, editor: StrReplaceEditorTool, arguments: object) -> None:
        result = editor.execute(arguments)  # type: ignore[arg-type]
        assert result.status == "error"
        assert result.error == "InvalidArguments"
        assert "must be an object" in result.message


def test_run_returns_json(editor: StrReplaceEditorTool) -> None:
    payload = json.loads(editor.run(command="create", path="/App.jsx", file_text="x"))
    assert payload == {
        "status": "success",
        "message": "Created file: /App.jsx",
        "data": {"path": "/App.jsx", "size": 1},
    }


def test_custom_name(vfs: VirtualFileSystem) -> None:
    assert StrReplaceEditorTool(vfs, name="editor").name == "editor"
    assert StrReplaceEditorTool(vfs).name == "str_replace_editor"


def test_missing_handler_is_rejected(vfs: VirtualFileSystem) -> None:
    class PartialEditor(StrReplaceEditorTool):
        def _build_handlers(self):
            handlers = super()._build_handlers()
            del handlers[EditorCommand.UNDO_EDIT]
            return handlers

    with pytest.raises(TypeError, match="undo_edit"):
        PartialEditor(vfs)
