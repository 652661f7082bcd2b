"""Tests for the generation turn driver."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest
from langchain_core.messages import AIMessageChunk, BaseMessage, SystemMessage, ToolMessage

from genfs.chat import run_generation_turn
from genfs.config import GenFSConfig, LLMConfig
from genfs.databases import SQLiteProjectStore
from genfs.prompts import GENERATION_PROMPT
from genfs.types import Project


def tool_call_chunks(name: str, args: dict[str, Any], call_id: str) -> list[AIMessageChunk]:
    """Split one tool call across two streamed chunks."""
    raw = json.dumps(args)
    middle = len(raw) // 2
    return [
        AIMessageChunk(
            content="",
            tool_call_chunks=[{"name": name, "args": raw[:middle], "id": call_id, "index": 0}],
        ),
        AIMessageChunk(
            content="",
            tool_call_chunks=[{"name": None, "args": raw[middle:], "id": None, "index": 0}],
        ),
    ]


def text_chunks(text: str) -> list[AIMessageChunk]:
    words = text.split(" ")
    return [AIMessageChunk(content=words[0])] + [AIMessageChunk(content=" " + w) for w in words[1:]]


class ScriptedChatModel:
    """Chat model double that streams a fixed chunk list per step."""

    def __init__(self, steps: list[list[AIMessageChunk]] | None = None, error: Exception | None = None):
        self.steps = list(steps or [])
        self.error = error
        self.bound_tools: list[Any] = []
        self.calls: list[list[BaseMessage]] = []

    def bind_tools(self, tools: list[Any]) -> "ScriptedChatModel":
        self.bound_tools = tools
        return self

    def stream(self, messages: list[BaseMessage]) -> Iterator[AIMessageChunk]:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        if self.steps:
            yield from self.steps.pop(0)
        else:
            yield AIMessageChunk(content="done")


def create_app_steps() -> list[list[AIMessageChunk]]:
    return [
        tool_call_chunks(
            "str_replace_editor",
            {"command": "create", "path": "/App.jsx", "file_text": "export default A;"},
            "call_1",
        ),
        tool_call_chunks(
            "str_replace_editor",
            {"command": "str_replace", "path": "/App.jsx", "old_str": "A;", "new_str": "App;"},
            "call_2",
        ),
        text_chunks("Created the app."),
    ]


def test_turn_runs_tool_calls_and_returns_files() -> None:
    model = ScriptedChatModel(create_app_steps())
    result = run_generation_turn(
        model,
        messages=[{"role": "user", "content": "Build an app"}],
        files={},
    )

    assert result.finished
    assert result.error is None
    assert result.steps == 3
    assert result.files == {"/App.jsx": {"type": "file", "content": "export default App;"}}
    assert [tool.name for tool in model.bound_tools] == ["str_replace_editor", "file_manager"]

    tool_messages = [m for m in result.messages if isinstance(m, ToolMessage)]
    assert [m.tool_call_id for m in tool_messages] == ["call_1", "call_2"]
    assert all(json.loads(m.content)["status"] == "success" for m in tool_messages)
    assert result.messages[-1].content == "Created the app."


def test_system_prompt_is_prepended() -> None:
    model = ScriptedChatModel()
    run_generation_turn(model, messages=[{"role": "user", "content": "hi"}], files={})

    first_call = model.calls[0]
    assert isinstance(first_call[0], SystemMessage)
    assert first_call[0].content == GENERATION_PROMPT
    assert first_call[1].content == "hi"


def test_tool_results_are_fed_back_to_the_model() -> None:
    model = ScriptedChatModel(create_app_steps())
    run_generation_turn(model, messages=[{"role": "user", "content": "go"}], files={})

    second_call = model.calls[1]
    assert isinstance(second_call[-1], ToolMessage)
    assert second_call[-1].tool_call_id == "call_1"


def test_incoming_files_are_editable() -> None:
    steps = [
        tool_call_chunks(
            "file_manager",
            {"command": "rename", "path": "/App.jsx", "new_path": "/src/App.jsx"},
            "call_1",
        ),
    ]
    result = run_generation_turn(
        ScriptedChatModel(steps),
        messages=[{"role": "user", "content": "move it"}],
        files={"/App.jsx": {"type": "file", "content": "app"}},
    )
    assert result.files == {
        "/src": {"type": "directory"},
        "/src/App.jsx": {"type": "file", "content": "app"},
    }


def test_tool_errors_go_back_to_the_model() -> None:
    steps = [
        tool_call_chunks(
            "str_replace_editor", {"command": "view", "path": "/missing.jsx"}, "call_1"
        ),
    ]
    seen: list[tuple[str, dict, str]] = []
    result = run_generation_turn(
        ScriptedChatModel(steps),
        messages=[{"role": "user", "content": "look"}],
        files={},
        on_tool_call=lambda name, args, out: seen.append((name, args, out)),
    )
    assert result.finished
    assert seen[0][0] == "str_replace_editor"
    assert json.loads(seen[0][2])["error"] == "NotFound"


def test_streamed_text_reaches_callback() -> None:
    fragments: list[str] = []
    run_generation_turn(
        ScriptedChatModel([text_chunks("a b c")]),
        messages=[{"role": "user", "content": "hi"}],
        files={},
        on_text=fragments.append,
    )
    assert fragments == ["a", " b", " c"]


def test_step_limit() -> None:
    looping = [
        tool_call_chunks("str_replace_editor", {"command": "view", "path": "/"}, f"call_{i}")
        for i in range(5)
    ]
    config = GenFSConfig(llm=LLMConfig(max_steps=2))
    result = run_generation_turn(
        ScriptedChatModel(looping),
        messages=[{"role": "user", "content": "loop"}],
        files={},
        config=config,
    )
    assert result.steps == 2
    assert not result.finished


def test_model_error_is_reported_not_raised(project_store: SQLiteProjectStore) -> None:
    project = Project.create(user_id="user-1", name="Broken")
    project_store.create_project(project)

    result = run_generation_turn(
        ScriptedChatModel(error=RuntimeError("rate limited")),
        messages=[{"role": "user", "content": "hi"}],
        files={"/App.jsx": {"type": "file", "content": "x"}},
        project_id=project.project_id,
        user_id="user-1",
        project_store=project_store,
    )
    assert result.error == "rate limited"
    assert not result.persisted
    assert result.files == {"/App.jsx": {"type": "file", "content": "x"}}
    assert project_store.get_project(project.project_id, "user-1").data == {}


class TestPersistence:
    def test_turn_is_saved(self, project_store: SQLiteProjectStore) -> None:
        project = Project.create(user_id="user-1", name="Demo")
        project_store.create_project(project)

        result = run_generation_turn(
            ScriptedChatModel(create_app_steps()),
            messages=[{"role": "user", "content": "Build an app"}],
            files={},
            project_id=project.project_id,
            user_id="user-1",
            project_store=project_store,
        )
        assert result.persisted

        saved = project_store.get_project(project.project_id, "user-1")
        assert saved.data == result.files
        assert [m["type"] for m in saved.messages] == ["human", "ai", "tool", "ai", "tool", "ai"]
        assert saved.messages[0]["data"]["content"] == "Build an app"

    def test_nothing_saved_without_user(self, project_store: SQLiteProjectStore) -> None:
        project = Project.create(user_id="user-1", name="Demo")
        project_store.create_project(project)

        result = run_generation_turn(
            ScriptedChatModel(create_app_steps()),
            messages=[{"role": "user", "content": "Build an app"}],
            files={},
            project_id=project.project_id,
            project_store=project_store,
        )
        assert not result.persisted
        assert project_store.get_project(project.project_id, "user-1").data == {}

    def test_other_users_project_is_untouched(self, project_store: SQLiteProjectStore) -> None:
        project = Project.create(user_id="owner", name="Private")
        project_store.create_project(project)

        result = run_generation_turn(
            ScriptedChatModel(create_app_steps()),
            messages=[{"role": "user", "content": "Build an app"}],
            files={},
            project_id=project.project_id,
            user_id="intruder",
            project_store=project_store,
        )
        assert not result.persisted
        assert project_store.get_project(project.project_id, "owner").data == {}

    def test_store_failure_keeps_result(self, project_store: SQLiteProjectStore, monkeypatch) -> None:
        def fail(*args: Any, **kwargs: Any) -> bool:
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(project_store, "update_project", fail)
        result = run_generation_turn(
            ScriptedChatModel(create_app_steps()),
            messages=[{"role": "user", "content": "Build an app"}],
            files={},
            project_id="p-1",
            user_id="user-1",
            project_store=project_store,
        )
        assert not result.persisted
        assert result.files["/App.jsx"]["content"] == "export default App;"


def test_invalid_files_raise() -> None:
    from genfs.errors import InvalidPathError

    with pytest.raises(InvalidPathError):
        run_generation_turn(
            ScriptedChatModel(),
            messages=[{"role": "user", "content": "hi"}],
            files={"relative.js": {"type": "file", "content": ""}},
        )
