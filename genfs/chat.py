"""
Generation turn driver.

A turn rebuilds the VirtualFileSystem from the client's serialized file map,
lets the model edit it through the ``str_replace_editor`` and ``file_manager``
tools, and finally persists the transcript and the resulting tree for the
project's owner.

Example usage:
    from langchain.chat_models import init_chat_model
    from genfs.chat import run_generation_turn

    model = init_chat_model("anthropic:claude-sonnet-4-20250514")
    result = run_generation_turn(
        model,
        messages=[{"role": "user", "content": "Make a counter component"}],
        files={},
    )
    print(result.files["/App.jsx"]["content"])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    SystemMessage,
    ToolMessage,
    convert_to_messages,
    message_chunk_to_message,
    messages_to_dict,
)

from genfs.config import GenFSConfig
from genfs.databases.base import BaseProjectStore
from genfs.prompts import get_generation_prompt
from genfs.tools.langchain_tools import LangChainToolProvider
from genfs.vfs import VirtualFileSystem

logger = logging.getLogger(__name__)

TextCallback = Callable[[str], None]
ToolCallback = Callable[[str, dict[str, Any], str], None]


@dataclass
class GenerationResult:
    """Outcome of one generation turn."""

    # Messages produced during the turn (assistant and tool messages)
    messages: list[BaseMessage] = field(default_factory=list)
    # Serialized file tree after the turn
    files: dict[str, dict[str, Any]] = field(default_factory=dict)
    steps: int = 0
    # False when the step limit was reached with tool calls still pending
    finished: bool = False
    persisted: bool = False
    error: str | None = None


def _chunk_text(content: Any) -> str:
    """Extract the displayable text from a streamed message chunk."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, Mapping) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


def _stream_step(
    model: Any,
    history: list[BaseMessage],
    on_text: TextCallback | None,
) -> AIMessage:
    """Stream one model step and merge the chunks into a single AIMessage."""
    merged = None
    for chunk in model.stream(history):
        if on_text is not None:
            text = _chunk_text(chunk.content)
            if text:
                on_text(text)
        merged = chunk if merged is None else merged + chunk

    if merged is None:
        return AIMessage(content="")
    message = message_chunk_to_message(merged)
    if not isinstance(message, AIMessage):
        return AIMessage(content=message.content)
    return message


def run_generation_turn(
    model: BaseChatModel,
    messages: Sequence[BaseMessage | Mapping[str, Any]],
    files: Mapping[str, Any],
    project_id: str | None = None,
    user_id: str | None = None,
    project_store: BaseProjectStore | None = None,
    config: GenFSConfig | None = None,
    on_text: TextCallback | None = None,
    on_tool_call: ToolCallback | None = None,
) -> GenerationResult:
    """
    Run one generation turn against a serialized file tree.

    Args:
        model: LangChain chat model supporting ``bind_tools`` and ``stream``.
        messages: Conversation so far, as messages or ``{"role", "content"}`` dicts.
        files: Serialized node map (``{path: {"type", "content"}}``).
        project_id: Project to persist to once the turn finishes.
        user_id: Owner of the project. Nothing is persisted without it.
        project_store: Store used for persistence.
        config: GenFS configuration. Uses defaults if not provided.
        on_text: Called with each streamed text fragment.
        on_tool_call: Called with (tool name, arguments, JSON result) after
            each tool call.

    Returns:
        GenerationResult with the response messages and the final file map.

    Raises:
        VFSError: If ``files`` is not a valid serialized tree.
    """
    config = config or GenFSConfig()
    conversation = convert_to_messages(list(messages))

    vfs = VirtualFileSystem.from_nodes(files, config=config)
    provider = LangChainToolProvider(vfs)
    bound_model = model.bind_tools(provider.get_tools())

    history: list[BaseMessage] = [SystemMessage(content=get_generation_prompt())]
    history.extend(conversation)

    result = GenerationResult()

    for _ in range(config.llm.max_steps):
        try:
            ai_message = _stream_step(bound_model, history, on_text)
        except Exception as e:
            logger.exception("Model step failed")
            result.error = str(e)
            break

        result.steps += 1
        history.append(ai_message)
        result.messages.append(ai_message)

        if not ai_message.tool_calls:
            result.finished = True
            break

        for tool_call in ai_message.tool_calls:
            tool_name = tool_call["name"]
            arguments = tool_call["args"]

            result_str = provider.execute_tool(tool_name, arguments)
            if config.debug:
                logger.debug("[GenFS DEBUG] %s(%s) -> %s", tool_name, arguments, result_str)
            if on_tool_call is not None:
                on_tool_call(tool_name, arguments, result_str)

            tool_message = ToolMessage(content=result_str, tool_call_id=tool_call["id"])
            history.append(tool_message)
            result.messages.append(tool_message)
    else:
        logger.warning("Generation stopped after %d steps", config.llm.max_steps)

    result.files = vfs.serialize()

    if result.error is None and project_id and user_id and project_store is not None:
        result.persisted = _persist_turn(
            project_store,
            project_id,
            user_id,
            conversation + result.messages,
            result.files,
        )

    return result


def _persist_turn(
    project_store: BaseProjectStore,
    project_id: str,
    user_id: str,
    messages: list[BaseMessage],
    files: dict[str, dict[str, Any]],
) -> bool:
    """Save the transcript and file tree. Failures are logged, not raised."""
    try:
        updated = project_store.update_project(
            project_id,
            user_id,
            messages=messages_to_dict(messages),
            data=files,
        )
    except Exception:
        logger.exception("Failed to save project %s", project_id)
        return False

    if not updated:
        logger.warning("Project %s not found for user %s", project_id, user_id)
    return updated
