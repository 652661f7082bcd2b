"""Tests for configuration, prompts and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from genfs import GENERATION_PROMPT, get_generation_prompt
from genfs.config import DEFAULT_MODEL, GenFSConfig
from genfs.utils import setup_logging


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setattr("genfs.config.load_dotenv", lambda: False)
    for name in ("GENFS_MODEL", "GENFS_DB_PATH", "GENFS_DEBUG", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults() -> None:
    config = GenFSConfig()
    assert config.tools.editor_tool_name == "str_replace_editor"
    assert config.tools.file_manager_tool_name == "file_manager"
    assert not config.tools.include_line_numbers
    assert not config.tools.overwrite_on_rename
    assert config.llm.model == DEFAULT_MODEL
    assert config.database.sqlite_path is None
    assert config.auto_log and not config.debug


def test_from_env(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GENFS_MODEL", "openai:gpt-5.2")
    clean_env.setenv("GENFS_DB_PATH", "/tmp/genfs-test.db")
    clean_env.setenv("GENFS_DEBUG", "true")
    clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")

    config = GenFSConfig.from_env()
    assert config.llm.model == "openai:gpt-5.2"
    assert config.llm.api_key == "sk-test"
    assert config.database.sqlite_path == "/tmp/genfs-test.db"
    assert config.debug


def test_from_env_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = GenFSConfig.from_env()
    assert config.llm.model == DEFAULT_MODEL
    assert config.database.sqlite_path is None
    assert not config.debug


def test_presets() -> None:
    assert GenFSConfig.default_local().database.sqlite_path is None
    persistent = GenFSConfig.default_persistent()
    assert persistent.database.sqlite_path.endswith("genfs.db")


def test_generation_prompt() -> None:
    assert "/App.jsx" in GENERATION_PROMPT
    assert get_generation_prompt() == GENERATION_PROMPT
    extended = get_generation_prompt("  Use TypeScript.  ")
    assert extended.startswith(GENERATION_PROMPT)
    assert extended.endswith("Use TypeScript.\n")


def test_setup_logging(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "genfs.log"
    logger = setup_logging(logging.WARNING, log_file=log_file)
    try:
        assert logger.name == "genfs"
        assert len(logger.handlers) == 2
        logging.getLogger("genfs.vfs").debug("written to file only")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text()
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
