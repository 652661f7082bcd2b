"""
Configuration management for GenFS.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

# Provider type definitions
DatabaseProvider = Literal["sqlite"]

# Default paths
DEFAULT_GENFS_HOME = Path.home() / ".genfs"

DEFAULT_MODEL = "anthropic:claude-sonnet-4-20250514"


@dataclass
class DatabaseConfig:
    """Configuration for the project store."""

    provider: DatabaseProvider = "sqlite"
    sqlite_path: str | None = None  # None means in-memory


@dataclass
class ToolConfig:
    """Configuration for the tool surface exposed to the agent."""

    editor_tool_name: str = "str_replace_editor"
    file_manager_tool_name: str = "file_manager"
    # Prefix viewed file lines with "N\t"; off so view returns raw content
    include_line_numbers: bool = False
    # Policy when the rename target is already occupied
    overwrite_on_rename: bool = False


@dataclass
class LLMConfig:
    """Configuration for the model driving a generation turn."""

    # "provider:model" string accepted by langchain's init_chat_model
    model: str = DEFAULT_MODEL
    api_key: str | None = None
    max_output_tokens: int = 10_000
    # Maximum model steps (each step may issue several tool calls) per turn
    max_steps: int = 40


@dataclass
class GenFSConfig:
    """Main configuration for GenFS."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    tools: ToolConfig = field(default_factory=ToolConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)

    # Keep an in-memory operation log on each VirtualFileSystem
    auto_log: bool = True

    # Debug mode - enables verbose logging for diagnosing issues
    debug: bool = False

    def get_genfs_home(self) -> Path:
        """Get the GenFS home directory."""
        return DEFAULT_GENFS_HOME

    @classmethod
    def from_env(cls) -> "GenFSConfig":
        """Create configuration from environment variables (and a .env file)."""
        load_dotenv()
        config = cls()

        config.llm.model = os.getenv("GENFS_MODEL", DEFAULT_MODEL)
        config.llm.api_key = os.getenv("ANTHROPIC_API_KEY")
        config.database.sqlite_path = os.getenv("GENFS_DB_PATH")
        config.debug = os.getenv("GENFS_DEBUG", "").lower() in ("1", "true", "yes")

        return config

    @classmethod
    def default_local(cls) -> "GenFSConfig":
        """Create a default local configuration (in-memory, no persistence)."""
        return cls(
            database=DatabaseConfig(provider="sqlite", sqlite_path=None),
            llm=LLMConfig(api_key=os.getenv("ANTHROPIC_API_KEY")),
        )

    @classmethod
    def default_persistent(cls) -> "GenFSConfig":
        """Create a default configuration with persistence enabled.

        Uses ~/.genfs/genfs.db for the project store.
        """
        home = DEFAULT_GENFS_HOME
        return cls(
            database=DatabaseConfig(
                provider="sqlite",
                sqlite_path=str(home / "genfs.db"),
            ),
            llm=LLMConfig(api_key=os.getenv("ANTHROPIC_API_KEY")),
        )
