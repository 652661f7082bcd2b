"""
GenFS Playground - interactive component generation in the terminal.

Each turn sends the conversation and the current file tree to the model,
streams its reply, shows every tool call as it runs, and saves the project
to a local SQLite store.

Usage:
    python playground/main.py                   # New project
    python playground/main.py --project <id>    # Resume a saved project
    python playground/main.py --list            # List saved projects

Model Configuration:
    Set GENFS_MODEL env var or use the 'model' command to switch:
    - "anthropic:claude-sonnet-4-20250514" (default)
    - "openai:gpt-5.2"
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime

from dotenv import load_dotenv
from langchain.chat_models import init_chat_model
from langchain_core.messages import HumanMessage, messages_from_dict
from prompt_toolkit import PromptSession
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

# Add parent directory to path for local development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from genfs import GenFSConfig, VFSError, VirtualFileSystem, get_tool_display_message
from genfs.chat import run_generation_turn
from genfs.databases import SQLiteProjectStore
from genfs.types import Project
from genfs.utils import setup_logging

load_dotenv()

USER_ID = os.getenv("GENFS_USER", "playground")


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


def print_header(text: str, color: str = Colors.CYAN):
    """Print a styled header."""
    width = 70
    print(f"\n{color}{'=' * width}{Colors.RESET}")
    print(f"{color}{Colors.BOLD}  {text}{Colors.RESET}")
    print(f"{color}{'=' * width}{Colors.RESET}")


def print_error(msg: str):
    print(f"{Colors.RED}x {msg}{Colors.RESET}")


def print_success(msg: str):
    print(f"{Colors.GREEN}+ {msg}{Colors.RESET}")


def get_model(config: GenFSConfig, model_string: str | None = None):
    """Initialize a streaming chat model from a "provider:model" string."""
    return init_chat_model(
        model_string or config.llm.model,
        max_tokens=config.llm.max_output_tokens,
        streaming=True,
    )


def create_multiline_prompt_session() -> PromptSession:
    """Create a prompt session that supports multi-line input.

    Enter: Insert newline
    Escape then Enter, or Ctrl+D: Submit
    """
    bindings = KeyBindings()

    @bindings.add(Keys.Enter)
    def _(event):
        event.current_buffer.insert_text("\n")

    @bindings.add(Keys.Escape, Keys.Enter)
    def _(event):
        event.current_buffer.validate_and_handle()

    @bindings.add("c-d")
    def _(event):
        event.current_buffer.validate_and_handle()

    return PromptSession(key_bindings=bindings, multiline=True)


def show_tool_call(tool_name: str, arguments: dict, result_str: str):
    """Print one tool call as a single status line."""
    label = get_tool_display_message(tool_name, arguments)
    try:
        result = json.loads(result_str)
    except json.JSONDecodeError:
        result = {"status": "unknown", "message": result_str[:100]}

    if result.get("status") == "success":
        print(f"\n{Colors.GRAY}  [{label}]{Colors.RESET} {Colors.GREEN}ok{Colors.RESET}")
    else:
        print(
            f"\n{Colors.GRAY}  [{label}]{Colors.RESET} "
            f"{Colors.RED}{result.get('error', 'error')}: {result.get('message')}{Colors.RESET}"
        )


def show_tree(files: dict):
    """Print the serialized file tree as an indented listing."""
    vfs = VirtualFileSystem.from_nodes(files)

    def walk(path: str, depth: int):
        for node in vfs.list_directory(path):
            marker = "/" if node.is_directory else ""
            print(f"  {'  ' * depth}{node.name}{marker}")
            if node.is_directory:
                walk(node.path, depth + 1)

    if not files:
        print(f"  {Colors.DIM}(empty){Colors.RESET}")
        return
    walk("/", 0)


class PlaygroundSession:
    """A single project being generated interactively."""

    def __init__(self, config: GenFSConfig, store: SQLiteProjectStore, project: Project):
        self.config = config
        self.store = store
        self.project = project
        self.model_string = config.llm.model
        self.model = get_model(config)
        self.messages = messages_from_dict(project.messages)
        self.files = dict(project.data)

    def chat_turn(self, user_input: str):
        """Run one generation turn and keep the resulting state."""
        self.messages.append(HumanMessage(content=user_input))

        print(f"\n{Colors.BLUE}{Colors.BOLD}assistant:{Colors.RESET} ", end="", flush=True)
        result = run_generation_turn(
            self.model,
            self.messages,
            self.files,
            project_id=self.project.project_id,
            user_id=self.project.user_id,
            project_store=self.store,
            config=self.config,
            on_text=lambda text: print(text, end="", flush=True),
            on_tool_call=show_tool_call,
        )
        print()

        if result.error:
            print_error(f"Generation failed: {result.error}")
            self.messages.pop()
            return

        self.messages.extend(result.messages)
        self.files = result.files
        if not result.finished:
            print_error(f"Stopped after {result.steps} steps")
        if result.persisted:
            print(f"{Colors.DIM}saved {self.project.project_id} ({result.steps} steps){Colors.RESET}")

    def handle_command(self, command: str) -> bool:
        """Handle a playground command. Returns False to exit."""
        parts = command.split(maxsplit=1)
        name = parts[0]

        if name in ("exit", "quit"):
            return False
        if name == "files":
            show_tree(self.files)
        elif name == "cat" and len(parts) == 2:
            vfs = VirtualFileSystem.from_nodes(self.files)
            try:
                print(vfs.view(parts[1]))
            except VFSError as e:
                print_error(e.message)
        elif name == "model" and len(parts) == 2:
            self.model_string = parts[1]
            self.model = get_model(self.config, self.model_string)
            print_success(f"Switched to {self.model_string}")
        else:
            print(f"{Colors.DIM}Commands: files, cat <path>, model <name>, exit{Colors.RESET}")
        return True

    def run(self):
        print_header(f"GenFS Playground - {self.project.name}")
        print(f"{Colors.DIM}Model: {self.model_string}{Colors.RESET}")
        print(f"{Colors.DIM}Project: {self.project.project_id}{Colors.RESET}")
        print(f"{Colors.DIM}Submit with Escape+Enter or Ctrl+D. Prefix commands with '/'.{Colors.RESET}")

        prompt = create_multiline_prompt_session()
        while True:
            try:
                user_input = prompt.prompt("\nyou> ").strip()
            except (KeyboardInterrupt, EOFError):
                break

            if not user_input:
                continue
            if user_input.startswith("/"):
                if not self.handle_command(user_input[1:]):
                    break
                continue

            self.chat_turn(user_input)


def list_projects(store: SQLiteProjectStore):
    projects = store.list_projects(USER_ID)
    if not projects:
        print("No saved projects.")
        return
    for project in projects:
        updated = datetime.fromtimestamp(project.updated_at).strftime("%Y-%m-%d %H:%M")
        print(f"  {project.project_id}  {updated}  {project.name} ({len(project.data)} nodes)")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="GenFS interactive playground")
    parser.add_argument("--project", help="Resume a saved project by id")
    parser.add_argument("--name", default="Untitled", help="Name for a new project")
    parser.add_argument("--list", action="store_true", help="List saved projects")
    args = parser.parse_args()

    config = GenFSConfig.from_env()
    if config.database.sqlite_path is None:
        config.database.sqlite_path = str(config.get_genfs_home() / "genfs.db")
    setup_logging(
        level=logging.DEBUG if config.debug else logging.WARNING,
        log_file=config.get_genfs_home() / "playground.log",
    )

    with SQLiteProjectStore(config.database.sqlite_path) as store:
        if args.list:
            list_projects(store)
            return

        if args.project:
            project = store.get_project(args.project, USER_ID)
            if project is None:
                print_error(f"Project not found: {args.project}")
                sys.exit(1)
        else:
            project = Project.create(user_id=USER_ID, name=args.name)
            store.create_project(project)

        PlaygroundSession(config, store, project).run()


if __name__ == "__main__":
    main()
