# src/pocket_todo/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import Editing
from ..tasks.task_store import TaskStore

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command rest of line".
        The rest of the line is passed as-is (task text keeps its spacing).
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, arg, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, arg)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a task, or submits the draft while editing)")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task_id(store: TaskStore, ref: str) -> str | None:
    """
    Accept either a task id or a 1-based position in the list.
    An exact id match wins over a position.
    """
    ref = ref.strip().lstrip("#")
    if not ref:
        return None
    if store.get(ref) is not None:
        return ref
    if ref.isdigit():
        pos = int(ref)
        tasks = store.tasks
        if 1 <= pos <= len(tasks):
            return tasks[pos - 1].id
    return None


def format_task_list(state: AppState) -> str:
    store = state.task_store
    tasks = store.tasks
    if not tasks:
        return "No tasks yet. Type something to add one."

    session = store.edit_session
    editing_id = session.task_id if isinstance(session, Editing) else None

    lines = []
    for i, t in enumerate(tasks, start=1):
        mark = "[x]" if t.completed else "[ ]"
        line = f"{i:>3}. {mark} {t.text}  ({t.id})"
        if t.id == state.highlight_id:
            line += "  <- new"
        if t.id == editing_id:
            line += "  <- editing"
        lines.append(line)

    # Insertion cue is shown once.
    state.highlight_id = None
    return "\n".join(lines)


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_status(state: AppState, arg: str) -> str:
    store = state.task_store
    done = sum(1 for t in store.tasks if t.completed)
    db_path = getattr(state.settings, "db_path", None)
    session = store.edit_session
    editing = session.task_id if isinstance(session, Editing) else "-"
    return (
        "Status:\n"
        f"  Tasks: {len(store)} ({done} done)\n"
        f"  Editing: {editing}\n"
        f"  Storage: {db_path} key={store.key}"
    )


def cmd_list(state: AppState, arg: str) -> str:
    return format_task_list(state)


def cmd_add(state: AppState, arg: str) -> str:
    task = state.task_store.add(arg)
    if task is None:
        return "Nothing to add."
    return format_task_list(state)


def cmd_done(state: AppState, arg: str) -> str:
    task_id = resolve_task_id(state.task_store, arg)
    if task_id is None:
        return f"No such task: {arg.strip() or '(empty)'}"
    state.task_store.toggle_complete(task_id)
    return format_task_list(state)


def cmd_delete(state: AppState, arg: str) -> str:
    task_id = resolve_task_id(state.task_store, arg)
    if task_id is None:
        return f"No such task: {arg.strip() or '(empty)'}"
    state.task_store.delete(task_id)
    return format_task_list(state)


def cmd_edit(
    state: AppState,
    arg: str,
    emit: CommandEmitter | None = None,
) -> str:
    """
    /edit <id|n>  -> start editing; the next plain line replaces the text
    """
    store = state.task_store
    task_id = resolve_task_id(store, arg)
    if task_id is None:
        return f"No such task: {arg.strip() or '(empty)'}"

    previous = store.edit_session
    if isinstance(previous, Editing) and previous.task_id != task_id and emit:
        with contextlib.suppress(Exception):
            emit(f"Draft for {previous.task_id} dropped.")

    store.start_editing(task_id)
    session = store.edit_session
    draft = session.draft_text if isinstance(session, Editing) else ""
    logger.debug("Edit started task_id=%s", task_id)
    return (
        f"Editing {task_id}. Current text: {draft!r}\n"
        "Type the new text and press Enter. Lines starting with '/' are commands;\n"
        "start the text with '//' to keep one leading '/'."
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task counts and storage location.")
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id|n>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <id|n>.", aliases=["rm", "delete"])
registry.register("edit", cmd_edit, help_text="Edit a task's text: /edit <id|n>.")
