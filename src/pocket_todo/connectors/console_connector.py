# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import format_task_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Editing

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Map one line of input to a store operation.

    - "//...", editing -> submit the draft with one leading "/" dropped
    - "/..."           -> slash command
    - plain, editing   -> submit the draft (set_draft + commit_edit)
    - plain            -> add a task
    """
    store = state.task_store
    editing = isinstance(store.edit_session, Editing)

    if editing and line.startswith("//"):
        store.set_draft(line[1:])
        store.commit_edit()
        return format_task_list(state)

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    cmd_response = command_registry.handle(state, line, emit=emit)
    if cmd_response is not None:
        return cmd_response

    if editing:
        store.set_draft(line)
        store.commit_edit()
        return format_task_list(state)

    if store.add(line) is None:
        return None
    return format_task_list(state)


async def run_console_loop(state: AppState, *, read_line=None) -> None:
    """
    Interactive REPL over the task store.

    input() runs in a worker thread so scheduled writes keep landing while
    the prompt waits.
    """
    if read_line is None:
        async def read_line(prompt: str) -> str:
            return await asyncio.to_thread(input, prompt)

    logger.info("Console connector started (tasks=%d).", len(state.task_store))
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(format_task_list(state))

    while True:
        session = state.task_store.edit_session
        prompt = f"edit {session.task_id}> " if isinstance(session, Editing) else "todo> "
        try:
            raw = await read_line(prompt)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        # Whitespace-only lines are kept while editing: an edit may blank the text.
        line = raw if isinstance(session, Editing) else raw.strip()
        if not line and not isinstance(session, Editing):
            continue

        if line.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, line)
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling input."

        if reply is not None:
            print(reply)

    logger.info("Console connector finished.")
