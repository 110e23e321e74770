# src/pocket_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, restores the task list,
then runs the console REPL until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, load_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(state: AppState, *, console_enabled: bool) -> None:
    await load_state(state)
    try:
        if console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled; nothing else to run.")
    finally:
        await shutdown_state(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/pocket_todo")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "pocket-todo"))

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state, console_enabled=settings.console_enabled))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
