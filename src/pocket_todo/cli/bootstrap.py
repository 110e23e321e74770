# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete storage and the task store into AppState,
- hydrates the task list from the durable slot.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and storage are injectable to keep tests off the real data dir.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = SqliteKeyValueStore(settings.db_path)

    task_store = TaskStore(storage, key=settings.storage_key)
    state = AppState(settings=settings, storage=storage, task_store=task_store)
    task_store.add_listener(state.on_task_added)
    return state


async def load_state(state: AppState) -> None:
    """Hydrate the task store. Never raises: a broken slot means an empty list."""
    await state.task_store.load()
    logger.info("Tasks restored: %d", len(state.task_store))


async def shutdown_state(state: AppState) -> None:
    """Best-effort: let in-flight writes land before the loop goes away."""
    try:
        await state.task_store.flush()
    except Exception:
        logger.exception("Failed to flush pending task writes.")
