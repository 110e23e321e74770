# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
import pytest_asyncio

from pocket_todo.cli.bootstrap import create_initial_state
from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="pocket-todo-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        db_path=tmp_path / "storage.sqlite3",
        storage_key="tasks",
    )


@pytest.fixture()
def storage() -> FakeKeyValueStorage:
    return FakeKeyValueStorage()


@pytest_asyncio.fixture()
async def store(storage: FakeKeyValueStorage) -> TaskStore:
    """Loaded TaskStore over an empty fake slot."""
    s = TaskStore(storage, key="tasks")
    await s.load()
    return s


@pytest_asyncio.fixture()
async def state(settings: SimpleNamespace, storage: FakeKeyValueStorage) -> AppState:
    st = create_initial_state(settings=settings, storage=storage)
    await st.task_store.load()
    return st
