# src/pocket_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore
from .ports import KeyValueStorage


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: Any

    storage: KeyValueStorage
    task_store: TaskStore

    # Id of the most recently added task; the console highlights it once (insertion cue).
    highlight_id: str | None = None

    def on_task_added(self, task: Task) -> None:
        self.highlight_id = task.id
