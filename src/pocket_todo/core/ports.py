# src/pocket_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from typing import Callable, Protocol

from ..tasks.task_models import Task

TaskAddedListener = Callable[[Task], None]
# Called after a successful add; the presentation layer uses it for the insertion cue.


class KeyValueStorage(Protocol):
    """
    Durable key-value slot.

    - get_item returns the last written value, or None if the key was never written.
    - set_item overwrites the value. Callers may not await it in order; last write wins.
    """

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...
