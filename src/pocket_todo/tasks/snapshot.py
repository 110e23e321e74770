# tasks/snapshot.py

"""
Snapshot codec for the durable slot.

The slot holds the whole list as a JSON array:
    [{"id": "1700000000000", "text": "Buy milk", "completed": false}, ...]

There is no version field; a format change needs its own compatibility handling.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .task_models import Task


class SnapshotError(ValueError):
    """Stored value is not a valid task list."""


def task_to_dict(task: Task) -> dict[str, Any]:
    return {"id": task.id, "text": task.text, "completed": task.completed}


def dump_tasks(tasks: Iterable[Task]) -> str:
    # ASCII-escaped so lone surrogates from undecodable input stay storable.
    return json.dumps([task_to_dict(t) for t in tasks])


def _item_to_task(item: Any, index: int) -> Task:
    if not isinstance(item, dict):
        raise SnapshotError(f"item {index} is not an object")

    task_id = item.get("id")
    text = item.get("text")
    completed = item.get("completed")

    if not isinstance(task_id, str) or not task_id:
        raise SnapshotError(f"item {index} has no string id")
    if not isinstance(text, str):
        raise SnapshotError(f"item {index} has no string text")
    if not isinstance(completed, bool):
        raise SnapshotError(f"item {index} has no boolean completed")

    return Task(id=task_id, text=text, completed=completed)


def parse_tasks(raw: str) -> list[Task]:
    """
    Parse a stored snapshot.

    Raises SnapshotError on anything that is not an array of well-formed tasks
    with unique ids. Partial recovery is not attempted.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow.
        raise SnapshotError(f"not JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotError(f"expected a JSON array, got {type(data).__name__}")

    tasks = [_item_to_task(item, i) for i, item in enumerate(data)]

    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise SnapshotError(f"duplicate task id {t.id!r}")
        seen.add(t.id)

    return tasks
