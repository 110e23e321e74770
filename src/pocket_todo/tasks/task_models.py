# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False


class _NoEdit(Enum):
    """Sentinel type for "no task is being edited"."""

    NO_EDIT = "no_edit"

    def __repr__(self) -> str:
        return "NO_EDIT"


NO_EDIT: Final = _NoEdit.NO_EDIT


@dataclass(slots=True, frozen=True)
class Editing:
    """
    Active edit session for one task.

    The draft lives here, not on the Task: it only reaches the list on commit.
    """

    task_id: str
    draft_text: str


EditSession = _NoEdit | Editing
