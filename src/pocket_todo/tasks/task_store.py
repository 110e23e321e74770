# tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
import time

from ..core.ports import KeyValueStorage, TaskAddedListener
from .snapshot import SnapshotError, dump_tasks, parse_tasks
from .task_models import NO_EDIT, EditSession, Editing, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Ordered task list mirrored into one durable key-value slot.

    - load() hydrates the list once; until then mutations are ignored
    - every mutation serializes the whole list and schedules a write
      as a fire-and-forget asyncio task (not awaited, not queued, not coalesced)
    - overlapping writes race at the storage layer: last write wins
    - no failure is raised to the caller; storage problems are logged and the
      store keeps working on in-memory state

    Mutating methods must be called from the event loop thread.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = "tasks") -> None:
        self._storage = storage
        self._key = key
        self._tasks: list[Task] = []
        self._edit: EditSession = NO_EDIT
        self._loaded = False
        self._listeners: list[TaskAddedListener] = []
        self._pending: set[asyncio.Task[None]] = set()

    # ---- read-only views ----

    @property
    def key(self) -> str:
        return self._key

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def edit_session(self) -> EditSession:
        return self._edit

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- listeners ----

    def add_listener(self, callback: TaskAddedListener) -> None:
        self._listeners.append(callback)

    def _notify_added(self, task: Task) -> None:
        for cb in list(self._listeners):
            try:
                cb(task)
            except Exception:
                logger.exception("task-added listener failed task_id=%s", task.id)

    # ---- startup ----

    async def load(self) -> None:
        """Hydrate from the durable slot. Absent or broken snapshot -> empty list."""
        if self._loaded:
            logger.debug("TaskStore.load called twice; ignoring")
            return

        try:
            raw = await self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read task snapshot key=%s; starting empty", self._key)
            raw = None

        if raw is not None:
            try:
                self._tasks = parse_tasks(raw)
            except SnapshotError as e:
                logger.warning("Ignoring malformed task snapshot key=%s: %s", self._key, e)
                self._tasks = []

        self._loaded = True
        logger.info("TaskStore loaded key=%s total=%d", self._key, len(self._tasks))

    def _accepting(self, op: str) -> bool:
        if not self._loaded:
            logger.warning("TaskStore.%s before load(); ignored", op)
            return False
        return True

    # ---- mutations ----

    def add(self, text: str) -> Task | None:
        """Append a new task. Text that trims to empty is rejected silently (returns None)."""
        if not self._accepting("add"):
            return None
        if not text.strip():
            logger.debug("add rejected: empty text")
            return None

        task = Task(id=self._new_id(), text=text, completed=False)
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        self._persist()
        self._notify_added(task)
        return task

    def delete(self, task_id: str) -> None:
        if not self._accepting("delete"):
            return
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if isinstance(self._edit, Editing) and self._edit.task_id == task_id:
            self._edit = NO_EDIT
        self._persist()

    def toggle_complete(self, task_id: str) -> None:
        if not self._accepting("toggle_complete"):
            return
        task = self.get(task_id)
        if task is not None:
            task.completed = not task.completed
        self._persist()

    def update_text(self, task_id: str, new_text: str) -> None:
        """
        Replace the text of a task. No trimming and no empty check here:
        an edit may leave a task with empty text, unlike add().

        Always ends the edit session.
        """
        if not self._accepting("update_text"):
            return
        task = self.get(task_id)
        if task is not None:
            task.text = new_text
        self._edit = NO_EDIT
        self._persist()

    # ---- edit session ----

    def start_editing(self, task_id: str) -> None:
        """viewing -> editing. Any other task's uncommitted draft is dropped."""
        task = self.get(task_id)
        if task is None:
            return
        if isinstance(self._edit, Editing) and self._edit.task_id != task_id:
            logger.debug("Discarding draft for task_id=%s", self._edit.task_id)
        self._edit = Editing(task_id=task.id, draft_text=task.text)

    def set_draft(self, text: str) -> None:
        if isinstance(self._edit, Editing):
            self._edit = Editing(task_id=self._edit.task_id, draft_text=text)

    def commit_edit(self) -> None:
        """editing -> viewing, applying the draft through update_text."""
        if isinstance(self._edit, Editing):
            self.update_text(self._edit.task_id, self._edit.draft_text)

    # ---- persistence ----

    def _new_id(self) -> str:
        # Millisecond timestamp, bumped on collision (two adds in the same ms).
        candidate = time.time_ns() // 1_000_000
        existing = {t.id for t in self._tasks}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def _persist(self) -> None:
        value = dump_tasks(self._tasks)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; task list not persisted")
            return

        job = loop.create_task(self._write(value))
        self._pending.add(job)
        job.add_done_callback(self._pending.discard)

    async def _write(self, value: str) -> None:
        try:
            await self._storage.set_item(self._key, value)
        except Exception:
            logger.exception("Failed to persist task list key=%s", self._key)

    async def flush(self) -> None:
        """Wait for writes still in flight (shutdown/tests only)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
