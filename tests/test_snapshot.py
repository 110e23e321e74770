# tests/test_snapshot.py

from __future__ import annotations

import json

import pytest

from pocket_todo.tasks.snapshot import SnapshotError, dump_tasks, parse_tasks
from pocket_todo.tasks.task_models import Task


def test_round_trip_keeps_ids_text_flags_and_order() -> None:
    tasks = [
        Task(id="1700000000002", text="later", completed=True),
        Task(id="1700000000001", text="", completed=False),
        Task(id="x", text='quotes " and \\ and ünïcode', completed=False),
    ]

    assert parse_tasks(dump_tasks(tasks)) == tasks


def test_dump_format_matches_slot_contract() -> None:
    raw = dump_tasks([Task(id="1", text="A", completed=False)])

    assert json.loads(raw) == [{"id": "1", "text": "A", "completed": False}]


def test_empty_list() -> None:
    assert dump_tasks([]) == "[]"
    assert parse_tasks("[]") == []


def test_unknown_fields_are_ignored() -> None:
    raw = '[{"id": "1", "text": "A", "completed": true, "color": "red"}]'

    assert parse_tasks(raw) == [Task(id="1", text="A", completed=True)]


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "{",
        "null",
        '"tasks"',
        "[1, 2]",
        '[{"text": "A", "completed": false}]',
        '[{"id": "", "text": "A", "completed": false}]',
        '[{"id": "1", "text": null, "completed": false}]',
        '[{"id": "1", "text": "A", "completed": "false"}]',
        '[{"id": "1", "text": "A", "completed": 0}]',
    ],
)
def test_malformed_snapshots_are_rejected(raw: str) -> None:
    with pytest.raises(SnapshotError):
        parse_tasks(raw)


def test_duplicate_ids_are_rejected() -> None:
    raw = dump_tasks([Task(id="1", text="A"), Task(id="1", text="B")])

    with pytest.raises(SnapshotError, match="duplicate"):
        parse_tasks(raw)
