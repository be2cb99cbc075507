"""Snapshot loading tests."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from domain.goal import Goal, GoalStatus
from domain.snapshot import Snapshot
from domain.tag import TagType
from domain.task import Priority, Task, TaskStatus

SNAPSHOT_YAML = """\
tasks:
  - id: 1
    description: Buy basil
    location_name: supermarket
    priority: HIGH
    created_at: 2026-03-01T08:00:00
  - id: 2
    description: Old errand
    status: COMPLETED
goals:
  - id: 5
    title: Grow herbs
    status: IN_PROGRESS
    progress: 20
  - id: 6
    title: Learn piano
    status: ABANDONED
milestones:
  - {id: 1, goal_id: 5, title: Buy pots, order_index: 0}
  - {id: 2, goal_id: 6, title: Scales, order_index: 0}
tags_by_task:
  1:
    - {id: 3, name: supermarket, type: LOCATION}
"""


def test_snapshot_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.yaml"
    path.write_text(SNAPSHOT_YAML, encoding="utf-8")

    snapshot = Snapshot.from_file(path)

    assert [t.id for t in snapshot.active_tasks()] == [1]
    assert [g.id for g in snapshot.active_goals()] == [5]
    assert [m.title for m in snapshot.milestones_for(5)] == ["Buy pots"]
    assert snapshot.tags_by_task[1][0].type is TagType.LOCATION
    assert snapshot.tasks[0].priority is Priority.HIGH
    assert snapshot.tasks[0].created_at == datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


def test_snapshot_from_json_with_string_keys(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps({"tasks": [{"id": 4, "description": "Call mom"}], "tags_by_task": {"4": []}}),
        encoding="utf-8",
    )

    snapshot = Snapshot.from_file(path)

    assert snapshot.tags_by_task == {4: []}


def test_missing_snapshot_is_empty(tmp_path: Path) -> None:
    snapshot = Snapshot.from_file(tmp_path / "none.yaml")

    assert snapshot.tasks == []
    assert snapshot.active_goals() == []


def test_snapshot_rejects_bad_records(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("goals:\n  - title: Too much\n    progress: 140\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        Snapshot.from_file(path)


def test_records_normalize_naive_timestamps() -> None:
    task = Task(description="x", due_date=datetime(2026, 1, 1, 9, 0), status=TaskStatus.SNOOZED)
    goal = Goal(title="y", target_date=datetime(2026, 6, 1), status=GoalStatus.ON_HOLD)

    assert task.due_date.tzinfo is UTC
    assert goal.target_date.tzinfo is UTC
    assert Priority.URGENT.ordinal > Priority.LOW.ordinal
