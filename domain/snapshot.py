"""File-backed stand-in for the persistence collaborator."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from domain.goal import Goal, GoalStatus, Milestone
from domain.tag import Tag
from domain.task import Task, TaskStatus

ACTIVE_TASK_STATUSES = {TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.SNOOZED}
ACTIVE_GOAL_STATUSES = {GoalStatus.NOT_STARTED, GoalStatus.IN_PROGRESS, GoalStatus.ON_HOLD}


class Snapshot(BaseModel):
    """Read-only bundle of tasks, goals, milestones and tags."""

    tasks: list[Task] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    tags_by_task: dict[int, list[Tag]] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path) -> Snapshot:
        """Load a snapshot from YAML or JSON; a missing file is an empty snapshot."""
        if not path.exists():
            return cls()
        with path.open("r", encoding="utf-8") as fh:
            if path.suffix.lower() == ".json":
                data = json.load(fh) or {}
            else:
                data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot file must contain a mapping: {path}")
        return cls.model_validate(data)

    def active_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.status in ACTIVE_TASK_STATUSES]

    def active_goals(self) -> list[Goal]:
        return [goal for goal in self.goals if goal.status in ACTIVE_GOAL_STATUSES]

    def milestones_for(self, goal_id: int) -> list[Milestone]:
        return [m for m in self.milestones if m.goal_id == goal_id]
