"""Derived value objects produced fresh by every engine call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from domain.goal import Goal, Milestone
from domain.tag import TagType
from domain.task import Priority, Task, TriggerType


class Intent(str, Enum):
    """What the user is trying to do with an utterance."""

    ADD_TASK = "ADD_TASK"
    ADD_GOAL = "ADD_GOAL"
    QUERY_TASKS = "QUERY_TASKS"
    QUERY_GOALS = "QUERY_GOALS"
    GOING_SOMEWHERE = "GOING_SOMEWHERE"
    STATUS_UPDATE = "STATUS_UPDATE"
    COMPLETE_TASK = "COMPLETE_TASK"
    COMPLETE_GOAL = "COMPLETE_GOAL"
    SNOOZE_TASK = "SNOOZE_TASK"
    GET_SUMMARY = "GET_SUMMARY"
    CHECK_IN_GOAL = "CHECK_IN_GOAL"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class ParsedTask:
    """Structured candidate task attributes extracted from free text."""

    description: str
    trigger_type: TriggerType = TriggerType.CONTEXT
    trigger_value: str | None = None
    category: str | None = None
    location_name: str | None = None
    due_date: datetime | None = None
    priority: Priority = Priority.MEDIUM
    tags: tuple[tuple[str, TagType], ...] = ()
    is_goal_related: bool = False
    goal_category: str | None = None

    @property
    def tag_names(self) -> list[str]:
        return [name for name, _ in self.tags]


@dataclass(frozen=True)
class TaskMatch:
    task: Task
    confidence: float
    reason: str


@dataclass(frozen=True)
class GoalMatch:
    goal: Goal
    confidence: float
    reason: str


@dataclass(frozen=True)
class MatchResult:
    """Ranked matches plus the canned reply for one utterance."""

    intent: Intent = Intent.UNKNOWN
    task_matches: tuple[TaskMatch, ...] = ()
    goal_matches: tuple[GoalMatch, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class DecayResult:
    task_id: int
    original_priority: Priority
    decayed_priority: Priority
    urgency_score: float
    reason: str


@dataclass(frozen=True)
class TaskChain:
    """Tasks ordered by creation time with a single current-step pointer."""

    id: str
    name: str
    tasks: tuple[Task, ...] = ()
    current_step_index: int = 0
    is_complete: bool = False


@dataclass(frozen=True)
class GoalDependency:
    goal_id: int
    depends_on_goal_ids: tuple[int, ...] = field(default_factory=tuple)
    is_blocked: bool = False


@dataclass(frozen=True)
class MilestoneStep:
    milestone: Milestone
    is_next: bool
