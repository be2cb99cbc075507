"""Read-only input records consumed by the engines."""

from domain.goal import Goal, GoalCategory, GoalStatus, Milestone
from domain.snapshot import Snapshot
from domain.tag import Tag, TagType
from domain.task import Priority, Task, TaskStatus, TriggerType

__all__ = [
    "Goal",
    "GoalCategory",
    "GoalStatus",
    "Milestone",
    "Priority",
    "Snapshot",
    "Tag",
    "TagType",
    "Task",
    "TaskStatus",
    "TriggerType",
]
