"""Task records and their enums."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from domain.clock import as_utc, utc_now


class TriggerType(str, Enum):
    """Condition class that fires a reminder."""

    TIME = "TIME"
    LOCATION = "LOCATION"
    EVENT = "EVENT"
    CONTEXT = "CONTEXT"


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    SNOOZED = "SNOOZED"
    CANCELLED = "CANCELLED"


class Priority(str, Enum):
    """Task priority, declared low to high."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def ordinal(self) -> int:
        return list(Priority).index(self)


class Task(BaseModel):
    """Reminder record owned by the persistence layer."""

    id: int = 0
    description: str
    trigger_type: TriggerType = TriggerType.CONTEXT
    trigger_value: str | None = None
    category: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    location_name: str | None = None
    notes: str | None = None
    due_date: datetime | None = None
    snoozed_until: datetime | None = None
    linked_goal_id: int | None = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("due_date", "snoozed_until", "created_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None
