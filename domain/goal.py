"""Goal and milestone records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from domain.clock import as_utc, utc_now


class GoalCategory(str, Enum):
    FITNESS = "FITNESS"
    TRAVEL = "TRAVEL"
    FINANCIAL = "FINANCIAL"
    LEARNING = "LEARNING"
    CAREER = "CAREER"
    PERSONAL = "PERSONAL"
    HEALTH = "HEALTH"


class GoalStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"


class Goal(BaseModel):
    """Long-running goal tracked with streaks and milestones."""

    id: int = 0
    title: str
    description: str | None = None
    category: GoalCategory = GoalCategory.PERSONAL
    status: GoalStatus = GoalStatus.NOT_STARTED
    progress: float = Field(default=0.0, ge=0.0, le=100.0)
    current_streak: int = 0
    best_streak: int = 0
    notes: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    target_date: datetime | None = None

    @field_validator("created_at", "target_date")
    @classmethod
    def _normalize_timestamp(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class Milestone(BaseModel):
    """Ordered step towards a goal."""

    id: int = 0
    goal_id: int
    title: str
    description: str | None = None
    order_index: int = 0
    is_completed: bool = False
