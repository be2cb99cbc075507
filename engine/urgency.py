"""Time-decaying urgency scores and priority re-derivation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from domain.clock import resolve_now
from domain.task import Priority, Task, TaskStatus
from engine.results import DecayResult

logger = logging.getLogger("remindme.urgency")

BASE_SCORES = {
    Priority.URGENT: 1.0,
    Priority.HIGH: 0.75,
    Priority.MEDIUM: 0.5,
    Priority.LOW: 0.25,
}

# (max hours until due, bonus); first bound that holds wins, overdue included.
DUE_PROXIMITY_BONUSES = (
    (0.0, 0.4),
    (2.0, 0.35),
    (12.0, 0.25),
    (24.0, 0.15),
    (72.0, 0.05),
)

# (min score, priority), highest first.
PRIORITY_THRESHOLDS = (
    (0.85, Priority.URGENT),
    (0.65, Priority.HIGH),
    (0.40, Priority.MEDIUM),
)

AGE_BONUS_DAYS = 14.0
MAX_AGE_BONUS = 0.3
SNOOZE_PENALTY = 0.05

_SCORED_STATUSES = {TaskStatus.PENDING, TaskStatus.SNOOZED}
_DAY_SECONDS = 86400.0
_HOUR_SECONDS = 3600.0


def _age_days(task: Task, now: datetime) -> float:
    return (now - task.created_at).total_seconds() / _DAY_SECONDS


def _hours_until_due(task: Task, now: datetime) -> float | None:
    if task.due_date is None:
        return None
    return (task.due_date - now).total_seconds() / _HOUR_SECONDS


def due_proximity_bonus(hours_until_due: float) -> float:
    for bound, bonus in DUE_PROXIMITY_BONUSES:
        if hours_until_due <= bound:
            return bonus
    return 0.0


def calculate_urgency_score(task: Task, now: datetime | None = None) -> float:
    """Score in [0, 1] from priority, age and due-date pressure; 0 for inactive tasks."""
    if task.status not in _SCORED_STATUSES:
        return 0.0
    now = resolve_now(now)

    score = BASE_SCORES[task.priority]
    score += max(0.0, min(MAX_AGE_BONUS, _age_days(task, now) / AGE_BONUS_DAYS))

    hours = _hours_until_due(task, now)
    if hours is not None:
        score += due_proximity_bonus(hours)

    if task.status is TaskStatus.SNOOZED:
        score -= SNOOZE_PENALTY

    return max(0.0, min(1.0, score))


def priority_for_score(score: float) -> Priority:
    for threshold, priority in PRIORITY_THRESHOLDS:
        if score >= threshold:
            return priority
    return Priority.LOW


def _decay_reason(task: Task, decayed: Priority, now: datetime) -> str:
    parts: list[str] = []
    if decayed is not task.priority:
        # Ordinal direction kept as shipped: moving to a higher priority reads
        # "De-escalated". Pending product confirmation.
        if decayed.ordinal < task.priority.ordinal:
            parts.append("Escalated:")
        else:
            parts.append("De-escalated:")

    age_days = int(_age_days(task, now))
    if age_days > 0:
        parts.append(f"{age_days}d old.")

    if task.due_date is not None:
        hours_left = int((task.due_date - now) / timedelta(hours=1))
        if hours_left < 0:
            parts.append(f"Overdue by {-hours_left}h.")
        elif hours_left < 24:
            parts.append(f"Due in {hours_left}h.")
        else:
            parts.append(f"Due in {hours_left // 24}d.")
    return " ".join(parts)


def calculate_decayed_priority(task: Task, now: datetime | None = None) -> DecayResult:
    """Recompute the effective priority of a task from its urgency score."""
    now = resolve_now(now)
    score = calculate_urgency_score(task, now)
    decayed = priority_for_score(score)
    if decayed is not task.priority:
        logger.debug(
            "Task %s priority %s -> %s (score=%.2f)",
            task.id,
            task.priority.value,
            decayed.value,
            score,
        )
    return DecayResult(
        task_id=task.id,
        original_priority=task.priority,
        decayed_priority=decayed,
        urgency_score=score,
        reason=_decay_reason(task, decayed, now),
    )


def rank_tasks_by_urgency(
    tasks: Sequence[Task], now: datetime | None = None
) -> list[tuple[Task, float]]:
    """Pair each task with its score, most urgent first."""
    now = resolve_now(now)
    scored = [(task, calculate_urgency_score(task, now)) for task in tasks]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def get_overdue_tasks(tasks: Sequence[Task], now: datetime | None = None) -> list[Task]:
    """Pending tasks whose due date has passed; snoozed tasks are not overdue."""
    now = resolve_now(now)
    return [
        task
        for task in tasks
        if task.due_date is not None and task.due_date < now and task.status is TaskStatus.PENDING
    ]


def get_tasks_due_soon(
    tasks: Sequence[Task], within_hours: float = 24, now: datetime | None = None
) -> list[Task]:
    """Pending tasks due between now and now + within_hours, soonest first."""
    now = resolve_now(now)
    cutoff = now + timedelta(hours=within_hours)
    due_soon = [
        task
        for task in tasks
        if task.due_date is not None
        and now <= task.due_date <= cutoff
        and task.status is TaskStatus.PENDING
    ]
    due_soon.sort(key=lambda task: task.due_date)
    return due_soon
