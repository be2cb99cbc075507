"""Sequencing state for task chains, goal dependencies and milestones."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from domain.clock import resolve_now
from domain.goal import Goal, GoalStatus, Milestone
from domain.task import Task, TaskStatus
from engine.results import GoalDependency, MilestoneStep, TaskChain

logger = logging.getLogger("remindme.chaining")

_OPEN_STEP_STATUSES = {TaskStatus.PENDING, TaskStatus.SNOOZED}

# (min progress, label), checked top-down after completion and overdue checks.
HEALTH_LABELS = (
    (0.75, "Almost Done"),
    (0.5, "Halfway There"),
    (0.25, "Making Progress"),
)


def build_chain_from_tasks(
    name: str, tasks: Sequence[Task], now: datetime | None = None
) -> TaskChain:
    """Order tasks by creation time and point at the first open step."""
    now = resolve_now(now)
    ordered = sorted(tasks, key=lambda task: task.created_at)
    current = next(
        (i for i, task in enumerate(ordered) if task.status in _OPEN_STEP_STATUSES),
        0,
    )
    chain = TaskChain(
        id=f"chain_{int(now.timestamp() * 1000)}",
        name=name,
        tasks=tuple(ordered),
        current_step_index=current,
        is_complete=all(task.status is TaskStatus.COMPLETED for task in ordered),
    )
    logger.debug(
        "Built chain %r with %d steps (current=%d, complete=%s)",
        name,
        len(ordered),
        current,
        chain.is_complete,
    )
    return chain


def get_next_task(chain: TaskChain) -> Task | None:
    if chain.is_complete:
        return None
    if 0 <= chain.current_step_index < len(chain.tasks):
        return chain.tasks[chain.current_step_index]
    return None


def get_completed_count(chain: TaskChain) -> int:
    return sum(1 for task in chain.tasks if task.status is TaskStatus.COMPLETED)


def get_progress(chain: TaskChain) -> float:
    """Completed fraction of the chain, 0 for an empty chain."""
    if not chain.tasks:
        return 0.0
    return get_completed_count(chain) / len(chain.tasks)


def check_goal_dependencies(
    goal: Goal,
    all_goals: Sequence[Goal],
    dependency_map: Mapping[int, Sequence[int]],
) -> GoalDependency:
    """A goal is blocked while any known dependency is not completed.

    Dependency ids with no matching goal are ignored.
    """
    dependencies = tuple(dependency_map.get(goal.id, ()))
    goals_by_id = {candidate.id: candidate for candidate in all_goals}
    is_blocked = any(
        dep_id in goals_by_id and goals_by_id[dep_id].status is not GoalStatus.COMPLETED
        for dep_id in dependencies
    )
    return GoalDependency(goal_id=goal.id, depends_on_goal_ids=dependencies, is_blocked=is_blocked)


def suggest_next_milestone(
    milestones: Sequence[Milestone], completed_milestones: Iterable[Milestone] = ()
) -> Milestone | None:
    """Lowest-ordered milestone that is neither completed nor listed as completed."""
    completed_ids = {milestone.id for milestone in completed_milestones}
    remaining = [m for m in milestones if m.id not in completed_ids and not m.is_completed]
    if not remaining:
        return None
    return min(remaining, key=lambda milestone: milestone.order_index)


def build_milestone_chain(milestones: Sequence[Milestone]) -> list[MilestoneStep]:
    """Milestones in order, with only the first incomplete one flagged as next."""
    steps: list[MilestoneStep] = []
    found_next = False
    for milestone in sorted(milestones, key=lambda m: m.order_index):
        is_next = not milestone.is_completed and not found_next
        if is_next:
            found_next = True
        steps.append(MilestoneStep(milestone=milestone, is_next=is_next))
    return steps


def calculate_chain_health(chain: TaskChain, now: datetime | None = None) -> str:
    """Human-readable health label for a chain."""
    if chain.is_complete:
        return "Complete"

    now = resolve_now(now)
    overdue = sum(
        1
        for task in chain.tasks
        if task.due_date is not None and task.due_date < now and task.status is TaskStatus.PENDING
    )
    if overdue > 0:
        return f"At Risk ({overdue} overdue)"

    progress = get_progress(chain)
    for threshold, label in HEALTH_LABELS:
        if progress >= threshold:
            return label
    if progress > 0:
        return "Getting Started"
    return "Not Started"
