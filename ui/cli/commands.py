"""Typer command handlers."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from core.orchestrator import Orchestrator, RuntimeBundle
from domain.snapshot import Snapshot
from engine.chaining import (
    build_chain_from_tasks,
    build_milestone_chain,
    calculate_chain_health,
    get_next_task,
    get_progress,
)
from engine.context_matcher import detect_intent
from engine.input_parser import parse_input
from engine.urgency import (
    calculate_decayed_priority,
    get_overdue_tasks,
    get_tasks_due_soon,
    rank_tasks_by_urgency,
)


def _local_now() -> datetime:
    """Local wall clock used by every command."""
    return datetime.now().astimezone()


def _runtime(root: Path | None = None) -> RuntimeBundle:
    return Orchestrator(root=root).build()


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _load_snapshot(path: Path) -> Snapshot:
    try:
        return Snapshot.from_file(path)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"Invalid snapshot {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def parse(text: str) -> None:
    """Print the parsed task as JSON."""
    _runtime()
    parsed = parse_input(text, now=_local_now())
    typer.echo(json.dumps(_json_safe(asdict(parsed)), indent=2))


def intent(text: str) -> None:
    _runtime()
    typer.echo(detect_intent(text).value)


def ask(text: str, data: Path) -> None:
    """Run the assistant pipeline over a snapshot."""
    bundle = _runtime()
    snapshot = _load_snapshot(data)
    response = bundle.assistant.process(
        text,
        snapshot.active_tasks(),
        snapshot.active_goals(),
        snapshot.tags_by_task,
        now=_local_now(),
    )
    typer.echo(f"[{response.intent.value}] confidence={response.confidence:.2f}")
    typer.echo(response.text)
    for action in response.suggested_actions:
        typer.echo(f"-> {action.label} ({action.action_type.value})")


def urgency(data: Path, due_within: float | None = None) -> None:
    """Print urgency ranking, decayed priorities, overdue and due-soon tasks."""
    bundle = _runtime()
    snapshot = _load_snapshot(data)
    now = _local_now()
    hours = due_within if due_within is not None else bundle.due_soon_hours

    typer.echo("Urgency ranking:")
    for task, score in rank_tasks_by_urgency(snapshot.tasks, now=now):
        decay = calculate_decayed_priority(task, now=now)
        line = f"{score:.2f} {task.description} [{decay.original_priority.value} -> {decay.decayed_priority.value}]"
        if decay.reason:
            line += f" {decay.reason}"
        typer.echo(line)

    overdue = get_overdue_tasks(snapshot.tasks, now=now)
    typer.echo(f"Overdue: {len(overdue)}")
    for task in overdue:
        typer.echo(f"- {task.description}")

    due_soon = get_tasks_due_soon(snapshot.tasks, within_hours=hours, now=now)
    typer.echo(f"Due within {hours:g}h: {len(due_soon)}")
    for task in due_soon:
        typer.echo(f"- {task.description}")


def chain(name: str, data: Path) -> None:
    """Print task chain state and milestone order per goal."""
    _runtime()
    snapshot = _load_snapshot(data)
    now = _local_now()
    task_chain = build_chain_from_tasks(name, snapshot.tasks, now=now)
    next_task = get_next_task(task_chain)

    typer.echo(f"Chain: {task_chain.name} ({len(task_chain.tasks)} steps)")
    typer.echo(f"Progress: {get_progress(task_chain):.0%}")
    typer.echo(f"Health: {calculate_chain_health(task_chain, now=now)}")
    typer.echo(f"Next: {next_task.description if next_task else '-'}")

    for goal in snapshot.goals:
        steps = build_milestone_chain(snapshot.milestones_for(goal.id))
        if not steps:
            continue
        typer.echo(f"Goal: {goal.title}")
        for step in steps:
            mark = "x" if step.milestone.is_completed else (">" if step.is_next else " ")
            typer.echo(f"  [{mark}] {step.milestone.title}")


def config_show() -> None:
    """Show merged config."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.config, indent=2))
