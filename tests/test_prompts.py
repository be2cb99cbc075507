"""Prompt builder and reply parsing tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from domain.goal import Goal, GoalCategory, Milestone
from domain.task import Priority, Task
from llm.prompt_engine.prompts import (
    SYSTEM_CONTEXT,
    build_contextual_response_prompt,
    build_goal_progress_prompt,
    build_intent_parsing_prompt,
    build_smart_snooze_prompt,
    build_task_summary_prompt,
    parse_intent_response,
)

NOW = datetime(2026, 3, 10, 14, 5, tzinfo=UTC)


def test_parse_intent_response_maps_null_to_none() -> None:
    parsed = parse_intent_response(
        "INTENT: ADD_TASK\n"
        "DESCRIPTION: Buy milk: two litres\n"
        "LOCATION: null\n"
        "DATE: tomorrow\n"
        "PRIORITY:  \n"
        "noise without separator\n"
        "category: shopping"
    )

    assert parsed.intent == "ADD_TASK"
    assert parsed.description == "Buy milk: two litres"
    assert parsed.location is None
    assert parsed.date == "tomorrow"
    assert parsed.priority is None
    assert parsed.category == "shopping"


def test_parse_intent_response_defaults() -> None:
    parsed = parse_intent_response("")

    assert parsed.intent == "UNKNOWN"
    assert parsed.description == ""


def test_intent_prompt_quotes_user_text() -> None:
    prompt = build_intent_parsing_prompt("book a cab")

    assert prompt.startswith(SYSTEM_CONTEXT)
    assert 'User message: "book a cab"' in prompt


def test_task_summary_prompt_lists_priority_location_and_due() -> None:
    tasks = [
        Task(
            id=1,
            description="Buy basil",
            priority=Priority.URGENT,
            location_name="supermarket",
            due_date=datetime(2026, 3, 12, tzinfo=UTC),
        ),
        Task(id=2, description="Call bank", priority=Priority.LOW),
    ]

    prompt = build_task_summary_prompt(tasks)

    assert "Tasks (2 total):" in prompt
    assert "- [URGENT] Buy basil @ supermarket due Mar 12" in prompt
    assert "- [LOW] Call bank" in prompt


def test_goal_progress_prompt_timeline() -> None:
    goal = Goal(
        id=1,
        title="Learn Kannada",
        category=GoalCategory.LEARNING,
        progress=42.7,
        current_streak=3,
        best_streak=9,
        target_date=NOW + timedelta(days=10, hours=1),
    )
    milestones = [
        Milestone(id=1, goal_id=1, title="Alphabet", is_completed=True),
        Milestone(id=2, goal_id=1, title="Numbers"),
    ]

    prompt = build_goal_progress_prompt(goal, milestones, now=NOW)
    overdue = build_goal_progress_prompt(goal.model_copy(update={"target_date": NOW}), [], now=NOW)
    undated = build_goal_progress_prompt(goal.model_copy(update={"target_date": None}), [], now=NOW)

    assert "Progress: 42%" in prompt
    assert "Streak: 3 days (best: 9)" in prompt
    assert "Timeline: 10 days remaining" in prompt
    assert "Completed: Alphabet" in prompt
    assert "Pending: Numbers" in prompt
    assert "Timeline: Past target date" in overdue
    assert "Timeline: No target date" in undated


def test_smart_snooze_prompt_uses_clock() -> None:
    task = Task(id=1, description="Stretch", category="health")

    prompt = build_smart_snooze_prompt(task, now=NOW)

    assert "Current time: 2:05 PM, Tuesday Mar 10" in prompt
    assert "Category: health" in prompt
    assert "Location:" not in prompt


def test_contextual_prompt_includes_history_and_location() -> None:
    prompt = build_contextual_response_prompt(
        "anything for today?",
        [],
        [],
        current_location="Jayanagar",
        recent_history=[("hi", True), ("Hello!" * 50, False)],
        now=NOW,
    )

    assert "No active tasks." in prompt
    assert "No active goals." in prompt
    assert "User is currently in: Jayanagar" in prompt
    assert "User: hi" in prompt
    assert f"Assistant: {('Hello!' * 50)[:200]}\n" in prompt
