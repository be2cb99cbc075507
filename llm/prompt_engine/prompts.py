"""Prompt builders for the optional generator, plus parsing of its structured replies."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.clock import resolve_now
from domain.goal import Goal, Milestone
from domain.task import Priority, Task

SYSTEM_CONTEXT = """\
You are RemindME, a helpful personal reminder and goal tracking assistant.
You help users manage tasks, track goals, and stay organized.
Be concise, friendly, and actionable in your responses.
Always respond in 2-3 sentences unless more detail is needed."""

_PRIORITY_LABELS = {
    Priority.URGENT: "[URGENT]",
    Priority.HIGH: "[HIGH]",
    Priority.MEDIUM: "[MED]",
    Priority.LOW: "[LOW]",
}


@dataclass(frozen=True)
class ParsedIntent:
    """Structured classification returned by the generator."""

    intent: str
    description: str
    location: str | None = None
    date: str | None = None
    priority: str | None = None
    category: str | None = None


def _short_date(value: datetime) -> str:
    return f"{value:%b} {value.day}"


def _clock_line(now: datetime) -> str:
    hour = now.hour % 12 or 12
    return f"{hour}:{now:%M %p, %A} {_short_date(now)}"


def build_intent_parsing_prompt(user_input: str) -> str:
    return f"""{SYSTEM_CONTEXT}

Classify the following user message into exactly one intent category.
Categories: ADD_TASK, ADD_GOAL, COMPLETE_TASK, CHECK_IN_GOAL, GET_SUMMARY, GOING_SOMEWHERE, STATUS_UPDATE, SNOOZE_TASK, LIST_TASKS, LIST_GOALS, GREETING, UNKNOWN

Also extract:
- description: the main task/goal description
- location: any mentioned location (or null)
- date: any mentioned date/time (or null)
- priority: urgent/high/medium/low (or null)
- category: fitness/travel/financial/learning/career/personal/health (or null)

User message: "{user_input}"

Respond in this exact format:
INTENT: <intent>
DESCRIPTION: <description>
LOCATION: <location or null>
DATE: <date or null>
PRIORITY: <priority or null>
CATEGORY: <category or null>"""


def build_task_summary_prompt(tasks: Sequence[Task]) -> str:
    lines = []
    for task in tasks[:15]:
        location = f" @ {task.location_name}" if task.location_name else ""
        due = f" due {_short_date(task.due_date)}" if task.due_date else ""
        lines.append(f"- {_PRIORITY_LABELS[task.priority]} {task.description}{location}{due}")
    task_list = "\n".join(lines)
    return f"""{SYSTEM_CONTEXT}

Summarize the following task list into a brief, organized daily briefing.
Group by priority and mention any urgent items first. Be concise.

Tasks ({len(tasks)} total):
{task_list}

Provide a 3-4 sentence summary highlighting what needs attention today."""


def build_goal_progress_prompt(
    goal: Goal, milestones: Sequence[Milestone], now: datetime | None = None
) -> str:
    now = resolve_now(now)
    done = [m.title for m in milestones if m.is_completed]
    pending = [m.title for m in milestones if not m.is_completed]
    milestone_lines = []
    if done:
        milestone_lines.append(f"Completed: {', '.join(done)}")
    if pending:
        milestone_lines.append(f"Pending: {', '.join(pending)}")

    if goal.target_date is not None:
        days_left = int((goal.target_date - now).total_seconds() // 86400)
        timeline = f"{days_left} days remaining" if days_left > 0 else "Past target date"
    else:
        timeline = "No target date"

    return f"""{SYSTEM_CONTEXT}

Provide a brief motivational progress update for this goal:

Goal: {goal.title}
Category: {goal.category.value}
Status: {goal.status.value}
Progress: {int(goal.progress)}%
Streak: {goal.current_streak} days (best: {goal.best_streak})
Timeline: {timeline}
Milestones:
{chr(10).join(milestone_lines)}

Give an encouraging 2-3 sentence update with a specific next-step suggestion."""


def build_goal_milestones_prompt(goal: Goal) -> str:
    description = f"Description: {goal.description}" if goal.description else ""
    return f"""{SYSTEM_CONTEXT}

Break down the following goal into 5-7 actionable milestones/steps.
Each step should be specific, measurable, and achievable.

Goal: {goal.title}
Category: {goal.category.value}
{description}

List the milestones in order, one per line, starting with the easiest/first step.
Format: just the milestone title, nothing else."""


def build_smart_snooze_prompt(task: Task, now: datetime | None = None) -> str:
    now = resolve_now(now)
    extras = []
    if task.location_name:
        extras.append(f"Location: {task.location_name}")
    if task.category:
        extras.append(f"Category: {task.category}")
    return f"""{SYSTEM_CONTEXT}

Suggest the best snooze time for this reminder based on context:

Task: {task.description}
Current time: {_clock_line(now)}
Priority: {task.priority.value}
{chr(10).join(extras)}

Suggest ONE specific snooze time (e.g., "tomorrow at 9 AM", "in 2 hours", "Monday morning").
Explain why in one sentence."""


def build_reflection_prompt(goal: Goal, recent_check_ins: int, days_since_start: int) -> str:
    return f"""{SYSTEM_CONTEXT}

Generate a brief reflection prompt for the user about their goal progress:

Goal: {goal.title}
Days active: {days_since_start}
Check-ins this week: {recent_check_ins}
Current streak: {goal.current_streak}
Progress: {int(goal.progress)}%

Ask ONE thoughtful reflection question that helps the user think about their progress and next steps.
Keep it encouraging and specific to their goal."""


def build_contextual_response_prompt(
    user_input: str,
    active_tasks: Sequence[Task],
    active_goals: Sequence[Goal],
    current_location: str | None = None,
    recent_history: Sequence[tuple[str, bool]] = (),
    now: datetime | None = None,
) -> str:
    """Prompt carrying the user's tasks, goals and recent turns as context.

    recent_history holds (message, is_from_user) pairs, oldest first.
    """
    now = resolve_now(now)
    if active_tasks:
        task_lines = []
        for task in active_tasks[:10]:
            category = f" ({task.category})" if task.category else ""
            location = f" @ {task.location_name}" if task.location_name else ""
            due = f" due {_short_date(task.due_date)}" if task.due_date else ""
            task_lines.append(
                f"- [{task.priority.value}] {task.description}{category}{location}{due}"
            )
        task_context = f"Active tasks ({len(active_tasks)} total):\n" + "\n".join(task_lines)
    else:
        task_context = "No active tasks."

    if active_goals:
        goal_lines = []
        for goal in active_goals[:5]:
            streak = f" streak:{goal.current_streak}d" if goal.current_streak > 0 else ""
            goal_lines.append(
                f"- {goal.title} [{goal.category.value}] {int(goal.progress)}%{streak} {goal.status.value}"
            )
        goal_context = f"Active goals ({len(active_goals)} total):\n" + "\n".join(goal_lines)
    else:
        goal_context = "No active goals."

    location_context = f"User is currently in: {current_location}" if current_location else ""
    history_context = ""
    if recent_history:
        turns = [
            f"{'User' if is_user else 'Assistant'}: {message[:200]}"
            for message, is_user in recent_history
        ]
        history_context = "Recent conversation:\n" + "\n".join(turns)

    return f"""{SYSTEM_CONTEXT}

User's current context:
Current time: {_clock_line(now)}
{location_context}
{task_context}
{goal_context}
{history_context}

User says: "{user_input}"

Respond helpfully. Reference specific tasks or goals when relevant. If the user asks a general question, answer it using their task/goal context. Consider the recent conversation for continuity. Be conversational and concise (2-4 sentences)."""


def build_action_enhancement_prompt(
    user_input: str,
    action_result: str,
    active_tasks: Sequence[Task],
    active_goals: Sequence[Goal],
) -> str:
    task_summary = ""
    if active_tasks:
        task_summary = "Other active tasks: " + ", ".join(t.description for t in active_tasks[:5])
    goal_summary = ""
    if active_goals:
        goal_summary = "Active goals: " + ", ".join(g.title for g in active_goals[:3])
    return f"""{SYSTEM_CONTEXT}

The user said: "{user_input}"
I performed this action: {action_result}
{task_summary}
{goal_summary}

Add ONE brief helpful tip or observation (1 sentence max) related to this action. For example, relate it to their other tasks/goals, suggest a follow-up, or note timing. Be specific, not generic. If there's nothing useful to add, respond with just "ok"."""


def build_daily_motivation_prompt(
    active_goal_count: int,
    active_task_count: int,
    longest_streak: int,
    top_goal: Goal | None,
) -> str:
    top_line = f"- Top goal: {top_goal.title} at {int(top_goal.progress)}%" if top_goal else ""
    return f"""{SYSTEM_CONTEXT}

Generate a brief morning motivation message for a user with:
- {active_task_count} pending tasks
- {active_goal_count} active goals
- Longest current streak: {longest_streak} days
{top_line}

Keep it to 1-2 sentences. Be specific and encouraging, not generic."""


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip() or value == "null":
        return None
    return value


def parse_intent_response(response: str) -> ParsedIntent:
    """Read the KEY: value lines of an intent-parsing reply."""
    fields: dict[str, str] = {}
    for line in response.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip().upper()] = value.strip()
    return ParsedIntent(
        intent=fields.get("INTENT", "UNKNOWN"),
        description=fields.get("DESCRIPTION", ""),
        location=_optional(fields.get("LOCATION")),
        date=_optional(fields.get("DATE")),
        priority=_optional(fields.get("PRIORITY")),
        category=_optional(fields.get("CATEGORY")),
    )
