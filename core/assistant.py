"""Conversation pipeline: local intelligence first, optional generator second.

Every answer is complete without the generator. When one is configured, its
output may replace the local reply text; a None reply or any failure leaves the
local result in place.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from domain.clock import resolve_now
from domain.goal import Goal, GoalCategory, GoalStatus, Milestone
from domain.tag import Tag
from domain.task import Priority, Task, TaskStatus
from engine.context_matcher import (
    detect_intent,
    generate_response,
    match_goals_to_context,
    match_tasks_to_context,
)
from engine.input_parser import parse_input
from engine.results import GoalMatch, Intent, ParsedTask, TaskMatch
from llm.base_llm import BaseLLM
from llm.prompt_engine import prompts

logger = logging.getLogger("remindme.assistant")

LOCAL_CONFIDENCE = 0.6
LLM_CONFIDENCE = 0.85
KEYWORD_MATCH_CONFIDENCE = 0.3
MAX_SUGGESTED_ACTIONS = 3
ACTION_LABEL_LIMIT = 30
SUMMARY_HEADER = "📊 AI Summary\n\n"

_KEYWORD_SEARCH_STATUSES = {TaskStatus.PENDING, TaskStatus.IN_PROGRESS}

_GOAL_CATEGORY_BY_PARSED = {
    "health": GoalCategory.FITNESS,
    "fitness": GoalCategory.FITNESS,
    "travel": GoalCategory.TRAVEL,
    "finance": GoalCategory.FINANCIAL,
    "learning": GoalCategory.LEARNING,
    "work": GoalCategory.CAREER,
}

_LIST_PREFIX = re.compile(r"^\d+[.)\-]\s*")
_BULLET_PREFIX = re.compile(r"^[-•]\s*")


class ActionType(str, Enum):
    CREATE_TASK = "CREATE_TASK"
    CREATE_GOAL = "CREATE_GOAL"
    COMPLETE_TASK = "COMPLETE_TASK"
    CHECK_IN_GOAL = "CHECK_IN_GOAL"
    SNOOZE_TASK = "SNOOZE_TASK"
    VIEW_SUMMARY = "VIEW_SUMMARY"
    ADD_MILESTONE = "ADD_MILESTONE"
    NAVIGATE = "NAVIGATE"


@dataclass(frozen=True)
class SuggestedAction:
    label: str
    action_type: ActionType
    payload: str | None = None


@dataclass(frozen=True)
class IntelligentResponse:
    """Reply text plus everything the host needs to act on an utterance."""

    text: str
    intent: Intent
    confidence: float
    task_matches: tuple[TaskMatch, ...] = ()
    goal_matches: tuple[GoalMatch, ...] = ()
    suggested_actions: tuple[SuggestedAction, ...] = field(default_factory=tuple)
    used_llm: bool = False


def goal_category_for(parsed: ParsedTask) -> GoalCategory:
    """Map a parsed task category onto the goal category set."""
    key = (parsed.goal_category or "").lower()
    return _GOAL_CATEGORY_BY_PARSED.get(key, GoalCategory.PERSONAL)


def keyword_task_matches(
    parsed: ParsedTask,
    active_tasks: Sequence[Task],
    tags_by_task: Mapping[int, Sequence[Tag]],
) -> list[Task]:
    """Pending or in-progress tasks linked to the parsed location or tag names.

    A keyword links a task when it occurs in the description, category,
    location name or notes, or when a tag on the task has exactly that name
    (case-insensitive).
    """
    if parsed.location_name is None:
        return []
    keywords = {parsed.location_name.lower(), *(name.lower() for name in parsed.tag_names)}
    found: list[Task] = []
    for task in active_tasks:
        if task.status not in _KEYWORD_SEARCH_STATUSES:
            continue
        fields = [
            value.lower()
            for value in (task.description, task.category, task.location_name, task.notes)
            if value
        ]
        tag_names = {tag.name.lower() for tag in tags_by_task.get(task.id, ())}
        if tag_names & keywords or any(k in value for k in keywords for value in fields):
            found.append(task)
    return found


def looks_like_task(parsed: ParsedTask) -> bool:
    """An unclassified utterance with a tag, place or date is saved as a task."""
    return bool(parsed.tags) or parsed.location_name is not None or parsed.due_date is not None


def saved_task_reply(parsed: ParsedTask) -> str:
    reply = f'✅ Saved: "{parsed.description}"\n'
    if parsed.tags:
        reply += f"🏷️ Tags: {', '.join(parsed.tag_names)}\n"
    return reply + "I'll remind you when the time is right!"


def enrich_with_keyword_matches(
    task_matches: Sequence[TaskMatch], keyword_tasks: Sequence[Task]
) -> list[TaskMatch]:
    """Append keyword-only hits after the scored matches, one entry per task id."""
    enriched = list(task_matches)
    seen = {match.task.id for match in task_matches}
    for task in keyword_tasks:
        if task.id in seen:
            continue
        seen.add(task.id)
        enriched.append(
            TaskMatch(task=task, confidence=KEYWORD_MATCH_CONFIDENCE, reason="keyword match")
        )
    return enriched


def _truncate(text: str) -> str:
    return text[:ACTION_LABEL_LIMIT]


def build_suggested_actions(
    intent: Intent,
    parsed: ParsedTask,
    active_tasks: Sequence[Task],
    active_goals: Sequence[Goal],
) -> tuple[SuggestedAction, ...]:
    actions: list[SuggestedAction] = []
    if intent is Intent.ADD_TASK:
        actions.append(SuggestedAction("View Tasks", ActionType.NAVIGATE, "tasks"))
    elif intent is Intent.ADD_GOAL:
        actions.append(SuggestedAction("View Goals", ActionType.NAVIGATE, "goals"))
        actions.append(SuggestedAction("Add Milestones", ActionType.ADD_MILESTONE))
    elif intent is Intent.GET_SUMMARY:
        urgent = next((t for t in active_tasks if t.priority is Priority.URGENT), None)
        if urgent is not None:
            actions.append(
                SuggestedAction(
                    f"Complete: {_truncate(urgent.description)}",
                    ActionType.COMPLETE_TASK,
                    str(urgent.id),
                )
            )
        in_progress = next((g for g in active_goals if g.status is GoalStatus.IN_PROGRESS), None)
        if in_progress is not None:
            actions.append(
                SuggestedAction(
                    f"Check in: {_truncate(in_progress.title)}",
                    ActionType.CHECK_IN_GOAL,
                    str(in_progress.id),
                )
            )
    elif intent is Intent.GOING_SOMEWHERE:
        if parsed.location_name is not None:
            actions.append(SuggestedAction("View Tasks", ActionType.NAVIGATE, "tasks"))
    elif intent is Intent.UNKNOWN and looks_like_task(parsed):
        actions.append(SuggestedAction("Save Task", ActionType.CREATE_TASK, parsed.description))
    elif len(active_tasks) > 3:
        actions.append(SuggestedAction("View Summary", ActionType.VIEW_SUMMARY))
    return tuple(actions[:MAX_SUGGESTED_ACTIONS])


def clean_milestone_lines(text: str) -> list[str]:
    """Strip numbering and bullets from generated list lines, dropping blanks."""
    lines: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        line = _BULLET_PREFIX.sub("", _LIST_PREFIX.sub("", line)).strip()
        if line:
            lines.append(line)
    return lines


class ConversationAssistant:
    """Composes parser, matcher and the optional generator for one utterance."""

    def __init__(self, generator: BaseLLM | None = None) -> None:
        self.generator = generator

    @property
    def has_generator(self) -> bool:
        return self.generator is not None and self.generator.is_available()

    def _generate(self, prompt: str) -> str | None:
        """Call the generator; None means enhancement unavailable."""
        if not self.has_generator:
            return None
        try:
            text = self.generator.generate(prompt)
        except Exception as exc:
            logger.warning("Generator failed, keeping local result: %s", exc)
            return None
        if text is None or not text.strip():
            return None
        return text.strip()

    def process(
        self,
        text: str,
        active_tasks: Sequence[Task],
        active_goals: Sequence[Goal],
        tags_by_task: Mapping[int, Sequence[Tag]] | None = None,
        now: datetime | None = None,
        current_location: str | None = None,
        recent_history: Sequence[tuple[str, bool]] = (),
    ) -> IntelligentResponse:
        """Interpret one utterance against the user's open tasks and goals."""
        now = resolve_now(now)
        tags_by_task = tags_by_task or {}
        intent = detect_intent(text)
        parsed = parse_input(text, now=now)
        task_matches = match_tasks_to_context(text, active_tasks, tags_by_task)
        goal_matches = match_goals_to_context(text, active_goals)

        if intent is Intent.GOING_SOMEWHERE:
            task_matches = enrich_with_keyword_matches(
                task_matches, keyword_task_matches(parsed, active_tasks, tags_by_task)
            )

        actions = build_suggested_actions(intent, parsed, active_tasks, active_goals)
        confidence = LOCAL_CONFIDENCE
        used_llm = False

        if intent is Intent.UNKNOWN and looks_like_task(parsed):
            reply = saved_task_reply(parsed)
        else:
            reply = generate_response(text, intent, task_matches, goal_matches)
            if intent is Intent.GET_SUMMARY:
                enhanced = self.summarize_tasks(active_tasks)
                if enhanced is not None:
                    enhanced = SUMMARY_HEADER + enhanced
            else:
                enhanced = self._generate(
                    prompts.build_contextual_response_prompt(
                        text,
                        active_tasks,
                        active_goals,
                        current_location=current_location,
                        recent_history=recent_history,
                        now=now,
                    )
                )
            if enhanced is not None:
                reply = enhanced
                confidence = LLM_CONFIDENCE
                used_llm = True

        logger.debug(
            "Processed utterance intent=%s tasks=%d goals=%d llm=%s",
            intent.value,
            len(task_matches),
            len(goal_matches),
            used_llm,
        )
        return IntelligentResponse(
            text=reply,
            intent=intent,
            confidence=confidence,
            task_matches=tuple(task_matches),
            goal_matches=tuple(goal_matches),
            suggested_actions=actions,
            used_llm=used_llm,
        )

    def summarize_tasks(self, active_tasks: Sequence[Task]) -> str | None:
        if not active_tasks:
            return None
        return self._generate(prompts.build_task_summary_prompt(active_tasks))

    def describe_goal_progress(
        self, goal: Goal, milestones: Sequence[Milestone], now: datetime | None = None
    ) -> str | None:
        return self._generate(prompts.build_goal_progress_prompt(goal, milestones, now=now))

    def suggest_milestones(self, goal: Goal) -> list[str]:
        text = self._generate(prompts.build_goal_milestones_prompt(goal))
        if text is None:
            return []
        return clean_milestone_lines(text)

    def suggest_snooze(self, task: Task, now: datetime | None = None) -> str | None:
        return self._generate(prompts.build_smart_snooze_prompt(task, now=now))

    def reflection_question(self, goal: Goal, now: datetime | None = None) -> str | None:
        now = resolve_now(now)
        days_since_start = int((now - goal.created_at).total_seconds() // 86400)
        return self._generate(
            prompts.build_reflection_prompt(goal, goal.current_streak, days_since_start)
        )

    def daily_motivation(
        self, active_tasks: Sequence[Task], active_goals: Sequence[Goal]
    ) -> str | None:
        top_goal = max(active_goals, key=lambda goal: goal.current_streak, default=None)
        return self._generate(
            prompts.build_daily_motivation_prompt(
                active_goal_count=len(active_goals),
                active_task_count=len(active_tasks),
                longest_streak=top_goal.current_streak if top_goal else 0,
                top_goal=top_goal,
            )
        )
