"""Intent detection, relevance matching and canned replies.

Confidence values are heuristic relevance scores in [0, 1], built by adding
fixed weights per overlapping signal and capping at 1.0.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from domain.goal import Goal, GoalStatus
from domain.tag import Tag
from domain.task import Task, TaskStatus
from engine.keywords import INTENT_PHRASES, REPLY_LOCATION_PATTERNS
from engine.results import GoalMatch, Intent, MatchResult, TaskMatch

logger = logging.getLogger("remindme.matcher")

MIN_CONFIDENCE = 0.1
SUMMARY_LIMIT = 5
STAR_CONFIDENCE = 0.5

_TASK_DESCRIPTION_WEIGHT = 0.2
_TASK_CATEGORY_WEIGHT = 0.3
_TASK_LOCATION_WEIGHT = 0.5
_TASK_TAG_WEIGHT = 0.4
_TASK_NOTES_WEIGHT = 0.1
_GOAL_TITLE_WEIGHT = 0.3
_GOAL_DESCRIPTION_WEIGHT = 0.15
_GOAL_CATEGORY_WEIGHT = 0.3

_CLOSED_TASK_STATUSES = {TaskStatus.COMPLETED, TaskStatus.CANCELLED}
_CLOSED_GOAL_STATUSES = {GoalStatus.COMPLETED, GoalStatus.ABANDONED}


def detect_intent(text: str) -> Intent:
    """Score each intent by the word count of its phrases found in the text."""
    lower = text.lower().strip()
    best_intent = Intent.UNKNOWN
    best_score = 0
    for intent, phrases in INTENT_PHRASES.items():
        score = sum(len(phrase.split(" ")) for phrase in phrases if phrase in lower)
        if score > best_score:
            best_score = score
            best_intent = intent
    logger.debug("Detected intent %s (score=%d)", best_intent.value, best_score)
    return best_intent


def _input_words(lower: str) -> list[str]:
    return [word for word in lower.split() if len(word) > 2]


def _mutual_overlap(input_words: Iterable[str], target_words: Sequence[str]) -> int:
    return sum(
        1 for word in input_words if any(t in word or word in t for t in target_words)
    )


def _contained_overlap(input_words: Iterable[str], target_words: Sequence[str]) -> int:
    return sum(1 for word in input_words if any(word in t for t in target_words))


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_task(
    lower: str,
    input_words: Sequence[str],
    task: Task,
    tags: Sequence[Tag] = (),
) -> tuple[float, list[str]]:
    """Return (clamped confidence, reasons) for one task against normalized input."""
    confidence = 0.0
    reasons: list[str] = []

    overlap = _mutual_overlap(input_words, task.description.lower().split())
    if overlap > 0:
        confidence += overlap * _TASK_DESCRIPTION_WEIGHT
        reasons.append("description match")

    if task.category is not None and task.category.lower() in lower:
        confidence += _TASK_CATEGORY_WEIGHT
        reasons.append(f"category: {task.category}")

    if task.location_name is not None and task.location_name.lower() in lower:
        confidence += _TASK_LOCATION_WEIGHT
        reasons.append(f"location: {task.location_name}")

    for tag in tags:
        if tag.name.lower() in lower:
            confidence += _TASK_TAG_WEIGHT
            reasons.append(f"tag: {tag.name}")

    if task.notes is not None:
        overlap = _contained_overlap(input_words, task.notes.lower().split())
        if overlap > 0:
            confidence += overlap * _TASK_NOTES_WEIGHT
            reasons.append("notes match")

    return _clamp(confidence), reasons


def match_tasks_to_context(
    text: str,
    active_tasks: Sequence[Task],
    tags_by_task: Mapping[int, Sequence[Tag]] | None = None,
) -> list[TaskMatch]:
    """Rank open tasks by relevance to the text, highest confidence first."""
    tags_by_task = tags_by_task or {}
    lower = text.lower().strip()
    input_words = _input_words(lower)
    matches: list[TaskMatch] = []

    for task in active_tasks:
        if task.status in _CLOSED_TASK_STATUSES:
            continue
        confidence, reasons = score_task(lower, input_words, task, tags_by_task.get(task.id, ()))
        if confidence > MIN_CONFIDENCE:
            matches.append(TaskMatch(task=task, confidence=confidence, reason=", ".join(reasons)))

    matches.sort(key=lambda match: match.confidence, reverse=True)
    logger.debug("Matched %d of %d tasks", len(matches), len(active_tasks))
    return matches


def score_goal(lower: str, input_words: Sequence[str], goal: Goal) -> tuple[float, list[str]]:
    """Return (clamped confidence, reasons) for one goal against normalized input."""
    confidence = 0.0
    reasons: list[str] = []

    overlap = _mutual_overlap(input_words, goal.title.lower().split())
    if overlap > 0:
        confidence += overlap * _GOAL_TITLE_WEIGHT
        reasons.append("title match")

    if goal.description is not None:
        overlap = _contained_overlap(input_words, goal.description.lower().split())
        if overlap > 0:
            confidence += overlap * _GOAL_DESCRIPTION_WEIGHT
            reasons.append("description match")

    if goal.category.value.lower() in lower:
        confidence += _GOAL_CATEGORY_WEIGHT
        reasons.append(f"category: {goal.category.value}")

    return _clamp(confidence), reasons


def match_goals_to_context(text: str, active_goals: Sequence[Goal]) -> list[GoalMatch]:
    """Rank open goals by relevance to the text, highest confidence first."""
    lower = text.lower().strip()
    input_words = _input_words(lower)
    matches: list[GoalMatch] = []

    for goal in active_goals:
        if goal.status in _CLOSED_GOAL_STATUSES:
            continue
        confidence, reasons = score_goal(lower, input_words, goal)
        if confidence > MIN_CONFIDENCE:
            matches.append(GoalMatch(goal=goal, confidence=confidence, reason=", ".join(reasons)))

    matches.sort(key=lambda match: match.confidence, reverse=True)
    logger.debug("Matched %d of %d goals", len(matches), len(active_goals))
    return matches


def extract_location(text: str) -> str | None:
    """Pull the destination out of a "going to X" / "I'm at X" utterance."""
    for pattern in REPLY_LOCATION_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def _going_somewhere_reply(
    text: str,
    task_matches: Sequence[TaskMatch],
    goal_matches: Sequence[GoalMatch],
) -> str:
    location = extract_location(text)
    if not task_matches and not goal_matches:
        return f"No pending tasks or goals related to {location or 'that location'}. Have a good trip!"

    lines: list[str] = []
    if location is not None:
        lines.append(f"Here's what you need to do for {location}:\n\n")
    else:
        lines.append("Here are related reminders:\n\n")
    if task_matches:
        lines.append("📋 Tasks:\n")
        for i, match in enumerate(task_matches, start=1):
            star = " ⭐" if match.confidence >= STAR_CONFIDENCE else ""
            lines.append(f"{i}. {match.task.description}{star}\n")
    if goal_matches:
        lines.append("\n🎯 Related Goals:\n")
        for i, match in enumerate(goal_matches, start=1):
            lines.append(f"{i}. {match.goal.title} ({int(match.goal.progress)}% done)\n")
    return "".join(lines)


def _summary_reply(task_matches: Sequence[TaskMatch], goal_matches: Sequence[GoalMatch]) -> str:
    if not task_matches and not goal_matches:
        return "You're all caught up! No pending tasks or active goals."

    lines = ["📊 Your Summary:\n\n"]
    if task_matches:
        lines.append(f"📋 {len(task_matches)} relevant task(s):\n")
        for i, match in enumerate(task_matches[:SUMMARY_LIMIT], start=1):
            lines.append(f"{i}. {match.task.description}\n")
        if len(task_matches) > SUMMARY_LIMIT:
            lines.append(f"...and {len(task_matches) - SUMMARY_LIMIT} more\n")
    if goal_matches:
        lines.append(f"\n🎯 {len(goal_matches)} active goal(s):\n")
        for i, match in enumerate(goal_matches[:SUMMARY_LIMIT], start=1):
            lines.append(f"{i}. {match.goal.title} - {int(match.goal.progress)}% done\n")
    return "".join(lines)


def generate_response(
    text: str,
    intent: Intent,
    task_matches: Sequence[TaskMatch],
    goal_matches: Sequence[GoalMatch],
) -> str:
    """Canned reply for an intent, branching on which match lists are empty."""
    if intent is Intent.GOING_SOMEWHERE:
        return _going_somewhere_reply(text, task_matches, goal_matches)
    if intent is Intent.GET_SUMMARY:
        return _summary_reply(task_matches, goal_matches)
    if intent is Intent.STATUS_UPDATE:
        if task_matches:
            description = task_matches[0].task.description
            return (
                f'Got it! I\'ve noted this update related to "{description}". '
                "This will be included in the summary when relevant."
            )
        return "Noted! I'll remember this information and bring it up when relevant."
    if intent is Intent.ADD_TASK:
        return "✅ Task added! I'll remind you at the right time."
    if intent is Intent.ADD_GOAL:
        return "🎯 Goal created! I'll help you track your progress."
    if intent is Intent.COMPLETE_TASK:
        if task_matches:
            return f'Great job! Marked "{task_matches[0].task.description}" as completed! 🎉'
        return "Which task did you complete? Please be more specific."
    if intent is Intent.CHECK_IN_GOAL:
        if goal_matches:
            goal = goal_matches[0].goal
            return f'Awesome! Checked in for "{goal.title}". Streak: {goal.current_streak + 1} days! 🔥'
        return "Which goal are you checking in for?"
    if task_matches or goal_matches:
        return _summary_reply(task_matches, goal_matches)
    return "I understand. How can I help you with your tasks or goals?"


def match_context(
    text: str,
    active_tasks: Sequence[Task],
    active_goals: Sequence[Goal],
    tags_by_task: Mapping[int, Sequence[Tag]] | None = None,
) -> MatchResult:
    """Run intent detection, both matchers and the reply template in one call."""
    intent = detect_intent(text)
    task_matches = match_tasks_to_context(text, active_tasks, tags_by_task)
    goal_matches = match_goals_to_context(text, active_goals)
    return MatchResult(
        intent=intent,
        task_matches=tuple(task_matches),
        goal_matches=tuple(goal_matches),
        summary=generate_response(text, intent, task_matches, goal_matches),
    )
