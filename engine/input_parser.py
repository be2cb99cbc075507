"""Free-text to structured task attributes.

The parser never fails: absence of a signal leaves the conservative default
(CONTEXT trigger, MEDIUM priority, no category). Stages run in a fixed order
and later stages only fill what earlier ones left unset, except the location
trigger which claims the trigger type outright.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import datetime, timedelta

from domain.clock import resolve_now
from domain.tag import TagType
from domain.task import Priority, TriggerType
from engine.keywords import (
    CATEGORY_KEYWORDS,
    CITY_KEYWORDS,
    DAY_MONTH_PATTERN,
    GOAL_KEYWORDS,
    HIGH_KEYWORDS,
    IN_N_UNITS_PATTERN,
    LOCATION_TRIGGER_PATTERNS,
    LOW_KEYWORDS,
    MONTH_DAY_PATTERN,
    PLACE_KEYWORDS,
    RELATIVE_PATTERN,
    REMIND_ME_PREFIX,
    TIME_PATTERNS,
    URGENT_KEYWORDS,
)
from engine.results import ParsedTask

logger = logging.getLogger("remindme.parser")

_DATE_FORMATS = ("%B %d %Y", "%d %B %Y")
_MIN_PLAUSIBLE_YEAR = 2000


def detect_priority(lower: str) -> Priority:
    """First keyword family hit wins, checked urgent, high, low."""
    if any(word in lower for word in URGENT_KEYWORDS):
        return Priority.URGENT
    if any(word in lower for word in HIGH_KEYWORDS):
        return Priority.HIGH
    if any(word in lower for word in LOW_KEYWORDS):
        return Priority.LOW
    return Priority.MEDIUM


def add_months(value: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _parse_calendar_date(phrase: str, now: datetime) -> datetime | None:
    tokens = phrase.replace(",", " ").split()
    if len(tokens) == 2:
        tokens.append(str(now.year))
    candidate = " ".join(tokens)
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(candidate, fmt)
        except ValueError:
            continue
        if parsed.year < _MIN_PLAUSIBLE_YEAR:
            parsed = parsed.replace(year=now.year)
        return parsed.replace(tzinfo=now.tzinfo)
    return None


def resolve_due_date(match: re.Match[str], now: datetime) -> datetime | None:
    """Turn a matched temporal phrase into an absolute timestamp relative to now."""
    phrase = match.group(0).lower()
    try:
        if match.re is RELATIVE_PATTERN:
            if phrase == "today":
                return now
            if phrase == "tomorrow":
                return now + timedelta(days=1)
            if phrase == "next week":
                return now + timedelta(weeks=1)
            if phrase == "next month":
                return add_months(now, 1)
            if phrase == "next year":
                return add_months(now, 12)
            return None
        if match.re is IN_N_UNITS_PATTERN:
            amount = int(match.group(1))
            unit = match.group(2).lower()
            if unit.startswith("day"):
                return now + timedelta(days=amount)
            if unit.startswith("week"):
                return now + timedelta(weeks=amount)
            return add_months(now, amount)
        if match.re in (MONTH_DAY_PATTERN, DAY_MONTH_PATTERN):
            return _parse_calendar_date(phrase, now)
    except (OverflowError, ValueError):
        logger.debug("Unresolvable date phrase %r", phrase)
    return None


def clean_description(text: str) -> str:
    """Strip a leading "remind me [to]" and capitalize what remains."""
    description = REMIND_ME_PREFIX.sub("", text.strip(), count=1)
    return description[:1].upper() + description[1:]


def _dedupe_tags(tags: list[tuple[str, TagType]]) -> tuple[tuple[str, TagType], ...]:
    seen: set[str] = set()
    unique: list[tuple[str, TagType]] = []
    for name, tag_type in tags:
        if name in seen:
            continue
        seen.add(name)
        unique.append((name, tag_type))
    return tuple(unique)


def parse_input(text: str, now: datetime | None = None) -> ParsedTask:
    """Extract trigger, priority, location, category and tags from an utterance."""
    now = resolve_now(now)
    lower = text.lower().strip()
    tags: list[tuple[str, TagType]] = []
    trigger_type = TriggerType.CONTEXT
    trigger_value: str | None = None
    location_name: str | None = None
    due_date: datetime | None = None
    category: str | None = None

    priority = detect_priority(lower)

    for pattern in TIME_PATTERNS:
        match = pattern.search(lower)
        if match:
            trigger_type = TriggerType.TIME
            trigger_value = match.group(0)
            due_date = resolve_due_date(match, now)
            break

    for pattern in LOCATION_TRIGGER_PATTERNS:
        match = pattern.search(lower)
        if match:
            place = match.group(1).strip()
            if place:
                trigger_type = TriggerType.LOCATION
                location_name = place
                tags.append((place, TagType.LOCATION))
                break

    for city in CITY_KEYWORDS:
        if city in lower:
            tags.append((city, TagType.LOCATION))
            if trigger_type is TriggerType.CONTEXT:
                trigger_type = TriggerType.LOCATION
                location_name = city

    for keyword, tag_type in PLACE_KEYWORDS.items():
        if keyword in lower:
            tags.append((keyword, tag_type))
            if location_name is None:
                location_name = keyword

    for word in lower.split():
        found = CATEGORY_KEYWORDS.get(word)
        if found is not None:
            category = found
            tags.append((found, TagType.CATEGORY))
            break

    is_goal_related = any(keyword in lower for keyword in GOAL_KEYWORDS)
    goal_category = category if is_goal_related else None

    parsed = ParsedTask(
        description=clean_description(text),
        trigger_type=trigger_type,
        trigger_value=trigger_value,
        category=category,
        location_name=location_name,
        due_date=due_date,
        priority=priority,
        tags=_dedupe_tags(tags),
        is_goal_related=is_goal_related,
        goal_category=goal_category,
    )
    logger.debug(
        "Parsed input trigger=%s priority=%s category=%s tags=%d",
        parsed.trigger_type.value,
        parsed.priority.value,
        parsed.category,
        len(parsed.tags),
    )
    return parsed
