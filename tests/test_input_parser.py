"""Input parser tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from domain.tag import TagType
from domain.task import Priority, TriggerType
from engine.input_parser import add_months, clean_description, parse_input

NOW = datetime(2026, 3, 10, 9, 30, tzinfo=UTC)


def test_parse_shopping_reminder_at_supermarket() -> None:
    parsed = parse_input("remind me to buy basil at the supermarket", now=NOW)

    assert parsed.description.startswith("Buy basil")
    assert ("supermarket", TagType.LOCATION) in parsed.tags
    assert parsed.category == "shopping"
    assert parsed.trigger_type is TriggerType.LOCATION
    assert parsed.location_name == "supermarket"
    assert parsed.priority is Priority.MEDIUM


def test_parse_urgent_bill_due_tomorrow() -> None:
    parsed = parse_input("Pay the rent bill tomorrow, it's urgent", now=NOW)

    assert parsed.priority is Priority.URGENT
    assert parsed.trigger_type is TriggerType.TIME
    assert parsed.trigger_value == "tomorrow"
    assert parsed.due_date is not None
    assert parsed.due_date.date() == (NOW + timedelta(days=1)).date()
    assert parsed.category == "finance"
    assert ("finance", TagType.CATEGORY) in parsed.tags


def test_parse_empty_input_yields_defaults() -> None:
    parsed = parse_input("   ", now=NOW)

    assert parsed.description == ""
    assert parsed.trigger_type is TriggerType.CONTEXT
    assert parsed.priority is Priority.MEDIUM
    assert parsed.category is None
    assert parsed.tags == ()
    assert parsed.is_goal_related is False


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("call mom asap", Priority.URGENT),
        ("this is important", Priority.HIGH),
        ("clean the garage someday", Priority.LOW),
        ("important but no rush, urgent", Priority.URGENT),
        ("water plants", Priority.MEDIUM),
    ],
)
def test_priority_keyword_precedence(text: str, expected: Priority) -> None:
    assert parse_input(text, now=NOW).priority is expected


@pytest.mark.parametrize(
    ("phrase", "expected"),
    [
        ("today", NOW),
        ("next week", NOW + timedelta(days=7)),
        ("next month", datetime(2026, 4, 10, 9, 30, tzinfo=UTC)),
        ("next year", datetime(2027, 3, 10, 9, 30, tzinfo=UTC)),
        ("in 3 days", NOW + timedelta(days=3)),
        ("in 2 weeks", NOW + timedelta(days=14)),
        ("in 2 months", datetime(2026, 5, 10, 9, 30, tzinfo=UTC)),
    ],
)
def test_relative_dates_resolve_against_now(phrase: str, expected: datetime) -> None:
    parsed = parse_input(f"renew passport {phrase}", now=NOW)

    assert parsed.trigger_value == phrase
    assert parsed.due_date == expected


def test_month_day_without_year_uses_current_year() -> None:
    parsed = parse_input("dentist appointment on June 5", now=NOW)

    assert parsed.trigger_value == "june 5"
    assert parsed.due_date == datetime(2026, 6, 5, tzinfo=UTC)


def test_day_month_with_year() -> None:
    parsed = parse_input("submit taxes by 15 april, 2027", now=NOW)

    assert parsed.trigger_type is TriggerType.TIME
    assert parsed.due_date == datetime(2027, 4, 15, tzinfo=UTC)


def test_month_day_keeps_comma_separated_year() -> None:
    parsed = parse_input("renew lease june 5, 2027", now=NOW)

    assert parsed.trigger_value == "june 5, 2027"
    assert parsed.due_date == datetime(2027, 6, 5, tzinfo=UTC)


def test_implausible_year_replaced_with_current_year() -> None:
    parsed = parse_input("party march 3 1999", now=NOW)

    assert parsed.due_date == datetime(2026, 3, 3, tzinfo=UTC)


def test_unparseable_date_keeps_trigger_value() -> None:
    parsed = parse_input("anniversary february 31", now=NOW)

    assert parsed.trigger_type is TriggerType.TIME
    assert parsed.trigger_value == "february 31"
    assert parsed.due_date is None


def test_add_months_clamps_day() -> None:
    value = datetime(2026, 1, 31, 8, 0, tzinfo=UTC)

    assert add_months(value, 1) == datetime(2026, 2, 28, 8, 0, tzinfo=UTC)
    assert add_months(value, 13) == datetime(2027, 2, 28, 8, 0, tzinfo=UTC)


def test_location_trigger_overrides_time_trigger() -> None:
    parsed = parse_input("pick up parcel tomorrow when i go to the post office", now=NOW)

    assert parsed.trigger_type is TriggerType.LOCATION
    assert parsed.trigger_value == "tomorrow"
    assert parsed.due_date is not None
    assert parsed.location_name == "the post office"


def test_city_sets_location_when_no_trigger() -> None:
    parsed = parse_input("Collect documents from Koramangala", now=NOW)

    assert parsed.trigger_type is TriggerType.LOCATION
    assert parsed.location_name == "koramangala"
    assert ("koramangala", TagType.LOCATION) in parsed.tags


def test_city_does_not_replace_time_trigger() -> None:
    parsed = parse_input("fly to dubai tomorrow", now=NOW)

    assert parsed.trigger_type is TriggerType.TIME
    assert ("dubai", TagType.LOCATION) in parsed.tags
    assert parsed.location_name is None


def test_place_keyword_fills_location_name() -> None:
    parsed = parse_input("pick up medicine from pharmacy tomorrow", now=NOW)

    assert parsed.trigger_type is TriggerType.TIME
    assert parsed.location_name == "pharmacy"
    assert parsed.category == "health"


def test_first_category_token_wins() -> None:
    parsed = parse_input("book flight and pay hotel", now=NOW)

    assert parsed.category == "learning"
    category_tags = [name for name, kind in parsed.tags if kind is TagType.CATEGORY]
    assert category_tags == ["learning"]


def test_goal_related_carries_detected_category() -> None:
    parsed = parse_input("start a workout habit", now=NOW)

    assert parsed.is_goal_related is True
    assert parsed.goal_category == "health"


def test_goal_related_without_category() -> None:
    parsed = parse_input("my resolution for this year", now=NOW)

    assert parsed.is_goal_related is True
    assert parsed.goal_category is None


def test_tags_are_unique_and_keep_first_seen_order() -> None:
    parsed = parse_input("buy bread at the supermarket", now=NOW)

    assert parsed.tags == (
        ("supermarket", TagType.LOCATION),
        ("market", TagType.LOCATION),
        ("shopping", TagType.CATEGORY),
    )


def test_location_phrase_runs_to_end_of_text() -> None:
    parsed = parse_input("buy vegetables at the market near the supermarket", now=NOW)

    assert parsed.location_name == "market near the supermarket"
    assert parsed.tag_names == ["market near the supermarket", "supermarket", "market", "shopping"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "!!! ... ???",
        ",,,",
        "going to bangalore, then bangalore again, then bengaluru",
        "mysore mysore mysore trip",
        "at the supermarket",
        "buy milk at the market near the supermarket market",
        "meet at the mall near the mall gate next week",
        "in",
        "at the",
        "get fuel at the gas station in pune asap, urgent, no rush",
        "remind me remind me to pay the bill by march 3, 2026 or 3 march",
        "book book book travel trip flight",
        "remind me to start a yoga habit in 2 weeks at the gym in goa",
    ],
)
def test_tags_unique_and_priority_valid_for_any_input(text: str) -> None:
    parsed = parse_input(text, now=NOW)

    names = parsed.tag_names
    assert len(names) == len(set(names))
    assert all(name for name in names)
    assert parsed.priority in set(Priority)
    assert parsed.trigger_type in set(TriggerType)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("remind me to call the bank", "Call the bank"),
        ("REMIND ME call the bank", "Call the bank"),
        ("  water the plants  ", "Water the plants"),
        ("Don't remind me to stop", "Don't remind me to stop"),
    ],
)
def test_clean_description(raw: str, expected: str) -> None:
    assert clean_description(raw) == expected


def test_naive_now_is_treated_as_utc() -> None:
    parsed = parse_input("call dad tomorrow", now=datetime(2026, 3, 10, 9, 30))

    assert parsed.due_date == datetime(2026, 3, 11, 9, 30, tzinfo=UTC)
