"""Static lookup tables and ordered pattern lists for the local engines.

Tables are read-only data, safe to share between callers. Ordering is part of
the behavior: city and place scans record tags in table order, intents tie-break
on table order, and pattern lists are evaluated first-match-wins.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from domain.tag import TagType
from engine.results import Intent

TABLES_VERSION = "1"

URGENT_KEYWORDS = ("urgent", "asap", "immediately", "critical", "emergency")
HIGH_KEYWORDS = ("important", "high priority", "soon", "quickly")
LOW_KEYWORDS = ("someday", "whenever", "no rush", "low priority", "eventually")

PLACE_KEYWORDS = MappingProxyType(
    {
        name: TagType.LOCATION
        for name in (
            "supermarket",
            "grocery",
            "store",
            "shop",
            "mall",
            "market",
            "nursery",
            "garden center",
            "hospital",
            "clinic",
            "pharmacy",
            "bank",
            "atm",
            "restaurant",
            "cafe",
            "gym",
            "metro",
            "station",
            "airport",
            "office",
            "school",
            "college",
            "university",
            "temple",
            "church",
            "mosque",
            "park",
            "hotel",
            "petrol",
            "gas station",
        )
    }
)

CITY_KEYWORDS = (
    "bangalore",
    "bengaluru",
    "mumbai",
    "delhi",
    "chennai",
    "hyderabad",
    "kolkata",
    "pune",
    "ahmedabad",
    "jaipur",
    "lucknow",
    "kochi",
    "goa",
    "mysore",
    "mangalore",
    "coimbatore",
    "chandigarh",
    "new york",
    "london",
    "tokyo",
    "dubai",
    "singapore",
    "jayanagar",
    "koramangala",
    "indiranagar",
    "whitefield",
    "hsr layout",
)

CATEGORY_KEYWORDS = MappingProxyType(
    {
        "car": "vehicle",
        "vehicle": "vehicle",
        "bike": "vehicle",
        "service": "vehicle",
        "brake": "vehicle",
        "engine": "vehicle",
        "tire": "vehicle",
        "tyre": "vehicle",
        "fuel": "vehicle",
        "petrol": "vehicle",
        "diesel": "vehicle",
        "buy": "shopping",
        "purchase": "shopping",
        "get": "shopping",
        "order": "shopping",
        "food": "food",
        "restaurant": "food",
        "eat": "food",
        "cook": "food",
        "recipe": "food",
        "doctor": "health",
        "medicine": "health",
        "hospital": "health",
        "health": "health",
        "fitness": "health",
        "exercise": "health",
        "workout": "health",
        "gym": "health",
        "run": "health",
        "yoga": "health",
        "pay": "finance",
        "bill": "finance",
        "rent": "finance",
        "insurance": "finance",
        "tax": "finance",
        "investment": "finance",
        "call": "communication",
        "email": "communication",
        "meet": "communication",
        "meeting": "work",
        "deadline": "work",
        "project": "work",
        "travel": "travel",
        "trip": "travel",
        "vacation": "travel",
        "holiday": "travel",
        "flight": "travel",
        "hotel": "travel",
        "booking": "travel",
        "passport": "travel",
        "visa": "travel",
        "learn": "learning",
        "study": "learning",
        "course": "learning",
        "read": "learning",
        "book": "learning",
        "plant": "home",
        "garden": "home",
        "clean": "home",
        "repair": "home",
        "fix": "home",
        "compost": "home",
    }
)

GOAL_KEYWORDS = (
    "start",
    "begin",
    "plan",
    "goal",
    "routine",
    "habit",
    "from next",
    "onwards",
    "long term",
    "this year",
    "this month",
    "resolution",
    "target",
    "achieve",
    "improve",
    "build",
)

_MONTHS = "january|february|march|april|may|june|july|august|september|october|november|december"

# Group layout per pattern is relied on by the date resolver in input_parser.
MONTH_DAY_PATTERN = re.compile(rf"({_MONTHS})\s+(\d{{1,2}})(?:,?\s+(\d{{4}}))?", re.IGNORECASE)
DAY_MONTH_PATTERN = re.compile(rf"(\d{{1,2}})\s+({_MONTHS})(?:,?\s+(\d{{4}}))?", re.IGNORECASE)
RELATIVE_PATTERN = re.compile(r"(tomorrow|today|next week|next month|next year)", re.IGNORECASE)
IN_N_UNITS_PATTERN = re.compile(r"in\s+(\d+)\s+(day|days|week|weeks|month|months)", re.IGNORECASE)

TIME_PATTERNS = (
    MONTH_DAY_PATTERN,
    DAY_MONTH_PATTERN,
    RELATIVE_PATTERN,
    IN_N_UNITS_PATTERN,
)

LOCATION_TRIGGER_PATTERNS = (
    re.compile(
        r"when\s+(?:i\s+)?(?:go|going|visit|travel|am)\s+(?:to|near|at)\s+(.+?)(?:\s+next|\s+time|$)",
        re.IGNORECASE,
    ),
    re.compile(r"(?:at|in|near)\s+(?:a\s+|the\s+)?(.+?)(?:\s+next|\s+time|$)", re.IGNORECASE),
    re.compile(r"(?:go|going)\s+(?:to|near)\s+(.+?)(?:\s+next|$)", re.IGNORECASE),
)

REMIND_ME_PREFIX = re.compile(r"^remind\s+me\s+(?:to\s+)?", re.IGNORECASE)

REPLY_LOCATION_PATTERNS = (
    re.compile(
        r"(?:going|heading|traveling|travelling|visiting)\s+(?:to\s+)?(.+?)"
        r"(?:\s+now|\s+today|\s+tomorrow|\.|$)",
        re.IGNORECASE,
    ),
    re.compile(r"(?:i am|i'm)\s+(?:in|at)\s+(.+?)(?:\s+now|\s+today|\.|$)", re.IGNORECASE),
)


INTENT_PHRASES = MappingProxyType(
    {
        Intent.ADD_TASK: (
            "remind me",
            "add task",
            "add reminder",
            "create task",
            "remember to",
            "don't forget",
            "i need to",
            "i have to",
            "i should",
            "note that",
            "remind about",
        ),
        Intent.ADD_GOAL: (
            "start a",
            "begin a",
            "my goal",
            "i want to achieve",
            "plan for",
            "set goal",
            "new goal",
            "i aim to",
            "target to",
            "resolution",
        ),
        Intent.GOING_SOMEWHERE: (
            "i am going to",
            "i'm going to",
            "going to",
            "heading to",
            "traveling to",
            "travelling to",
            "visiting",
            "on my way to",
            "i am at",
            "i'm at",
            "i am in",
            "i'm in",
            "reached",
        ),
        Intent.STATUS_UPDATE: (
            "i have faced",
            "there is an issue",
            "problem with",
            "issue with",
            "noticed that",
            "something wrong",
            "update about",
            "regarding my",
            "about my",
        ),
        Intent.COMPLETE_TASK: (
            "done with",
            "completed",
            "finished",
            "i did",
            "mark as done",
            "task done",
            "got it done",
            "bought",
            "purchased",
        ),
        Intent.GET_SUMMARY: (
            "summary",
            "summarize",
            "what do i",
            "what should i",
            "what's pending",
            "show me",
            "list my",
            "what are my",
            "any reminders",
            "anything i need",
            "what tasks",
            "what goals",
            "how am i doing",
            "progress",
        ),
        Intent.CHECK_IN_GOAL: (
            "check in",
            "update progress",
            "i worked on",
            "i exercised",
            "i studied",
            "i practiced",
            "goal update",
            "progress update",
        ),
    }
)
