"""Shared Temporal Pattern Vocabulary

Regex fragments for wall-clock times, time ranges, single time markers and
durations. The time resolver matches with these rules and the activity
extractor strips with the same fragments, so whatever the resolver reads is
exactly what the extractor removes from the activity title.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern


# Wall-clock time: 7, 7am, 7:30am, 7:30 am, 14:30
TIME = r"\d{1,2}(?::\d{2})?\s*(?:am|pm)?"

# Grammar used to parse a single captured time string
TIME_STRING = r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?"

FROM_TO_RANGE = rf"from\s+({TIME})\s+(?:to|until|till|-)\s+({TIME})"
BARE_RANGE = rf"({TIME})\s*(?:to|-|until|till)\s*({TIME})"
BETWEEN_RANGE = rf"between\s+({TIME})\s+and\s+({TIME})"

START_MARKER = rf"(?:at|since|starting|from)\s+({TIME})"
LEADING_TIME = rf"^({TIME})\s"
END_MARKER = rf"(?:until|till|ending|ended\s+at)\s+({TIME})"

HOURS_UNIT = r"hours?|hrs?|h"
MINUTES_UNIT = r"minutes?|mins?|m"

FOR_HOURS = rf"for\s+(\d+(?:\.\d+)?)\s*({HOURS_UNIT})\b"
FOR_MINUTES = rf"for\s+(\d+)\s*({MINUTES_UNIT})\b"
BARE_HOURS = rf"(\d+(?:\.\d+)?)\s*({HOURS_UNIT})\b"
BARE_MINUTES = rf"(\d+)\s*({MINUTES_UNIT})\b"
FOR_DURATION = rf"for\s+\d+(?:\.\d+)?\s*(?:{HOURS_UNIT}|{MINUTES_UNIT})\b"


@dataclass(frozen=True)
class PatternRule:
    """A named, compiled pattern with an optional role tag.

    ``kind`` is "start"/"end" for single markers and "hours"/"minutes"
    for durations.
    """
    name: str
    pattern: Pattern[str]
    kind: str = ""

    def search(self, text: str) -> Optional["re.Match[str]"]:
        return self.pattern.search(text)


def _rule(name: str, fragment: str, kind: str = "") -> PatternRule:
    return PatternRule(name=name, pattern=re.compile(fragment, re.IGNORECASE), kind=kind)


def _removal(fragment: str) -> Pattern[str]:
    # Leading whitespace goes with the phrase
    return re.compile(r"\s*" + fragment, re.IGNORECASE)


TIME_STRING_PATTERN = re.compile(TIME_STRING, re.IGNORECASE)

# Order is precedence: first match wins
RANGE_RULES: List[PatternRule] = [
    _rule("from_to", FROM_TO_RANGE),
    _rule("bare_range", BARE_RANGE),
    _rule("between", BETWEEN_RANGE),
]

SINGLE_TIME_RULES: List[PatternRule] = [
    _rule("start_marker", START_MARKER, kind="start"),
    _rule("leading_time", LEADING_TIME, kind="start"),
    _rule("end_marker", END_MARKER, kind="end"),
]

DURATION_RULES: List[PatternRule] = [
    _rule("for_hours", FOR_HOURS, kind="hours"),
    _rule("for_minutes", FOR_MINUTES, kind="minutes"),
    _rule("bare_hours", BARE_HOURS, kind="hours"),
    _rule("bare_minutes", BARE_MINUTES, kind="minutes"),
]

# Applied in order, each one to every occurrence
TIME_PHRASE_REMOVALS: List[Pattern[str]] = [
    _removal(FROM_TO_RANGE),
    _removal(BARE_RANGE),
    _removal(BETWEEN_RANGE),
    _removal(START_MARKER),
    _removal(END_MARKER),
    _removal(FOR_DURATION),
]
