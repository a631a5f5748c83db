"""
Sample test data for Diary Analyzer testing.

Realistic log messages and questions with the routing outcome each one
is expected to produce.
"""

from datetime import datetime, timezone

# Reference clock used across the suite
SAMPLE_NOW = datetime(2026, 2, 2, 12, 0, tzinfo=timezone.utc)
SAMPLE_LAST_EVENT_END = datetime(2026, 2, 2, 10, 0, tzinfo=timezone.utc)

# Messages the rule-based tier should handle
SAMPLE_LOG_MESSAGES = [
    {
        "text": "log coding from 9am to 11am",
        "expected_title": "Coding",
        "expected_category": "prod",
        "expected_source": "explicit_range",
    },
    {
        "text": "record gym session from 7am to 8am",
        "expected_title": "Gym session",
        "expected_category": "prod",
        "expected_source": "explicit_range",
    },
    {
        "text": "track meeting for 2 hours",
        "expected_title": "Meeting",
        "expected_category": "prod",
        "expected_source": "last_event_plus_duration",
    },
    {
        "text": "log lunch",
        "expected_title": "Lunch",
        "expected_category": "admin",
        "expected_source": "last_event_to_now",
    },
    {
        "text": "record watching Netflix",
        "expected_title": "Watching Netflix",
        "expected_category": "nonprod",
        "expected_source": "last_event_to_now",
    },
    {
        "text": "add sleep from 11pm to 7am",
        "expected_title": "Sleep",
        "expected_category": "admin",
        "expected_source": "explicit_range",
    },
    {
        "text": "log work from 9:30am to 5:30pm",
        "expected_title": "Work",
        "expected_category": "prod",
        "expected_source": "explicit_range",
    },
    {
        "text": "track gym 6am-7am",
        "expected_title": "Gym",
        "expected_category": "prod",
        "expected_source": "explicit_range",
    },
]

# Messages that must be handed to the language-model tier
SAMPLE_FALLBACK_MESSAGES = [
    {"text": "how was my day yesterday?", "expected_reason": "not_log_request"},
    {"text": "show my stats", "expected_reason": "not_log_request"},
    {"text": "hello", "expected_reason": "not_log_request"},
    {"text": "log my mood?", "expected_reason": "not_log_request"},
    {"text": "log from 9am to 11am", "expected_reason": "no_activity_found"},
]
