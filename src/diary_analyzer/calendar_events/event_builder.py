"""Calendar Event Payload Builder

Builds the payloads handed to the calendar service and to the user once a
log entry has been interpreted: category normalization, calendar mapping,
event creation payloads, the category disambiguation prompt and local
time display.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..core.config_manager import CalendarConfig
from ..core.error_handler import IncompleteTimeRangeError, InvalidCategoryError
from ..core.logging_manager import LoggingManager
from ..intelligence.category_classifier import Category
from ..intelligence.request_router import LogData
from ..processors.core.time_parser import format_instant


CATEGORY_ALIASES: Dict[str, Category] = {
    "prod": Category.PROD,
    "productive": Category.PROD,
    "work": Category.PROD,
    "nonprod": Category.NONPROD,
    "non-prod": Category.NONPROD,
    "non-productive": Category.NONPROD,
    "nonproductive": Category.NONPROD,
    "leisure": Category.NONPROD,
    "admin": Category.ADMIN,
    "rest": Category.ADMIN,
    "routine": Category.ADMIN,
}

CATEGORY_LABELS: Dict[Category, str] = {
    Category.PROD: "Productive",
    Category.NONPROD: "Non-productive",
    Category.ADMIN: "Admin/Rest",
}

CATEGORY_OPTION_LABELS: Dict[Category, str] = {
    Category.PROD: "Productive (work, learning, exercise)",
    Category.NONPROD: "Non-productive (leisure, entertainment)",
    Category.ADMIN: "Admin/Rest (meals, routine, rest)",
}


def normalize_category(value: str) -> Category:
    """Map a user-supplied category name or alias to a category.

    Raises:
        InvalidCategoryError: If the name is not a known category or alias
    """
    category = CATEGORY_ALIASES.get(value.strip().lower())
    if category is None:
        raise InvalidCategoryError(value, [c.value for c in Category])
    return category


def category_label(category: Category) -> str:
    return CATEGORY_LABELS[category]


def format_local_time(instant: datetime, utc_offset_minutes: int = 0) -> str:
    """Render an instant as the user's local 12-hour time, e.g. "9:00 AM"."""
    local = instant.astimezone(timezone.utc) + timedelta(minutes=utc_offset_minutes)
    meridiem = "PM" if local.hour >= 12 else "AM"
    hour12 = local.hour % 12 or 12
    return f"{hour12}:{local.minute:02d} {meridiem}"


def build_category_prompt(title: str, inferred: Optional[Category] = None) -> Dict[str, Any]:
    """Build the multiple-choice prompt for a low-confidence category.

    Args:
        title: Activity title being logged
        inferred: Category the classifier guessed, if any

    Returns:
        ``{"question": ..., "options": [{"id", "label"}, ...]}``
    """
    if inferred is not None:
        question = (
            f"I inferred \"{inferred.value}\" for \"{title}\" but I'm not very confident. "
            f"Which category is correct?"
        )
    else:
        question = f"Which category best fits \"{title}\"?"

    options: List[Dict[str, str]] = [
        {"id": category.value, "label": CATEGORY_OPTION_LABELS[category]}
        for category in Category
    ]
    return {"question": question, "options": options}


class EventBuilder:
    """Builds calendar event creation payloads from log entries."""

    def __init__(self, calendar_config: Optional[CalendarConfig] = None):
        """Initialize builder with calendar names per category.

        Args:
            calendar_config: Calendar section of the application config
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.calendar_config = calendar_config or CalendarConfig()

    def calendar_for(self, category: Category) -> str:
        return getattr(self.calendar_config, category.value)

    @property
    def category_calendars(self) -> List[str]:
        """Calendars consulted for the most recent logged event."""
        return [self.calendar_for(category) for category in Category]

    def build_event_payload(
        self,
        log_data: LogData,
        time_zone: Optional[str] = None,
        description: str = ""
    ) -> Dict[str, Any]:
        """Build the payload for the calendar event creation service.

        Args:
            log_data: Resolved log entry
            time_zone: IANA zone name; defaults to the configured zone
            description: Optional event description

        Returns:
            Event payload with ISO-8601 UTC start and end

        Raises:
            IncompleteTimeRangeError: If start or end is unresolved
        """
        if log_data.start_time is None or log_data.end_time is None:
            missing = "start" if log_data.start_time is None else "end"
            raise IncompleteTimeRangeError(
                f"Cannot create event '{log_data.title}': {missing} time is unresolved "
                f"({log_data.time_source.value})"
            )

        if log_data.start_time >= log_data.end_time:
            self.logger.warning(
                f"Start time ({format_instant(log_data.start_time)}) is not before "
                f"end time ({format_instant(log_data.end_time)})"
            )

        return {
            "summary": log_data.title,
            "description": description,
            "calendar": self.calendar_for(log_data.category),
            "startDateTime": format_instant(log_data.start_time),
            "endDateTime": format_instant(log_data.end_time),
            "timeZone": time_zone or self.calendar_config.time_zone,
        }
