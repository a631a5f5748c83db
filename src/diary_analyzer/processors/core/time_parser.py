"""Time-String and Duration Parsing

Parses bare wall-clock expressions ("2:30pm", "14:30") and duration phrases
("for 2 hours", "30 minutes"), and anchors wall-clock times to the caller's
local day as UTC instants.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from dateutil import parser as date_parser

from ...core.logging_manager import LoggingManager
from .temporal_patterns import DURATION_RULES, TIME_STRING_PATTERN


logger = LoggingManager.get_logger(__name__)

Instant = Union[datetime, str]


@dataclass(frozen=True)
class Duration:
    """A parsed duration phrase."""
    hours: float = 0.0
    minutes: int = 0
    matched_text: str = ""

    def as_timedelta(self) -> timedelta:
        """Offset in whole milliseconds, fractional milliseconds truncated.

        Raises:
            OverflowError: If the duration exceeds what timedelta can hold
        """
        milliseconds = int((self.hours * 60 + self.minutes) * 60 * 1000)
        return timedelta(milliseconds=milliseconds)


def parse_time_string(time_str: str) -> Optional[Tuple[int, int]]:
    """Parse ``H[:MM][am|pm]`` into a 24-hour ``(hour, minute)`` pair.

    Args:
        time_str: Captured time text, e.g. "9am", "12:30 pm", "14:05"

    Returns:
        ``(hour, minute)`` or None when the text is not a valid time
    """
    match = TIME_STRING_PATTERN.search(time_str.strip().lower())
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    meridiem = match.group(3)

    if meridiem == "pm" and hours != 12:
        hours += 12
    elif meridiem == "am" and hours == 12:
        hours = 0

    if hours < 0 or hours > 23 or minutes < 0 or minutes > 59:
        return None

    return hours, minutes


def local_time_to_utc(
    hour: int,
    minute: int,
    anchor: datetime,
    utc_offset_minutes: int = 0
) -> Optional[datetime]:
    """Place a local wall-clock time on the anchor's local day, in UTC.

    The local calendar date is the date of ``anchor`` shifted by
    ``utc_offset_minutes``. The resulting local time is shifted back by
    the same offset to give the UTC instant. Returns None when either
    shift leaves the representable date range.
    """
    try:
        offset = timedelta(minutes=utc_offset_minutes)
        local_anchor = anchor.astimezone(timezone.utc) + offset

        local_wall_clock = datetime(
            local_anchor.year,
            local_anchor.month,
            local_anchor.day,
            hour,
            minute,
            tzinfo=timezone.utc
        )

        return local_wall_clock - offset
    except OverflowError:
        logger.debug(f"Local time {hour:02d}:{minute:02d} out of range for offset {utc_offset_minutes}")
        return None


def parse_time_to_utc(
    time_str: str,
    anchor: datetime,
    utc_offset_minutes: int = 0
) -> Optional[datetime]:
    """Parse a time string and convert it to a UTC instant on today's local date."""
    parsed = parse_time_string(time_str)
    if parsed is None:
        logger.debug(f"Rejected time string: {time_str!r}")
        return None

    hour, minute = parsed
    return local_time_to_utc(hour, minute, anchor, utc_offset_minutes)


def find_duration(text: str) -> Optional[Duration]:
    """Find the first duration phrase in lower-cased message text."""
    for rule in DURATION_RULES:
        match = rule.search(text)
        if not match:
            continue

        if rule.kind == "hours":
            return Duration(hours=float(match.group(1)), matched_text=match.group(0))
        try:
            minutes = int(match.group(1))
        except ValueError:
            # Beyond the interpreter's integer string conversion limit
            continue
        return Duration(minutes=minutes, matched_text=match.group(0))

    return None


def coerce_instant(value: Optional[Instant]) -> Optional[datetime]:
    """Normalize a caller-supplied instant to an aware UTC datetime.

    Strings are read as ISO-8601; naive datetimes are taken to be UTC.
    Unreadable values yield None.
    """
    if value is None:
        return None

    if isinstance(value, str):
        try:
            value = date_parser.isoparse(value)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Ignoring unparseable instant {value!r}: {e}")
            return None

    if not isinstance(value, datetime):
        logger.warning(f"Ignoring instant of unsupported type {type(value).__name__}")
        return None

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)

    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        logger.warning(f"Ignoring instant outside the representable UTC range: {value.isoformat()}")
        return None


def format_instant(value: Optional[datetime]) -> Optional[str]:
    """Serialize as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if value is None:
        return None

    value = value.astimezone(timezone.utc)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"
