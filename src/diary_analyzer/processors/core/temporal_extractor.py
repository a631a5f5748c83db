"""Temporal Extractor for Activity Logging

Resolves the start and end instants of a logged activity from a message.
Resolution rules are tried in a fixed priority order and the first rule
that produces a result decides the range and its source tag.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from ...core.logging_manager import LoggingManager
from .temporal_patterns import RANGE_RULES, SINGLE_TIME_RULES
from .time_parser import (
    Duration,
    Instant,
    coerce_instant,
    find_duration,
    format_instant,
    parse_time_to_utc,
)


class TimeSource(Enum):
    """Which resolution rule produced a start/end pair."""
    EXPLICIT_RANGE = "explicit_range"
    START_PLUS_DURATION = "start_plus_duration"
    END_MINUS_DURATION = "end_minus_duration"
    LAST_EVENT_PLUS_DURATION = "last_event_plus_duration"
    CURRENT_MINUS_DURATION = "current_minus_duration"
    START_TO_NOW = "start_to_now"
    LAST_EVENT_TO_END = "last_event_to_end"
    UNKNOWN_TO_END = "unknown_to_end"
    LAST_EVENT_TO_NOW = "last_event_to_now"
    END_ONLY = "end_only"


@dataclass(frozen=True)
class TimeMarker:
    """A single start- or end-type time reference in the message."""
    kind: str  # start | end
    instant: datetime
    matched_text: str


@dataclass(frozen=True)
class TimeResolution:
    """Resolved activity range. Either side may be None when unresolved."""
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    source: TimeSource

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "startTime": format_instant(self.start_time),
            "endTime": format_instant(self.end_time),
            "source": self.source.value,
        }


@dataclass(frozen=True)
class ResolutionContext:
    """Everything a resolution rule may look at."""
    text: str
    current_time: datetime
    utc_offset_minutes: int
    last_event_end_time: Optional[datetime]
    duration: Optional[Duration]
    marker: Optional[TimeMarker]


ResolutionRule = Tuple[str, Callable[[ResolutionContext], Optional[TimeResolution]]]


class TemporalExtractor:
    """Priority-ordered time range resolver."""

    def __init__(self):
        """Initialize temporal extractor with its ordered resolution rules."""
        self.logger = LoggingManager.get_logger(__name__)
        self.resolution_rules = self._build_resolution_rules()

    def _build_resolution_rules(self) -> List[ResolutionRule]:
        """Build the ordered decision table.

        Returns:
            ``(name, handler)`` pairs; a handler returns None to pass
        """
        return [
            ("explicit_range", self._resolve_explicit_range),
            ("marker_with_duration", self._resolve_marker_with_duration),
            ("duration_only", self._resolve_duration_only),
            ("single_time", self._resolve_single_time),
            ("default", self._resolve_default),
        ]

    def extract_time_info(
        self,
        message: str,
        last_event_end_time: Optional[Instant] = None,
        current_time: Optional[Instant] = None,
        utc_offset_minutes: Optional[int] = 0
    ) -> TimeResolution:
        """Resolve the activity's time range from a message.

        Args:
            message: Raw user message
            last_event_end_time: End of the most recently logged event
            current_time: Reference "now"; defaults to the system clock
            utc_offset_minutes: Minutes added to UTC to get local time

        Returns:
            Resolved range with the tag of the rule that produced it
        """
        now = coerce_instant(current_time) or datetime.now(timezone.utc)
        utc_offset_minutes = utc_offset_minutes or 0
        text = message.lower()

        context = ResolutionContext(
            text=text,
            current_time=now,
            utc_offset_minutes=utc_offset_minutes,
            last_event_end_time=coerce_instant(last_event_end_time),
            duration=find_duration(text),
            marker=self._find_single_time(text, now, utc_offset_minutes),
        )

        for name, handler in self.resolution_rules:
            resolution = handler(context)
            if resolution is None:
                continue

            self.logger.debug(f"Time resolved by rule '{name}': {resolution.source.value}")
            self._check_ordering(resolution)
            return resolution

        # The default rule always resolves
        raise AssertionError("no time resolution rule applied")

    def _find_single_time(
        self,
        text: str,
        current_time: datetime,
        utc_offset_minutes: int
    ) -> Optional[TimeMarker]:
        """Find the first single time marker whose time parses."""
        for rule in SINGLE_TIME_RULES:
            match = rule.search(text)
            if not match:
                continue

            instant = parse_time_to_utc(match.group(1), current_time, utc_offset_minutes)
            if instant is None:
                continue

            return TimeMarker(kind=rule.kind, instant=instant, matched_text=match.group(0))

        return None

    def _resolve_explicit_range(self, context: ResolutionContext) -> Optional[TimeResolution]:
        for rule in RANGE_RULES:
            match = rule.search(context.text)
            if not match:
                continue

            start = parse_time_to_utc(match.group(1), context.current_time, context.utc_offset_minutes)
            end = parse_time_to_utc(match.group(2), context.current_time, context.utc_offset_minutes)
            if start is None or end is None:
                self.logger.debug(f"Range '{match.group(0)}' has an invalid endpoint")
                continue

            return TimeResolution(start, end, TimeSource.EXPLICIT_RANGE)

        return None

    def _resolve_marker_with_duration(self, context: ResolutionContext) -> Optional[TimeResolution]:
        if context.duration is None or context.marker is None:
            return None

        try:
            offset = context.duration.as_timedelta()
            if context.marker.kind == "start":
                start = context.marker.instant
                return TimeResolution(start, start + offset, TimeSource.START_PLUS_DURATION)

            end = context.marker.instant
            return TimeResolution(end - offset, end, TimeSource.END_MINUS_DURATION)
        except OverflowError:
            self._log_out_of_range(context, context.marker.matched_text)
            return None

    def _resolve_duration_only(self, context: ResolutionContext) -> Optional[TimeResolution]:
        if context.duration is None:
            return None

        try:
            offset = context.duration.as_timedelta()
            if context.last_event_end_time is not None:
                start = context.last_event_end_time
                return TimeResolution(start, start + offset, TimeSource.LAST_EVENT_PLUS_DURATION)

            end = context.current_time
            return TimeResolution(end - offset, end, TimeSource.CURRENT_MINUS_DURATION)
        except OverflowError:
            self._log_out_of_range(context)
            return None

    def _log_out_of_range(self, context: ResolutionContext, anchor_text: str = "") -> None:
        anchor = f" from '{anchor_text}'" if anchor_text else ""
        self.logger.debug(
            f"Duration '{context.duration.matched_text}'{anchor} leaves the representable date range"
        )

    def _resolve_single_time(self, context: ResolutionContext) -> Optional[TimeResolution]:
        marker = context.marker
        if marker is None:
            return None

        if marker.kind == "start":
            return TimeResolution(marker.instant, context.current_time, TimeSource.START_TO_NOW)

        if context.last_event_end_time is not None:
            return TimeResolution(context.last_event_end_time, marker.instant, TimeSource.LAST_EVENT_TO_END)

        # Start stays unresolved; callers must not guess it
        return TimeResolution(None, marker.instant, TimeSource.UNKNOWN_TO_END)

    def _resolve_default(self, context: ResolutionContext) -> TimeResolution:
        if context.last_event_end_time is not None:
            return TimeResolution(
                context.last_event_end_time, context.current_time, TimeSource.LAST_EVENT_TO_NOW
            )

        return TimeResolution(None, context.current_time, TimeSource.END_ONLY)

    def _check_ordering(self, resolution: TimeResolution) -> None:
        """Warn on a range that does not move forward; it is still returned."""
        start, end = resolution.start_time, resolution.end_time
        if start is not None and end is not None and start >= end:
            self.logger.warning(
                f"Start time ({format_instant(start)}) is not before "
                f"end time ({format_instant(end)}) [{resolution.source.value}]"
            )


_default_extractor = TemporalExtractor()


def extract_time_info(
    message: str,
    last_event_end_time: Optional[Instant] = None,
    current_time: Optional[Instant] = None,
    utc_offset_minutes: int = 0
) -> TimeResolution:
    """Resolve a message's time range with the shared extractor."""
    return _default_extractor.extract_time_info(
        message,
        last_event_end_time=last_event_end_time,
        current_time=current_time,
        utc_offset_minutes=utc_offset_minutes,
    )
