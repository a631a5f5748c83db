"""Two-Tier Request Router

Turns a free-text message into a structured activity log entry using the
rule-based components (tier 1), or hands the message to an external
language-model interpreter (tier 2) when the rules cannot. Tier 2 is a
designed outcome, not an error: questions and messages without an activity
are expected to take that path.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..core.logging_manager import LoggingManager
from ..processors.core.temporal_extractor import TemporalExtractor, TimeSource
from ..processors.core.time_parser import coerce_instant, format_instant
from .category_classifier import Category, CategoryClassifier, CategoryConfidence
from .entity_extractor import EntityExtractor
from .intent_classifier import IntentClassifier


MIN_UTC_OFFSET_MINUTES = -720
MAX_UTC_OFFSET_MINUTES = 840


class FallbackReason(Enum):
    """Why a message was handed to tier 2."""
    NOT_LOG_REQUEST = "not_log_request"
    NO_ACTIVITY_FOUND = "no_activity_found"
    PATTERN_EXTRACTION_FAILED = "pattern_extraction_failed"


@dataclass(frozen=True)
class LogRequest:
    """A message and the caller-supplied context it is parsed against."""
    message: str
    current_time: datetime
    last_event_end_time: Optional[datetime] = None
    utc_offset_minutes: int = 0

    @classmethod
    def from_context(
        cls,
        message: Optional[str],
        context: Optional[Mapping[str, Any]] = None,
        default_utc_offset_minutes: int = 0
    ) -> "LogRequest":
        """Build a request from a wire-style context mapping.

        Recognized keys are ``lastEventEndTime``, ``currentTime`` and
        ``utcOffsetMinutes``. Instants may be datetimes or ISO-8601 strings;
        ``currentTime`` falls back to the system clock.
        """
        context = context or {}
        current_time = coerce_instant(context.get("currentTime")) or datetime.now(timezone.utc)

        return cls(
            message=message if isinstance(message, str) else "",
            current_time=current_time,
            last_event_end_time=coerce_instant(context.get("lastEventEndTime")),
            utc_offset_minutes=_coerce_offset(
                context.get("utcOffsetMinutes"), default_utc_offset_minutes
            ),
        )


@dataclass(frozen=True)
class LogData:
    """Structured activity log entry."""
    title: str
    category: Category
    category_confidence: CategoryConfidence
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    time_source: TimeSource

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "category": self.category.value,
            "categoryConfidence": self.category_confidence.value,
            "startTime": format_instant(self.start_time),
            "endTime": format_instant(self.end_time),
            "timeSource": self.time_source.value,
        }


@dataclass(frozen=True)
class ParseOutcome:
    """Result of the tier 1 attempt."""
    success: bool
    needs_llm: bool
    reason: Optional[FallbackReason] = None
    data: Optional[LogData] = None
    action: Optional[str] = None
    suggest_llm_verification: bool = False

    @classmethod
    def failed(cls, reason: FallbackReason) -> "ParseOutcome":
        return cls(success=False, needs_llm=True, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason.value, "needsLLM": True}

        result = {
            "success": True,
            "needsLLM": False,
            "action": self.action,
            "data": self.data.to_dict(),
        }
        if self.suggest_llm_verification:
            result["suggestLLMVerification"] = True
        return result


@dataclass(frozen=True)
class RouteResult:
    """Routing decision: a tier 1 log entry or a tier 2 handoff."""
    tier: int
    method: str
    original_message: str
    outcome: Optional[ParseOutcome] = None
    reason: Optional[FallbackReason] = None
    partial_data: Optional[LogData] = None

    @property
    def is_pattern_match(self) -> bool:
        return self.tier == 1

    def to_dict(self) -> Dict[str, Any]:
        if self.is_pattern_match:
            return {"tier": self.tier, "method": self.method, **self.outcome.to_dict()}

        return {
            "tier": self.tier,
            "method": self.method,
            "reason": self.reason.value,
            "originalMessage": self.original_message,
            "partialData": self.partial_data.to_dict() if self.partial_data else None,
        }


def _coerce_offset(value: Any, default: int) -> int:
    if value is None:
        return default

    offset = None
    if isinstance(value, int) and not isinstance(value, bool):
        offset = value
    elif isinstance(value, float) and value.is_integer():
        offset = int(value)

    # UTC-12:00 through UTC+14:00
    if offset is not None and MIN_UTC_OFFSET_MINUTES <= offset <= MAX_UTC_OFFSET_MINUTES:
        return offset

    LoggingManager.get_logger(__name__).warning(
        f"Ignoring invalid utcOffsetMinutes {value!r}, using {default}"
    )
    return default


class RequestRouter:
    """Orchestrates classification, extraction, time resolution and categorization."""

    def __init__(self, default_utc_offset_minutes: int = 0):
        """Initialize router and its rule-based components.

        Args:
            default_utc_offset_minutes: Offset used when the caller gives none
        """
        self.logger = LoggingManager.get_logger(__name__)
        self.default_utc_offset_minutes = default_utc_offset_minutes

        self.intent_classifier = IntentClassifier()
        self.entity_extractor = EntityExtractor()
        self.temporal_extractor = TemporalExtractor()
        self.category_classifier = CategoryClassifier()

    def parse_log_message(self, request: LogRequest) -> ParseOutcome:
        """Attempt tier 1 extraction for a request.

        Args:
            request: Message and context

        Returns:
            Successful outcome with log data, or a failed outcome naming the reason
        """
        if not self.intent_classifier.is_log_request(request.message):
            return ParseOutcome.failed(FallbackReason.NOT_LOG_REQUEST)

        title = self.entity_extractor.extract_activity(request.message)
        if title is None:
            return ParseOutcome.failed(FallbackReason.NO_ACTIVITY_FOUND)

        time_info = self.temporal_extractor.extract_time_info(
            request.message,
            last_event_end_time=request.last_event_end_time,
            current_time=request.current_time,
            utc_offset_minutes=request.utc_offset_minutes,
        )
        category = self.category_classifier.infer_category(title)

        data = LogData(
            title=title,
            category=category.category,
            category_confidence=category.confidence,
            start_time=time_info.start_time,
            end_time=time_info.end_time,
            time_source=time_info.source,
        )

        return ParseOutcome(
            success=True,
            needs_llm=False,
            data=data,
            action="log",
            suggest_llm_verification=category.confidence == CategoryConfidence.LOW,
        )

    def route(self, message: Optional[str], context: Optional[Mapping[str, Any]] = None) -> RouteResult:
        """Route a message to tier 1 or tier 2.

        Args:
            message: Raw user message
            context: Optional ``lastEventEndTime``, ``currentTime`` and
                ``utcOffsetMinutes``

        Returns:
            Routing decision
        """
        request = LogRequest.from_context(message, context, self.default_utc_offset_minutes)
        outcome = self.parse_log_message(request)

        if outcome.success and not outcome.needs_llm:
            self.logger.info(
                f"Tier 1 log entry: {outcome.data.title!r} -> {outcome.data.category.value} "
                f"({outcome.data.category_confidence.value}, {outcome.data.time_source.value})"
            )
            return RouteResult(tier=1, method="pattern", original_message=request.message, outcome=outcome)

        reason = outcome.reason or FallbackReason.PATTERN_EXTRACTION_FAILED
        self.logger.info(f"Tier 2 handoff: {reason.value}")
        return RouteResult(
            tier=2,
            method="llm",
            original_message=request.message,
            reason=reason,
            partial_data=outcome.data,
        )


_default_router = RequestRouter()


def parse_log_message(message: str, context: Optional[Mapping[str, Any]] = None) -> ParseOutcome:
    """Attempt tier 1 extraction with the shared router."""
    request = LogRequest.from_context(message, context)
    return _default_router.parse_log_message(request)


def route_request(message: str, context: Optional[Mapping[str, Any]] = None) -> RouteResult:
    """Route a message with the shared router."""
    return _default_router.route(message, context)
