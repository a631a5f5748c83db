"""Diary Analyzer Intelligence Package

Rule-based interpretation of activity log messages: intent classification,
activity extraction, category inference and two-tier routing.
"""

from .category_classifier import (
    Category,
    CategoryClassifier,
    CategoryConfidence,
    CategoryScore,
    infer_category
)
from .entity_extractor import EntityExtractor, extract_activity
from .intent_classifier import ClassificationResult, IntentClassifier, is_log_request
from .request_router import (
    FallbackReason,
    LogData,
    LogRequest,
    ParseOutcome,
    RequestRouter,
    RouteResult,
    parse_log_message,
    route_request
)

__all__ = [
    "Category",
    "CategoryClassifier",
    "CategoryConfidence",
    "CategoryScore",
    "infer_category",
    "EntityExtractor",
    "extract_activity",
    "ClassificationResult",
    "IntentClassifier",
    "is_log_request",
    "FallbackReason",
    "LogData",
    "LogRequest",
    "ParseOutcome",
    "RequestRouter",
    "RouteResult",
    "parse_log_message",
    "route_request"
]
