"""Diary Analyzer - Activity Log Message Interpreter

Turns free-text messages such as "log coding from 9am to 11am" into
structured calendar entries, handing anything the rules cannot interpret
to a language-model fallback.
"""

__version__ = "0.1.0"
__author__ = "Diary Analyzer Team"
__description__ = "Activity Log Message Interpreter"

from .intelligence import (
    extract_activity,
    infer_category,
    is_log_request,
    parse_log_message,
    route_request
)
from .processors.core.temporal_extractor import extract_time_info

__all__ = [
    "extract_activity",
    "extract_time_info",
    "infer_category",
    "is_log_request",
    "parse_log_message",
    "route_request"
]
