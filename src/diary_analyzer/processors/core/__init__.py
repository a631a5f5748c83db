"""Temporal Processors

Wall-clock time and duration parsing plus the priority-ordered time range
resolver used for activity logging.
"""

from .temporal_extractor import (
    TemporalExtractor,
    TimeResolution,
    TimeSource,
    extract_time_info
)
from .time_parser import (
    Duration,
    coerce_instant,
    find_duration,
    format_instant,
    local_time_to_utc,
    parse_time_string,
    parse_time_to_utc
)

__all__ = [
    "TemporalExtractor",
    "TimeResolution",
    "TimeSource",
    "extract_time_info",
    "Duration",
    "coerce_instant",
    "find_duration",
    "format_instant",
    "local_time_to_utc",
    "parse_time_string",
    "parse_time_to_utc"
]
