"""Data Processing Module

Temporal processing for activity log messages.
"""

from .core.temporal_extractor import TemporalExtractor, TimeResolution, TimeSource

__all__ = [
    "TemporalExtractor",
    "TimeResolution",
    "TimeSource"
]
