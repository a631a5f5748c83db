"""Calendar Event Payloads

Builders for what the calendar service and the user see after a message
has been interpreted.
"""

from .event_builder import (
    EventBuilder,
    build_category_prompt,
    category_label,
    format_local_time,
    normalize_category
)

__all__ = [
    "EventBuilder",
    "build_category_prompt",
    "category_label",
    "format_local_time",
    "normalize_category"
]
