"""Activity Extractor

Reduces a log command to a clean activity title by stripping the leading
action phrase and every time, range and duration phrase the time resolver
understands.
"""

import re
from typing import List, Optional, Pattern

from ..core.logging_manager import LoggingManager
from ..processors.core.temporal_patterns import TIME_PHRASE_REMOVALS


class EntityExtractor:
    """Extracts the activity title from a log command."""

    def __init__(self):
        """Initialize extractor with action prefixes and cleanup patterns."""
        self.logger = LoggingManager.get_logger(__name__)
        self.action_prefixes = self._build_action_prefixes()
        self.time_phrase_removals = TIME_PHRASE_REMOVALS
        self.edge_punctuation = re.compile(r"^[\s,.-]+|[\s,.-]+$")

    def _build_action_prefixes(self) -> List[Pattern[str]]:
        """Build leading action phrase patterns.

        Returns:
            Candidate prefixes in the order they are tried
        """
        return [
            re.compile(r"^(log|record|track|add|note)\s+(that\s+)?", re.IGNORECASE),
            re.compile(r"^(i\s+)?(just\s+)?(did|finished|completed|started|worked\s+on)\s+", re.IGNORECASE),
            re.compile(r"^(spent\s+time\s+on|was\s+doing)\s+", re.IGNORECASE),
        ]

    def extract_activity(self, message: str) -> Optional[str]:
        """Extract the activity title from a message.

        Args:
            message: Raw user message

        Returns:
            Capitalized activity title, or None if nothing is left
        """
        activity = self._strip_action_prefix(message.strip())

        for pattern in self.time_phrase_removals:
            activity = pattern.sub("", activity)

        activity = re.sub(r"\s+", " ", activity)
        activity = self.edge_punctuation.sub("", activity).strip()

        if not activity:
            self.logger.debug(f"No activity left after cleanup: {message[:100]!r}")
            return None

        return activity[0].upper() + activity[1:]

    def _strip_action_prefix(self, text: str) -> str:
        # Only the first matching prefix is removed
        for prefix in self.action_prefixes:
            stripped, count = prefix.subn("", text, count=1)
            if count:
                return stripped
        return text


_default_extractor = EntityExtractor()


def extract_activity(message: str) -> Optional[str]:
    """Extract an activity title with the shared extractor."""
    return _default_extractor.extract_activity(message)
