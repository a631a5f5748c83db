"""Intent Classifier for Activity Logging

Decides whether a message is a command to log an activity or a question
about logged data. Rules are evaluated strictly in order and the first
matching rule decides; rejection rules come first so that a question
phrased with a logging verb ("log my mood?") is never taken as a command.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.logging_manager import LoggingManager


PRIMARY_LOG_KEYWORDS = ("log", "record", "track", "add", "note")


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification decision table."""
    name: str
    predicate: Callable[[str], bool]
    is_log_request: bool


@dataclass(frozen=True)
class ClassificationResult:
    """Verdict plus the rule that produced it (None when nothing matched)."""
    is_log_request: bool
    matched_rule: Optional[str]
    text_processed: str


def _matches(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern, re.IGNORECASE)
    return lambda text: compiled.search(text) is not None


def _first_word_is_keyword(text: str) -> bool:
    words = text.split()
    return bool(words) and words[0] in PRIMARY_LOG_KEYWORDS


def _first_two_words_match(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda text: compiled.search(" ".join(text.split()[:2])) is not None


class IntentClassifier:
    """Rule-based log request classifier."""

    def __init__(self):
        """Initialize intent classifier with its ordered rules."""
        self.logger = LoggingManager.get_logger(__name__)
        self.rules = self._build_rejection_rules() + self._build_action_rules()

    def _build_rejection_rules(self) -> List[ClassificationRule]:
        """Build rules for questions and data queries.

        Returns:
            Rules that classify a message as not a log request
        """
        return [
            ClassificationRule(
                "interrogative_opener",
                _matches(r"^(how|what|when|where|why|who|which|show|get|display|tell|give|find)\b"),
                False,
            ),
            ClassificationRule("trailing_question_mark", _matches(r"\?$"), False),
            ClassificationRule(
                "polite_question",
                _matches(r"^(can|could|would|should|is|are|was|were|do|does|did)\s+(you|i|it|this|that|the|my)\b"),
                False,
            ),
            ClassificationRule(
                "data_reference",
                _matches(r"my\s+(day|time|stats|data|history|events|activities)\b"),
                False,
            ),
        ]

    def _build_action_rules(self) -> List[ClassificationRule]:
        """Build rules for explicit logging phrasing.

        Returns:
            Rules that classify a message as a log request
        """
        return [
            ClassificationRule("logging_verb", _matches(r"^(log|record|track|add|note)\b"), True),
            ClassificationRule(
                "finished_activity",
                _matches(r"^(i\s+)?(just\s+)?(finished|completed|did)\s+\w"),
                True,
            ),
            ClassificationRule(
                "worked_on_activity",
                _matches(r"^(i\s+)?(just\s+)?(worked\s+on|started)\s+\w"),
                True,
            ),
            ClassificationRule("spent_time", _matches(r"^spent\s+\w"), True),
            ClassificationRule("primary_keyword", _first_word_is_keyword, True),
            ClassificationRule(
                "first_person_prefix",
                _first_two_words_match(r"^i\s+(did|finished|completed|started|worked|spent)"),
                True,
            ),
            ClassificationRule(
                "just_prefix",
                _first_two_words_match(r"^just\s+(did|finished|completed|started|worked)"),
                True,
            ),
        ]

    def classify(self, message: str) -> ClassificationResult:
        """Classify a message, reporting which rule decided.

        Args:
            message: Raw user message

        Returns:
            Classification verdict with the deciding rule name
        """
        normalized = message.strip().lower()

        for rule in self.rules:
            if rule.predicate(normalized):
                self.logger.debug(
                    f"Message classified by rule '{rule.name}': is_log_request={rule.is_log_request}"
                )
                return ClassificationResult(rule.is_log_request, rule.name, normalized)

        return ClassificationResult(False, None, normalized)

    def is_log_request(self, message: str) -> bool:
        """Whether the message is a command to log an activity."""
        return self.classify(message).is_log_request


_default_classifier = IntentClassifier()


def is_log_request(message: str) -> bool:
    """Classify a message with the shared classifier."""
    return _default_classifier.is_log_request(message)
