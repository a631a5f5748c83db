"""Category Classifier for Logged Activities

Infers a productivity category from an activity title by keyword scoring.
Every vocabulary keyword found as a case-insensitive substring adds its
character length to its category's score, so longer, more specific terms
weigh more. Keywords are summed as listed, repeats included.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from ..core.logging_manager import LoggingManager


class Category(Enum):
    """Productivity categories, in tie-break order."""
    PROD = "prod"
    NONPROD = "nonprod"
    ADMIN = "admin"


class CategoryConfidence(Enum):
    """Confidence band of an inferred category."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class CategoryScore:
    """Inferred category with its confidence band and raw tallies."""
    category: Category
    confidence: CategoryConfidence
    scores: Dict[Category, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "category": self.category.value,
            "confidence": self.confidence.value,
            "scores": {category.value: score for category, score in self.scores.items()},
        }


CATEGORY_KEYWORDS: Dict[Category, Tuple[str, ...]] = {
    Category.PROD: (
        "work", "working", "worked", "coding", "code", "programming", "develop",
        "meeting", "meetings", "met with", "call with", "sync", "standup",
        "study", "studying", "studied", "learning", "learn", "course", "class",
        "gym", "workout", "exercise", "exercising", "run", "running", "jog",
        "writing", "write", "wrote", "documentation", "docs",
        "research", "researching", "analysis", "analyzing",
        "planning", "plan", "design", "designing", "architect",
        "review", "reviewing", "code review", "pr review",
        "email", "emails", "correspondence",
        "presentation", "present", "demo",
        "interview", "interviewing",
        "training", "train", "onboarding",
        "debugging", "debug", "fix", "fixing", "fixed",
        "testing", "test", "tests", "qa",
        "deploy", "deployment", "release",
        "brainstorm", "brainstorming", "ideation",
        "project", "task", "tasks", "sprint",
        "reading technical", "documentation",
        "focus", "focused", "deep work",
    ),
    Category.NONPROD: (
        "gaming", "game", "games", "played", "playing",
        "netflix", "youtube", "hulu", "streaming", "watching",
        "tv", "television", "movie", "movies", "show", "shows",
        "social media", "twitter", "instagram", "facebook", "tiktok", "reddit",
        "browse", "browsing", "surfing", "internet",
        "scroll", "scrolling",
        "entertainment", "fun", "leisure",
        "hang out", "hanging out", "hung out", "hangout",
        "party", "partying", "parties",
        "drinking", "drinks", "bar", "pub",
        "video call social", "facetime", "zoom social",
        "chatting", "chat", "messaging",
        "shopping", "shop", "online shopping",
        "procrastinat", "distract",
    ),
    Category.ADMIN: (
        "sleep", "sleeping", "slept", "nap", "napping",
        "eat", "eating", "ate", "breakfast", "lunch", "dinner", "meal", "snack",
        "cook", "cooking", "cooked", "prepare food", "meal prep",
        "commute", "commuting", "drive", "driving", "drove", "transit", "bus", "train",
        "shower", "showering", "hygiene", "getting ready", "grooming",
        "chore", "chores", "clean", "cleaning", "laundry", "dishes", "vacuum",
        "grocery", "groceries", "shopping for food",
        "errand", "errands",
        "break", "rest", "resting", "relaxing", "relax",
        "walk", "walking", "stroll",
        "routine", "morning routine", "night routine", "evening routine",
        "appointment", "doctor", "dentist", "haircut",
        "bills", "paying bills", "admin", "administrative",
        "waiting", "wait", "queue",
    ),
}


class CategoryClassifier:
    """Keyword-length scoring classifier for activity titles."""

    HIGH_MIN_SCORE = 10
    HIGH_MIN_MARGIN = 5
    MEDIUM_MIN_SCORE = 5

    def __init__(self):
        """Initialize category classifier."""
        self.logger = LoggingManager.get_logger(__name__)
        self.category_keywords = CATEGORY_KEYWORDS

    def infer_category(self, title: str) -> CategoryScore:
        """Infer the category of an activity title.

        Args:
            title: Activity title, any case

        Returns:
            Winning category, confidence band and per-category scores.
            With no keyword hits the result is ``prod``/``low``.
        """
        normalized = title.lower()
        scores = self._score_all_categories(normalized)

        # sorted() is stable, so ties keep prod > nonprod > admin order
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
        top_category, top_score = ranked[0]
        runner_up_score = ranked[1][1]

        confidence = self._confidence_band(top_score, top_score - runner_up_score)
        if confidence is None:
            self.logger.debug(f"No category keywords in {title[:100]!r}, defaulting to prod")
            return CategoryScore(Category.PROD, CategoryConfidence.LOW, scores)

        result = CategoryScore(top_category, confidence, scores)
        self.logger.debug(f"Category inferred: {result.to_dict()}")
        return result

    def _score_all_categories(self, text: str) -> Dict[Category, int]:
        scores = {category: 0 for category in Category}
        for category, keywords in self.category_keywords.items():
            for keyword in keywords:
                if keyword in text:
                    scores[category] += len(keyword)
        return scores

    def _confidence_band(self, top_score: int, margin: int) -> Optional[CategoryConfidence]:
        if top_score >= self.HIGH_MIN_SCORE and margin >= self.HIGH_MIN_MARGIN:
            return CategoryConfidence.HIGH
        if top_score >= self.MEDIUM_MIN_SCORE:
            return CategoryConfidence.MEDIUM
        if top_score > 0:
            return CategoryConfidence.LOW
        return None


_default_classifier = CategoryClassifier()


def infer_category(title: str) -> CategoryScore:
    """Infer a category with the shared classifier."""
    return _default_classifier.infer_category(title)
