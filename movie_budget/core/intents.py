"""
Chat intent classification.

Free-text messages are routed by case-insensitive keyword matching over an
ordered rule list. The first matching rule wins.

Classification Order:
1. Generate template - "template" or "create"
2. Analyze budget - "analyze" or "report"
3. Apply template - "apply" or "use template"
4. Delegate - anything else goes to the text-generation endpoint
"""

from enum import Enum, auto
from typing import Callable, List, Sequence, Tuple, TypeVar

from .templates import DOCUMENTARY, FEATURE_FILM, SHORT_FILM


class Intent(Enum):
    """Actions the chat dispatcher can take for a message."""
    GENERATE_TEMPLATE = auto()
    ANALYZE = auto()
    APPLY_TEMPLATE = auto()
    DELEGATE = auto()


class FallbackTopic(Enum):
    """Topics used to pick an offline reply when generation is unavailable."""
    TEMPLATE = auto()
    ANALYSIS = auto()
    RECOMMENDATION = auto()
    GENERAL = auto()


T = TypeVar("T")
Predicate = Callable[[str], bool]


def contains_any(*keywords: str) -> Predicate:
    """Build a predicate matching lowercased text containing any keyword."""
    def predicate(text: str) -> bool:
        return any(keyword in text for keyword in keywords)
    return predicate


INTENT_RULES: List[Tuple[Predicate, Intent]] = [
    (contains_any("template", "create"), Intent.GENERATE_TEMPLATE),
    (contains_any("analyze", "report"), Intent.ANALYZE),
    (contains_any("apply", "use template"), Intent.APPLY_TEMPLATE),
]

PROJECT_TYPE_RULES: List[Tuple[Predicate, str]] = [
    (contains_any("short"), SHORT_FILM),
    (contains_any("documentary"), DOCUMENTARY),
]

FALLBACK_TOPIC_RULES: List[Tuple[Predicate, FallbackTopic]] = [
    (contains_any("template", "create"), FallbackTopic.TEMPLATE),
    (contains_any("analyze", "report"), FallbackTopic.ANALYSIS),
    (contains_any("recommend", "advice"), FallbackTopic.RECOMMENDATION),
]


def first_match(text: str, rules: Sequence[Tuple[Predicate, T]], default: T) -> T:
    """Return the value of the first rule whose predicate matches text."""
    lowered = text.lower()
    for predicate, value in rules:
        if predicate(lowered):
            return value
    return default


def classify_intent(text: str) -> Intent:
    return first_match(text, INTENT_RULES, Intent.DELEGATE)


def classify_project_type(text: str) -> str:
    """Pick a catalog project type; feature film when nothing matches."""
    return first_match(text, PROJECT_TYPE_RULES, FEATURE_FILM)


def classify_fallback_topic(text: str) -> FallbackTopic:
    return first_match(text, FALLBACK_TOPIC_RULES, FallbackTopic.GENERAL)
