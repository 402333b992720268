"""
Tests for chat intent classification.
"""

import pytest

from movie_budget.core.intents import (
    FallbackTopic,
    Intent,
    classify_fallback_topic,
    classify_intent,
    classify_project_type,
)
from movie_budget.core.templates import DOCUMENTARY, FEATURE_FILM, SHORT_FILM


class TestClassifyIntent:
    """Test ordered keyword routing."""

    @pytest.mark.parametrize("text, expected", [
        ("Give me a template", Intent.GENERATE_TEMPLATE),
        ("CREATE a budget", Intent.GENERATE_TEMPLATE),
        ("please analyze this", Intent.ANALYZE),
        ("Show me a Report", Intent.ANALYZE),
        ("apply it", Intent.APPLY_TEMPLATE),
        ("how much for catering?", Intent.DELEGATE),
        ("", Intent.DELEGATE),
    ])
    def test_keywords(self, text, expected):
        assert classify_intent(text) == expected

    def test_template_beats_analyze(self):
        assert classify_intent("analyze this template") == Intent.GENERATE_TEMPLATE

    def test_analyze_beats_apply(self):
        assert classify_intent("apply the report") == Intent.ANALYZE

    def test_use_template_routes_to_generate(self):
        # "use template" also contains "template", which is checked first
        assert classify_intent("use template") == Intent.GENERATE_TEMPLATE


class TestClassifyProjectType:
    """Test template project type selection."""

    def test_short(self):
        assert classify_project_type("Create a SHORT film template") == SHORT_FILM

    def test_documentary(self):
        assert classify_project_type("documentary template") == DOCUMENTARY

    def test_short_beats_documentary(self):
        assert classify_project_type("short documentary") == SHORT_FILM

    def test_default_is_feature_film(self):
        assert classify_project_type("feature film request") == FEATURE_FILM
        assert classify_project_type("") == FEATURE_FILM


class TestClassifyFallbackTopic:
    """Test offline reply topic selection."""

    @pytest.mark.parametrize("text, expected", [
        ("create something", FallbackTopic.TEMPLATE),
        ("a report please", FallbackTopic.ANALYSIS),
        ("any ADVICE?", FallbackTopic.RECOMMENDATION),
        ("what do you recommend", FallbackTopic.RECOMMENDATION),
        ("hello", FallbackTopic.GENERAL),
    ])
    def test_topics(self, text, expected):
        assert classify_fallback_topic(text) == expected
