"""
Tests for the category vocabulary and its matching helpers.
"""

import pytest

from bloom_identity.models.profile import IdentityType
from bloom_identity.models.signals import DeclaredProfile
from bloom_identity.services.vocabulary import (
    CANONICAL_CATEGORIES,
    CATEGORY_KEYWORDS,
    DEFAULT_FALLBACK_CATEGORIES,
    GENERAL_CATEGORY,
    PERSONALITY_KEYWORDS,
    contains_blocked_keyword,
    detect_categories,
    infer_categories,
    map_declared_profile,
    match_keywords,
)


class TestVocabularyData:
    def test_every_canonical_category_has_keywords(self):
        assert set(CATEGORY_KEYWORDS) == set(CANONICAL_CATEGORIES)
        assert all(CATEGORY_KEYWORDS[c] for c in CANONICAL_CATEGORIES)

    def test_fallback_categories_are_canonical(self):
        assert set(DEFAULT_FALLBACK_CATEGORIES) <= set(CANONICAL_CATEGORIES)

    def test_every_identity_type_has_personality_keywords(self):
        assert set(PERSONALITY_KEYWORDS) == set(IdentityType)

    def test_visionary_keywords(self):
        assert {"vision", "future", "disruptive"} <= set(PERSONALITY_KEYWORDS[IdentityType.VISIONARY])

    def test_innovator_keywords_skip_generic_catalog_words(self):
        generic = "PDF tools and a site builder to build workflows"
        assert match_keywords(generic, PERSONALITY_KEYWORDS[IdentityType.INNOVATOR]) == []
        assert match_keywords("Tinker with a novel prototype", PERSONALITY_KEYWORDS[IdentityType.INNOVATOR]) == [
            "prototype",
            "novel",
            "tinker",
        ]


class TestMatchKeywords:
    def test_matches_suffixed_forms(self):
        assert match_keywords("Building AI agents", ["agent", "ai", "build"]) == ["agent", "ai", "build"]

    def test_does_not_match_inside_words(self):
        assert match_keywords("maintain your email", ["ai"]) == []

    def test_case_insensitive_and_distinct(self):
        assert match_keywords("LLM llm LLMs", ["llm", "llm"]) == ["llm"]

    def test_multi_word_keywords(self):
        assert match_keywords("Intro to Machine Learning", ["machine learning"]) == ["machine learning"]

    def test_market_only_takes_plural_suffix(self):
        assert match_keywords("emerging markets", ["market"]) == ["market"]
        assert match_keywords("growth marketing", ["market"]) == []


class TestDetectCategories:
    def test_orders_by_distinct_hits(self):
        assert detect_categories(["DeFi protocols", "AI agents", "LLM"]) == ["AI Tools", "Crypto"]

    def test_ties_keep_canonical_order(self):
        assert detect_categories(["figma", "yoga"]) == ["Wellness", "Design"]

    def test_empty_input(self):
        assert detect_categories([]) == []
        assert detect_categories(["", "   "]) == []

    def test_unmatched_text(self):
        assert detect_categories(["gardening"]) == []


class TestInferCategories:
    def test_general_when_nothing_matches(self):
        assert infer_categories("weather forecast helper") == [GENERAL_CATEGORY]

    def test_marketing_is_not_finance(self):
        assert infer_categories("email marketing sequences") == ["Marketing"]
        assert infer_categories("stock markets dashboard") == ["Finance"]

    def test_canonical_order(self):
        assert infer_categories("figma plugin for python developers") == ["Design", "Development"]


class TestBlockedKeywords:
    @pytest.mark.parametrize(
        "text",
        ["Wallet drainer toolkit", "my-wallet-drainer-kit", "Keylogger for research", "cookie-stealer v2"],
    )
    def test_blocked(self, text):
        assert contains_blocked_keyword(text) is True

    @pytest.mark.parametrize("text", ["Hackathon planner", "Cracking good recipes", "Wallet balance viewer"])
    def test_not_blocked(self, text):
        assert contains_blocked_keyword(text) is False


class TestMapDeclaredProfile:
    def test_role_then_focus_then_tech(self):
        profile = DeclaredProfile(
            role="Founder & Software Engineer",
            current_focus=["DeFi protocols", "AI agents"],
            tech_stack=["TypeScript", "Solidity"],
        )
        assert map_declared_profile(profile) == ["Development", "Crypto", "AI Tools"]

    def test_community_role(self):
        assert map_declared_profile(DeclaredProfile(role="Community Lead")) == ["Marketing"]

    def test_designer_role(self):
        assert map_declared_profile(DeclaredProfile(role="Product Designer")) == ["Design"]

    def test_empty_profile(self):
        assert map_declared_profile(DeclaredProfile()) == []
