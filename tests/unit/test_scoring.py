"""
Tests for RecommendationScorer: per-factor points, exclusion, ordering and threshold.
"""

import pytest

from bloom_identity.models.catalog import CandidateItem
from bloom_identity.models.profile import IdentityType, MergedProfile
from bloom_identity.models.signals import Dimensions
from bloom_identity.services.recommendation.scoring import RecommendationScorer

TERMS = ["defi", "llm", "agent"]
HIGH = Dimensions(conviction=80, intuition=80, contribution=70)
NEUTRAL = Dimensions()


@pytest.fixture
def profile() -> MergedProfile:
    return MergedProfile(main_categories=["AI Tools"], sub_categories=["Design"], excluded_skill_ids=["x"])


@pytest.fixture
def perfect() -> CandidateItem:
    return CandidateItem(
        id="perfect",
        name="Future Vision Agent",
        description="Disruptive DeFi agent for LLM builders",
        categories=["AI Tools"],
        base_relevance=0.5,
    )


def make(candidate_id: str, categories: list[str], description: str = "", relevance: float = 0.0) -> CandidateItem:
    return CandidateItem(
        id=candidate_id,
        name=candidate_id,
        description=description,
        categories=categories,
        base_relevance=relevance,
    )


class TestFactors:
    def test_category_main(self, profile, perfect):
        points, reasons = RecommendationScorer.category_match(perfect, profile)
        assert points == 30
        assert reasons == ["Matches your main interest: AI Tools"]

    def test_category_sub(self, profile):
        points, _ = RecommendationScorer.category_match(make("d", ["Design"]), profile)
        assert points == 15

    def test_category_none(self, profile):
        assert RecommendationScorer.category_match(make("f", ["Finance"]), profile) == (0, [])

    def test_personality_capped(self, perfect):
        points, reasons = RecommendationScorer.personality_match(perfect, IdentityType.VISIONARY)
        assert points == 20
        assert "Visionary" in reasons[0]

    def test_personality_single_keyword(self):
        candidate = make("c", ["General"], description="Streamline your inbox")
        points, _ = RecommendationScorer.personality_match(candidate, IdentityType.OPTIMIZER)
        assert points == 10

    def test_conversation_capped(self, perfect):
        points, _ = RecommendationScorer.conversation_alignment(perfect, TERMS + ["builder"])
        assert points == 15

    def test_conversation_per_term(self, perfect):
        points, _ = RecommendationScorer.conversation_alignment(perfect, ["defi", "solana"])
        assert points == 5

    @pytest.mark.parametrize(
        "dimensions,expected",
        [
            (Dimensions(conviction=70, intuition=70, contribution=65), 15),
            (Dimensions(conviction=69, intuition=69, contribution=64), 0),
            (Dimensions(conviction=70, intuition=10, contribution=10), 5),
            (Dimensions(conviction=10, intuition=10, contribution=65), 5),
        ],
    )
    def test_dimension_bonus(self, dimensions, expected):
        points, reasons = RecommendationScorer.dimension_bonus(dimensions)
        assert points == expected
        assert len(reasons) == expected // 5


class TestScore:
    def test_perfect_candidate_scores_80(self, profile, perfect):
        ranked = RecommendationScorer.score([perfect], profile, IdentityType.VISIONARY, HIGH, TERMS)

        assert ranked[0].score == 80
        assert ranked[0].is_recommended is True
        assert ranked[0].breakdown == {
            "category": 30.0,
            "personality": 20.0,
            "conversation": 15.0,
            "dimensions": 15.0,
            "total": 80.0,
        }

    def test_excluded_ids_never_ranked(self, profile, perfect):
        excluded = perfect.model_copy(update={"id": "x"})
        ranked = RecommendationScorer.score([excluded, perfect], profile, IdentityType.VISIONARY, HIGH, TERMS)

        assert [r.candidate.id for r in ranked] == ["perfect"]

    def test_everything_excluded(self, profile):
        ranked = RecommendationScorer.score([make("x", ["AI Tools"])], profile, IdentityType.VISIONARY, NEUTRAL)
        assert ranked == []

    def test_empty_candidates(self, profile):
        assert RecommendationScorer.score([], profile, IdentityType.VISIONARY, NEUTRAL) == []

    def test_sorted_by_score_descending(self, profile):
        candidates = [make("none", ["Finance"]), make("sub", ["Design"]), make("main", ["AI Tools"])]
        ranked = RecommendationScorer.score(candidates, profile, IdentityType.VISIONARY, NEUTRAL)

        assert [r.candidate.id for r in ranked] == ["main", "sub", "none"]
        assert [r.score for r in ranked] == [30, 15, 0]

    def test_ties_broken_by_relevance(self, profile):
        candidates = [make("low", ["AI Tools"], relevance=0.2), make("high", ["AI Tools"], relevance=0.9)]
        ranked = RecommendationScorer.score(candidates, profile, IdentityType.VISIONARY, NEUTRAL)

        assert [r.candidate.id for r in ranked] == ["high", "low"]

    def test_full_ties_keep_upstream_order(self, profile):
        candidates = [make(f"c{i}", ["AI Tools"], relevance=0.5) for i in range(5)]
        ranked = RecommendationScorer.score(candidates, profile, IdentityType.VISIONARY, NEUTRAL)

        assert [r.candidate.id for r in ranked] == ["c0", "c1", "c2", "c3", "c4"]

    def test_threshold_at_sixty(self, profile):
        # 30 category + 20 personality + 10 conversation
        at_threshold = make("at", ["AI Tools"], description="vision for the future of defi llm")
        # 30 category + 20 personality + 5 conversation
        below = make("below", ["AI Tools"], description="vision for the future of defi")
        ranked = RecommendationScorer.score([below, at_threshold], profile, IdentityType.VISIONARY, NEUTRAL, TERMS)

        assert [(r.candidate.id, r.score, r.is_recommended) for r in ranked] == [
            ("at", 60, True),
            ("below", 55, False),
        ]

    @pytest.mark.parametrize("identity_type", list(IdentityType))
    def test_score_always_in_range(self, profile, perfect, identity_type):
        ranked = RecommendationScorer.score(
            [perfect, make("plain", [])], profile, identity_type, HIGH, TERMS + ["vision", "future"]
        )
        assert all(0 <= r.score <= 100 for r in ranked)
