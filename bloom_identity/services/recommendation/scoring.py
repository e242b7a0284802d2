from loguru import logger

from bloom_identity.core.constants import (
    BONUS_CONTRIBUTION_MIN,
    BONUS_CONVICTION_MIN,
    BONUS_INTUITION_MIN,
    RECOMMENDATION_THRESHOLD,
    SCORE_CATEGORY_MAIN,
    SCORE_CATEGORY_SUB,
    SCORE_CONVERSATION_MAX,
    SCORE_CONVERSATION_PER_TERM,
    SCORE_DIMENSION_BONUS,
    SCORE_MAX,
    SCORE_MIN,
    SCORE_PERSONALITY_MAX,
    SCORE_PERSONALITY_PER_KEYWORD,
)
from bloom_identity.models.catalog import CandidateItem, RankedCandidate
from bloom_identity.models.profile import IdentityType, MergedProfile
from bloom_identity.models.signals import Dimensions
from bloom_identity.services.recommendation.filtering import RecommendationFiltering
from bloom_identity.services.vocabulary import PERSONALITY_KEYWORDS, match_keywords


class RecommendationScorer:
    """
    Scores catalog candidates against a merged profile.

    Four additive factors, each testable on its own:
    category match (30), personality match (20), conversation alignment (15)
    and dimension bonus (15). A perfect candidate scores 80.
    """

    @staticmethod
    def category_match(candidate: CandidateItem, profile: MergedProfile) -> tuple[int, list[str]]:
        for category in profile.main_categories:
            if category in candidate.categories:
                return SCORE_CATEGORY_MAIN, [f"Matches your main interest: {category}"]
        for category in profile.sub_categories:
            if category in candidate.categories:
                return SCORE_CATEGORY_SUB, [f"Related to your interest: {category}"]
        return 0, []

    @staticmethod
    def personality_match(candidate: CandidateItem, identity_type: IdentityType) -> tuple[int, list[str]]:
        matched = match_keywords(candidate.text, PERSONALITY_KEYWORDS.get(identity_type, []))
        if not matched:
            return 0, []
        points = min(SCORE_PERSONALITY_MAX, len(matched) * SCORE_PERSONALITY_PER_KEYWORD)
        return points, [f"Fits the {identity_type.value} mindset ({', '.join(matched)})"]

    @staticmethod
    def conversation_alignment(candidate: CandidateItem, conversation_terms: list[str]) -> tuple[int, list[str]]:
        matched = match_keywords(candidate.text, conversation_terms)
        if not matched:
            return 0, []
        points = min(SCORE_CONVERSATION_MAX, len(matched) * SCORE_CONVERSATION_PER_TERM)
        return points, [f"Came up in your conversations: {', '.join(matched)}"]

    @staticmethod
    def dimension_bonus(dimensions: Dimensions) -> tuple[int, list[str]]:
        points = 0
        reasons = []
        if dimensions.conviction >= BONUS_CONVICTION_MIN:
            points += SCORE_DIMENSION_BONUS
            reasons.append("High conviction")
        if dimensions.intuition >= BONUS_INTUITION_MIN:
            points += SCORE_DIMENSION_BONUS
            reasons.append("High intuition")
        if dimensions.contribution >= BONUS_CONTRIBUTION_MIN:
            points += SCORE_DIMENSION_BONUS
            reasons.append("High contribution")
        return points, reasons

    @classmethod
    def score_candidate(
        cls,
        candidate: CandidateItem,
        profile: MergedProfile,
        identity_type: IdentityType,
        dimensions: Dimensions,
        conversation_terms: list[str] | None = None,
    ) -> RankedCandidate:
        category_points, category_reasons = cls.category_match(candidate, profile)
        personality_points, personality_reasons = cls.personality_match(candidate, identity_type)
        conversation_points, conversation_reasons = cls.conversation_alignment(candidate, conversation_terms or [])
        dimension_points, dimension_reasons = cls.dimension_bonus(dimensions)

        total = category_points + personality_points + conversation_points + dimension_points
        score = float(max(SCORE_MIN, min(SCORE_MAX, total)))

        return RankedCandidate(
            candidate=candidate,
            score=score,
            is_recommended=score >= RECOMMENDATION_THRESHOLD,
            reasons=category_reasons + personality_reasons + conversation_reasons + dimension_reasons,
            breakdown={
                "category": float(category_points),
                "personality": float(personality_points),
                "conversation": float(conversation_points),
                "dimensions": float(dimension_points),
                "total": score,
            },
        )

    @classmethod
    def score(
        cls,
        candidates: list[CandidateItem],
        profile: MergedProfile,
        identity_type: IdentityType,
        dimensions: Dimensions,
        conversation_terms: list[str] | None = None,
    ) -> list[RankedCandidate]:
        """
        Score and rank candidates.

        Excluded ids are removed before scoring. Ties on score go to the higher
        catalog relevance, then keep upstream order. Candidates below the
        recommendation threshold stay in the list, flagged as not recommended.

        Args:
            candidates: Candidates in upstream fetch order
            profile: Merged profile
            identity_type: Resolved identity type
            dimensions: Dimension triple used for the bonus
            conversation_terms: Raw conversation topics and interests

        Returns:
            Ranked list (possibly empty)
        """
        eligible = RecommendationFiltering.remove_excluded(candidates, profile.excluded_skill_ids)
        scored = [
            cls.score_candidate(candidate, profile, identity_type, dimensions, conversation_terms)
            for candidate in eligible
        ]
        scored.sort(key=lambda r: (r.score, r.candidate.base_relevance), reverse=True)

        recommended = sum(1 for r in scored if r.is_recommended)
        excluded = len(candidates) - len(eligible)
        logger.info(f"Scored {len(scored)} candidates ({recommended} recommended, {excluded} excluded)")
        return scored
