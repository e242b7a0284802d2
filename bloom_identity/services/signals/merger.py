import math
import re

from loguru import logger

from bloom_identity.core.constants import (
    FEEDBACK_INTRODUCE_THRESHOLD,
    MAIN_CATEGORY_LIMIT,
    NUDGE_FULL_STATIC_WEIGHT,
    NUDGE_LIMIT,
    POSITION_DECAY,
    SUB_CATEGORY_LIMIT,
)
from bloom_identity.models.profile import DimensionNudges, MergedProfile
from bloom_identity.models.signals import DeclaredProfile, Dimensions, FeedbackSignal
from bloom_identity.services.signals.weights import DEFAULT_WEIGHT_SCHEDULE, WeightSchedule
from bloom_identity.services.vocabulary import ROLE_NUDGE_RULES, WORKING_STYLE_NUDGES, map_declared_profile

DIMENSION_NAMES = ("conviction", "intuition", "contribution")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class SignalMerger:
    """
    Blends conversation, declared profile and feedback into one MergedProfile.

    Pure: no I/O, every combination of missing optional sources has an output.
    Scoring runs in two separate stages, base scoreboard first and feedback
    multipliers second, since a multiplier on a decayed score can reorder ranks.
    """

    def __init__(self, schedule: WeightSchedule = DEFAULT_WEIGHT_SCHEDULE):
        self.schedule = schedule

    def merge(
        self,
        conversation_categories: list[str],
        conversation_dimensions: Dimensions | None,
        declared_profile: DeclaredProfile | None,
        feedback: FeedbackSignal | None,
    ) -> MergedProfile:
        """
        Merge signal sources into ranked categories and bounded dimension nudges.

        Args:
            conversation_categories: Ordered categories detected from conversation
            conversation_dimensions: Conversation dimensions (not modified here)
            declared_profile: Static declared profile, or None
            feedback: Feedback history, or None

        Returns:
            MergedProfile
        """
        event_count = feedback.event_count if feedback else 0
        weights = self.schedule.compute(event_count, has_static_profile=declared_profile is not None)

        declared_categories = map_declared_profile(declared_profile) if declared_profile else []
        declared_interests = declared_profile.interests if declared_profile else []

        scoreboard = self.build_scoreboard(
            [
                (conversation_categories, weights.conversation),
                (declared_categories, weights.static),
            ]
        )
        if feedback and feedback.category_weights:
            scoreboard = self.apply_feedback(scoreboard, feedback.category_weights, weights.feedback)

        ranked = self.rank(scoreboard)
        main_categories = ranked[:MAIN_CATEGORY_LIMIT]
        sub_categories = self.build_sub_categories(ranked, declared_interests)

        if not main_categories:
            main_categories = list(conversation_categories)

        nudges = self.calculate_dimension_nudges(declared_profile, weights.static)

        logger.debug(
            f"Merged signals with weights conv={weights.conversation:.3f} static={weights.static:.3f} "
            f"feedback={weights.feedback:.3f}: main={main_categories}"
        )

        return MergedProfile(
            main_categories=main_categories,
            sub_categories=sub_categories,
            dimension_nudges=nudges,
            excluded_skill_ids=list(feedback.exclude_skill_ids) if feedback else [],
            category_weights=dict(feedback.category_weights) if feedback else {},
            weights=weights,
        )

    @staticmethod
    def build_scoreboard(sources: list[tuple[list[str], float]]) -> dict[str, float]:
        """
        Accumulate position-decayed scores across sources.

        Each entry scores weight * (1.0 - index * POSITION_DECAY). No floor is
        applied, so very late entries can score zero or below.
        """
        scoreboard: dict[str, float] = {}
        for categories, weight in sources:
            for index, category in enumerate(categories):
                position_weight = 1.0 - index * POSITION_DECAY
                scoreboard[category] = scoreboard.get(category, 0.0) + weight * position_weight
        return scoreboard

    @staticmethod
    def apply_feedback(
        scoreboard: dict[str, float], category_weights: dict[str, float], feedback_weight: float
    ) -> dict[str, float]:
        """
        Apply feedback multipliers on top of a base scoreboard.

        Categories with a positive score are multiplied. Unseen categories are only
        introduced when strongly boosted, contributing feedback_weight * (multiplier - 1).
        """
        adjusted = dict(scoreboard)
        for category, multiplier in category_weights.items():
            existing = adjusted.get(category, 0.0)
            if existing > 0:
                adjusted[category] = existing * multiplier
            elif multiplier > FEEDBACK_INTRODUCE_THRESHOLD:
                adjusted[category] = feedback_weight * (multiplier - 1.0)
        return adjusted

    @staticmethod
    def rank(scoreboard: dict[str, float]) -> list[str]:
        """Sort by score descending; equal scores keep insertion order."""
        return [category for category, _ in sorted(scoreboard.items(), key=lambda x: x[1], reverse=True)]

    @staticmethod
    def build_sub_categories(ranked: list[str], declared_interests: list[str]) -> list[str]:
        """Lower-ranked categories first, then declared interests; unique, capped."""
        main = set(ranked[:MAIN_CATEGORY_LIMIT])
        subs: list[str] = []
        for category in ranked[MAIN_CATEGORY_LIMIT:] + list(declared_interests):
            if category in main or category in subs:
                continue
            subs.append(category)
        return subs[:SUB_CATEGORY_LIMIT]

    @staticmethod
    def calculate_dimension_nudges(declared_profile: DeclaredProfile | None, static_weight: float) -> DimensionNudges:
        """
        Derive dimension nudges from working style and role text.

        Raw nudges are clamped, scaled by static_weight / 0.3, rounded half up,
        and clamped again so the result always fits [-15, +15].
        """
        if declared_profile is None:
            return DimensionNudges()

        raw = dict.fromkeys(DIMENSION_NAMES, 0)

        style_nudges = WORKING_STYLE_NUDGES.get(declared_profile.working_style or "", {})
        for dimension, amount in style_nudges.items():
            raw[dimension] += amount

        if declared_profile.role:
            role = declared_profile.role.lower()
            for pattern, rule_nudges in ROLE_NUDGE_RULES:
                if re.search(pattern, role):
                    for dimension, amount in rule_nudges.items():
                        raw[dimension] += amount

        scale = static_weight / NUDGE_FULL_STATIC_WEIGHT
        scaled = {}
        for dimension in DIMENSION_NAMES:
            clamped = _clamp(raw[dimension], -NUDGE_LIMIT, NUDGE_LIMIT)
            scaled[dimension] = int(_clamp(_round_half_up(clamped * scale), -NUDGE_LIMIT, NUDGE_LIMIT))

        return DimensionNudges(**scaled)
