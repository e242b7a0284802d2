from enum import Enum

from pydantic import BaseModel, Field

from bloom_identity.core.constants import NUDGE_LIMIT
from bloom_identity.models.signals import Dimensions


class IdentityType(str, Enum):
    VISIONARY = "Visionary"
    EXPLORER = "Explorer"
    OPTIMIZER = "Optimizer"
    INNOVATOR = "Innovator"
    CULTIVATOR = "Cultivator"


class DimensionNudges(BaseModel):
    """Bounded adjustments derived from the declared profile."""

    conviction: int = Field(default=0, ge=-NUDGE_LIMIT, le=NUDGE_LIMIT)
    intuition: int = Field(default=0, ge=-NUDGE_LIMIT, le=NUDGE_LIMIT)
    contribution: int = Field(default=0, ge=-NUDGE_LIMIT, le=NUDGE_LIMIT)


class SignalWeights(BaseModel):
    """Share of fusion influence granted to each source. Sums to 1.0."""

    conversation: float
    static: float
    feedback: float


class MergedProfile(BaseModel):
    """
    Result of fusing conversation, declared profile and feedback signals.

    main_categories holds at most three unique names; sub_categories holds at most
    ten and never repeats a main category.
    """

    main_categories: list[str] = Field(default_factory=list)
    sub_categories: list[str] = Field(default_factory=list)
    dimension_nudges: DimensionNudges = Field(default_factory=DimensionNudges)
    excluded_skill_ids: list[str] = Field(default_factory=list)
    category_weights: dict[str, float] = Field(default_factory=dict)
    weights: SignalWeights | None = None


class GeneratedProfile(BaseModel):
    """Identity profile handed to callers (dashboard, CLI formatting, outreach)."""

    user_id: str
    main_categories: list[str] = Field(default_factory=list)
    sub_categories: list[str] = Field(default_factory=list)
    dimension_nudges: DimensionNudges = Field(default_factory=DimensionNudges)
    dimensions: Dimensions = Field(default_factory=Dimensions, description="Conversation dimensions after nudges")
    identity_type: IdentityType
    data_quality_score: int = Field(ge=0, le=100)
    data_quality_summary: str = ""
    conversation_terms: list[str] = Field(default_factory=list)
    excluded_skill_ids: list[str] = Field(default_factory=list)
    category_weights: dict[str, float] = Field(default_factory=dict)
    sources: list[str] = Field(default_factory=list)

    def to_merged(self) -> MergedProfile:
        return MergedProfile(
            main_categories=self.main_categories,
            sub_categories=self.sub_categories,
            dimension_nudges=self.dimension_nudges,
            excluded_skill_ids=self.excluded_skill_ids,
            category_weights=self.category_weights,
        )
