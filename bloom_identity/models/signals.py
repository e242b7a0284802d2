from typing import Literal

from pydantic import BaseModel, Field, model_validator

from bloom_identity.core.constants import MIN_CONVERSATION_MESSAGES, NEUTRAL_DIMENSION

SignalQuality = Literal["real", "none"]


class Dimensions(BaseModel):
    """Three independent 0-100 behavioral scores."""

    conviction: int = Field(default=NEUTRAL_DIMENSION, ge=0, le=100)
    intuition: int = Field(default=NEUTRAL_DIMENSION, ge=0, le=100)
    contribution: int = Field(default=NEUTRAL_DIMENSION, ge=0, le=100)


class ConversationSnapshot(BaseModel):
    """What the conversation source reports for a user."""

    topics: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    preferences: list[str] = Field(default_factory=list)
    history: list[str] = Field(default_factory=list, description="Raw conversation snippets")
    message_count: int = Field(default=0, ge=0)
    dimensions: Dimensions | None = Field(default=None, description="Analyzer output, when available")

    @property
    def terms(self) -> list[str]:
        """Lower-cased, de-duplicated topics and interests in first-seen order."""
        seen: dict[str, None] = {}
        for term in self.topics + self.interests:
            cleaned = term.strip().lower()
            if cleaned:
                seen.setdefault(cleaned, None)
        return list(seen)


class DeclaredProfile(BaseModel):
    """Static profile the user declared about themselves (USER.md)."""

    role: str | None = None
    current_focus: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    working_style: str | None = Field(default=None, description="deep-focus | explorer | multitasker")
    raw: dict[str, str] = Field(default_factory=dict, description="Unparsed sections keyed by header")

    @property
    def has_signals(self) -> bool:
        return bool(self.role or self.current_focus or self.tech_stack or self.interests or self.working_style)


class PublicProfile(BaseModel):
    """Supplemental public/social signal source."""

    bio: str = ""
    posts: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.bio and not self.posts


class FeedbackSignal(BaseModel):
    """Historical interaction feedback (accept/reject/skip events)."""

    category_weights: dict[str, float] = Field(
        default_factory=dict, description="Category -> multiplier (1.0 neutral, >1 boost, <1 suppress)"
    )
    exclude_skill_ids: list[str] = Field(default_factory=list)
    event_count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return not self.category_weights and not self.exclude_skill_ids and self.event_count == 0


class SignalBundle(BaseModel):
    """
    One source's contribution to fusion.

    A conversation bundle below the minimum message count is never available.
    """

    source: str
    available: bool = False
    quality: SignalQuality = "none"
    categories: list[str] = Field(default_factory=list)
    dimensions: Dimensions | None = None
    message_count: int | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _enforce_message_minimum(self) -> "SignalBundle":
        if self.message_count is not None and self.message_count < MIN_CONVERSATION_MESSAGES:
            self.available = False
        if not self.available:
            self.quality = "none"
        return self

    @classmethod
    def unavailable(cls, source: str, error: str | None = None, message_count: int | None = None) -> "SignalBundle":
        return cls(source=source, available=False, quality="none", error=error, message_count=message_count)


class CollectedSignals(BaseModel):
    """Everything the collector gathered for one request."""

    user_id: str
    bundles: dict[str, SignalBundle] = Field(default_factory=dict)
    conversation: ConversationSnapshot | None = None
    declared_profile: DeclaredProfile | None = None
    feedback: FeedbackSignal | None = None
    public_profile: PublicProfile | None = None

    @property
    def sources(self) -> list[str]:
        """Names of the sources that produced usable data."""
        return [name for name, bundle in self.bundles.items() if bundle.available]

    def is_available(self, source: str) -> bool:
        bundle = self.bundles.get(source)
        return bool(bundle and bundle.available)
