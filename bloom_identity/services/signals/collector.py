import asyncio
from typing import Any

from loguru import logger

from bloom_identity.core.constants import (
    MIN_CONVERSATION_MESSAGES,
    QUALITY_CONVERSATION_BASE,
    QUALITY_CONVERSATION_BONUS,
    QUALITY_HIGH_CONFIDENCE,
    QUALITY_MEDIUM_CONFIDENCE,
    QUALITY_PUBLIC_ACTIVITY_BONUS,
    QUALITY_PUBLIC_ACTIVITY_MIN,
    QUALITY_PUBLIC_BASE,
    QUALITY_PUBLIC_NETWORK_BONUS,
    QUALITY_PUBLIC_NETWORK_MIN,
    QUALITY_RICH_HISTORY,
    QUALITY_RICH_INTERESTS,
    QUALITY_RICH_TOPICS,
)
from bloom_identity.core.exceptions import InsufficientDataError
from bloom_identity.models.signals import (
    CollectedSignals,
    ConversationSnapshot,
    DeclaredProfile,
    FeedbackSignal,
    PublicProfile,
    SignalBundle,
)
from bloom_identity.services.signals.sources import (
    ConversationSource,
    DeclaredProfileSource,
    FeedbackStore,
    PublicProfileSource,
)
from bloom_identity.services.vocabulary import DEFAULT_FALLBACK_CATEGORIES, detect_categories, map_declared_profile

CONVERSATION = "conversation"
DECLARED_PROFILE = "declared_profile"
FEEDBACK = "feedback"
PUBLIC_PROFILE = "public_profile"


class SignalCollector:
    """
    Gathers per-source signal bundles for one user.

    Every source is fetched concurrently and independently: a failing source
    becomes an unavailable bundle and never aborts its siblings. No retries.
    """

    def __init__(
        self,
        conversation_source: ConversationSource,
        declared_profile_source: DeclaredProfileSource | None = None,
        feedback_store: FeedbackStore | None = None,
        public_profile_source: PublicProfileSource | None = None,
    ):
        self.conversation_source = conversation_source
        self.declared_profile_source = declared_profile_source
        self.feedback_store = feedback_store
        self.public_profile_source = public_profile_source

    async def collect(
        self,
        user_id: str,
        include_static_profile: bool = True,
        include_feedback: bool = True,
        include_public_profile: bool = True,
    ) -> CollectedSignals:
        """
        Collect all enabled sources.

        Args:
            user_id: User to collect for
            include_static_profile: Read the declared profile
            include_feedback: Read feedback history
            include_public_profile: Read the public/social profile

        Returns:
            CollectedSignals with one bundle per source
        """
        logger.info(f"[{user_id}] Collecting signals")

        fetchers: dict[str, Any] = {CONVERSATION: self.conversation_source.read_conversation(user_id)}
        if include_static_profile and self.declared_profile_source:
            fetchers[DECLARED_PROFILE] = self.declared_profile_source.read_declared_profile()
        if include_feedback and self.feedback_store:
            fetchers[FEEDBACK] = self.feedback_store.read_feedback(user_id)
        if include_public_profile and self.public_profile_source:
            fetchers[PUBLIC_PROFILE] = self.public_profile_source.read_public_profile(user_id)

        results = await asyncio.gather(*fetchers.values(), return_exceptions=True)
        raw = dict(zip(fetchers.keys(), results))

        signals = CollectedSignals(user_id=user_id)
        self._collect_conversation(signals, raw.get(CONVERSATION))
        if DECLARED_PROFILE in raw:
            self._collect_declared_profile(signals, raw[DECLARED_PROFILE])
        if FEEDBACK in raw:
            self._collect_feedback(signals, raw[FEEDBACK])
        if PUBLIC_PROFILE in raw:
            self._collect_public_profile(signals, raw[PUBLIC_PROFILE])

        if not signals.sources:
            logger.warning(f"[{user_id}] No data sources available - manual Q&A fallback required")
        else:
            logger.info(f"[{user_id}] Collected sources: {', '.join(signals.sources)}")
        return signals

    def _collect_conversation(self, signals: CollectedSignals, result: Any) -> None:
        if isinstance(result, Exception) or result is None:
            logger.warning(f"[{signals.user_id}] Conversation unavailable: {result}")
            signals.bundles[CONVERSATION] = SignalBundle.unavailable(CONVERSATION, error=str(result), message_count=0)
            return

        snapshot: ConversationSnapshot = result
        if snapshot.message_count < MIN_CONVERSATION_MESSAGES:
            logger.warning(
                f"[{signals.user_id}] Conversation has {snapshot.message_count} messages "
                f"(minimum {MIN_CONVERSATION_MESSAGES})"
            )
            signals.bundles[CONVERSATION] = SignalBundle.unavailable(
                CONVERSATION, error="insufficient messages", message_count=snapshot.message_count
            )
            signals.conversation = snapshot
            return

        categories = detect_categories(snapshot.topics + snapshot.interests + snapshot.preferences)
        if not categories:
            categories = list(DEFAULT_FALLBACK_CATEGORIES)

        signals.conversation = snapshot
        signals.bundles[CONVERSATION] = SignalBundle(
            source=CONVERSATION,
            available=True,
            quality="real",
            categories=categories,
            dimensions=snapshot.dimensions,
            message_count=snapshot.message_count,
        )

    def _collect_declared_profile(self, signals: CollectedSignals, result: Any) -> None:
        if isinstance(result, Exception) or result is None:
            if isinstance(result, Exception):
                logger.warning(f"[{signals.user_id}] Declared profile unavailable: {result}")
            signals.bundles[DECLARED_PROFILE] = SignalBundle.unavailable(
                DECLARED_PROFILE, error=str(result) if result else None
            )
            return
        if not result.has_signals:
            logger.debug(f"[{signals.user_id}] Declared profile has no usable fields")
            signals.bundles[DECLARED_PROFILE] = SignalBundle.unavailable(DECLARED_PROFILE, error="empty")
            return

        profile: DeclaredProfile = result
        signals.declared_profile = profile
        signals.bundles[DECLARED_PROFILE] = SignalBundle(
            source=DECLARED_PROFILE,
            available=True,
            quality="real",
            categories=map_declared_profile(profile),
        )

    def _collect_feedback(self, signals: CollectedSignals, result: Any) -> None:
        if isinstance(result, Exception) or result is None:
            if isinstance(result, Exception):
                logger.warning(f"[{signals.user_id}] Feedback unavailable: {result}")
            signals.bundles[FEEDBACK] = SignalBundle.unavailable(FEEDBACK, error=str(result) if result else None)
            return
        if result.is_empty:
            logger.debug(f"[{signals.user_id}] No feedback recorded")
            signals.bundles[FEEDBACK] = SignalBundle.unavailable(FEEDBACK, error="empty")
            return

        feedback: FeedbackSignal = result
        signals.feedback = feedback
        boosted = [category for category, weight in feedback.category_weights.items() if weight > 1.0]
        signals.bundles[FEEDBACK] = SignalBundle(
            source=FEEDBACK,
            available=True,
            quality="real",
            categories=boosted,
        )

    def _collect_public_profile(self, signals: CollectedSignals, result: Any) -> None:
        if isinstance(result, Exception) or result is None or result.is_empty:
            if isinstance(result, Exception):
                logger.warning(f"[{signals.user_id}] Public profile unavailable: {result}")
            signals.bundles[PUBLIC_PROFILE] = SignalBundle.unavailable(
                PUBLIC_PROFILE, error=str(result) if isinstance(result, Exception) else "empty"
            )
            return

        public: PublicProfile = result
        signals.public_profile = public
        signals.bundles[PUBLIC_PROFILE] = SignalBundle(
            source=PUBLIC_PROFILE,
            available=True,
            quality="real",
            categories=detect_categories([public.bio, *public.posts]),
        )

    @staticmethod
    def has_sufficient_data(signals: CollectedSignals) -> bool:
        return signals.is_available(CONVERSATION)

    @staticmethod
    def require_conversation(signals: CollectedSignals) -> ConversationSnapshot:
        """Return the conversation snapshot or raise InsufficientDataError."""
        if not SignalCollector.has_sufficient_data(signals) or signals.conversation is None:
            message_count = signals.conversation.message_count if signals.conversation else 0
            raise InsufficientDataError(message_count, MIN_CONVERSATION_MESSAGES)
        return signals.conversation

    @staticmethod
    def get_data_quality_score(signals: CollectedSignals) -> int:
        """
        Data quality score (0-100).

        Conversation: 70 base plus up to 15 for richness.
        Public profile: 10 base plus up to 5 for activity and network size.
        """
        score = 0

        conversation = signals.conversation
        if conversation is not None and signals.is_available(CONVERSATION):
            score += QUALITY_CONVERSATION_BASE
            if len(set(conversation.topics)) >= QUALITY_RICH_TOPICS:
                score += QUALITY_CONVERSATION_BONUS
            if len(set(conversation.interests)) >= QUALITY_RICH_INTERESTS:
                score += QUALITY_CONVERSATION_BONUS
            if len(conversation.history) >= QUALITY_RICH_HISTORY:
                score += QUALITY_CONVERSATION_BONUS

        public = signals.public_profile
        if public is not None and signals.is_available(PUBLIC_PROFILE):
            score += QUALITY_PUBLIC_BASE
            if len(public.posts) >= QUALITY_PUBLIC_ACTIVITY_MIN:
                score += QUALITY_PUBLIC_ACTIVITY_BONUS
            if len(public.following) >= QUALITY_PUBLIC_NETWORK_MIN:
                score += QUALITY_PUBLIC_NETWORK_BONUS

        return max(0, min(100, score))

    @staticmethod
    def get_data_quality_summary(signals: CollectedSignals) -> str:
        score = SignalCollector.get_data_quality_score(signals)
        sources = " + ".join(signals.sources)

        if score >= QUALITY_HIGH_CONFIDENCE:
            return f"High confidence ({score}/100) - {sources}"
        if score >= QUALITY_MEDIUM_CONFIDENCE:
            return f"Medium confidence ({score}/100) - {sources}"
        if score > 0:
            return f"Low confidence ({score}/100) - {sources} - consider manual Q&A"
        return "No data - fallback to manual Q&A required"
