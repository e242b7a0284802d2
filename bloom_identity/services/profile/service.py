from loguru import logger

from bloom_identity.models.profile import GeneratedProfile
from bloom_identity.models.signals import Dimensions
from bloom_identity.services.profile.classifier import DimensionClassifier
from bloom_identity.services.signals.collector import CONVERSATION, SignalCollector
from bloom_identity.services.signals.merger import SignalMerger


class ProfileService:
    """
    Builds a GeneratedProfile for a user: collect, fuse, nudge, classify.
    """

    def __init__(
        self,
        collector: SignalCollector,
        merger: SignalMerger | None = None,
        classifier: DimensionClassifier | None = None,
    ):
        self.collector = collector
        self.merger = merger or SignalMerger()
        self.classifier = classifier or DimensionClassifier()

    async def generate_profile(
        self,
        user_id: str,
        include_static_profile: bool = True,
        include_feedback: bool = True,
        include_public_profile: bool = True,
    ) -> GeneratedProfile:
        """
        Generate an identity profile from every available signal source.

        Args:
            user_id: User to profile
            include_static_profile: Blend the declared profile
            include_feedback: Blend feedback history
            include_public_profile: Count the public profile toward data quality

        Returns:
            GeneratedProfile

        Raises:
            InsufficientDataError: when the conversation has too few messages
        """
        signals = await self.collector.collect(
            user_id,
            include_static_profile=include_static_profile,
            include_feedback=include_feedback,
            include_public_profile=include_public_profile,
        )
        snapshot = SignalCollector.require_conversation(signals)

        conversation_bundle = signals.bundles[CONVERSATION]
        merged = self.merger.merge(
            conversation_bundle.categories,
            snapshot.dimensions,
            signals.declared_profile,
            signals.feedback,
        )

        dimensions = self.classifier.apply_nudges(snapshot.dimensions or Dimensions(), merged.dimension_nudges)
        identity_type = self.classifier.classify_dimensions(dimensions)
        quality_score = SignalCollector.get_data_quality_score(signals)

        logger.info(
            f"[{user_id}] Profile generated: {identity_type.value}, main={merged.main_categories}, "
            f"quality={quality_score}"
        )

        return GeneratedProfile(
            user_id=user_id,
            main_categories=merged.main_categories,
            sub_categories=merged.sub_categories,
            dimension_nudges=merged.dimension_nudges,
            dimensions=dimensions,
            identity_type=identity_type,
            data_quality_score=quality_score,
            data_quality_summary=SignalCollector.get_data_quality_summary(signals),
            conversation_terms=snapshot.terms,
            excluded_skill_ids=merged.excluded_skill_ids,
            category_weights=merged.category_weights,
            sources=signals.sources,
        )
