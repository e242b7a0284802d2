from bloom_identity.core.constants import CULTIVATOR_CONTRIBUTION_THRESHOLD, QUADRANT_THRESHOLD
from bloom_identity.models.profile import DimensionNudges, IdentityType
from bloom_identity.models.signals import Dimensions


class DimensionClassifier:
    """
    Maps conviction/intuition/contribution to one of five identity types.

    Total and deterministic over [0, 100]^3.
    """

    @staticmethod
    def classify(conviction: float, intuition: float, contribution: float) -> IdentityType:
        """
        Classify a dimension triple.

        Contribution above 65 overrides everything else. Otherwise the quadrant
        decides, with exactly 50 counting as high on either axis.

        Args:
            conviction: 0-100
            intuition: 0-100
            contribution: 0-100

        Returns:
            IdentityType
        """
        if contribution > CULTIVATOR_CONTRIBUTION_THRESHOLD:
            return IdentityType.CULTIVATOR

        high_conviction = conviction >= QUADRANT_THRESHOLD
        high_intuition = intuition >= QUADRANT_THRESHOLD

        if high_conviction and high_intuition:
            return IdentityType.VISIONARY
        if high_conviction:
            return IdentityType.OPTIMIZER
        if high_intuition:
            return IdentityType.EXPLORER
        return IdentityType.INNOVATOR

    @classmethod
    def classify_dimensions(cls, dimensions: Dimensions) -> IdentityType:
        return cls.classify(dimensions.conviction, dimensions.intuition, dimensions.contribution)

    @staticmethod
    def apply_nudges(dimensions: Dimensions, nudges: DimensionNudges) -> Dimensions:
        """Add nudges to each dimension, clamped into [0, 100]."""
        return Dimensions(
            conviction=max(0, min(100, dimensions.conviction + nudges.conviction)),
            intuition=max(0, min(100, dimensions.intuition + nudges.intuition)),
            contribution=max(0, min(100, dimensions.contribution + nudges.contribution)),
        )
