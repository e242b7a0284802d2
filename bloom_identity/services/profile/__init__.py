from bloom_identity.services.profile.classifier import DimensionClassifier
from bloom_identity.services.profile.service import ProfileService

__all__ = ["DimensionClassifier", "ProfileService"]
