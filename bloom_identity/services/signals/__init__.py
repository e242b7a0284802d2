"""
Signal fusion.

Collects per-source signal bundles and blends them into a merged profile.
"""

from bloom_identity.services.signals.collector import SignalCollector
from bloom_identity.services.signals.declared_profile import MarkdownProfileSource, parse_declared_profile
from bloom_identity.services.signals.merger import SignalMerger
from bloom_identity.services.signals.weights import DEFAULT_WEIGHT_SCHEDULE, WeightSchedule

__all__ = [
    "SignalCollector",
    "SignalMerger",
    "WeightSchedule",
    "DEFAULT_WEIGHT_SCHEDULE",
    "MarkdownProfileSource",
    "parse_declared_profile",
]
