from collections.abc import Iterable

from loguru import logger

from bloom_identity.models.catalog import CandidateItem
from bloom_identity.services.vocabulary import contains_blocked_keyword


class RecommendationFiltering:
    """
    Handles exclusion sets, unsafe-item filtering and candidate de-duplication.
    """

    @staticmethod
    def remove_excluded(candidates: list[CandidateItem], excluded_ids: Iterable[str]) -> list[CandidateItem]:
        """Drop candidates the user rejected; unconditional."""
        excluded = set(excluded_ids)
        if not excluded:
            return list(candidates)
        return [candidate for candidate in candidates if candidate.id not in excluded]

    @staticmethod
    def is_safe(candidate: CandidateItem) -> bool:
        if candidate.is_suspicious or candidate.is_malware_blocked:
            return False
        return not contains_blocked_keyword(f"{candidate.id} {candidate.name} {candidate.description}")

    @classmethod
    def filter_unsafe(cls, candidates: list[CandidateItem]) -> list[CandidateItem]:
        safe = []
        for candidate in candidates:
            if cls.is_safe(candidate):
                safe.append(candidate)
            else:
                logger.debug(f"Dropping unsafe catalog item {candidate.id}")
        return safe

    @staticmethod
    def merge_results(batches: Iterable[list[CandidateItem]]) -> list[CandidateItem]:
        """
        Merge search batches by id.

        The first-seen entry keeps its attributes and position; its relevance is
        raised to the maximum observed across duplicate hits.
        """
        merged: dict[str, CandidateItem] = {}
        for batch in batches:
            for item in batch:
                existing = merged.get(item.id)
                if existing is None:
                    merged[item.id] = item.model_copy()
                elif item.base_relevance > existing.base_relevance:
                    existing.base_relevance = item.base_relevance
        return list(merged.values())
