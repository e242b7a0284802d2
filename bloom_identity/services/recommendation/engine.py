import asyncio

from loguru import logger

from bloom_identity.core.config import settings
from bloom_identity.models.catalog import CandidateItem, RankedCandidate
from bloom_identity.models.profile import GeneratedProfile
from bloom_identity.services.catalog.service import CatalogService
from bloom_identity.services.recommendation.filtering import RecommendationFiltering
from bloom_identity.services.recommendation.scoring import RecommendationScorer


class RecommendationEngine:
    """
    Fetches catalog candidates for a generated profile and ranks them.
    """

    def __init__(
        self,
        catalog: CatalogService,
        main_limit: int = settings.CATALOG_MAIN_LIMIT,
        sub_limit: int = settings.CATALOG_SUB_LIMIT,
        sub_queries: int = settings.CATALOG_SUB_QUERIES,
    ):
        self.catalog = catalog
        self.main_limit = main_limit
        self.sub_limit = sub_limit
        self.sub_queries = sub_queries

    async def fetch_candidates(self, profile: GeneratedProfile) -> list[CandidateItem]:
        """
        Search once per main and sub category, concurrently, and merge by id.

        Args:
            profile: Generated identity profile

        Returns:
            Candidates in first-seen order (main category queries first)
        """
        queries = [(category, self.main_limit) for category in profile.main_categories]
        queries += [(category, self.sub_limit) for category in profile.sub_categories[: self.sub_queries]]
        if not queries:
            return []

        tasks = [self.catalog.search(query, limit) for query, limit in queries]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        batches = []
        for (query, _), batch in zip(queries, results):
            if isinstance(batch, Exception):
                logger.warning(f"[{profile.user_id}] Catalog query '{query}' failed: {batch}")
                continue
            batches.append(batch)

        candidates = RecommendationFiltering.merge_results(batches)
        logger.info(f"[{profile.user_id}] Fetched {len(candidates)} unique candidates from {len(queries)} queries")
        return candidates

    @staticmethod
    def rank_candidates(candidates: list[CandidateItem], profile: GeneratedProfile) -> list[RankedCandidate]:
        """Rank candidates against a generated profile."""
        return RecommendationScorer.score(
            candidates,
            profile.to_merged(),
            profile.identity_type,
            profile.dimensions,
            profile.conversation_terms,
        )

    async def recommend(
        self, profile: GeneratedProfile, limit: int = settings.RECOMMENDATION_LIMIT
    ) -> list[RankedCandidate]:
        candidates = await self.fetch_candidates(profile)
        ranked = self.rank_candidates(candidates, profile)
        return ranked[:limit]
