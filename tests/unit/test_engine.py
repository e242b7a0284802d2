"""
Tests for RecommendationEngine: concurrent category searches, merge by id, ranking.
"""

import asyncio

import pytest

from bloom_identity.models.catalog import CandidateItem
from bloom_identity.models.profile import GeneratedProfile, IdentityType
from bloom_identity.services.recommendation.engine import RecommendationEngine
from bloom_identity.services.recommendation.filtering import RecommendationFiltering


class FakeCatalog:
    """Search-only stand-in for CatalogService; raising entries simulate failed queries."""

    def __init__(self, results: dict):
        self.results = results
        self.calls: list[tuple[str, int]] = []

    async def search(self, query: str, limit: int = 10) -> list[CandidateItem]:
        self.calls.append((query, limit))
        result = self.results.get(query, [])
        if isinstance(result, Exception):
            raise result
        return result


class HandshakeCatalog:
    """Every search waits until all expected queries are in flight."""

    def __init__(self, queries: list[str]):
        self.started = {query: asyncio.Event() for query in queries}

    async def search(self, query: str, limit: int = 10) -> list[CandidateItem]:
        self.started[query].set()
        await asyncio.gather(*(event.wait() for event in self.started.values()))
        return [item(query.lower().replace(" ", "-"), 0.5)]


def item(candidate_id: str, relevance: float, name: str | None = None, categories: list[str] | None = None):
    return CandidateItem(
        id=candidate_id,
        name=name or candidate_id,
        categories=categories or ["AI Tools"],
        base_relevance=relevance,
    )


@pytest.fixture
def profile() -> GeneratedProfile:
    return GeneratedProfile(
        user_id="u1",
        main_categories=["AI Tools", "Crypto"],
        sub_categories=["Design", "Finance", "Education", "Wellness"],
        identity_type=IdentityType.VISIONARY,
        data_quality_score=85,
        excluded_skill_ids=["banned"],
    )


class TestFetchCandidates:
    @pytest.mark.asyncio
    async def test_queries_mains_and_first_subs(self, profile):
        catalog = FakeCatalog({})
        engine = RecommendationEngine(catalog, main_limit=4, sub_limit=2, sub_queries=3)

        await engine.fetch_candidates(profile)

        assert catalog.calls == [
            ("AI Tools", 4),
            ("Crypto", 4),
            ("Design", 2),
            ("Finance", 2),
            ("Education", 2),
        ]

    @pytest.mark.asyncio
    async def test_merges_by_id_keeping_first_seen_and_max_relevance(self, profile):
        catalog = FakeCatalog(
            {
                "AI Tools": [item("a", 0.5), item("b", 0.4, name="first b")],
                "Crypto": [item("b", 0.9, name="second b"), item("c", 0.3)],
            }
        )
        engine = RecommendationEngine(catalog)

        candidates = await engine.fetch_candidates(profile)

        assert [c.id for c in candidates] == ["a", "b", "c"]
        assert candidates[1].name == "first b"
        assert candidates[1].base_relevance == 0.9

    @pytest.mark.asyncio
    async def test_queries_run_concurrently(self, profile):
        catalog = HandshakeCatalog(["AI Tools", "Crypto", "Design", "Finance", "Education"])
        engine = RecommendationEngine(catalog, sub_queries=3)

        candidates = await asyncio.wait_for(engine.fetch_candidates(profile), timeout=2)

        assert [c.id for c in candidates] == ["ai-tools", "crypto", "design", "finance", "education"]

    @pytest.mark.asyncio
    async def test_failed_query_is_skipped(self, profile):
        catalog = FakeCatalog({"AI Tools": RuntimeError("timeout"), "Crypto": [item("c", 0.3)]})
        candidates = await RecommendationEngine(catalog).fetch_candidates(profile)

        assert [c.id for c in candidates] == ["c"]

    @pytest.mark.asyncio
    async def test_no_categories(self):
        profile = GeneratedProfile(user_id="u1", identity_type=IdentityType.EXPLORER, data_quality_score=0)
        catalog = FakeCatalog({})

        assert await RecommendationEngine(catalog).fetch_candidates(profile) == []
        assert catalog.calls == []


class TestRecommend:
    @pytest.mark.asyncio
    async def test_ranks_and_truncates(self, profile):
        catalog = FakeCatalog(
            {
                "AI Tools": [item("a", 0.5), item("banned", 0.99)],
                "Design": [item("d", 0.8, categories=["Design"])],
                "Finance": [item("f", 0.7, categories=["Finance"])],
            }
        )
        engine = RecommendationEngine(catalog)

        ranked = await engine.recommend(profile, limit=2)

        assert [r.candidate.id for r in ranked] == ["a", "d"]

    def test_rank_candidates_uses_profile_exclusions(self, profile):
        ranked = RecommendationEngine.rank_candidates([item("banned", 1.0), item("ok", 0.1)], profile)
        assert [r.candidate.id for r in ranked] == ["ok"]


class TestMergeResults:
    def test_does_not_mutate_inputs(self):
        first = item("a", 0.1)
        merged = RecommendationFiltering.merge_results([[first], [item("a", 0.7)]])

        assert merged[0].base_relevance == 0.7
        assert first.base_relevance == 0.1
