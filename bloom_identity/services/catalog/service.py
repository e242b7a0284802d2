from typing import Any

import httpx
from async_lru import alru_cache
from loguru import logger

from bloom_identity.core.config import settings
from bloom_identity.models.catalog import CandidateItem
from bloom_identity.services.catalog.client import SKILL_PAGE_BASE, CatalogClient
from bloom_identity.services.recommendation.filtering import RecommendationFiltering
from bloom_identity.services.vocabulary import infer_categories


class CatalogService:
    """
    Searches the external skill catalog and turns raw payloads into CandidateItems.

    Search payloads are flat objects; detail payloads are nested as
    {skill, owner, moderation, latestVersion}.
    """

    def __init__(self, client: CatalogClient):
        self.client = client

    async def close(self):
        await self.client.close()

    async def search(self, query: str, limit: int = 10) -> list[CandidateItem]:
        """
        Search the catalog for one query.

        Args:
            query: Free-text query, usually a category name
            limit: Maximum results requested

        Returns:
            Safe candidates in catalog order; empty on failure
        """
        try:
            data = await self.client.search(query, limit)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Catalog search failed for '{query}': {e}")
            return []

        if not data or not isinstance(data.get("results"), list):
            return []

        items = [self.parse_search_item(item) for item in data["results"] if isinstance(item, dict)]
        items = RecommendationFiltering.filter_unsafe([item for item in items if item.id])
        logger.debug(f"Catalog search '{query}' returned {len(items)} items")
        return items

    @alru_cache(maxsize=1000, ttl=3600)
    async def get_skill_details(self, slug: str) -> CandidateItem | None:
        """Fetch full detail for a skill, None when missing or on failure."""
        try:
            data = await self.client.get_skill(slug)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to get skill details for {slug}: {e}")
            return None
        if not data:
            return None
        return self.parse_detail(data)

    @staticmethod
    def _extract_name(summary: str) -> str:
        return summary.split("-")[0].strip()

    @staticmethod
    def _normalize_version(version: str | None) -> str:
        version = version or "1.0.0"
        return version if version.startswith("v") else f"v{version}"

    @staticmethod
    def _relevance(raw: Any) -> float:
        try:
            return max(0.0, float(raw or 0.0))
        except (TypeError, ValueError):
            return 0.0

    @classmethod
    def parse_search_item(cls, item: dict[str, Any]) -> CandidateItem:
        slug = item.get("slug") or ""
        description = item.get("summary") or item.get("description") or ""
        tags = item.get("tags") if isinstance(item.get("tags"), list) else []
        owner = item.get("owner") or {}

        return CandidateItem(
            id=slug,
            name=item.get("displayName") or item.get("name") or cls._extract_name(description),
            description=description,
            categories=infer_categories(f"{slug} {description} {' '.join(str(t) for t in tags)}"),
            base_relevance=cls._relevance(item.get("score")),
            version=cls._normalize_version(item.get("version")),
            url=f"{SKILL_PAGE_BASE}/{slug}",
            creator=owner.get("handle") or owner.get("username"),
        )

    @classmethod
    def parse_detail(cls, data: dict[str, Any]) -> CandidateItem:
        skill = data.get("skill") or data
        owner = data.get("owner") or {}
        moderation = data.get("moderation") or {}
        latest = data.get("latestVersion") or {}

        slug = skill.get("slug") or ""
        description = skill.get("summary") or skill.get("description") or ""
        tags = skill.get("tags") if isinstance(skill.get("tags"), list) else []

        return CandidateItem(
            id=slug,
            name=skill.get("displayName") or skill.get("name") or cls._extract_name(description),
            description=description,
            categories=infer_categories(f"{slug} {description} {' '.join(str(t) for t in tags)}"),
            base_relevance=0.0,
            version=cls._normalize_version(latest.get("version") or skill.get("version")),
            url=f"{SKILL_PAGE_BASE}/{slug}",
            creator=owner.get("handle") or owner.get("username"),
            is_suspicious=bool(moderation.get("isSuspicious", False)),
            is_malware_blocked=bool(moderation.get("isMalwareBlocked", False)),
        )


def get_catalog_service() -> CatalogService:
    client = CatalogClient(
        base_url=settings.CATALOG_API_URL,
        timeout=settings.CATALOG_TIMEOUT,
        max_retries=settings.CATALOG_MAX_RETRIES,
    )
    return CatalogService(client)


catalog_service = get_catalog_service()
