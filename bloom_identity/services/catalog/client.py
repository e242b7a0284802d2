from typing import Any

import httpx

from bloom_identity.core.base_client import BaseClient
from bloom_identity.core.version import __version__

SKILL_PAGE_BASE = "https://clawhub.ai/skills"


class CatalogClient(BaseClient):
    """
    Client for the ClawHub skill registry HTTP API.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "User-Agent": f"BloomIdentity/{__version__}",
            "Accept": "application/json",
        }
        super().__init__(
            base_url=base_url, timeout=timeout, max_retries=max_retries, headers=headers, transport=transport
        )

    async def search(self, query: str, limit: int) -> dict[str, Any] | None:
        """Vector search over skills: GET /search?q=<query>&limit=<limit>."""
        return await self.get("/search", params={"q": query, "limit": limit})

    async def get_skill(self, slug: str) -> dict[str, Any] | None:
        """Skill detail: GET /skills/<slug>, None when missing."""
        return await self.get(f"/skills/{slug}")
