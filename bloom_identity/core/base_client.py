import asyncio
from typing import Any

import httpx
from loguru import logger


class BaseClient:
    """
    Base asynchronous HTTP client for external collaborators.

    Retries transport errors and non-2xx responses with exponential backoff.
    A 404 is returned to the caller untouched so lookups can treat it as "missing".
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        max_retries: int = 3,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.headers = headers or {}
        self.transport = transport
        self.backoff_base = 0.5
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def close(self):
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        client = await self.get_client()
        last_exception: Exception | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await client.request(method, url, **kwargs)
                if response.status_code == 404:
                    return response
                response.raise_for_status()
                return response
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                last_exception = e
                if attempt < self.max_retries:
                    wait_time = self.backoff_base * (2 ** (attempt - 1))
                    logger.warning(
                        f"Request failed ({method} {url}): {e}. "
                        f"Retrying in {wait_time}s... (Attempt {attempt}/{self.max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                else:
                    logger.error(f"Request failed after {self.max_retries} attempts: {e}")

        raise last_exception or httpx.RequestError(f"Request failed: {method} {url}")

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any] | None:
        """Perform a GET request and return the JSON body, or None on 404."""
        response = await self._request("GET", url, params=params, **kwargs)
        if response.status_code == 404:
            return None
        return response.json()
