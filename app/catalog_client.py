"""Upstream catalog client.

Both fetch paths swallow failures: ``fetch_all`` degrades to an empty list
after its retry budget is spent and ``fetch_by_id`` degrades to ``None``.
Callers cannot tell an empty catalog from an unreachable one.
"""
from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

import httpx

from .config import settings

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json"}


class CatalogClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        retries: int = 2,
        retry_delay: float = 2.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay
        # Per-attempt bounds come from asyncio.wait_for, not httpx phase timeouts.
        self._client = httpx.AsyncClient(headers=DEFAULT_HEADERS, timeout=None, transport=transport)

    async def fetch_all(self) -> List[Dict[str, Any]]:
        """Fetch every product, retrying transient failures.

        Each attempt is bounded by ``timeout`` seconds; an expired attempt is
        cancelled and counted as a failure. Returns ``[]`` once all
        ``retries + 1`` attempts have failed.
        """

        attempts = self.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = await asyncio.wait_for(self._client.get(self.base_url), self.timeout)
                response.raise_for_status()
                payload = response.json()
                if not isinstance(payload, list):
                    raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
                logger.debug("fetch_all attempt %s returned %s products", attempt, len(payload))
                return payload
            except asyncio.TimeoutError:
                logger.warning(
                    "fetch_all attempt %s/%s timed out after %ss", attempt, attempts, self.timeout
                )
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                logger.warning("fetch_all attempt %s/%s failed: %s", attempt, attempts, exc)

            if attempt < attempts:
                logger.info("Retrying in %ss...", self.retry_delay)
                await asyncio.sleep(self.retry_delay)

        logger.error("fetch_all giving up after %s attempts against %s", attempts, self.base_url)
        return []

    async def fetch_by_id(self, product_id: str | int) -> Optional[Dict[str, Any]]:
        """Fetch a single product; ``None`` on any failure. No retry, no timeout."""

        url = f"{self.base_url}/{product_id}"
        try:
            response = await self._client.get(url, timeout=None)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("fetch_by_id %s failed: %s", product_id, exc)
            return None
        if not response.is_success:
            logger.info("fetch_by_id %s returned HTTP %s", product_id, response.status_code)
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("fetch_by_id %s returned invalid JSON: %s", product_id, exc)
            return None

    async def aclose(self) -> None:
        await self._client.aclose()


@lru_cache(maxsize=1)
def get_catalog_client() -> CatalogClient:
    logger.info("Using catalog API at %s", settings.catalog_api_url)
    return CatalogClient(
        settings.catalog_api_url,
        timeout=settings.fetch_timeout_seconds,
        retries=settings.fetch_retries,
        retry_delay=settings.retry_delay_seconds,
    )


async def close_catalog_client() -> None:
    """Close the shared client and drop it so the next caller gets a fresh one."""

    if get_catalog_client.cache_info().currsize:
        client = get_catalog_client()
        get_catalog_client.cache_clear()
        await client.aclose()
