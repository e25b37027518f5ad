"""
PageService - Cached, deduplicated access to dotCMS pages.

Combines:
- Canonical REST URLs and GraphQL page documents as cache keys
- SingleFlightCache for TTL caching and request coalescing
- UpstreamClient for the HTTP exchange
"""

import json
from datetime import timedelta
from typing import Any, Literal

from loguru import logger

from dotcms.pages.graphql import build_page_query, query_id
from dotcms.pages.policy import ttl_for_mode
from dotcms.pages.request import PageRequest
from dotcms.pages.rest import build_page_url, rest_cache_key
from dotcms.services.cache import SingleFlightCache
from dotcms.services.client import FetchResult, UpstreamClient
from dotcms.services.errors import MalformedResponse, ServiceError
from dotcms.settings import Settings, global_settings

Transport = Literal["rest", "graphql"]


def load_json(payload: str) -> Any:
    """Parse an upstream payload, raising MalformedResponse if it is not JSON."""
    try:
        return json.loads(payload)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Failed to deserialize page response: {e}") from e


class PageService:
    """
    Page retrieval over REST or GraphQL with a shared single-flight cache.

    Usage:
        async with PageService.from_settings(global_settings) as pages:
            payload = await pages.get_page(PageRequest(path="/about-us/"))
            page = load_json(payload)
    """

    def __init__(
        self,
        client: UpstreamClient,
        cache: SingleFlightCache | None = None,
        live_ttl: timedelta = timedelta(seconds=60),
    ):
        self.client = client
        self.cache = cache or SingleFlightCache()
        self._live_ttl = live_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "PageService":
        """Build a service from configuration."""
        client = UpstreamClient(
            api_host=settings.api_host,
            authorization=settings.authorization,
            timeout=settings.request_timeout,
        )
        return cls(
            client=client,
            cache=SingleFlightCache(debug=settings.debug),
            live_ttl=timedelta(seconds=settings.live_cache_ttl),
        )

    async def get_page(self, request: PageRequest) -> str:
        """Fetch a page through the REST endpoint."""
        url = build_page_url(request, self.client.api_host)
        return await self.cache.get_or_add(
            rest_cache_key(url),
            lambda: self.client.fetch_rest(url),
            ttl_for_mode(request.mode, self._live_ttl),
        )

    async def get_page_graphql(self, request: PageRequest) -> str:
        """Fetch a page through the GraphQL endpoint."""
        document = build_page_query(request)
        return await self.query_graphql(document, ttl_for_mode(request.mode, self._live_ttl))

    async def query_graphql(self, document: str, ttl: timedelta = timedelta(0)) -> str:
        """
        Run an arbitrary GraphQL document.

        The document digest is both the cache key and the ``qid`` sent
        upstream. The default zero TTL means the result is not cached,
        though concurrent identical queries still share one request.
        """
        qid = query_id(document)
        return await self.cache.get_or_add(
            qid,
            lambda: self.client.fetch_graphql(document, qid),
            ttl,
        )

    async def fetch_page(
        self,
        request: PageRequest,
        transport: Transport = "rest",
    ) -> FetchResult[str]:
        """Like get_page/get_page_graphql, but failures come back as values."""
        if transport == "graphql":
            key = query_id(build_page_query(request))
            fetch = self.get_page_graphql
        else:
            key = rest_cache_key(build_page_url(request, self.client.api_host))
            fetch = self.get_page

        try:
            return FetchResult(data=await fetch(request), key=key)
        except ServiceError as e:
            return FetchResult(error=e, key=key)

    async def close(self) -> None:
        """Close the HTTP client and drop cached pages."""
        await self.client.close()
        await self.cache.clear()
        logger.debug("PageService closed")

    async def __aenter__(self) -> "PageService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def get_health_status(self) -> dict[str, Any]:
        """Get cache status."""
        return {"cache": self.cache.get_stats().to_dict()}


# Global service instance
_global_service: PageService | None = None


def get_page_service() -> PageService:
    """Get the global page service instance."""
    global _global_service
    if _global_service is None:
        _global_service = PageService.from_settings(global_settings)
    return _global_service


async def close_page_service() -> None:
    """Close the global page service."""
    global _global_service
    if _global_service:
        await _global_service.close()
        _global_service = None
