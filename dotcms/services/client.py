"""
UpstreamClient - Async HTTP client for the dotCMS content API.

Performs the two upstream exchanges the page core needs:
- GET of a canonical REST page URL
- POST of a GraphQL document, identified by its ``qid`` digest

Both attach the precomputed Authorization header, map transport errors to
the service error hierarchy and report to a FetchObserver.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar
from urllib.parse import urlencode

import httpx

from dotcms.services.errors import (
    NetworkFailure,
    RequestTimeoutError,
    ServiceError,
    TransportFailure,
)
from dotcms.services.observer import FetchObserver, LoggingObserver

T = TypeVar("T")

GRAPHQL_PATH = "/api/v1/graphql"


@dataclass
class FetchResult(Generic[T]):
    """Result of a fetch: either data or a typed failure, never both."""

    data: T | None = None
    error: ServiceError | None = None
    key: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the data or raise the captured failure."""
        if self.error is not None:
            raise self.error
        return self.data


class UpstreamClient:
    """
    HTTP client bound to one dotCMS host and credential.

    Usage:
        client = UpstreamClient(
            api_host="https://demo.dotcms.com",
            authorization="Bearer <token>",
        )
        payload = await client.fetch_rest(url)
        await client.close()
    """

    def __init__(
        self,
        api_host: str,
        authorization: str,
        timeout: float = 30.0,
        observer: FetchObserver | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_host = api_host.rstrip("/")
        self._authorization = authorization
        self._timeout = timeout
        self._observer = observer or LoggingObserver()

        # HTTP client (lazy initialization unless injected)
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._http_client

    def graphql_url(self, qid: str) -> str:
        """GraphQL endpoint URL carrying the query digest."""
        return f"{self.api_host}{GRAPHQL_PATH}?{urlencode({'qid': qid})}"

    async def fetch_rest(self, url: str) -> str:
        """GET a REST page URL and return the body as text."""
        return await self._execute_request("GET", url)

    async def fetch_graphql(self, document: str, qid: str) -> str:
        """POST a GraphQL document and return the body as text."""
        return await self._execute_request(
            "POST", self.graphql_url(qid), json_data={"query": document}
        )

    async def _execute_request(
        self,
        method: str,
        url: str,
        json_data: dict[str, str] | None = None,
    ) -> str:
        """Execute the actual HTTP request."""
        client = await self._get_http_client()
        self._observer.request_started(method, url)

        try:
            response = await client.request(
                method=method,
                url=url,
                headers={"Authorization": self._authorization},
                json=json_data,
            )
            response.raise_for_status()
            return response.text

        except httpx.TimeoutException as e:
            error: ServiceError = RequestTimeoutError(url, self._timeout)
            self._observer.request_failed(method, url, e)
            raise error from e

        except httpx.HTTPStatusError as e:
            error = TransportFailure(e.response.status_code, url=url)
            self._observer.request_failed(method, url, error)
            raise error from e

        except httpx.RequestError as e:
            error = NetworkFailure(str(e) or type(e).__name__, url=url)
            self._observer.request_failed(method, url, e)
            raise error from e

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "UpstreamClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
