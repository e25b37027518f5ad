"""
Service layer infrastructure for upstream dotCMS calls.

Provides:
- SingleFlightCache: TTL cache that coalesces concurrent productions
- UpstreamClient: Async HTTP client for the REST and GraphQL endpoints
- FetchObserver: Side channel for request/failure events
- Error types with a closed set of failure kinds
"""

from dotcms.services.errors import (
    FailureKind,
    MalformedResponse,
    NetworkFailure,
    RequestTimeoutError,
    ServiceError,
    TransportFailure,
)
from dotcms.services.cache import CacheEntry, CacheStats, SingleFlightCache
from dotcms.services.observer import FetchObserver, LoggingObserver, NullObserver
from dotcms.services.client import FetchResult, UpstreamClient

__all__ = [
    # Errors
    "FailureKind",
    "ServiceError",
    "TransportFailure",
    "NetworkFailure",
    "RequestTimeoutError",
    "MalformedResponse",
    # Cache
    "SingleFlightCache",
    "CacheEntry",
    "CacheStats",
    # Observer
    "FetchObserver",
    "LoggingObserver",
    "NullObserver",
    # Client
    "UpstreamClient",
    "FetchResult",
]
