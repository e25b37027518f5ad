"""
Service layer exceptions.

Every failure the page core can surface belongs to one of the
``FailureKind`` values, so callers can branch on ``error.kind``
without matching on exception classes.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Closed set of failure kinds."""

    TRANSPORT = "transport"  # Upstream answered with a non-2xx status
    NETWORK = "network"  # Connection or timeout error
    MALFORMED = "malformed"  # Payload could not be parsed


class ServiceError(Exception):
    """Base exception for service layer errors."""

    kind: FailureKind = FailureKind.NETWORK

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class TransportFailure(ServiceError):
    """dotCMS returned a non-success status code."""

    kind = FailureKind.TRANSPORT

    def __init__(self, status_code: int, url: str | None = None):
        self.status_code = status_code
        super().__init__(f"dotCMS API returned status code: {status_code}", url=url)


class NetworkFailure(ServiceError):
    """The request never produced a response."""

    kind = FailureKind.NETWORK


class RequestTimeoutError(NetworkFailure):
    """Request timed out."""

    def __init__(self, url: str | None, timeout: float):
        self.timeout = timeout
        super().__init__(f"Request to '{url}' timed out after {timeout}s", url=url)


class MalformedResponse(ServiceError):
    """Payload could not be deserialized."""

    kind = FailureKind.MALFORMED
