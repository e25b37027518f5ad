"""
Fetch observers - side channel notified at fixed points of an upstream fetch.

The client never logs directly; it tells its observer when a request is
about to go out and when one has failed. ``LoggingObserver`` is the default,
``NullObserver`` keeps tests quiet.
"""

from loguru import logger


class FetchObserver:
    """Base observer. Subclasses override the hooks they care about."""

    def request_started(self, method: str, url: str) -> None:
        pass

    def request_failed(self, method: str, url: str, error: Exception) -> None:
        pass


class NullObserver(FetchObserver):
    """Observer that ignores everything."""


class LoggingObserver(FetchObserver):
    """Writes request and failure events to loguru."""

    def request_started(self, method: str, url: str) -> None:
        logger.info(f"Requesting page from: {method} {url}")

    def request_failed(self, method: str, url: str, error: Exception) -> None:
        logger.opt(exception=error).error(
            f"Error getting page from dotCMS API ({method} {url}): {error}"
        )
