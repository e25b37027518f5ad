"""
Cache lifetime per rendering mode.

LIVE content is cached briefly to absorb bursts. EDIT and PREVIEW must show
the latest draft, so they are never cached.
"""

from datetime import timedelta

from dotcms.pages.request import PageMode

LIVE_CACHE_TTL = timedelta(seconds=60)
NO_CACHE = timedelta(0)


def ttl_for_mode(mode: PageMode, live_ttl: timedelta = LIVE_CACHE_TTL) -> timedelta:
    return live_ttl if mode == PageMode.LIVE else NO_CACHE
