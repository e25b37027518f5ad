"""
REST transport: canonical page URLs.

The URL built here is both the request target and the cache key, so the
parameter set and order are fixed and every key and value is escaped.
"""

from urllib.parse import quote

from dotcms.pages.request import PageRequest

PAGE_API_PREFIX = "api/v1/page/json"


def _escape(value: str) -> str:
    return quote(value, safe="")


def build_page_url(request: PageRequest, api_host: str) -> str:
    """
    Build the canonical REST URL for a page request.

    Optional parameters (siteId, mode, language_id, persona) are only
    included when set; fireRules and depth are always present.
    """
    path = quote(request.normalized_path, safe="/")
    base = f"{api_host.rstrip('/')}/{PAGE_API_PREFIX}{path}"

    params: list[tuple[str, str]] = []
    if request.site_id:
        params.append(("siteId", request.site_id))
    if request.mode:
        params.append(("mode", request.mode.value))
    if request.language_id:
        params.append(("language_id", request.language_id))
    if request.persona:
        params.append(("persona", request.persona))
    params.append(("fireRules", "true" if request.fire_rules else "false"))
    params.append(("depth", str(int(request.depth))))

    query = "&".join(f"{_escape(key)}={_escape(value)}" for key, value in params)
    return f"{base}?{query}"


def rest_cache_key(url: str) -> str:
    """The REST cache key is the canonical URL itself."""
    return url
