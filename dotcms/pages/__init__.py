"""
dotCMS page retrieval: request descriptors, request builders and the
cached page service.
"""

from dotcms.pages.request import PageMode, PageRequest, normalize_path
from dotcms.pages.rest import build_page_url, rest_cache_key
from dotcms.pages.graphql import (
    build_page_query,
    build_page_selector,
    escape_graphql_string,
    query_id,
)
from dotcms.pages.policy import ttl_for_mode
from dotcms.pages.service import (
    PageService,
    close_page_service,
    get_page_service,
    load_json,
)

__all__ = [
    "PageMode",
    "PageRequest",
    "normalize_path",
    "build_page_url",
    "rest_cache_key",
    "build_page_query",
    "build_page_selector",
    "escape_graphql_string",
    "query_id",
    "ttl_for_mode",
    "PageService",
    "get_page_service",
    "close_page_service",
    "load_json",
]
