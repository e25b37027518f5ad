"""Tests for canonical REST page URLs."""

from dotcms.pages.request import PageMode, PageRequest
from dotcms.pages.rest import build_page_url, rest_cache_key

HOST = "https://demo.dotcms.com"


def test_root_live_page():
    url = build_page_url(PageRequest(path="/", mode=PageMode.LIVE), HOST)
    assert url == f"{HOST}/api/v1/page/json/index?mode=LIVE&fireRules=false&depth=1"
    assert url.endswith("/page/json/index?mode=LIVE&fireRules=false&depth=1")


def test_all_parameters_in_order():
    request = PageRequest(
        path="/about-us/",
        site_id="site-1",
        mode=PageMode.PREVIEW,
        language_id="2",
        persona="p1",
        fire_rules=True,
        depth=3,
    )
    assert build_page_url(request, HOST) == (
        f"{HOST}/api/v1/page/json/about-us/index"
        "?siteId=site-1&mode=PREVIEW&language_id=2&persona=p1&fireRules=true&depth=3"
    )


def test_empty_optional_values_are_omitted():
    url = build_page_url(PageRequest(path="/a", site_id="", persona=""), HOST)
    assert "siteId" not in url
    assert "persona" not in url


def test_values_are_percent_encoded():
    request = PageRequest(path="/a b", persona="x&y=z", site_id="s/1")
    url = build_page_url(request, HOST)
    assert "/page/json/a%20b?" in url
    assert "siteId=s%2F1" in url
    assert "persona=x%26y%3Dz" in url


def test_trailing_slash_on_host_is_ignored():
    request = PageRequest(path="/a")
    assert build_page_url(request, HOST + "/") == build_page_url(request, HOST)


def test_deterministic():
    request = PageRequest(path="/news/", persona="p1", language_id="1")
    assert build_page_url(request, HOST) == build_page_url(request, HOST)


def test_key_sensitive_to_every_field():
    base = PageRequest(path="/a", site_id="s", language_id="1", persona="p")
    variants = [
        PageRequest(path="/b", site_id="s", language_id="1", persona="p"),
        PageRequest(path="/a", site_id="t", language_id="1", persona="p"),
        PageRequest(path="/a", site_id="s", mode=PageMode.EDIT, language_id="1", persona="p"),
        PageRequest(path="/a", site_id="s", language_id="2", persona="p"),
        PageRequest(path="/a", site_id="s", language_id="1", persona="q"),
        PageRequest(path="/a", site_id="s", language_id="1", persona="p", fire_rules=True),
        PageRequest(path="/a", site_id="s", language_id="1", persona="p", depth=2),
    ]
    base_key = rest_cache_key(build_page_url(base, HOST))
    keys = {rest_cache_key(build_page_url(v, HOST)) for v in variants}
    assert base_key not in keys
    assert len(keys) == len(variants)


def test_normalized_paths_share_a_key():
    assert build_page_url(PageRequest(path=""), HOST) == build_page_url(PageRequest(path="/"), HOST)
