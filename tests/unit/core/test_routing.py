"""Tests for canonical page paths and navigation parents."""

from __future__ import annotations

import pytest

from eden.config.strategies import default_page_url_strategy, with_extension_page_url_strategy
from eden.core.routing import page_path, parent_key, route_slug


@pytest.mark.parametrize(
    ("key", "slug", "lang", "expected"),
    [
        ("about", "about", "en", "/about"),
        ("about", "about", "no", "/no/about"),
        ("home", "", "en", "/"),
        ("home", "", "no", "/no/"),
        ("home", "welcome", "en", "/"),
        ("docs.guide", "/docs/guide/", "en", "/docs/guide"),
    ],
)
def test_page_paths(site_config, key, slug, lang, expected):
    assert page_path(key, slug, lang, site_config, default_page_url_strategy) == expected


def test_with_extension_strategy(site_config):
    assert page_path("about", "about", "no", site_config, with_extension_page_url_strategy) == "/no/about.html"
    assert page_path("home", "", "en", site_config, with_extension_page_url_strategy) == "/index.html"


def test_route_slug_of_index_is_empty(site_config):
    assert route_slug("home", "anything", site_config) == ""


@pytest.mark.parametrize(
    ("key", "existing", "expected"),
    [
        ("home", {"home"}, None),
        (None, set(), None),
        ("about", set(), "home"),
        ("a.b.c", {"a.b"}, "a.b"),
        ("a.b.c", set(), "b"),
        ("a.b", set(), "a"),
    ],
)
def test_parent_key(key, existing, expected):
    assert parent_key(key, "home", existing.__contains__) == expected
