"""Tests for url and page-url strategy selection."""

from __future__ import annotations

import pytest

from eden.config import UnknownStrategyError, parse_page_url_strategy, parse_url_strategy
from eden.config.strategies import (
    default_page_url_strategy,
    flat_url_strategy,
    nested_url_strategy,
    with_extension_page_url_strategy,
)


@pytest.mark.parametrize(
    ("path", "flat", "nested"),
    [
        ("/", "index.html", "index.html"),
        ("/about", "about.html", "about/index.html"),
        ("/no/", "no/index.html", "no/index.html"),
        ("/no/about", "no/about.html", "no/about/index.html"),
    ],
)
def test_builtin_url_strategies(path, flat, nested):
    assert flat_url_strategy({"path": path}) == flat
    assert nested_url_strategy({"path": path}) == nested


def test_parse_builtins():
    assert parse_url_strategy("flat") is flat_url_strategy
    assert parse_url_strategy(":nested") is nested_url_strategy
    assert parse_page_url_strategy(None) is default_page_url_strategy
    assert parse_page_url_strategy("with-extension") is with_extension_page_url_strategy


def test_parse_custom_reference():
    assert parse_url_strategy("eden.config.strategies:nested_url_strategy") is nested_url_strategy


def test_callable_is_used_as_is():
    def strategy(request):
        return "x.html"

    assert parse_url_strategy(strategy) is strategy


@pytest.mark.parametrize(
    "strategy",
    ["sideways", "no_such_module_xyz:func", "eden.config.strategies:missing", "eden.config.strategies:URL_STRATEGIES", 3],
)
def test_unknown_strategies(strategy):
    with pytest.raises(UnknownStrategyError) as exc_info:
        parse_url_strategy(strategy)

    assert exc_info.value.option == "url-strategy"
