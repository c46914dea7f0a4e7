"""Canonical page paths and navigation relationships between content keys."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eden.config.settings import SiteConfig
    from eden.config.strategies import PageUrlStrategy


def route_slug(content_key: str, slug: object, site_config: SiteConfig) -> str:
    """The index page always routes to the language root, whatever its slug says."""
    if content_key == site_config.index:
        return ""
    return str(slug or "").strip("/")


def page_path(
    content_key: str,
    slug: object,
    lang: str,
    site_config: SiteConfig,
    strategy: PageUrlStrategy,
) -> str:
    """Compute the URL of a page with the configured page-url strategy.

    Examples with the default strategy, default language ``en``:
        ("home", "", "en") -> "/"
        ("home", "", "no") -> "/no/"
        ("about", "about", "no") -> "/no/about"
    """
    return strategy({"slug": route_slug(content_key, slug, site_config), "lang": lang, "site-config": site_config})


def parent_key(content_key: str | None, index: str | None, exists: Callable[[str], bool]) -> str | None:
    """Navigation parent of a dotted content key.

    ``a.b.c`` -> ``a.b`` when that page exists, otherwise the page keyed ``b``.
    Single-segment keys hang off the index; the index itself has no parent.
    """
    if content_key is None or content_key == index:
        return None
    segments = content_key.split(".")
    if len(segments) == 1:
        return index
    candidate = ".".join(segments[:-1])
    if exists(candidate):
        return candidate
    return segments[-2]
