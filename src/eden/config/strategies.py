"""URL strategies.

Two kinds of strategy are configured per site:

* the *url strategy* maps a rendered page to an output file path
  (``{"path", "page"} -> "about/index.html"``);
* the *page-url strategy* maps page identity to the URL used in links and in
  the page registry (``{"slug", "lang", "site-config"} -> "/en/about"``).

Built-ins are selected by name; anything of the form ``"package.module:function"``
is imported and used as a custom strategy.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from eden.config.exceptions import UnknownStrategyError

if TYPE_CHECKING:
    from eden.config.settings import SiteConfig

UrlStrategy = Callable[[Mapping[str, Any]], str]
PageUrlStrategy = Callable[[Mapping[str, Any]], str]


def flat_url_strategy(request: Mapping[str, Any]) -> str:
    """``/about`` -> ``about.html``; directory paths map to their ``index.html``."""
    path = str(request["path"]).strip("/")
    if not path:
        return "index.html"
    if str(request["path"]).endswith("/"):
        return f"{path}/index.html"
    return f"{path}.html"


def nested_url_strategy(request: Mapping[str, Any]) -> str:
    """``/about`` -> ``about/index.html``."""
    path = str(request["path"]).strip("/")
    return f"{path}/index.html" if path else "index.html"


def _lang_prefix(lang: str | None, site_config: SiteConfig) -> str:
    return "" if site_config.is_default_lang(lang) else f"/{lang}"


def default_page_url_strategy(request: Mapping[str, Any]) -> str:
    """Extensionless URLs, default language unprefixed."""
    prefix = _lang_prefix(request.get("lang"), request["site-config"])
    slug = str(request.get("slug") or "").strip("/")
    return f"{prefix}/{slug}" if slug else f"{prefix}/"


def with_extension_page_url_strategy(request: Mapping[str, Any]) -> str:
    """Like the default strategy but pointing at ``.html`` files."""
    prefix = _lang_prefix(request.get("lang"), request["site-config"])
    slug = str(request.get("slug") or "").strip("/")
    return f"{prefix}/{slug}.html" if slug else f"{prefix}/index.html"


URL_STRATEGIES: dict[str, UrlStrategy] = {
    "flat": flat_url_strategy,
    "nested": nested_url_strategy,
}

PAGE_URL_STRATEGIES: dict[str, PageUrlStrategy] = {
    "default": default_page_url_strategy,
    "with-extension": with_extension_page_url_strategy,
}


def _import_strategy(option: str, reference: str) -> Callable[..., str]:
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise UnknownStrategyError(option, reference, "expected a built-in name or 'module:function'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise UnknownStrategyError(option, reference, str(exc)) from exc
    strategy = getattr(module, attribute, None)
    if not callable(strategy):
        raise UnknownStrategyError(option, reference, f"'{attribute}' is not a callable in {module_name}")
    return strategy


def _resolve(option: str, builtins: Mapping[str, Callable[..., str]], strategy: object) -> Callable[..., str]:
    if callable(strategy):
        return strategy
    if not isinstance(strategy, str):
        raise UnknownStrategyError(option, strategy, "must be a name or a callable")
    name = strategy.lstrip(":")
    if name in builtins:
        return builtins[name]
    if ":" in name:
        return _import_strategy(option, name)
    raise UnknownStrategyError(option, strategy, f"choose one of {', '.join(builtins)} or 'module:function'")


def parse_url_strategy(strategy: object) -> UrlStrategy:
    """Resolve the configured ``url-strategy``."""
    return _resolve("url-strategy", URL_STRATEGIES, strategy)


def parse_page_url_strategy(strategy: object) -> PageUrlStrategy:
    """Resolve the configured ``page-url-strategy``."""
    return _resolve("page-url-strategy", PAGE_URL_STRATEGIES, strategy or "default")
