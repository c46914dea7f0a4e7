"""Configuration facade.

    from eden.config import SiteConfig, load_site_config
"""

from eden.config.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    IndexContentNotFoundError,
    UnknownStrategyError,
    WrapperTemplateNotFoundError,
)
from eden.config.loader import find_site_config, load_site_config, site_config_from_mapping
from eden.config.settings import (
    CURRENT_YEAR_CONSTANT,
    DEFAULT_SITE_FILE,
    BuildSettings,
    LanguageSettings,
    SiteConfig,
)
from eden.config.strategies import (
    PageUrlStrategy,
    UrlStrategy,
    parse_page_url_strategy,
    parse_url_strategy,
)

__all__ = [
    "CURRENT_YEAR_CONSTANT",
    "DEFAULT_SITE_FILE",
    "BuildSettings",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigValidationError",
    "IndexContentNotFoundError",
    "LanguageSettings",
    "PageUrlStrategy",
    "SiteConfig",
    "UnknownStrategyError",
    "UrlStrategy",
    "WrapperTemplateNotFoundError",
    "find_site_config",
    "load_site_config",
    "parse_page_url_strategy",
    "parse_url_strategy",
    "site_config_from_mapping",
]
