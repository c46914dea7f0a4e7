"""Site configuration loader for ``site.yaml``.

Paths inside the configuration are resolved relative to the directory that
holds the configuration file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from eden.config.exceptions import ConfigNotFoundError, ConfigValidationError
from eden.config.settings import DEFAULT_SITE_FILE, SiteConfig

logger = logging.getLogger(__name__)


def find_site_config(start_dir: Path, filename: str = DEFAULT_SITE_FILE) -> Path | None:
    """Search upward for ``site.yaml``.

    Args:
        start_dir: Starting directory for upward search
        filename: Configuration file name to look for

    Returns:
        Path to the configuration file if found, else None
    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        config_path = candidate / filename
        if config_path.is_file():
            return config_path
    return None


def _read_yaml_mapping(config_path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(config_path, [{"loc": (), "msg": f"invalid YAML: {e}"}]) from e
    if not isinstance(data, dict):
        raise ConfigValidationError(
            config_path,
            [{"loc": (), "msg": f"configuration root must be a mapping, got {type(data).__name__}"}],
        )
    return data


def load_site_config(config_path: Path) -> SiteConfig:
    """Load and validate a site configuration file.

    Args:
        config_path: Path to ``site.yaml``

    Returns:
        Validated SiteConfig whose ``root_path`` is the file's directory

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid YAML or fails validation
    """
    config_path = config_path.expanduser()
    if not config_path.is_file():
        raise ConfigNotFoundError(config_path)

    logger.info("Loading site configuration from %s", config_path)
    data = _read_yaml_mapping(config_path)
    return site_config_from_mapping(data, root_path=config_path.resolve().parent, source=config_path)


def site_config_from_mapping(
    data: dict[str, Any], *, root_path: Path | None = None, source: Path | None = None
) -> SiteConfig:
    """Validate an already parsed configuration mapping."""
    payload = dict(data)
    if root_path is not None:
        payload["root_path"] = root_path
    try:
        return SiteConfig.model_validate(payload)
    except ValidationError as e:
        raise ConfigValidationError(source, e.errors()) from e


__all__ = ["find_site_config", "load_site_config", "site_config_from_mapping"]
