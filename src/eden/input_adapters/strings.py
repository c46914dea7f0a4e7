"""Translation strings: ``content/strings.<lang>.yaml``.

Keys may be flat (``nav/home: Home``) or nested mappings; ``eden/t`` accepts
both a flat key and a path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from eden.input_adapters.exceptions import ContentParseError
from eden.rendering.warnings import EdenWarning, InvalidContent

logger = logging.getLogger(__name__)


def strings_file(content_dir: Path, lang: str) -> Path:
    return content_dir / f"strings.{lang}.yaml"


def load_strings_file(path: Path) -> dict[str, Any]:
    """Read one strings file.

    Raises:
        ContentParseError: If the file is not valid YAML or not a mapping

    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ContentParseError(path, exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ContentParseError(path, f"expected a mapping, got {type(data).__name__}")
    return {str(key): value for key, value in data.items()}


def load_strings(
    content_dir: Path, languages: tuple[str, ...] | list[str]
) -> tuple[dict[str, dict[str, Any]], tuple[EdenWarning, ...]]:
    """Load the string table of every language that has one.

    An unreadable strings file leaves that language without strings and is
    reported as an ``invalid-content`` warning.
    """
    tables: dict[str, dict[str, Any]] = {}
    warnings: list[EdenWarning] = []
    for lang in languages:
        path = strings_file(content_dir, lang)
        if not path.is_file():
            continue
        try:
            tables[lang] = load_strings_file(path)
        except ContentParseError as exc:
            logger.warning("Skipping strings file: %s", exc)
            warnings.append(InvalidContent(file=str(path), error=str(exc.reason)))
            continue
        logger.debug("Loaded %d string(s) for %s", len(tables[lang]), lang)
    return tables, tuple(warnings)
