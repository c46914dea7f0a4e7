"""Template loader.

Templates are directive trees written as YAML or JSON lists, one per file,
named after the file stem::

    # templates/page.yaml
    - article
    - [h1, [eden/get, title]]
    - [eden/get, html/content]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from eden.core.models import TemplateStore
from eden.input_adapters.exceptions import TemplateParseError
from eden.rendering.warnings import EdenWarning, InvalidTemplate

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIXES = frozenset({".yaml", ".yml", ".json"})


@dataclass(frozen=True)
class LoadedTemplates:
    store: TemplateStore
    warnings: tuple[EdenWarning, ...] = ()


def load_template_file(path: Path) -> Any:
    """Parse one template file.

    Raises:
        TemplateParseError: If the file cannot be read, parsed, or is not a list

    """
    try:
        text = path.read_text(encoding="utf-8")
        tree = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise TemplateParseError(path, exc) from exc
    if not isinstance(tree, list):
        raise TemplateParseError(path, f"template root must be a list, got {type(tree).__name__}")
    return tree


def load_templates(templates_dir: Path) -> LoadedTemplates:
    """Load all templates below ``templates_dir``.

    Broken files are skipped and reported as ``invalid-template`` warnings.
    """
    templates: dict[str, Any] = {}
    warnings: list[EdenWarning] = []
    if not templates_dir.is_dir():
        logger.warning("Templates directory not found: %s", templates_dir)
        return LoadedTemplates(store=TemplateStore(), warnings=())

    for path in sorted(templates_dir.rglob("*")):
        if not path.is_file() or path.suffix not in TEMPLATE_SUFFIXES:
            continue
        try:
            tree = load_template_file(path)
        except TemplateParseError as exc:
            logger.warning("Skipping template file: %s", exc)
            warnings.append(InvalidTemplate(file=str(path), error=str(exc.reason)))
            continue
        if path.stem in templates:
            logger.warning("Template %s defined twice; using %s", path.stem, path)
        templates[path.stem] = tree

    logger.info("Loaded %d template(s) from %s", len(templates), templates_dir)
    return LoadedTemplates(store=TemplateStore(templates), warnings=tuple(warnings))
