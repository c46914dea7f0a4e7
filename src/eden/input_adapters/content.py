"""Content loader.

Layout::

    content/
        strings.en.yaml          translation strings (see strings.py)
        en/
            home.md              -> key "home"
            blog/first-post.md   -> key "blog.first-post"
            team.yaml            -> key "team"

Markdown files carry YAML front matter; their body is converted to HTML and
stored under the ``html/content`` field. YAML files are plain field mappings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from eden.core.models import HTML_CONTENT_FIELD, ContentItem, ContentStore
from eden.input_adapters.exceptions import ContentParseError
from eden.input_adapters.markdown import parse_frontmatter, render_markdown
from eden.rendering.warnings import EdenWarning, InvalidContent

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


@dataclass(frozen=True)
class LoadedContent:
    store: ContentStore
    warnings: tuple[EdenWarning, ...] = ()


def content_key_for(path: Path, lang_dir: Path) -> str:
    """``blog/first-post.md`` relative to the language directory -> ``blog.first-post``."""
    relative = path.relative_to(lang_dir).with_suffix("")
    return ".".join(relative.parts)


def _read_markdown(path: Path) -> dict[str, Any]:
    try:
        metadata, body = parse_frontmatter(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise ContentParseError(path, exc) from exc
    html = render_markdown(body)
    if html is not None:
        metadata[HTML_CONTENT_FIELD] = html
    return metadata


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ContentParseError(path, exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ContentParseError(path, f"expected a mapping, got {type(data).__name__}")
    return data


def load_content_file(path: Path, key: str, lang: str) -> ContentItem:
    """Parse one content file.

    Raises:
        ContentParseError: If the file cannot be read or parsed

    """
    fields = _read_markdown(path) if path.suffix in MARKDOWN_SUFFIXES else _read_yaml(path)
    return ContentItem(key=key, lang=lang, fields=fields)


def _content_files(lang_dir: Path) -> list[Path]:
    suffixes = MARKDOWN_SUFFIXES | YAML_SUFFIXES
    return sorted(path for path in lang_dir.rglob("*") if path.is_file() and path.suffix in suffixes)


def load_content(content_dir: Path, languages: tuple[str, ...] | list[str]) -> LoadedContent:
    """Load every content file for the configured languages.

    A file that fails to parse is left out and reported as an
    ``invalid-content`` warning; the rest of the content still loads.
    """
    items: list[ContentItem] = []
    warnings: list[EdenWarning] = []
    for lang in languages:
        lang_dir = content_dir / lang
        if not lang_dir.is_dir():
            logger.debug("No content directory for language %s at %s", lang, lang_dir)
            continue
        for path in _content_files(lang_dir):
            key = content_key_for(path, lang_dir)
            try:
                items.append(load_content_file(path, key, lang))
            except ContentParseError as exc:
                logger.warning("Skipping content file: %s", exc)
                warnings.append(InvalidContent(file=str(path), error=str(exc.reason)))

    logger.info("Loaded %d content item(s) from %s", len(items), content_dir)
    return LoadedContent(store=ContentStore(items), warnings=tuple(warnings))
