"""Markdown front matter parsing and markdown-to-HTML conversion."""

from __future__ import annotations

import logging
from typing import Any

import frontmatter
import yaml
from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)

_md = MarkdownIt("commonmark", {"html": True}).enable("table")


def render_markdown(content: str | None) -> str | None:
    """Render markdown content to HTML.

    Returns None if content is None or empty.
    """
    if content and content.strip():
        return _md.render(content).strip()
    return None


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter using python-frontmatter.

    Args:
        content: Markdown content that may include front matter.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        ValueError: If the front matter is not valid YAML or not a mapping

    """
    try:
        parsed = frontmatter.loads(content)
    except yaml.YAMLError as exc:
        msg = f"invalid front matter: {exc}"
        raise ValueError(msg) from exc

    raw_metadata = parsed.metadata or {}
    if not isinstance(raw_metadata, dict):
        msg = f"front matter must be a mapping, got {type(raw_metadata).__name__}"
        raise ValueError(msg)

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return dict(raw_metadata), body
