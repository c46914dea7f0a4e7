"""Output writer: maps rendered pages to files.

The url strategy decides where a page lives on disk::

    flat:   "/" -> index.html, "/about" -> about.html, "/no/" -> no/index.html
    nested: "/about" -> about/index.html

The site's assets directory is copied as-is to ``<output_dir>/assets``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from eden.config.strategies import UrlStrategy
from eden.core.models import Page
from eden.output_adapters.exceptions import OutputWriterError, UnsafeOutputPathError

logger = logging.getLogger(__name__)

ASSETS_DIR = "assets"


@dataclass(frozen=True)
class OutputFile:
    path: str
    content: bytes


def _field(page: Page | Mapping[str, Any], name: str) -> Any:
    if isinstance(page, Mapping):
        return page.get(name)
    return getattr(page, name)


def write_output(page: Page | Mapping[str, Any], url_strategy: UrlStrategy) -> OutputFile:
    """Destination path (relative to the output directory) and bytes of one page.

    Raises:
        OutputWriterError: If the page has not been rendered

    """
    path = _field(page, "path")
    html = _field(page, "html")
    if html is None:
        raise OutputWriterError(path or "?", "page has no rendered HTML")
    relative = url_strategy({"path": path, "page": page})
    return OutputFile(path=str(relative).lstrip("/"), content=str(html).encode("utf-8"))


class OutputWriter:
    """Writes pages below ``output_dir``."""

    def __init__(self, output_dir: Path, url_strategy: UrlStrategy) -> None:
        self.output_dir = output_dir
        self.url_strategy = url_strategy

    def _target(self, relative: str) -> Path:
        root = self.output_dir.resolve()
        target = (root / relative).resolve()
        if not target.is_relative_to(root):
            raise UnsafeOutputPathError(relative, self.output_dir)
        return target

    def write(self, page: Page | Mapping[str, Any]) -> Path:
        """Write one page and return the file it went to.

        Raises:
            OutputWriterError: If the file cannot be written
            UnsafeOutputPathError: If the strategy points outside ``output_dir``

        """
        output = write_output(page, self.url_strategy)
        target = self._target(output.path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(output.content)
        except OSError as exc:
            raise OutputWriterError(target, exc) from exc
        logger.debug("Wrote %s", target)
        return target

    def write_all(self, pages: Iterable[Page | Mapping[str, Any]]) -> list[Path]:
        return [self.write(page) for page in pages]

    def copy_assets(self, source: Path) -> list[Path]:
        """Copy the site's assets directory unchanged to ``<output_dir>/assets``.

        Returns the copied files, or an empty list when ``source`` does not exist.

        Raises:
            OutputWriterError: If the directory cannot be copied

        """
        if not source.is_dir():
            logger.debug("No assets directory at %s", source)
            return []
        target = self._target(ASSETS_DIR)
        try:
            shutil.copytree(source, target, dirs_exist_ok=True)
        except OSError as exc:
            raise OutputWriterError(target, exc) from exc
        copied = sorted(target / path.relative_to(source) for path in source.rglob("*") if path.is_file())
        logger.info("Copied %d asset(s) to %s", len(copied), target)
        return copied


def clean_output(output_dir: Path) -> bool:
    """Remove a previous build. Returns False when there was nothing to remove.

    Raises:
        OutputWriterError: If the directory cannot be removed

    """
    if not output_dir.exists():
        return False
    try:
        shutil.rmtree(output_dir)
    except OSError as exc:
        raise OutputWriterError(output_dir, exc) from exc
    logger.info("Removed %s", output_dir)
    return True
