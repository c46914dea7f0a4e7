"""Page graph resolution.

Starting from the render roots, every reachable page is rendered in discovery
mode to harvest its ``eden/link`` targets. Discovery runs breadth first, one
batch (all keys currently queued) at a time: the batch is rendered in a
thread pool and the results are merged into the visited set only after the
whole batch finished. Reachable pages with a slug and a title then get a
canonical path and go into the page registry.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from eden.core.models import ContentItem, PageMetadata, PageRegistry, SectionRef
from eden.core.routing import page_path, route_slug
from eden.rendering.context import RenderMode
from eden.rendering.interpreter import RenderResult
from eden.rendering.page import PageRenderer
from eden.rendering.warnings import EdenWarning, MissingContent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    registry: PageRegistry
    reachable: tuple[str, ...]
    warnings: tuple[EdenWarning, ...] = ()


class PageGraphResolver:
    """Computes the reachable page set and the page registry for one build."""

    def __init__(self, renderer: PageRenderer, max_workers: int | None = None) -> None:
        self._renderer = renderer
        self._max_workers = max_workers

    @property
    def _languages(self) -> tuple[str, ...]:
        return self._renderer.site_config.languages

    def _discover(self, item: ContentItem) -> RenderResult | None:
        return self._renderer.render(item, RenderMode.DISCOVERY)

    def resolve(self, roots: Iterable[str]) -> Resolution:
        content = self._renderer.content
        queue: deque[str] = deque(dict.fromkeys(roots))
        queued: set[str] = set(queue)
        visited: list[str] = []
        used: set[str] = set()
        sections: dict[str, SectionRef] = {}
        warnings: list[EdenWarning] = []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            while queue:
                batch = list(queue)
                queue.clear()
                visited.extend(batch)
                logger.debug("Discovery batch of %d page(s): %s", len(batch), ", ".join(batch))

                jobs: list[ContentItem] = []
                for key in batch:
                    items = [content.get(lang, key) for lang in self._languages]
                    found = [item for item in items if item is not None]
                    if not found:
                        warnings.append(MissingContent(content_key=key))
                    jobs.extend(found)

                for result in executor.map(self._discover, jobs):
                    if result is None:
                        continue
                    used.update(result.rendered_content)
                    sections.update(result.sections)
                    for link in result.links:
                        if link not in queued:
                            queued.add(link)
                            queue.append(link)

        registry = self._assign(visited, sections)
        orphans = sorted(content.keys() - set(visited) - used)
        for key in orphans:
            warnings.append(MissingContent(content_key=key, reason="orphaned"))
        if orphans:
            logger.info("%d content item(s) not reachable from the render roots", len(orphans))

        return Resolution(registry=registry, reachable=tuple(visited), warnings=tuple(warnings))

    def _assign(self, reachable: Iterable[str], sections: dict[str, SectionRef]) -> PageRegistry:
        config = self._renderer.site_config
        strategy = self._renderer.page_url
        entries = []
        for key in reachable:
            for lang in self._languages:
                item = self._renderer.content.get(lang, key)
                if item is None or not item.is_routable:
                    continue
                entries.append(
                    PageMetadata(
                        content_key=key,
                        lang=lang,
                        slug=route_slug(key, item.slug, config),
                        title=item.title,
                        path=page_path(key, item.slug, lang, config, strategy),
                        fields=item.fields,
                    )
                )
        return PageRegistry.from_entries(entries, sections)
