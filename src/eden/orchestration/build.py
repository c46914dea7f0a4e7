"""Build orchestrator: ``Load -> ResolveGraph -> Render -> Write``.

Stages run strictly one after the other. Inside a stage the work may be
parallel: graph discovery renders batches of pages in a thread pool, and the
Render stage renders every registered (content-key, lang) pair in a thread
pool, each task returning its own warnings.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from pathlib import Path
from typing import Any

from eden.config.exceptions import IndexContentNotFoundError, WrapperTemplateNotFoundError
from eden.config.settings import BuildSettings, SiteConfig
from eden.config.strategies import parse_page_url_strategy, parse_url_strategy
from eden.core.models import ContentStore, Page, PageMetadata, PageRegistry, TemplateStore
from eden.graph.resolver import PageGraphResolver, Resolution
from eden.input_adapters.content import load_content
from eden.input_adapters.strings import load_strings
from eden.input_adapters.templates import load_templates
from eden.output_adapters.writer import OutputWriter
from eden.orchestration.report import write_html_report
from eden.rendering.page import DOCTYPE, PageRenderer
from eden.rendering.warnings import EdenWarning, MissingPageTemplate

logger = logging.getLogger(__name__)


class Stage(StrEnum):
    LOAD = "load"
    RESOLVE_GRAPH = "resolve-graph"
    RENDER = "render"
    WRITE = "write"


@dataclass(frozen=True)
class LoadedSite:
    """Output of the Load stage."""

    content: ContentStore
    templates: TemplateStore
    strings: dict[str, dict[str, Any]] = field(default_factory=dict)
    warnings: tuple[EdenWarning, ...] = ()


@dataclass(frozen=True)
class BuildResult:
    pages: tuple[Page, ...]
    warnings: tuple[EdenWarning, ...]
    registry: PageRegistry
    reachable: tuple[str, ...] = ()
    written: tuple[Path, ...] = ()
    assets: tuple[Path, ...] = ()
    timings: dict[str, float] = field(default_factory=dict)
    output_dir: Path | None = None
    mode: str = "prod"

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class BuildOrchestrator:
    """Runs one build of one site."""

    def __init__(
        self,
        site_config: SiteConfig,
        settings: BuildSettings | None = None,
        *,
        today: date | None = None,
    ) -> None:
        self.site_config = site_config
        self.settings = settings or BuildSettings()
        self.build_constants = site_config.effective_build_constants(today)
        # Unknown strategies are configuration errors and must fail before any stage runs
        self.url_strategy = parse_url_strategy(site_config.url_strategy)
        self.page_url_strategy = parse_page_url_strategy(site_config.page_url_strategy)
        self.timings: dict[str, float] = {}

    @property
    def output_dir(self) -> Path:
        if self.settings.output_dir is not None:
            return self.settings.output_dir
        return self.site_config.abs_output_dir

    @contextmanager
    def _stage(self, stage: Stage) -> Iterator[None]:
        logger.info("Stage [bold]%s[/bold] started", stage.value)
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - started
            self.timings[stage.value] = elapsed
            logger.info("Stage [bold]%s[/bold] finished in %.3fs", stage.value, elapsed)

    # -- stages --------------------------------------------------------------

    def load(self) -> LoadedSite:
        """Read content, templates and translation strings from disk."""
        languages = self.site_config.languages
        content_dir = self.site_config.abs_content_dir
        content = load_content(content_dir, languages)
        templates = load_templates(self.site_config.abs_templates_dir)
        strings, string_warnings = load_strings(content_dir, languages)
        return LoadedSite(
            content=content.store,
            templates=templates.store,
            strings=strings,
            warnings=content.warnings + templates.warnings + string_warnings,
        )

    def validate(self, site: LoadedSite) -> None:
        """Check the loaded site against the configuration.

        Raises:
            WrapperTemplateNotFoundError: If the wrapper template was not loaded
            IndexContentNotFoundError: If the index has no content in the default language

        """
        if self.site_config.wrapper not in site.templates:
            raise WrapperTemplateNotFoundError(self.site_config.wrapper, sorted(site.templates))
        default_lang = self.site_config.default_lang
        if site.content.get(default_lang, self.site_config.index) is None:
            raise IndexContentNotFoundError(self.site_config.index, default_lang)

    def renderer(self, site: LoadedSite) -> PageRenderer:
        return PageRenderer(
            site_config=self.site_config,
            content=site.content,
            templates=site.templates,
            page_url=self.page_url_strategy,
            strings=site.strings,
            build_constants=self.build_constants,
            markers=self.settings.is_dev,
        )

    def resolve_graph(self, renderer: PageRenderer) -> Resolution:
        resolver = PageGraphResolver(renderer, max_workers=self.settings.worker_count)
        resolution = resolver.resolve(self.site_config.render_roots)
        logger.info(
            "Resolved %d reachable key(s) into %d page(s)", len(resolution.reachable), len(resolution.registry)
        )
        return resolution

    def _render_one(
        self, renderer: PageRenderer, registry: PageRegistry, meta: PageMetadata
    ) -> tuple[Page | None, tuple[EdenWarning, ...]]:
        item = renderer.content.get(meta.lang, meta.content_key)
        if item is None:
            return None, ()
        template = renderer.template_name(item)
        result = renderer.render(item, registry=registry)
        if result is None:
            logger.warning("No template %s for %s (%s)", template, meta.content_key, meta.lang)
            return None, (MissingPageTemplate(template=template, content_key=meta.content_key, lang=meta.lang),)
        page = Page.from_metadata(meta, template)
        page.html = DOCTYPE + result.html
        return page, result.warnings

    def render(self, renderer: PageRenderer, registry: PageRegistry) -> tuple[list[Page], list[EdenWarning]]:
        """Render every registered page. Results are merged in (lang, key) order."""
        entries = list(registry)
        with ThreadPoolExecutor(max_workers=self.settings.worker_count) as executor:
            results = list(executor.map(lambda meta: self._render_one(renderer, registry, meta), entries))

        pages: list[Page] = []
        warnings: list[EdenWarning] = []
        for page, page_warnings in results:
            if page is not None:
                pages.append(page)
            warnings.extend(page_warnings)
        return pages, warnings

    def write(self, pages: list[Page]) -> tuple[list[Path], list[Path]]:
        """Write every page, then copy the assets directory. Returns (pages, assets)."""
        writer = OutputWriter(self.output_dir, self.url_strategy)
        written = writer.write_all(pages)
        return written, writer.copy_assets(self.site_config.abs_assets_dir)

    # -- driver --------------------------------------------------------------

    def build(self, site: LoadedSite | None = None, *, write: bool = True) -> BuildResult:
        """Run the whole build.

        Args:
            site: Already loaded stores; when given the Load stage reads nothing from disk
            write: Whether to run the Write stage

        Returns:
            BuildResult with the rendered pages and every warning of the build

        Raises:
            ConfigError: If the configuration does not match the loaded site
            OutputWriterError: If a page cannot be written

        """
        self.timings = {}
        with self._stage(Stage.LOAD):
            if site is None:
                site = self.load()
            self.validate(site)

        renderer = self.renderer(site)
        with self._stage(Stage.RESOLVE_GRAPH):
            resolution = self.resolve_graph(renderer)

        with self._stage(Stage.RENDER):
            pages, render_warnings = self.render(renderer, resolution.registry)

        written: list[Path] = []
        assets: list[Path] = []
        if write:
            with self._stage(Stage.WRITE):
                written, assets = self.write(pages)

        warnings = (*site.warnings, *resolution.warnings, *render_warnings)
        logger.info("Built %d page(s) with %d warning(s)", len(pages), len(warnings))
        result = BuildResult(
            pages=tuple(pages),
            warnings=warnings,
            registry=resolution.registry,
            reachable=resolution.reachable,
            written=tuple(written),
            assets=tuple(assets),
            timings=dict(self.timings),
            output_dir=self.output_dir,
            mode=self.settings.mode,
        )
        if write and self.settings.is_dev:
            write_html_report(result, self.output_dir)
        return result
