"""Rendering of a whole page: its own template wrapped by the site wrapper."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from eden.core.models import ContentItem, ContentStore, PageRegistry, TemplateStore
from eden.rendering.context import RenderContext, RenderMode
from eden.rendering.interpreter import Interpreter, RenderResult

if TYPE_CHECKING:
    from eden.config.settings import SiteConfig
    from eden.config.strategies import PageUrlStrategy

DOCTYPE = "<!DOCTYPE html>"


@dataclass(frozen=True)
class PageRenderer:
    """Everything needed to render any (content-key, lang) pair of one build."""

    site_config: SiteConfig
    content: ContentStore
    templates: TemplateStore
    page_url: PageUrlStrategy
    strings: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    build_constants: Mapping[str, Any] = field(default_factory=dict)
    markers: bool = False
    interpreter: Interpreter = field(default_factory=Interpreter)

    @staticmethod
    def template_name(item: ContentItem) -> str:
        """A page uses its declared template, or the template named like its key."""
        declared = item.template
        return declared if isinstance(declared, str) and declared else item.key

    def has_template(self, item: ContentItem) -> bool:
        return self.template_name(item) in self.templates

    def context(
        self, item: ContentItem, mode: RenderMode = RenderMode.FINAL, registry: PageRegistry | None = None
    ) -> RenderContext:
        return RenderContext(
            lang=item.lang,
            data={**self.build_constants, **item.data, "lang": item.lang},
            content=self.content,
            templates=self.templates,
            strings=self.strings.get(item.lang, {}),
            registry=registry,
            site_config=self.site_config,
            build_constants=self.build_constants,
            content_key=item.key,
            template=self.template_name(item),
            mode=mode,
            markers=self.markers,
        )

    def render(
        self, item: ContentItem, mode: RenderMode = RenderMode.FINAL, registry: PageRegistry | None = None
    ) -> RenderResult | None:
        """Render ``item`` inside the wrapper.

        Returns None when the page's template does not exist.
        """
        name = self.template_name(item)
        if name not in self.templates:
            return None
        ctx = self.context(item, mode, registry)
        page, diagnostics = self.interpreter.evaluate(self.templates[name], ctx)

        wrapper = self.site_config.wrapper
        if wrapper not in self.templates:
            return RenderResult.of(page, diagnostics)
        wrapped, wrapper_diagnostics = self.interpreter.evaluate(
            self.templates[wrapper], ctx.replace(body=page, template=wrapper)
        )
        return RenderResult.of(wrapped, diagnostics + wrapper_diagnostics)
