"""Immutable render context passed explicitly through every interpreter call."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from eden.core.models import ContentStore, PageRegistry, TemplateStore

if TYPE_CHECKING:
    from eden.config.settings import SiteConfig


class RenderMode(StrEnum):
    DISCOVERY = "discovery"
    FINAL = "final"


class _NoBody:
    def __repr__(self) -> str:
        return "NO_BODY"


# Distinguishes "no wrapper body" from a body that rendered to None
NO_BODY: Any = _NoBody()


@dataclass(frozen=True)
class RenderContext:
    """Everything a directive may read while rendering one node.

    ``data`` is the current scope. Directives that change the scope
    (``eden/each``, ``eden/with``, ``eden/link``, ``eden/render``) derive a new
    context with :meth:`replace` or :meth:`merged`; the caller's context is
    never modified.
    """

    lang: str
    data: Mapping[str, Any] = field(default_factory=dict)
    content: ContentStore = field(default_factory=ContentStore)
    templates: TemplateStore = field(default_factory=TemplateStore)
    strings: Mapping[str, Any] = field(default_factory=dict)
    registry: PageRegistry | None = None
    site_config: SiteConfig | None = None
    build_constants: Mapping[str, Any] = field(default_factory=dict)
    content_key: str | None = None
    template: str | None = None
    body: Any = NO_BODY
    mode: RenderMode = RenderMode.FINAL
    markers: bool = False

    @property
    def is_discovery(self) -> bool:
        return self.mode is RenderMode.DISCOVERY

    @property
    def has_body(self) -> bool:
        return self.body is not NO_BODY

    @property
    def index_key(self) -> str | None:
        return self.site_config.index if self.site_config else None

    def replace(self, **changes: Any) -> RenderContext:
        return dataclasses.replace(self, **changes)

    def merged(self, extra: Mapping[str, Any]) -> RenderContext:
        """New context whose scope is the current one shadowed by ``extra``."""
        return dataclasses.replace(self, data={**self.data, **extra})

    def without(self, *keys: str) -> RenderContext:
        return dataclasses.replace(self, data={k: v for k, v in self.data.items() if k not in keys})
