"""Core data types shared by the interpreter, the resolver and the orchestrator.

Everything here is immutable once built: stores are filled by the loaders
before a build starts, and the page registry is frozen right after graph
resolution.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

CONTENT_KEY_FIELD = "content-key"
HTML_CONTENT_FIELD = "html/content"


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class ContentItem:
    """A parsed content record, unique by ``(key, lang)``."""

    key: str
    lang: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))

    @property
    def title(self) -> Any:
        return self.fields.get("title")

    @property
    def slug(self) -> Any:
        return self.fields.get("slug")

    @property
    def template(self) -> Any:
        return self.fields.get("template")

    @property
    def is_routable(self) -> bool:
        """Only items with both a slug and a title become pages."""
        return self.slug is not None and self.title is not None

    @property
    def data(self) -> dict[str, Any]:
        """Fields as a scope mapping, including the item's own content key."""
        return {**self.fields, CONTENT_KEY_FIELD: self.key}


@dataclass(frozen=True)
class SectionRef:
    """A fragment rendered with ``section-id`` that links can target."""

    section_id: str
    content_key: str
    parent: str | None


@dataclass(frozen=True)
class PageMetadata:
    """Registry entry for one routable (content-key, lang) pair."""

    content_key: str
    lang: str
    slug: str
    title: Any
    path: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))


@dataclass
class Page:
    """A page to render and write. ``html`` is filled by the Render stage."""

    content_key: str
    lang: str
    slug: str
    template: str
    path: str
    metadata: Mapping[str, Any]
    html: str | None = None

    @classmethod
    def from_metadata(cls, meta: PageMetadata, template: str) -> Page:
        return cls(
            content_key=meta.content_key,
            lang=meta.lang,
            slug=meta.slug,
            template=template,
            path=meta.path,
            metadata=meta.fields,
        )


class ContentStore:
    """Read-only view of all content, keyed by language then content key."""

    def __init__(self, items: Iterable[ContentItem] = ()) -> None:
        by_lang: dict[str, dict[str, ContentItem]] = {}
        for item in items:
            by_lang.setdefault(item.lang, {})[item.key] = item
        self._items: Mapping[str, Mapping[str, ContentItem]] = MappingProxyType(
            {lang: MappingProxyType(dict(sorted(entries.items()))) for lang, entries in sorted(by_lang.items())}
        )

    @classmethod
    def from_mapping(cls, content: Mapping[str, Mapping[str, Mapping[str, Any]]]) -> ContentStore:
        """Build a store from ``{lang: {key: fields}}``."""
        return cls(
            ContentItem(key=key, lang=lang, fields=fields)
            for lang, entries in content.items()
            for key, fields in entries.items()
        )

    def get(self, lang: str, key: str) -> ContentItem | None:
        return self._items.get(lang, {}).get(key)

    def for_lang(self, lang: str) -> Mapping[str, ContentItem]:
        return self._items.get(lang, MappingProxyType({}))

    def languages_for(self, key: str) -> tuple[str, ...]:
        return tuple(lang for lang, entries in self._items.items() if key in entries)

    def keys(self) -> set[str]:
        return {key for entries in self._items.values() for key in entries}

    @property
    def languages(self) -> tuple[str, ...]:
        return tuple(self._items)

    def __contains__(self, key: object) -> bool:
        return any(key in entries for entries in self._items.values())

    def __iter__(self) -> Iterator[ContentItem]:
        for entries in self._items.values():
            yield from entries.values()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._items.values())


class TemplateStore(Mapping[str, Any]):
    """Read-only mapping of template name to directive tree."""

    def __init__(self, templates: Mapping[str, Any] | None = None) -> None:
        self._templates: Mapping[str, Any] = MappingProxyType(dict(templates or {}))

    def __getitem__(self, name: str) -> Any:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


@dataclass(frozen=True)
class PageRegistry:
    """``lang -> content-key -> PageMetadata`` plus the section index.

    Built exactly once per build, after graph resolution.
    """

    pages: Mapping[str, Mapping[str, PageMetadata]] = field(default_factory=dict)
    sections: Mapping[str, SectionRef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "pages",
            MappingProxyType({lang: _freeze(entries) for lang, entries in self.pages.items()}),
        )
        object.__setattr__(self, "sections", _freeze(self.sections))

    @classmethod
    def from_entries(
        cls, entries: Iterable[PageMetadata], sections: Mapping[str, SectionRef] | None = None
    ) -> PageRegistry:
        pages: dict[str, dict[str, PageMetadata]] = {}
        for meta in entries:
            pages.setdefault(meta.lang, {})[meta.content_key] = meta
        return cls(pages=pages, sections=sections or {})

    def get(self, lang: str, key: str) -> PageMetadata | None:
        return self.pages.get(lang, {}).get(key)

    def section(self, key: str) -> SectionRef | None:
        return self.sections.get(key)

    def __iter__(self) -> Iterator[PageMetadata]:
        for lang in sorted(self.pages):
            for key in sorted(self.pages[lang]):
                yield self.pages[lang][key]

    def __len__(self) -> int:
        return sum(len(entries) for entries in self.pages.values())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        lang, key = item
        return self.get(lang, key) is not None
