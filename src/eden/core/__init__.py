from eden.core.models import (
    CONTENT_KEY_FIELD,
    HTML_CONTENT_FIELD,
    ContentItem,
    ContentStore,
    Page,
    PageMetadata,
    PageRegistry,
    SectionRef,
    TemplateStore,
)
from eden.core.routing import page_path, parent_key, route_slug

__all__ = [
    "CONTENT_KEY_FIELD",
    "HTML_CONTENT_FIELD",
    "ContentItem",
    "ContentStore",
    "Page",
    "PageMetadata",
    "PageRegistry",
    "SectionRef",
    "TemplateStore",
    "page_path",
    "parent_key",
    "route_slug",
]
