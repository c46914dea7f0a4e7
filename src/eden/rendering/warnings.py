"""Structured, non-fatal diagnostics.

Every warning is a frozen pydantic model discriminated by its ``type`` field.
Field names are snake_case in Python and hyphenated when serialized, so a
dumped warning looks like::

    {"type": "missing-key", "directive": "eden/get", "key": "title", "content-key": "home"}

``WARNING_ADAPTER`` validates a single serialized warning against the union of
all warning types; tests and the report both rely on it.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def _hyphenate(name: str) -> str:
    return name.replace("_", "-")


class EdenWarning(BaseModel):
    """Base class for all warnings."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=_hyphenate,
    )

    # "page" warnings come from the interpreter, "build" warnings from the stages around it
    level: ClassVar[str] = "page"

    type: str

    @property
    def message(self) -> str:
        return self.type

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def _where(content_key: str | None, lang: str | None = None) -> str:
    parts = []
    if content_key:
        parts.append(f"in '{content_key}'")
    if lang:
        parts.append(f"({lang})")
    return (" " + " ".join(parts)) if parts else ""


class MissingKey(EdenWarning):
    type: Literal["missing-key"] = "missing-key"
    directive: str = "eden/get"
    key: Any
    content_key: str | None = None
    template: str | None = None
    lang: str | None = None

    @property
    def message(self) -> str:
        template = f" (template '{self.template}')" if self.template else ""
        return f"{self.directive}: key '{self.key}' not found{_where(self.content_key, self.lang)}{template}"


class MissingPath(EdenWarning):
    type: Literal["missing-path"] = "missing-path"
    directive: str = "eden/get-in"
    path: list[Any]
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"{self.directive}: path {self.path} not found{_where(self.content_key)}"


class MissingConfigKey(EdenWarning):
    type: Literal["missing-config-key"] = "missing-config-key"
    directive: str = "eden/site-config"
    path: list[Any]
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"site configuration has no value at {self.path}{_where(self.content_key)}"


class MissingCollectionKey(EdenWarning):
    type: Literal["missing-collection-key"] = "missing-collection-key"
    directive: str = "eden/each"
    key: Any
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"eden/each: collection '{self.key}' not found{_where(self.content_key)}"


class UnsupportedEachCollectionSpec(EdenWarning):
    type: Literal["unsupported-each-collection-spec"] = "unsupported-each-collection-spec"
    directive: str = "eden/each"
    spec: Any
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"eden/each: cannot iterate over {self.spec!r}{_where(self.content_key)}"


class MissingPageContent(EdenWarning):
    type: Literal["missing-page-content"] = "missing-page-content"
    directive: str
    lang: str | None = None
    spec: Any = None
    content_key: str | None = None
    parent: str | None = None

    @property
    def message(self) -> str:
        origin = f" from '{self.parent}'" if self.parent else ""
        return f"{self.directive}: no page '{self.content_key}' for language {self.lang}{origin}"


class MissingRenderTemplate(EdenWarning):
    type: Literal["missing-render-template"] = "missing-render-template"
    directive: str = "eden/render"
    lang: str | None = None
    template: Any
    spec: Any = None
    content_key: str | None = None
    parent: str | None = None

    @property
    def message(self) -> str:
        return f"eden/render: template '{self.template}' not found for '{self.content_key}'{_where(self.parent)}"


class WithDirectiveDataNotFound(EdenWarning):
    type: Literal["with-directive-data-not-found"] = "with-directive-data-not-found"
    directive: str = "eden/with"
    data_key: Any
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"eden/with: no data under '{self.data_key}'{_where(self.content_key)}"


class MissingIncludeTemplate(EdenWarning):
    type: Literal["missing-include-template"] = "missing-include-template"
    directive: str = "eden/include"
    template: Any
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"eden/include: template '{self.template}' not found{_where(self.content_key)}"


class MissingBodyInContext(EdenWarning):
    type: Literal["missing-body-in-context"] = "missing-body-in-context"
    directive: str = "eden/body"
    content_key: str | None = None
    template: str | None = None

    @property
    def message(self) -> str:
        return f"eden/body used outside a wrapper{_where(self.content_key)}"


class InvalidKeyOrPath(EdenWarning):
    type: Literal["invalid-key-or-path"] = "invalid-key-or-path"
    directive: str = "eden/t"
    path: Any
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"{self.directive}: {self.path!r} is neither a key nor a path{_where(self.content_key)}"


class NotAString(EdenWarning):
    type: Literal["not-a-string"] = "not-a-string"
    directive: str = "eden/t"
    content_key: str | None = None
    lang: str | None = None
    value: Any = None
    template_variable: str
    template_string: str
    form: Any = None

    @property
    def message(self) -> str:
        return (
            f"{self.directive}: {self.template_variable} in \"{self.template_string}\" "
            f"got non-string value {self.value!r}{_where(self.content_key, self.lang)}"
        )


class UnknownDirective(EdenWarning):
    type: Literal["unknown-directive"] = "unknown-directive"
    directive: str
    content_key: str | None = None

    @property
    def message(self) -> str:
        return f"unknown directive '{self.directive}'{_where(self.content_key)}"


class MissingContent(EdenWarning):
    """Content referenced but absent everywhere, or present but never reached."""

    level: ClassVar[str] = "build"

    type: Literal["missing-content"] = "missing-content"
    content_key: str
    reason: Literal["not-found", "orphaned"] = "not-found"

    @property
    def message(self) -> str:
        if self.reason == "orphaned":
            return f"content '{self.content_key}' is not reachable from any render root"
        return f"page '{self.content_key}' not found in any language"


class MissingPageTemplate(EdenWarning):
    level: ClassVar[str] = "build"

    type: Literal["missing-page-template"] = "missing-page-template"
    template: str
    content_key: str
    lang: str

    @property
    def message(self) -> str:
        return f"template '{self.template}' not found for page '{self.content_key}' ({self.lang}); page skipped"


class InvalidContent(EdenWarning):
    level: ClassVar[str] = "build"

    type: Literal["invalid-content"] = "invalid-content"
    file: str
    error: str

    @property
    def message(self) -> str:
        return f"could not load content file {self.file}: {self.error}"


class InvalidTemplate(EdenWarning):
    level: ClassVar[str] = "build"

    type: Literal["invalid-template"] = "invalid-template"
    file: str
    error: str

    @property
    def message(self) -> str:
        return f"could not load template file {self.file}: {self.error}"


AnyWarning = Annotated[
    MissingKey
    | MissingPath
    | MissingConfigKey
    | MissingCollectionKey
    | UnsupportedEachCollectionSpec
    | MissingPageContent
    | MissingRenderTemplate
    | WithDirectiveDataNotFound
    | MissingIncludeTemplate
    | MissingBodyInContext
    | InvalidKeyOrPath
    | NotAString
    | UnknownDirective
    | MissingContent
    | MissingPageTemplate
    | InvalidContent
    | InvalidTemplate,
    Field(discriminator="type"),
]

WARNING_ADAPTER: TypeAdapter[AnyWarning] = TypeAdapter(AnyWarning)
WARNING_TYPES: tuple[str, ...] = (
    "missing-key",
    "missing-path",
    "missing-config-key",
    "missing-collection-key",
    "unsupported-each-collection-spec",
    "missing-page-content",
    "missing-render-template",
    "with-directive-data-not-found",
    "missing-include-template",
    "missing-body-in-context",
    "invalid-key-or-path",
    "not-a-string",
    "unknown-directive",
    "missing-content",
    "missing-page-template",
    "invalid-content",
    "invalid-template",
)
