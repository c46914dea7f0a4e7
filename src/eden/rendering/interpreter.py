"""Directive interpreter.

Walks a template tree against a :class:`RenderContext` and returns the
rendered tree together with everything it noticed on the way: warnings, link
targets, linkable sections and the content keys it pulled in through
``eden/render``. Lookup problems never raise; they degrade to an inline
placeholder plus a structured warning. Only a tree that cannot be classified
at all raises :class:`TemplateShapeError`.

Every internal evaluation returns ``(value, Diagnostics)`` and callers combine
the diagnostics of their children, so one render call shares no mutable state
with any other.
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from eden.core.models import HTML_CONTENT_FIELD, SectionRef
from eden.core.routing import parent_key
from eden.exceptions import TemplateShapeError
from eden.rendering.context import NO_BODY, RenderContext
from eden.rendering.directives import (
    ALL_CONTENT,
    COMPARISON_OPERATORS,
    EACH_GROUP_ITEMS,
    EACH_GROUP_KEY,
    EACH_INDEX,
    EACH_KEY,
    EACH_VALUE,
    LINK_HREF,
    LINK_TITLE,
    Directive,
    is_directive_keyword,
    lookup_directive,
    normalize_keyword,
)
from eden.rendering.each import Entry, Group, apply_options, build_options, split_options, to_entries, truthy
from eden.rendering.html import Comment, Fragment, Placeholder, add_attributes, describe, parse_tag, to_html
from eden.rendering.warnings import (
    EdenWarning,
    InvalidKeyOrPath,
    MissingBodyInContext,
    MissingCollectionKey,
    MissingConfigKey,
    MissingIncludeTemplate,
    MissingKey,
    MissingPageContent,
    MissingPath,
    MissingRenderTemplate,
    NotAString,
    UnknownDirective,
    UnsupportedEachCollectionSpec,
    WithDirectiveDataNotFound,
)

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}

_NAV_ROOT = "root"
_NAV_PARENT = "parent"


@dataclass(frozen=True)
class Diagnostics:
    """What a render produced besides the tree itself."""

    warnings: tuple[EdenWarning, ...] = ()
    links: tuple[str, ...] = ()
    sections: tuple[tuple[str, SectionRef], ...] = ()
    rendered: tuple[str, ...] = ()

    def __add__(self, other: Diagnostics) -> Diagnostics:
        if not other:
            return self
        if not self:
            return other
        return Diagnostics(
            warnings=self.warnings + other.warnings,
            links=self.links + other.links,
            sections=self.sections + other.sections,
            rendered=self.rendered + other.rendered,
        )

    def __bool__(self) -> bool:
        return bool(self.warnings or self.links or self.sections or self.rendered)

    @classmethod
    def warn(cls, *warnings: EdenWarning) -> Diagnostics:
        return cls(warnings=tuple(warnings))


EMPTY = Diagnostics()

Evaluated = tuple[Any, Diagnostics]
Handler = Callable[[list[Any], list[Any], RenderContext], Evaluated]


def combine(parts: Sequence[Diagnostics]) -> Diagnostics:
    result = EMPTY
    for part in parts:
        result = result + part
    return result


@dataclass(frozen=True)
class RenderResult:
    node: Any
    warnings: tuple[EdenWarning, ...] = ()
    links: tuple[str, ...] = ()
    sections: tuple[tuple[str, SectionRef], ...] = ()
    rendered_content: tuple[str, ...] = ()

    @classmethod
    def of(cls, node: Any, diagnostics: Diagnostics) -> RenderResult:
        return cls(
            node=node,
            warnings=diagnostics.warnings,
            links=diagnostics.links,
            sections=diagnostics.sections,
            rendered_content=diagnostics.rendered,
        )

    @property
    def html(self) -> str:
        return to_html(self.node)


def _lookup(scope: Any, key: Any) -> Any:
    if not isinstance(scope, Mapping):
        return None
    try:
        return scope.get(key)
    except TypeError:
        # unhashable key, e.g. a placeholder produced by a nested lookup
        return None


def _walk(value: Any, path: Sequence[Any]) -> Any:
    for segment in path:
        if isinstance(value, Mapping):
            value = _lookup(value, segment)
        elif isinstance(value, Sequence) and not isinstance(value, str) and isinstance(segment, int):
            value = value[segment] if -len(value) <= segment < len(value) else None
        else:
            return None
        if value is None:
            return None
    return value


def _data(value: Any) -> Any:
    """Sequences read from content data are content, never template elements."""
    if isinstance(value, (list, tuple)) and not isinstance(value, (Fragment, Placeholder)):
        return Fragment(_data(item) for item in value)
    return value


def _key(value: Any) -> Any:
    """Keys may be written as keywords: ``:title`` and ``title`` are the same key."""
    return normalize_keyword(value) if isinstance(value, str) else value


def _as_path(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)) and not isinstance(value, Placeholder):
        return [_key(segment) for segment in value]
    return [_key(value)]


def _is_all_content(spec: Any) -> bool:
    if isinstance(spec, str):
        return normalize_keyword(spec) == ALL_CONTENT
    return (
        isinstance(spec, (list, tuple))
        and len(spec) == 1
        and isinstance(spec[0], str)
        and normalize_keyword(spec[0]) == ALL_CONTENT
    )


def _compare(op: str, left: Any, right: Any) -> bool:
    try:
        return bool(_COMPARATORS[op](left, right))
    except TypeError:
        return False


class Interpreter:
    """Evaluates template trees.

    The interpreter itself is stateless and safe to share between threads.
    """

    def __init__(self) -> None:
        self._handlers: dict[Directive, Handler] = {
            Directive.GET: self._get,
            Directive.GET_IN: self._get_in,
            Directive.SITE_CONFIG: self._site_config,
            Directive.IF: self._if,
            Directive.EACH: self._each,
            Directive.WITH: self._with,
            Directive.LINK: self._link,
            Directive.RENDER: self._render,
            Directive.INCLUDE: self._include,
            Directive.BODY: self._body,
            Directive.T: self._t,
        }

    def render(self, node: Any, context: RenderContext) -> RenderResult:
        return RenderResult.of(*self.evaluate(node, context))

    def evaluate(self, node: Any, ctx: RenderContext) -> Evaluated:
        if node is None or isinstance(node, (Fragment, Placeholder, Comment, Markup)):
            return node, EMPTY
        if isinstance(node, (list, tuple)):
            return self._evaluate_sequence(node, ctx)
        if isinstance(node, Mapping):
            return self._evaluate_mapping(node, ctx)
        if isinstance(node, (set, frozenset)):
            raise TemplateShapeError(node, "sets are not valid template nodes")
        return node, EMPTY

    def _evaluate_sequence(self, node: Sequence[Any], ctx: RenderContext) -> Evaluated:
        if not node:
            return Fragment(), EMPTY
        head = node[0]
        if isinstance(head, str):
            if is_directive_keyword(head):
                return self._dispatch(list(node), ctx)
            return self._element(node, ctx)
        if head is None or isinstance(head, (list, tuple)):
            return self._fragment(node, ctx)
        raise TemplateShapeError(node, f"cannot classify a node headed by {head!r}")

    def _evaluate_mapping(self, node: Mapping[Any, Any], ctx: RenderContext) -> Evaluated:
        result: dict[Any, Any] = {}
        parts = []
        for key, value in node.items():
            result[key], diagnostics = self.evaluate(value, ctx)
            parts.append(diagnostics)
        return result, combine(parts)

    def _argument(self, node: Any, ctx: RenderContext) -> Evaluated:
        """Evaluate a directive argument: nested directive forms run, literals are kept as written."""
        if isinstance(node, (list, tuple)) and node and is_directive_keyword(node[0]):
            return self.evaluate(node, ctx)
        if isinstance(node, Mapping):
            result: dict[Any, Any] = {}
            parts = []
            for key, value in node.items():
                result[key], diagnostics = self._argument(value, ctx)
                parts.append(diagnostics)
            return result, combine(parts)
        if isinstance(node, (list, tuple)):
            values = []
            parts = []
            for item in node:
                value, diagnostics = self._argument(item, ctx)
                values.append(value)
                parts.append(diagnostics)
            return values, combine(parts)
        return node, EMPTY

    def _children(self, nodes: Sequence[Any], ctx: RenderContext) -> tuple[list[Any], Diagnostics]:
        out: list[Any] = []
        parts = []
        for child in nodes:
            value, diagnostics = self.evaluate(child, ctx)
            parts.append(diagnostics)
            if isinstance(value, Fragment):
                out.extend(value)
            elif value is not None:
                out.append(value)
        return out, combine(parts)

    def _fragment(self, node: Sequence[Any], ctx: RenderContext) -> Evaluated:
        children, diagnostics = self._children(node, ctx)
        return Fragment(children), diagnostics

    def _element(self, node: Sequence[Any], ctx: RenderContext) -> Evaluated:
        head = node[0]
        if not head.strip():
            raise TemplateShapeError(node, "empty tag")
        parse_tag(head)

        rest = list(node[1:])
        out: list[Any] = [head]
        parts = []
        if rest and isinstance(rest[0], Mapping):
            attributes, diagnostics = self._evaluate_mapping(rest.pop(0), ctx)
            out.append(attributes)
            parts.append(diagnostics)
        children, diagnostics = self._children(rest, ctx)
        out.extend(children)
        parts.append(diagnostics)
        return out, combine(parts)

    def _body_forms(self, forms: Sequence[Any], ctx: RenderContext) -> Evaluated:
        """Render directive body forms as one fragment."""
        children, diagnostics = self._children(forms, ctx)
        return Fragment(children), diagnostics

    def _marker(self, ctx: RenderContext, text: str) -> Comment | None:
        return Comment(text) if ctx.markers else None

    def _template_name(self, ctx: RenderContext) -> str | None:
        if ctx.template:
            return ctx.template
        declared = ctx.data.get("template") if isinstance(ctx.data, Mapping) else None
        return declared if isinstance(declared, str) else None

    def _dispatch(self, form: list[Any], ctx: RenderContext) -> Evaluated:
        keyword = form[0]
        directive = lookup_directive(keyword)
        if directive is None:
            name = normalize_keyword(keyword)
            logger.debug("Unknown directive %s in %s", name, ctx.content_key)
            warning = UnknownDirective(directive=name, content_key=ctx.content_key)
            return self._marker(ctx, f"unknown directive {name}"), Diagnostics.warn(warning)
        return self._handlers[directive](form[1:], form, ctx)

    # -- lookups -----------------------------------------------------------

    def _get(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        raw_key, diagnostics = self._argument(args[0] if args else None, ctx)
        key = _key(raw_key)
        value = _lookup(ctx.data, key)
        if value is None:
            if len(args) > 1:
                default, default_diagnostics = self.evaluate(args[1], ctx)
                return default, diagnostics + default_diagnostics
            warning = MissingKey(
                directive=Directive.GET.value,
                key=key,
                content_key=ctx.content_key,
                template=self._template_name(ctx),
                lang=ctx.lang,
            )
            return Placeholder.for_form(Directive.GET.value, key), diagnostics + Diagnostics.warn(warning)
        if key == HTML_CONTENT_FIELD and isinstance(value, str):
            return Markup(value), diagnostics
        return _data(value), diagnostics

    def _get_in(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        raw_path, diagnostics = self._argument(args[0] if args else [], ctx)
        path = _as_path(raw_path) if raw_path is not None else []
        value = _walk(ctx.data, path) if path else ctx.data
        if value is None:
            if len(args) > 1:
                default, default_diagnostics = self.evaluate(args[1], ctx)
                return default, diagnostics + default_diagnostics
            warning = MissingPath(path=path, content_key=ctx.content_key)
            return Placeholder.for_form(Directive.GET_IN.value, path), diagnostics + Diagnostics.warn(warning)
        if path and path[-1] == HTML_CONTENT_FIELD and isinstance(value, str):
            return Markup(value), diagnostics
        return _data(value), diagnostics

    def _site_config(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        evaluated, diagnostics = self._argument(args, ctx)
        path = _as_path(evaluated[0] if len(evaluated) == 1 else evaluated)
        config = ctx.site_config.as_data() if ctx.site_config is not None else {}
        value = _walk(config, path)
        if value is None:
            warning = MissingConfigKey(path=path, content_key=ctx.content_key)
            return Placeholder.for_form(Directive.SITE_CONFIG.value, path), diagnostics + Diagnostics.warn(warning)
        return _data(value), diagnostics

    # -- control flow ------------------------------------------------------

    def _condition(self, node: Any, ctx: RenderContext) -> tuple[bool, Diagnostics]:
        if (
            isinstance(node, (list, tuple))
            and len(node) == 3
            and isinstance(node[0], str)
            and normalize_keyword(node[0]) in COMPARISON_OPERATORS
        ):
            left, left_diagnostics = self._argument(node[1], ctx)
            right, right_diagnostics = self._argument(node[2], ctx)
            return _compare(normalize_keyword(node[0]), left, right), left_diagnostics + right_diagnostics
        value, diagnostics = self.evaluate(node, ctx)
        return truthy(value), diagnostics

    def _if(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        if not args:
            return None, EMPTY
        holds, diagnostics = self._condition(args[0], ctx)
        branch_index = 1 if holds else 2
        if len(args) <= branch_index:
            return None, diagnostics
        value, branch_diagnostics = self.evaluate(args[branch_index], ctx)
        return value, diagnostics + branch_diagnostics

    def _collection(self, spec: Any, ctx: RenderContext) -> tuple[Any, Diagnostics, bool]:
        """Resolve an ``eden/each`` collection spec.

        Returns ``(collection, diagnostics, ok)``; ``ok`` is false when nothing
        should be rendered.
        """
        if _is_all_content(spec):
            items = [item.data for item in ctx.content.for_lang(ctx.lang).values()]
            return items, EMPTY, True

        if isinstance(spec, str):
            spec = _key(spec)
            value = _lookup(ctx.data, spec)
            if value is None:
                warning = MissingCollectionKey(key=spec, content_key=ctx.content_key)
                return None, Diagnostics.warn(warning), False
            diagnostics = EMPTY
        elif isinstance(spec, (list, tuple)) and spec and is_directive_keyword(spec[0]):
            value, diagnostics = self.evaluate(spec, ctx)
            if value is None or isinstance(value, Placeholder):
                return None, diagnostics, False
            if _is_all_content(value):
                return self._collection(value, ctx)
        elif isinstance(spec, (list, tuple, Mapping)):
            value, diagnostics = spec, EMPTY
        else:
            warning = UnsupportedEachCollectionSpec(spec=spec, content_key=ctx.content_key)
            return None, Diagnostics.warn(warning), False

        if isinstance(value, (Mapping, list, tuple)):
            return value, diagnostics, True
        warning = UnsupportedEachCollectionSpec(spec=spec, content_key=ctx.content_key)
        return None, diagnostics + Diagnostics.warn(warning), False

    def _each(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        if not args:
            warning = UnsupportedEachCollectionSpec(spec=None, content_key=ctx.content_key)
            return self._marker(ctx, "eden/each without a collection"), Diagnostics.warn(warning)

        raw_options, body = split_options(args[1:])
        evaluated_options, option_diagnostics = self._argument(raw_options, ctx)
        options = build_options(evaluated_options)

        collection, diagnostics, ok = self._collection(args[0], ctx)
        diagnostics = option_diagnostics + diagnostics
        if not ok:
            return self._marker(ctx, f"eden/each {describe(args[0])} rendered nothing"), diagnostics

        selected = apply_options(to_entries(collection), options)
        out: list[Any] = []
        parts = [diagnostics]
        for index, selection in enumerate(selected):
            scope = self._each_scope(selection, index)
            children, item_diagnostics = self._children(body, ctx.merged(scope))
            out.extend(children)
            parts.append(item_diagnostics)
        return Fragment(out), combine(parts)

    @staticmethod
    def _each_scope(selection: Entry | Group, index: int) -> dict[str, Any]:
        if isinstance(selection, Group):
            return {
                EACH_GROUP_KEY: selection.key,
                EACH_GROUP_ITEMS: [entry.value for entry in selection.entries],
                EACH_INDEX: index,
            }
        scope: dict[str, Any] = {}
        if isinstance(selection.value, Mapping):
            scope.update(selection.value)
        if selection.keyed:
            scope[EACH_KEY] = selection.key
            scope[EACH_VALUE] = selection.value
        elif not isinstance(selection.value, Mapping):
            scope[EACH_VALUE] = selection.value
        scope[EACH_INDEX] = index
        return scope

    def _with(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        """Merge a mapping found under the key into the scope for the body.

        A value that is present but not a mapping leaves the scope unchanged; a
        missing value warns and the body still renders against the outer scope.
        """
        raw_key, diagnostics = self._argument(args[0] if args else None, ctx)
        key = _key(raw_key)
        value = _lookup(ctx.data, key)
        if value is None:
            diagnostics = diagnostics + Diagnostics.warn(
                WithDirectiveDataNotFound(data_key=key, content_key=ctx.content_key)
            )
            scoped = ctx
        elif isinstance(value, Mapping):
            scoped = ctx.merged(value)
        else:
            scoped = ctx
        body, body_diagnostics = self._body_forms(args[1:], scoped)
        return body, diagnostics + body_diagnostics

    # -- pages, templates and strings --------------------------------------

    def _link_target(self, spec: Any, ctx: RenderContext) -> tuple[str | None, str, str | None]:
        """Normalize a link spec to ``(content_key, lang, nav)``."""
        if isinstance(spec, str):
            return _key(spec), ctx.lang, None
        if isinstance(spec, Mapping):
            nav = spec.get("nav")
            nav = normalize_keyword(nav) if isinstance(nav, str) else None
            key = spec.get("content-key")
            lang = spec.get("lang") or ctx.lang
            if key is None and nav is None:
                key = ctx.content_key
            return (key if isinstance(key, str) else None), str(lang), nav
        return None, ctx.lang, None

    def _nav_key(self, nav: str, lang: str, ctx: RenderContext) -> str | None:
        if nav == _NAV_ROOT:
            return ctx.index_key
        if ctx.registry is not None and not ctx.is_discovery:
            registry = ctx.registry
            return parent_key(ctx.content_key, ctx.index_key, lambda key: registry.get(lang, key) is not None)
        return parent_key(ctx.content_key, ctx.index_key, lambda key: ctx.content.get(lang, key) is not None)

    def _resolve_link(self, key: str, lang: str, ctx: RenderContext) -> tuple[str, Any] | None:
        registry = ctx.registry
        if registry is None:
            return None
        section = registry.section(key)
        if section is not None and section.parent is not None:
            page = registry.get(lang, section.parent)
            if page is not None:
                item = ctx.content.get(lang, key)
                title = item.title if item is not None and item.title is not None else page.title
                return f"{page.path}#{section.section_id}", title
        page = registry.get(lang, key)
        if page is None:
            return None
        return page.path, page.title

    def _link(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        spec, diagnostics = self._argument(args[0] if args else None, ctx)
        body = args[1:]
        key, lang, nav = self._link_target(spec, ctx)

        if nav == _NAV_PARENT and ctx.content_key is not None and ctx.content_key == ctx.index_key:
            return None, diagnostics
        if nav is not None:
            key = self._nav_key(nav, lang, ctx)

        if ctx.is_discovery:
            if key is None:
                return None, diagnostics
            item = ctx.content.get(lang, key)
            title = item.title if item is not None and item.title is not None else key
            rendered, body_diagnostics = self._body_forms(body, ctx.merged({LINK_HREF: "#", LINK_TITLE: title}))
            return rendered, diagnostics + Diagnostics(links=(key,)) + body_diagnostics

        resolved = self._resolve_link(key, lang, ctx) if key is not None else None
        if resolved is None:
            warning = MissingPageContent(
                directive=Directive.LINK.value,
                lang=lang,
                spec=spec,
                content_key=key,
                parent=ctx.content_key,
            )
            rendered, body_diagnostics = self._body_forms(body, ctx.without(LINK_HREF, LINK_TITLE))
            placeholder = Placeholder.for_form(Directive.LINK.value, key if key is not None else spec)
            return Fragment([placeholder, *rendered]), diagnostics + Diagnostics.warn(warning) + body_diagnostics

        href, title = resolved
        rendered, body_diagnostics = self._body_forms(body, ctx.merged({LINK_HREF: href, LINK_TITLE: title}))
        return rendered, diagnostics + body_diagnostics

    def _render_template(self, name: str, ctx: RenderContext) -> Evaluated:
        return self.evaluate(ctx.templates[name], ctx.replace(template=name))

    def _render(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        spec, diagnostics = self._argument(args[0] if args else None, ctx)

        if isinstance(spec, str):
            if ctx.content.get(ctx.lang, spec) is None and spec in ctx.templates:
                value, template_diagnostics = self._render_template(spec, ctx)
                return value, diagnostics + template_diagnostics
            data_key, template_name, section_id = spec, None, None
        elif isinstance(spec, Mapping):
            data_key = spec.get("data")
            template_name = spec.get("template")
            section_id = spec.get("section-id")
            if data_key is None and isinstance(template_name, str) and template_name in ctx.templates:
                value, template_diagnostics = self._render_template(template_name, ctx)
                return value, diagnostics + template_diagnostics
        else:
            data_key, template_name, section_id = None, None, None

        item = ctx.content.get(ctx.lang, data_key) if isinstance(data_key, str) else None
        if item is None:
            warning = MissingPageContent(
                directive=Directive.RENDER.value,
                lang=ctx.lang,
                spec=spec,
                content_key=data_key if isinstance(data_key, str) else None,
                parent=ctx.content_key,
            )
            return Placeholder.for_form(Directive.RENDER.value, data_key), diagnostics + Diagnostics.warn(warning)

        template_name = template_name or item.template or data_key
        if template_name not in ctx.templates:
            warning = MissingRenderTemplate(
                lang=ctx.lang,
                template=template_name,
                spec=spec,
                content_key=data_key,
                parent=ctx.content_key,
            )
            return Placeholder.for_form(Directive.RENDER.value, data_key), diagnostics + Diagnostics.warn(warning)

        scoped = ctx.replace(
            data={**ctx.build_constants, **item.data, "lang": ctx.lang},
            content_key=data_key,
            template=template_name,
            body=NO_BODY,
        )
        value, template_diagnostics = self.evaluate(ctx.templates[template_name], scoped)
        used = Diagnostics(rendered=(data_key,))
        if isinstance(section_id, str) and section_id:
            used = used + Diagnostics(
                sections=((data_key, SectionRef(section_id=section_id, content_key=data_key, parent=ctx.content_key)),)
            )
            value = add_attributes(value, {"id": section_id})
        return value, diagnostics + template_diagnostics + used

    def _include(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        name, diagnostics = self._argument(args[0] if args else None, ctx)
        if not isinstance(name, str) or name not in ctx.templates:
            warning = MissingIncludeTemplate(template=name, content_key=ctx.content_key)
            return self._marker(ctx, f"missing include {describe(name)}"), diagnostics + Diagnostics.warn(warning)
        scoped = ctx
        if len(args) > 1:
            override, override_diagnostics = self._argument(args[1], ctx)
            diagnostics = diagnostics + override_diagnostics
            if isinstance(override, Mapping):
                scoped = ctx.merged(override)
        value, template_diagnostics = self._render_template(name, scoped)
        return value, diagnostics + template_diagnostics

    def _body(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        if ctx.has_body:
            return ctx.body, EMPTY
        warning = MissingBodyInContext(content_key=ctx.content_key, template=self._template_name(ctx))
        return self._marker(ctx, "eden/body outside a wrapper"), Diagnostics.warn(warning)

    def _t(self, args: list[Any], form: list[Any], ctx: RenderContext) -> Evaluated:
        raw_key, diagnostics = self._argument(args[0] if args else None, ctx)
        key = _key(raw_key)
        extra = args[1] if len(args) > 1 else None

        if isinstance(key, str):
            template_string = _lookup(ctx.strings, key)
        elif isinstance(key, (list, tuple)) and not isinstance(key, Placeholder) and key:
            key = _as_path(key)
            template_string = _lookup(ctx.strings, "/".join(map(str, key))) or _walk(ctx.strings, key)
        else:
            warning = InvalidKeyOrPath(path=key, content_key=ctx.content_key)
            return Placeholder.for_form(Directive.T.value, key), diagnostics + Diagnostics.warn(warning)

        default = extra if isinstance(extra, str) else None
        if not isinstance(template_string, str):
            if default is not None:
                return default, diagnostics
            warning = MissingKey(
                directive=Directive.T.value,
                key=key,
                content_key=ctx.content_key,
                template=self._template_name(ctx),
                lang=ctx.lang,
            )
            return Placeholder.for_form(Directive.T.value, key), diagnostics + Diagnostics.warn(warning)

        interpolations: Mapping[str, Any] = {}
        if isinstance(extra, Mapping):
            interpolations, interpolation_diagnostics = self._argument(extra, ctx)
            diagnostics = diagnostics + interpolation_diagnostics

        warnings: list[EdenWarning] = []

        def substitute(match: re.Match[str]) -> str:
            value = _lookup(interpolations, match.group(1).strip())
            if isinstance(value, str):
                return value
            warnings.append(
                NotAString(
                    content_key=ctx.content_key,
                    lang=ctx.lang,
                    value=value,
                    template_variable=match.group(0),
                    template_string=template_string,
                    form=list(form),
                )
            )
            return match.group(0)

        translated = _PLACEHOLDER_RE.sub(substitute, template_string)
        return translated, diagnostics + Diagnostics.warn(*warnings)
