"""Rendered-tree node types and the HTML serializer.

A rendered tree uses the same nested-list shape as a template, with the
directives already expanded:

    ["div.card#intro", {"data-x": 1}, ["h1", "Title"], Markup("<p>raw</p>")]

Plain strings are escaped on output; ``markupsafe.Markup`` values are emitted
as-is. ``Fragment`` holds several sibling nodes and is spliced into its
parent. ``Comment`` becomes an HTML comment and is only produced for dev builds.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup, escape

from eden.exceptions import TemplateShapeError

MISSING_CONTENT_CLASS = "missing-content"
INNER_HTML_ATTR = "innerHTML"

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

_TAG_RE = re.compile(r"^(?P<tag>[^.#\s]+)(?P<rest>(?:[.#][^.#\s]+)*)$")
_SHORTHAND_RE = re.compile(r"([.#])([^.#\s]+)")


class Fragment(list):
    """A sequence of sibling nodes produced by a single directive."""


class Placeholder(list):
    """Inline marker left where a directive could not resolve."""

    @classmethod
    def for_form(cls, directive: str, argument: Any) -> Placeholder:
        return cls([f"span.{MISSING_CONTENT_CLASS}", f"[{directive} {describe(argument)}]"])


@dataclass(frozen=True)
class Comment:
    text: str


def describe(value: Any) -> str:
    """Short printable form of a directive argument, used in placeholders."""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(describe(item) for item in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{describe(k)} {describe(v)}" for k, v in value.items()) + "}"
    if value is None:
        return "nil"
    return str(value)


def parse_tag(head: str) -> tuple[str, str | None, list[str]]:
    """Split ``"a.button.big#cta"`` into tag name, id and classes."""
    match = _TAG_RE.match(head)
    if match is None:
        raise TemplateShapeError(head, "tag must look like 'name', 'name.class' or 'name#id'")
    element_id = None
    classes: list[str] = []
    for marker, value in _SHORTHAND_RE.findall(match.group("rest")):
        if marker == "#":
            element_id = value
        else:
            classes.append(value)
    return match.group("tag"), element_id, classes


def add_attributes(node: Any, attributes: Mapping[str, Any]) -> Any:
    """Merge ``attributes`` into an element node; anything else is returned unchanged."""
    if not (isinstance(node, list) and node and isinstance(node[0], str)):
        return node
    head, *rest = node
    if rest and isinstance(rest[0], Mapping):
        return type(node)([head, {**rest[0], **attributes}, *rest[1:]])
    return type(node)([head, dict(attributes), *rest])


def to_html(node: Any) -> str:
    """Serialize a rendered tree to an HTML string."""
    return "".join(_emit(node))


def _emit(node: Any) -> Iterable[str]:
    if node is None:
        return
    if isinstance(node, Markup):
        yield str(node)
    elif isinstance(node, str):
        yield str(escape(node))
    elif isinstance(node, Comment):
        yield f"<!-- {node.text.replace('--', '- -')} -->"
    elif isinstance(node, (list, tuple)):
        if not node:
            return
        head = node[0]
        if isinstance(node, Fragment) or not isinstance(head, str):
            for child in node:
                yield from _emit(child)
        else:
            yield from _emit_element(head, node[1:])
    elif isinstance(node, bool):
        yield "true" if node else "false"
    else:
        yield str(escape(str(node)))


def _emit_element(head: str, rest: Any) -> Iterable[str]:
    tag, element_id, classes = parse_tag(head)
    attributes: dict[str, Any] = {}
    children = list(rest)
    if children and isinstance(children[0], Mapping):
        attributes = dict(children.pop(0))

    if element_id and "id" not in attributes:
        attributes = {"id": element_id, **attributes}
    if classes:
        extra = attributes.get("class")
        merged = [*classes, *(_as_list(extra) if extra is not None and extra is not False else [])]
        attributes["class"] = merged

    inner_html = attributes.pop(INNER_HTML_ATTR, None)

    yield f"<{tag}{_format_attributes(attributes)}>"
    if tag in VOID_ELEMENTS:
        return
    if inner_html is not None:
        yield str(inner_html)
    else:
        for child in children:
            yield from _emit(child)
    yield f"</{tag}>"


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)) and not isinstance(value, Placeholder):
        return list(value)
    return [value]


def _format_attributes(attributes: Mapping[str, Any]) -> str:
    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
            continue
        parts.append(f' {name}="{escape(_attribute_value(name, value))}"')
    return "".join(parts)


def _attribute_value(name: str, value: Any) -> str:
    if name == "style" and isinstance(value, Mapping):
        return "; ".join(f"{k}: {v}" for k, v in value.items())
    if isinstance(value, Placeholder):
        return to_text(value)
    if isinstance(value, (list, tuple)):
        return " ".join(to_text(item) for item in value if item is not None and item is not False)
    return to_text(value)


def to_text(value: Any) -> str:
    """Plain text of a rendered value, used inside attribute values."""
    if isinstance(value, (list, tuple)):
        if value and isinstance(value[0], str) and not isinstance(value, Fragment):
            return "".join(to_text(child) for child in value[1:] if not isinstance(child, Mapping))
        return "".join(to_text(child) for child in value)
    if isinstance(value, bool):
        return "true" if value else ""
    if value is None or isinstance(value, Comment):
        return ""
    return str(value)
