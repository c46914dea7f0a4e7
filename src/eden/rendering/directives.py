"""The closed set of directive keywords and the reserved scope keys."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

DIRECTIVE_PREFIX = "eden/"

# Sentinel collection spec for eden/each: every content item in the current language
ALL_CONTENT = "eden/all"

EACH_INDEX = "eden.each/index"
EACH_KEY = "eden.each/key"
EACH_VALUE = "eden.each/value"
EACH_GROUP_KEY = "eden.each/group-key"
EACH_GROUP_ITEMS = "eden.each/group-items"

LINK_HREF = "link/href"
LINK_TITLE = "link/title"

COMPARISON_OPERATORS = frozenset({"=", "!=", "<", ">", "<=", ">="})


class Directive(StrEnum):
    GET = "eden/get"
    GET_IN = "eden/get-in"
    SITE_CONFIG = "eden/site-config"
    IF = "eden/if"
    EACH = "eden/each"
    WITH = "eden/with"
    LINK = "eden/link"
    RENDER = "eden/render"
    INCLUDE = "eden/include"
    BODY = "eden/body"
    T = "eden/t"


def normalize_keyword(value: str) -> str:
    """Drop the optional leading colon: ``":eden/get"`` and ``"eden/get"`` are the same keyword."""
    return value[1:] if value.startswith(":") else value


def is_directive_keyword(head: Any) -> bool:
    """Anything in the ``eden/`` namespace is a directive, known or not."""
    return isinstance(head, str) and normalize_keyword(head).startswith(DIRECTIVE_PREFIX)


def lookup_directive(head: str) -> Directive | None:
    try:
        return Directive(normalize_keyword(head))
    except ValueError:
        return None
