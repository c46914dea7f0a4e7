"""Collection query pipeline behind ``eden/each``.

Options are always applied in the order where -> group-by -> order-by ->
limit, whatever order they were written in.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from eden.rendering.directives import EACH_GROUP_KEY, normalize_keyword

OPTION_NAMES = frozenset({"where", "group-by", "order-by", "limit"})
_DIRECTIONS = {"asc": False, "desc": True}


def truthy(value: Any) -> bool:
    """Only ``None`` and ``False`` are false; empty strings, ``0`` and ``[]`` are true."""
    return value is not None and value is not False


@dataclass(frozen=True)
class Entry:
    """One element of the collection being iterated.

    ``key`` is set when the collection was a mapping.
    """

    value: Any
    key: Any = None
    keyed: bool = False

    def field(self, name: Any) -> Any:
        if isinstance(self.value, Mapping):
            return self.value.get(name)
        return None


@dataclass(frozen=True)
class Group:
    key: Any
    entries: tuple[Entry, ...]


@dataclass(frozen=True)
class EachOptions:
    where: Mapping[str, Any] | None = None
    group_by: Any = None
    order_by: tuple[tuple[Any, bool], ...] = ()
    limit: int | None = None


def option_name(value: Any) -> str | None:
    if isinstance(value, str):
        name = normalize_keyword(value)
        if name in OPTION_NAMES:
            return name
    return None


def split_options(args: Sequence[Any]) -> tuple[dict[str, Any], list[Any]]:
    """Peel ``option value`` pairs off the front of ``args``; the rest is the body."""
    options: dict[str, Any] = {}
    index = 0
    while index + 1 < len(args):
        name = option_name(args[index])
        if name is None:
            break
        options[name] = args[index + 1]
        index += 2
    return options, list(args[index:])


def field_name(value: Any) -> Any:
    """Field names may be written as keywords: ``:v`` names the field ``v``."""
    if isinstance(value, str):
        return normalize_keyword(value)
    if isinstance(value, (list, tuple)):
        return [field_name(item) for item in value]
    return value


def _direction(value: Any) -> bool | None:
    if isinstance(value, str):
        return _DIRECTIONS.get(normalize_keyword(value).lower())
    return None


def parse_order_by(value: Any) -> tuple[tuple[Any, bool], ...]:
    """Normalize ``field``, ``[field, dir]``, ``[[f1, dir], f2]`` or ``[f1, dir, f2]``.

    Returns ``(field, descending)`` pairs.
    """
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        return ((field_name(value), False),)

    pairs: list[tuple[Any, bool]] = []
    index = 0
    while index < len(value):
        item = value[index]
        if isinstance(item, (list, tuple)):
            if item:
                descending = _direction(item[1]) if len(item) > 1 else False
                pairs.append((field_name(item[0]), bool(descending)))
            index += 1
            continue
        following = value[index + 1] if index + 1 < len(value) else None
        descending = _direction(following)
        if descending is None:
            pairs.append((field_name(item), False))
            index += 1
        else:
            pairs.append((field_name(item), descending))
            index += 2
    return tuple(pairs)


def build_options(raw: Mapping[str, Any]) -> EachOptions:
    limit = raw.get("limit")
    where = raw.get("where")
    return EachOptions(
        where={field_name(k): v for k, v in where.items()} if isinstance(where, Mapping) else None,
        group_by=field_name(raw.get("group-by")),
        order_by=parse_order_by(raw.get("order-by")),
        limit=max(0, int(limit)) if isinstance(limit, (int, float)) and not isinstance(limit, bool) else None,
    )


def to_entries(collection: Any) -> list[Entry]:
    if isinstance(collection, Mapping):
        return [Entry(value=v, key=k, keyed=True) for k, v in collection.items()]
    return [Entry(value=item) for item in collection]


def _matches(entry: Entry, where: Mapping[str, Any]) -> bool:
    for name, expected in where.items():
        actual = entry.field(name)
        # 1 == True in Python, but a flag only matches a flag
        if actual != expected or isinstance(actual, bool) != isinstance(expected, bool):
            return False
    return True


def _group_key(entry: Entry, group_by: Any) -> Any:
    if isinstance(group_by, (list, tuple)):
        return tuple(entry.field(name) for name in group_by)
    return entry.field(group_by)


def _compare(a: Any, b: Any) -> int:
    if a is None or b is None:
        return (a is not None) - (b is not None)
    try:
        return (a > b) - (a < b)
    except TypeError:
        a_text, b_text = str(a), str(b)
        return (a_text > b_text) - (a_text < b_text)


def _sorted(values: list[Any], pairs: Sequence[tuple[Any, bool]], field_of: Any) -> list[Any]:
    result = list(values)
    # Stable sorts applied from the least significant key
    for name, descending in reversed(pairs):
        result.sort(
            key=functools.cmp_to_key(lambda a, b, name=name: _compare(field_of(a, name), field_of(b, name))),
            reverse=descending,
        )
    return result


def _entry_field(entry: Entry, name: Any) -> Any:
    return entry.field(name)


def _group_field(group: Group, name: Any) -> Any:
    return group.key if name == EACH_GROUP_KEY else None


def apply_options(entries: list[Entry], options: EachOptions) -> list[Entry] | list[Group]:
    """Run the pipeline. Returns entries, or groups when ``group-by`` is set."""
    if options.where:
        entries = [entry for entry in entries if _matches(entry, options.where)]

    if options.group_by is None:
        if options.order_by:
            entries = _sorted(entries, options.order_by, _entry_field)
        return entries[: options.limit] if options.limit is not None else entries

    buckets: dict[Any, list[Entry]] = {}
    for entry in entries:
        buckets.setdefault(_hashable(_group_key(entry, options.group_by)), []).append(entry)

    group_pairs = [(name, desc) for name, desc in options.order_by if name == EACH_GROUP_KEY]
    member_pairs = [(name, desc) for name, desc in options.order_by if name != EACH_GROUP_KEY]

    groups = [
        Group(key=key, entries=tuple(_sorted(members, member_pairs, _entry_field) if member_pairs else members))
        for key, members in buckets.items()
    ]
    if group_pairs:
        groups = _sorted(groups, group_pairs, _group_field)
    return groups[: options.limit] if options.limit is not None else groups


def _hashable(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, tuple):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, Mapping):
        return tuple(sorted((str(k), _hashable(v)) for k, v in value.items()))
    return value
