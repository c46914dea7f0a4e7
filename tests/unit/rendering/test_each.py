"""Tests for ``eden/each`` and its where/group-by/order-by/limit pipeline."""

from __future__ import annotations

import pytest

from eden.rendering import Interpreter
from eden.rendering.each import (
    EachOptions,
    Entry,
    Group,
    apply_options,
    build_options,
    parse_order_by,
    split_options,
    to_entries,
)
from eden.rendering.warnings import MissingCollectionKey, UnsupportedEachCollectionSpec


def render(node, ctx):
    return Interpreter().render(node, ctx)


class TestParseOrderBy:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, ()),
            ("v", (("v", False),)),
            (":v", (("v", False),)),
            ([":v", ":desc"], (("v", True),)),
            (["a", "asc", "b", "desc"], (("a", False), ("b", True))),
            ([["a", "desc"], "b"], (("a", True), ("b", False))),
            (["a", "b"], (("a", False), ("b", False))),
        ],
    )
    def test_forms(self, raw, expected):
        assert parse_order_by(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [(2, 2), (0, 0), (-1, 0), (2.0, 2), (True, None), ("3", None)])
def test_build_options_limit(raw, expected):
    assert build_options({"limit": raw}).limit == expected


def test_split_options_stops_at_body():
    options, body = split_options([":where", {"a": 1}, "limit", 2, ["li"], ":limit"])

    assert options == {"where": {"a": 1}, "limit": 2}
    assert body == [["li"], ":limit"]


class TestApplyOptions:
    def test_pipeline_order(self):
        entries = to_entries([{"v": 3}, {"v": 1}, {"v": 2}])
        options = EachOptions(order_by=parse_order_by([":v", ":desc"]), limit=2)

        result = apply_options(entries, options)

        assert [entry.value for entry in result] == [{"v": 3}, {"v": 2}]

    def test_where_runs_before_limit(self):
        entries = to_entries([{"v": 1, "on": False}, {"v": 2, "on": True}, {"v": 3, "on": True}])

        result = apply_options(entries, EachOptions(where={"on": True}, limit=1))

        assert [entry.value["v"] for entry in result] == [2]

    def test_where_requires_every_pair(self):
        entries = to_entries(
            [
                {"cat": "news", "lang": "en", "t": "a"},
                {"cat": "news", "lang": "no", "t": "b"},
                {"cat": "blog", "lang": "en", "t": "c"},
            ]
        )

        result = apply_options(entries, EachOptions(where={"cat": "news", "lang": "en"}))

        assert [entry.value["t"] for entry in result] == ["a"]

    def test_where_false_does_not_match_missing_field(self):
        entries = to_entries([{"t": "a", "draft": False}, {"t": "b"}, {"t": "c", "draft": True}])

        result = apply_options(entries, EachOptions(where={"draft": False}))

        assert [entry.value["t"] for entry in result] == ["a"]

    def test_where_flags_do_not_equal_numbers(self):
        entries = to_entries([{"n": 1}, {"n": True}, {"n": 0}])

        assert [entry.value["n"] for entry in apply_options(entries, EachOptions(where={"n": True}))] == [True]
        assert [entry.value["n"] for entry in apply_options(entries, EachOptions(where={"n": 1}))] == [1]

    def test_missing_sort_field_sorts_first(self):
        entries = to_entries([{"v": 2}, {}, {"v": 1}])

        result = apply_options(entries, EachOptions(order_by=(("v", False),)))

        assert [entry.value.get("v") for entry in result] == [None, 1, 2]

    def test_group_by(self):
        entries = to_entries([{"cat": "b", "n": 1}, {"cat": "a", "n": 2}, {"cat": "b", "n": 3}])

        result = apply_options(
            entries,
            EachOptions(group_by="cat", order_by=(("eden.each/group-key", False), ("n", True))),
        )

        assert all(isinstance(group, Group) for group in result)
        assert [group.key for group in result] == ["a", "b"]
        assert [entry.value["n"] for entry in result[1].entries] == [3, 1]

    def test_mapping_entries_are_keyed(self):
        assert to_entries({"a": 1}) == [Entry(value=1, key="a", keyed=True)]


class TestEachDirective:
    def test_order_by_and_limit(self, make_context):
        ctx = make_context({"items": [{"v": 3}, {"v": 1}, {"v": 2}]})
        template = ["ul", ["eden/each", "items", ":order-by", [":v", ":desc"], ":limit", 2, ["li", ["eden/get", "v"]]]]

        assert render(template, ctx).html == "<ul><li>3</li><li>2</li></ul>"

    def test_option_order_in_template_does_not_matter(self, make_context):
        ctx = make_context({"items": [{"v": 3}, {"v": 1}, {"v": 2}]})
        template = ["eden/each", "items", ":limit", 2, ":order-by", "v", ["i", ["eden/get", "v"]]]

        assert render(template, ctx).html == "<i>1</i><i>2</i>"

    def test_index_binding(self, make_context):
        ctx = make_context({"xs": ["a", "b"]})
        template = ["eden/each", "xs", ["i", ["eden/get", "eden.each/index"], ["eden/get", "eden.each/value"]]]

        assert render(template, ctx).html == "<i>0a</i><i>1b</i>"

    def test_mapping_binds_key_and_value(self, make_context):
        ctx = make_context({"links": {"a": "x", "b": "y"}})
        template = ["eden/each", "links", ["li", ["eden/get", "eden.each/key"], "=", ["eden/get", "eden.each/value"]]]

        assert render(template, ctx).html == "<li>a=x</li><li>b=y</li>"

    def test_item_fields_shadow_outer_scope(self, make_context):
        ctx = make_context({"title": "Outer", "items": [{"title": "Inner"}, {}]})
        template = ["eden/each", "items", ["b", ["eden/get", "title"]]]

        assert render(template, ctx).html == "<b>Inner</b><b>Outer</b>"

    def test_all_content(self, make_context):
        ctx = make_context(content={"en": {"b": {"title": "B"}, "a": {"title": "A"}}, "no": {"c": {"title": "C"}}})
        template = ["eden/each", "eden/all", ["li", ["eden/get", "content-key"], ":", ["eden/get", "title"]]]

        assert render(template, ctx).html == "<li>a:A</li><li>b:B</li>"

    def test_grouping(self, make_context):
        ctx = make_context({"items": [{"cat": "b", "n": 1}, {"cat": "a", "n": 2}, {"cat": "b", "n": 3}]})
        template = [
            "eden/each",
            "items",
            ":group-by",
            ":cat",
            ":order-by",
            ["eden.each/group-key", "asc"],
            [
                "section",
                ["h2", ["eden/get", "eden.each/group-key"]],
                ["eden/each", "eden.each/group-items", ["span", ["eden/get", "n"]]],
            ],
        ]

        assert render(template, ctx).html == (
            "<section><h2>a</h2><span>2</span></section><section><h2>b</h2><span>1</span><span>3</span></section>"
        )

    def test_where_with_draft_false(self, make_context):
        ctx = make_context({"posts": [{"t": "a", "draft": False}, {"t": "b"}]})
        template = ["ul", ["eden/each", "posts", ":where", {":draft": False}, ["li", ["eden/get", "t"]]]]

        assert render(template, ctx).html == "<ul><li>a</li></ul>"

    def test_negative_limit_renders_nothing(self, make_context):
        ctx = make_context({"xs": ["a", "b", "c"]})

        result = render(["ul", ["eden/each", "xs", ":limit", -1, ["li", ["eden/get", "eden.each/value"]]]], ctx)

        assert result.html == "<ul></ul>"

    def test_collection_from_directive(self, make_context):
        ctx = make_context({"page": {"tags": ["x", "y"]}})
        template = ["eden/each", ["eden/get-in", ["page", "tags"]], ["i", ["eden/get", "eden.each/value"]]]

        assert render(template, ctx).html == "<i>x</i><i>y</i>"

    def test_missing_collection(self, make_context):
        result = render(["ul", ["eden/each", "items", ["li"]]], make_context(content_key="home"))

        assert result.html == "<ul></ul>"
        assert result.warnings == (MissingCollectionKey(key="items", content_key="home"),)

    def test_unsupported_spec(self, make_context):
        result = render(["eden/each", 5, ["li"]], make_context())

        assert result.warnings == (UnsupportedEachCollectionSpec(spec=5),)

    def test_scalar_collection_value_is_unsupported(self, make_context):
        result = render(["eden/each", "n", ["li"]], make_context({"n": 3}))

        assert [w.type for w in result.warnings] == ["unsupported-each-collection-spec"]
