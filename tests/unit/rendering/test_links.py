"""Tests for ``eden/link`` and ``eden/render``: page registry lookups, discovery and sections."""

from __future__ import annotations

import pytest

from eden.core.models import PageMetadata, PageRegistry, SectionRef
from eden.rendering import Interpreter, RenderMode
from eden.rendering.warnings import MissingPageContent, MissingRenderTemplate

ANCHOR = ["a", {"href": ["eden/get", "link/href"]}, ["eden/get", "link/title"]]


def render(node, ctx):
    return Interpreter().render(node, ctx)


def meta(key: str, lang: str, path: str, title: str) -> PageMetadata:
    return PageMetadata(content_key=key, lang=lang, slug=path.strip("/"), title=title, path=path)


@pytest.fixture
def registry() -> PageRegistry:
    return PageRegistry.from_entries(
        [
            meta("home", "en", "/", "Home"),
            meta("about", "en", "/about", "About"),
            meta("about", "no", "/no/about", "Om oss"),
            meta("docs.guide", "en", "/docs/guide", "Guide"),
            meta("guide", "en", "/guide", "Top guide"),
        ],
        sections={"team": SectionRef(section_id="team-section", content_key="team", parent="about")},
    )


class TestLink:
    def test_resolves_href_and_title(self, make_context, registry):
        result = render(["eden/link", "about", ANCHOR], make_context(registry=registry))

        assert result.html == '<a href="/about">About</a>'
        assert result.warnings == ()

    def test_other_language(self, make_context, registry):
        ctx = make_context(registry=registry)

        result = render(["eden/link", {"content-key": "about", "lang": "no"}, ANCHOR], ctx)

        assert result.html == '<a href="/no/about">Om oss</a>'

    def test_link_to_self(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="about")

        assert render(["eden/link", {}, ANCHOR], ctx).html == '<a href="/about">About</a>'

    def test_unresolved_link_warns_and_keeps_body(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="home")

        result = render(["p", ["eden/link", "missing", ["span", "text"]]], ctx)

        assert result.html == '<p><span class="missing-content">[eden/link missing]</span><span>text</span></p>'
        assert result.warnings == (
            MissingPageContent(directive="eden/link", lang="en", spec="missing", content_key="missing", parent="home"),
        )

    def test_links_to_section_of_parent_page(self, make_context, registry):
        ctx = make_context(registry=registry, content={"en": {"team": {"title": "Team"}}})

        assert render(["eden/link", "team", ANCHOR], ctx).html == '<a href="/about#team-section">Team</a>'

    def test_nav_root(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="about")

        assert render(["eden/link", {"nav": ":root"}, ANCHOR], ctx).html == '<a href="/">Home</a>'

    def test_nav_parent_prefers_dotted_prefix(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="docs.guide.intro")

        assert render(["eden/link", {"nav": "parent"}, ANCHOR], ctx).html == '<a href="/docs/guide">Guide</a>'

    def test_nav_parent_falls_back_to_last_segment(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="manual.guide.intro")

        assert render(["eden/link", {"nav": "parent"}, ANCHOR], ctx).html == '<a href="/guide">Top guide</a>'

    def test_nav_parent_of_top_level_page_is_index(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="about")

        assert render(["eden/link", {"nav": "parent"}, ANCHOR], ctx).html == '<a href="/">Home</a>'

    def test_index_has_no_parent(self, make_context, registry):
        ctx = make_context(registry=registry, content_key="home")

        result = render(["nav", ["eden/link", {"nav": "parent"}, ANCHOR]], ctx)

        assert result.html == "<nav></nav>"
        assert result.warnings == ()

    def test_discovery_records_target(self, make_context):
        ctx = make_context(content={"en": {"about": {"title": "About"}}}, mode=RenderMode.DISCOVERY)

        result = render(["eden/link", "about", ANCHOR], ctx)

        assert result.links == ("about",)
        assert result.html == '<a href="#">About</a>'
        assert result.warnings == ()

    def test_discovery_records_unknown_targets_too(self, make_context):
        ctx = make_context(mode=RenderMode.DISCOVERY)

        result = render(["eden/link", "ghost", ANCHOR], ctx)

        assert result.links == ("ghost",)
        assert result.html == '<a href="#">ghost</a>'


class TestRender:
    def test_renders_content_with_its_template(self, make_context):
        ctx = make_context(
            {"title": "Page"},
            content={"en": {"card-data": {"title": "Card", "template": "card"}}},
            templates={"card": ["div.card", ["eden/get", "title"]]},
            content_key="home",
        )

        result = render(["main", ["eden/render", "card-data"]], ctx)

        assert result.html == '<main><div class="card">Card</div></main>'
        assert result.rendered_content == ("card-data",)

    def test_template_defaults_to_content_key(self, make_context):
        ctx = make_context(
            content={"en": {"footer": {"text": "bye"}}},
            templates={"footer": ["footer", ["eden/get", "text"]]},
        )

        assert render(["eden/render", "footer"], ctx).html == "<footer>bye</footer>"

    def test_explicit_template(self, make_context):
        ctx = make_context(
            content={"en": {"team": {"title": "Team"}}},
            templates={"card": ["div", ["eden/get", "title"]]},
        )

        assert render(["eden/render", {"data": "team", "template": "card"}], ctx).html == "<div>Team</div>"

    def test_section_id(self, make_context):
        ctx = make_context(
            content={"en": {"team": {"title": "Team"}}},
            templates={"team": ["section", ["h2", ["eden/get", "title"]]]},
            content_key="about",
        )

        result = render(["eden/render", {"data": "team", "section-id": "team-section"}], ctx)

        assert result.html == '<section id="team-section"><h2>Team</h2></section>'
        assert result.sections == (
            ("team", SectionRef(section_id="team-section", content_key="team", parent="about")),
        )

    def test_template_only(self, make_context):
        ctx = make_context({"title": "Here"}, templates={"hero": ["header", ["eden/get", "title"]]})

        result = render(["eden/render", "hero"], ctx)

        assert result.html == "<header>Here</header>"
        assert result.rendered_content == ()

    def test_body_is_not_visible_inside_rendered_content(self, make_context):
        ctx = make_context(
            content={"en": {"part": {}}},
            templates={"part": ["div", ["eden/body"]]},
            body=["p", "outer body"],
        )

        result = render(["eden/render", "part"], ctx)

        assert result.html == "<div></div>"
        assert [w.type for w in result.warnings] == ["missing-body-in-context"]

    def test_missing_content(self, make_context):
        result = render(["eden/render", "nope"], make_context(content_key="home"))

        assert result.html == '<span class="missing-content">[eden/render nope]</span>'
        assert result.warnings == (
            MissingPageContent(directive="eden/render", lang="en", spec="nope", content_key="nope", parent="home"),
        )

    def test_missing_template(self, make_context):
        ctx = make_context(content={"en": {"team": {"title": "Team"}}}, content_key="about")

        result = render(["eden/render", "team"], ctx)

        assert result.warnings == (
            MissingRenderTemplate(lang="en", template="team", spec="team", content_key="team", parent="about"),
        )
