from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
import yaml

from eden.config import SiteConfig, site_config_from_mapping
from eden.core.models import ContentStore, TemplateStore
from eden.rendering import Interpreter, RenderContext

SITE_YAML = {
    "wrapper": "wrapper",
    "index": "home",
    "lang": {"en": {"name": "English", "default": True}, "no": {"name": "Norsk"}},
    "url-strategy": "flat",
}

WRAPPER = ["html", ["body", ["main", ["eden/body"]]]]


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    return site_config_from_mapping(SITE_YAML, root_path=tmp_path)


@pytest.fixture
def interpreter() -> Interpreter:
    return Interpreter()


@pytest.fixture
def make_context(site_config: SiteConfig):
    """Factory for render contexts over in-memory stores."""

    def _make(
        data: dict[str, Any] | None = None,
        *,
        lang: str = "en",
        content: dict[str, dict[str, dict[str, Any]]] | None = None,
        templates: dict[str, Any] | None = None,
        **changes: Any,
    ) -> RenderContext:
        return RenderContext(
            lang=lang,
            data=data or {},
            content=ContentStore.from_mapping(content or {}),
            templates=TemplateStore(templates or {}),
            site_config=site_config,
            **changes,
        )

    return _make


@dataclass
class SiteFixture:
    """A site on disk: ``site.yaml`` plus content and template files."""

    root: Path
    config: dict[str, Any] = field(default_factory=lambda: dict(SITE_YAML))

    @property
    def site_file(self) -> Path:
        return self.root / "site.yaml"

    @property
    def output_dir(self) -> Path:
        return self.root / "dist"

    def write_config(self, **overrides: Any) -> Path:
        self.config.update(overrides)
        self.site_file.write_text(yaml.safe_dump(self.config, sort_keys=False), encoding="utf-8")
        return self.site_file

    def content(self, lang: str, relative: str, text: str) -> Path:
        path = self.root / "content" / lang / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def template(self, name: str, tree: Any) -> Path:
        path = self.root / "templates" / f"{name}.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(tree, sort_keys=False), encoding="utf-8")
        return path

    def asset(self, relative: str, text: str) -> Path:
        path = self.root / "assets" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def strings(self, lang: str, table: dict[str, Any]) -> Path:
        path = self.root / "content" / f"strings.{lang}.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(table, sort_keys=False), encoding="utf-8")
        return path


@pytest.fixture
def site(tmp_path: Path) -> SiteFixture:
    """A small two-language site: home links to about, about links back."""
    fixture = SiteFixture(root=tmp_path)
    fixture.write_config()
    fixture.template("wrapper", WRAPPER)
    fixture.template(
        "page",
        [
            "article",
            ["h1", ["eden/get", "title"]],
            ["eden/get", "html/content"],
            ["nav", ["eden/link", "about", ["a", {"href": ["eden/get", "link/href"]}, ["eden/get", "link/title"]]]],
        ],
    )
    fixture.template(
        "about",
        [
            "article",
            ["h1", ["eden/get", "title"]],
            ["eden/link", "home", ["a", {"href": ["eden/get", "link/href"]}, ["eden/t", "back"]]],
        ],
    )
    fixture.content("en", "home.md", "---\ntitle: Home\nslug: ''\ntemplate: page\n---\nWelcome *home*.\n")
    fixture.content("no", "home.md", "---\ntitle: Hjem\nslug: ''\ntemplate: page\n---\nVelkommen.\n")
    fixture.content("en", "about.yaml", "title: About\nslug: about\n")
    fixture.content("no", "about.yaml", "title: Om oss\nslug: about\n")
    fixture.strings("en", {"back": "Back home"})
    fixture.strings("no", {"back": "Tilbake"})
    return fixture
