"""Tests for site configuration loading and validation."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from eden.config import (
    CURRENT_YEAR_CONSTANT,
    BuildSettings,
    ConfigNotFoundError,
    ConfigValidationError,
    find_site_config,
    load_site_config,
    site_config_from_mapping,
)

BASE = {"wrapper": "wrapper", "index": "home", "lang": {"en": {"default": True}, "no": {}}}


class TestSiteConfig:
    def test_defaults(self, tmp_path: Path):
        config = site_config_from_mapping(BASE, root_path=tmp_path)

        assert config.default_lang == "en"
        assert config.languages == ("en", "no")
        assert config.render_roots == ("home",)
        assert config.url_strategy == "flat"
        assert config.page_url_strategy == "default"
        assert config.abs_content_dir == tmp_path / "content"
        assert config.abs_output_dir == tmp_path / "dist"

    def test_default_language_is_listed_first(self, tmp_path: Path):
        config = site_config_from_mapping(
            {**BASE, "lang": {"no": {}, "en": {"default": True}}}, root_path=tmp_path
        )

        assert config.languages == ("en", "no")

    def test_hyphenated_keys(self, tmp_path: Path):
        config = site_config_from_mapping(
            {**BASE, "render-roots": ["home", "about"], "url-strategy": "nested", "output-dir": "public"},
            root_path=tmp_path,
        )

        assert config.render_roots == ("home", "about")
        assert config.url_strategy == "nested"
        assert config.abs_output_dir == tmp_path / "public"

    def test_single_render_root_string(self, tmp_path: Path):
        assert site_config_from_mapping({**BASE, "render-roots": "about"}).render_roots == ("about",)

    def test_extra_keys_are_kept_for_site_config_lookups(self, tmp_path: Path):
        config = site_config_from_mapping({**BASE, "site-name": "Eden"}, root_path=tmp_path)

        assert config.as_data()["site-name"] == "Eden"
        assert config.as_data()["lang"]["en"]["default"] is True

    @pytest.mark.parametrize(
        "lang",
        [{}, {"en": {}, "no": {}}, {"en": {"default": True}, "no": {"default": True}}],
    )
    def test_exactly_one_default_language(self, lang):
        with pytest.raises(ConfigValidationError):
            site_config_from_mapping({**BASE, "lang": lang})

    @pytest.mark.parametrize("missing", ["wrapper", "index", "lang"])
    def test_required_keys(self, missing):
        data = {k: v for k, v in BASE.items() if k != missing}

        with pytest.raises(ConfigValidationError) as exc_info:
            site_config_from_mapping(data)

        assert exc_info.value.errors

    def test_build_constants(self, tmp_path: Path):
        config = site_config_from_mapping({**BASE, "build-constants": {"site/owner": "Ada"}}, root_path=tmp_path)

        constants = config.effective_build_constants(date(2024, 5, 1))

        assert constants == {CURRENT_YEAR_CONSTANT: "2024", "site/owner": "Ada"}


class TestLoader:
    def test_load_resolves_paths_against_the_file(self, tmp_path: Path):
        site_dir = tmp_path / "site"
        site_dir.mkdir()
        (site_dir / "site.yaml").write_text("wrapper: wrapper\nindex: home\nlang:\n  en:\n    default: true\n")

        config = load_site_config(site_dir / "site.yaml")

        assert config.root_path == site_dir.resolve()
        assert config.abs_templates_dir == site_dir.resolve() / "templates"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigNotFoundError):
            load_site_config(tmp_path / "site.yaml")

    @pytest.mark.parametrize("text", ["wrapper: [unclosed", "- a list\n- not a mapping\n"])
    def test_invalid_yaml(self, tmp_path: Path, text: str):
        path = tmp_path / "site.yaml"
        path.write_text(text)

        with pytest.raises(ConfigValidationError):
            load_site_config(path)

    def test_find_searches_upward(self, tmp_path: Path):
        (tmp_path / "site.yaml").write_text("index: home\n")
        nested = tmp_path / "content" / "en"
        nested.mkdir(parents=True)

        assert find_site_config(nested) == (tmp_path / "site.yaml").resolve()

    def test_find_returns_none(self, tmp_path: Path):
        assert find_site_config(tmp_path, filename="nope.yaml") is None


class TestBuildSettings:
    def test_defaults(self, monkeypatch):
        for name in ("EDEN_MODE", "EDEN_OUTPUT_DIR", "EDEN_MAX_WORKERS"):
            monkeypatch.delenv(name, raising=False)

        settings = BuildSettings()

        assert settings.mode == "prod"
        assert not settings.is_dev
        assert settings.output_dir is None
        assert settings.worker_count >= 1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EDEN_MODE", "dev")
        monkeypatch.setenv("EDEN_MAX_WORKERS", "3")

        settings = BuildSettings()

        assert settings.is_dev
        assert settings.worker_count == 3
