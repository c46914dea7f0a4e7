"""Pydantic models for the site configuration and the build settings.

``SiteConfig`` mirrors ``site.yaml``. Keys are written with hyphens in the file
(``render-roots``, ``page-url-strategy``) and exposed as snake_case attributes.
Unknown keys are kept so templates can read them through ``eden/site-config``.

``BuildSettings`` holds per-invocation options and honours ``EDEN_*``
environment variables.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SITE_FILE = "site.yaml"
DEFAULT_OUTPUT_DIR = Path("dist")
CURRENT_YEAR_CONSTANT = "eden/current-year"


def _hyphenate(name: str) -> str:
    return name.replace("_", "-")


class LanguageSettings(BaseModel):
    """One entry of the ``lang`` map."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = Field(default=None, description="Human readable language name")
    default: bool = Field(default=False, description="Whether this is the unprefixed language")


class SiteConfig(BaseModel):
    """Validated ``site.yaml``."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=_hyphenate,
    )

    wrapper: str = Field(description="Template wrapping every page")
    index: str = Field(description="Content key rendered as the homepage")
    lang: dict[str, LanguageSettings] = Field(description="Language code -> settings")
    render_roots: tuple[str, ...] = Field(default=(), description="Entry points for reachability")
    url_strategy: str = Field(default="flat", description="flat, nested or module:function")
    page_url_strategy: str = Field(default="default", description="default, with-extension or module:function")
    content_dir: Path = Field(default=Path("content"))
    templates_dir: Path = Field(default=Path("templates"))
    assets_dir: Path = Field(default=Path("assets"))
    output_dir: Path = Field(default=DEFAULT_OUTPUT_DIR)
    build_constants: dict[str, Any] = Field(default_factory=dict)
    root_path: Path = Field(default_factory=Path.cwd, exclude=True)

    @field_validator("lang")
    @classmethod
    def validate_languages(cls, value: dict[str, LanguageSettings]) -> dict[str, LanguageSettings]:
        """Require exactly one default language."""
        if not value:
            msg = "at least one language must be configured"
            raise ValueError(msg)
        defaults = [code for code, settings in value.items() if settings.default]
        if len(defaults) != 1:
            msg = f"exactly one language must set 'default: true', found {len(defaults)}"
            if defaults:
                msg += f" ({', '.join(defaults)})"
            raise ValueError(msg)
        return value

    @field_validator("render_roots", mode="before")
    @classmethod
    def coerce_render_roots(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    @model_validator(mode="before")
    @classmethod
    def default_render_roots(cls, data: Any) -> Any:
        """Fall back to the index page when no render roots are configured."""
        if not isinstance(data, dict):
            return data
        roots = data.get("render-roots", data.get("render_roots"))
        if not roots and data.get("index"):
            data = {**data, "render-roots": [data["index"]]}
            data.pop("render_roots", None)
        return data

    @property
    def default_lang(self) -> str:
        return next(code for code, settings in self.lang.items() if settings.default)

    @property
    def languages(self) -> tuple[str, ...]:
        """Configured language codes, default language first."""
        default = self.default_lang
        return (default, *(code for code in self.lang if code != default))

    def is_default_lang(self, lang: str | None) -> bool:
        return lang is None or lang == self.default_lang

    def resolve_dir(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root_path / path

    @property
    def abs_content_dir(self) -> Path:
        return self.resolve_dir(self.content_dir)

    @property
    def abs_templates_dir(self) -> Path:
        return self.resolve_dir(self.templates_dir)

    @property
    def abs_assets_dir(self) -> Path:
        return self.resolve_dir(self.assets_dir)

    @property
    def abs_output_dir(self) -> Path:
        return self.resolve_dir(self.output_dir)

    def as_data(self) -> dict[str, Any]:
        """Plain mapping view used by ``eden/site-config`` lookups."""
        return self.model_dump(by_alias=True, mode="python")

    def effective_build_constants(self, today: date | None = None) -> dict[str, Any]:
        """Build constants merged into every page scope."""
        today = today or date.today()
        return {CURRENT_YEAR_CONSTANT: str(today.year), **self.build_constants}


class BuildSettings(BaseSettings):
    """Per-invocation build options.

    Supports environment variable overrides, e.g. ``EDEN_MODE=dev`` or
    ``EDEN_MAX_WORKERS=4``.
    """

    model_config = SettingsConfigDict(env_prefix="EDEN_", extra="ignore")

    mode: Literal["prod", "dev"] = Field(default="prod", description="dev builds show inline markers")
    output_dir: Path | None = Field(default=None, description="Overrides the site's output-dir")
    max_workers: int | None = Field(default=None, ge=1, description="Render worker pool size")

    @property
    def is_dev(self) -> bool:
        return self.mode == "dev"

    @property
    def worker_count(self) -> int:
        return self.max_workers or os.cpu_count() or 1
