"""Tests for the template loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from eden.input_adapters import TemplateParseError, load_template_file, load_templates


def test_yaml_and_json_templates(tmp_path: Path):
    (tmp_path / "page.yaml").write_text("- article\n- [h1, [eden/get, title]]\n")
    (tmp_path / "partials").mkdir()
    (tmp_path / "partials" / "card.json").write_text(json.dumps(["div.card", ["eden/get", "title"]]))
    (tmp_path / "README.md").write_text("not a template")

    loaded = load_templates(tmp_path)

    assert dict(loaded.store) == {
        "page": ["article", ["h1", ["eden/get", "title"]]],
        "card": ["div.card", ["eden/get", "title"]],
    }
    assert loaded.warnings == ()


def test_missing_directory(tmp_path: Path):
    loaded = load_templates(tmp_path / "nope")

    assert len(loaded.store) == 0


@pytest.mark.parametrize(
    ("name", "text"),
    [("map.yaml", "a: 1\n"), ("broken.json", "[1,"), ("broken.yaml", "- [unclosed\n")],
)
def test_invalid_templates(tmp_path: Path, name: str, text: str):
    path = tmp_path / name
    path.write_text(text)

    with pytest.raises(TemplateParseError):
        load_template_file(path)

    loaded = load_templates(tmp_path)
    assert [w.type for w in loaded.warnings] == ["invalid-template"]
    assert loaded.warnings[0].file == str(path)
    assert name.split(".")[0] not in loaded.store
