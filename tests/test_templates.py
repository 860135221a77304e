"""Tests for templates.py"""

import json

import pytest

import templates
from templates import (
    FileTemplate,
    ImageTemplate,
    available_templates,
    discover_templates,
    get_template,
    register,
    unregister,
)
from vectorize import ConversionOptions, IndexedImage


@pytest.fixture(autouse=True)
def empty_registry(monkeypatch):
    monkeypatch.setattr(templates, "_REGISTRY", {})


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "tiny.json"
    record = {"width": 1, "height": 1, "colors": [[1, 2, 3]], "pixels": [0]}
    path.write_text(json.dumps(record))
    return path


class Checkerboard(ImageTemplate):
    """In-memory template, to check the strategy interface."""

    @property
    def name(self) -> str:
        return "checkerboard"

    def load(self) -> IndexedImage:
        return IndexedImage.from_pixels(2, 2, [0, 1, 1, 0])


class TestRegistry:
    def test_register_and_get(self):
        template = register(Checkerboard())
        assert get_template("checkerboard") is template
        assert available_templates() == ["checkerboard"]
        assert template.description == "checkerboard"

    def test_duplicate_name(self):
        register(Checkerboard())
        with pytest.raises(ValueError, match="already registered"):
            register(Checkerboard())
        register(Checkerboard(), overwrite=True)

    def test_unknown_template(self):
        register(Checkerboard())
        with pytest.raises(KeyError, match="checkerboard"):
            get_template("jungle_waterfall")

    def test_unregister(self):
        register(Checkerboard())
        unregister("checkerboard")
        assert available_templates() == []

    def test_default_configure_keeps_options(self):
        options = ConversionOptions(max_vertices=100)
        assert Checkerboard().configure(options) is options


class TestFileTemplate:
    def test_load(self, image_file):
        template = FileTemplate(image_file)
        assert template.name == "tiny"
        assert template.description == "tiny.json"
        assert template.load().pixels.tolist() == [0]

    def test_color_subset(self, image_file):
        template = FileTemplate(image_file, colors=frozenset({3}))
        assert template.configure(ConversionOptions()).colors == frozenset({3})

    def test_caller_colors_win(self, image_file):
        template = FileTemplate(image_file, colors=frozenset({3}))
        options = ConversionOptions(colors=frozenset({1}))
        assert template.configure(options).colors == frozenset({1})


class TestDiscovery:
    def test_discover_directory(self, image_file, tmp_path):
        (tmp_path / "notes.txt").write_text("not an image")
        found = discover_templates(tmp_path)
        assert [t.name for t in found] == ["tiny"]
        assert available_templates() == ["tiny"]

    def test_discover_twice(self, image_file, tmp_path):
        discover_templates(tmp_path)
        assert discover_templates(tmp_path) == []

    def test_missing_directory(self, tmp_path):
        assert discover_templates(tmp_path / "missing") == []

    def test_bundled_templates(self):
        discover_templates()
        assert "demo_waterfall" in available_templates()
        image = get_template("demo_waterfall").load()
        assert image.width == 8
