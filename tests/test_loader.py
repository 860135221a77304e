"""Tests for utils/loader.py"""

import json

import pytest

from constants import TEMPLATES
from localtypes import RGB
from utils.loader import image_from_record, load_image, script_to_record
from vectorize import ImageFormatError, PaletteCycle

RECORD = {
    "width": 2,
    "height": 2,
    "colors": [[0, 0, 0], [10, 20, 30], [40, 50, 60]],
    "cycles": [{"low": 1, "high": 2, "rate": 512, "reverse": 0}],
    "pixels": [0, 1, 2, 1],
}


class TestScriptToRecord:
    def test_json_payload(self):
        script = "CanvasCycle.processImage(" + json.dumps(RECORD) + ");"
        assert script_to_record(script) == RECORD

    def test_bare_keys_and_trailing_commas(self):
        script = """
        CanvasCycle.processImage({
            width: 2, height: 1,
            colors: [[1, 2, 3], [4, 5, 6],],
            cycles: [{ reverse: 2, rate: 10, low: 0, high: 1 },],
            pixels: [0, 1],
        });
        """
        record = script_to_record(script)
        assert record["width"] == 2
        assert record["cycles"] == [{"reverse": 2, "rate": 10, "low": 0, "high": 1}]
        assert record["pixels"] == [0, 1]

    def test_no_object(self):
        with pytest.raises(ImageFormatError):
            script_to_record("CanvasCycle.processImage();")


class TestImageFromRecord:
    def test_valid_record(self):
        image = image_from_record(RECORD)
        assert (image.width, image.height) == (2, 2)
        assert image.colors[1] == RGB(10, 20, 30)
        assert len(image.colors) == 256
        assert image.cycles == (PaletteCycle(1, 2, 512, 0),)
        assert image.pixels.tolist() == [0, 1, 2, 1]

    def test_cycles_are_optional(self):
        record = {key: value for key, value in RECORD.items() if key != "cycles"}
        assert image_from_record(record).cycles == ()

    def test_missing_keys(self):
        with pytest.raises(ImageFormatError, match="pixels"):
            image_from_record({"width": 1, "height": 1, "colors": []})

    def test_pixel_count_mismatch(self):
        with pytest.raises(ImageFormatError, match="Expected 4 pixels"):
            image_from_record({**RECORD, "pixels": [0, 1, 2]})

    def test_pixel_outside_palette(self):
        with pytest.raises(ImageFormatError, match="slot 3"):
            image_from_record({**RECORD, "pixels": [0, 1, 2, 3]})

    def test_pixel_outside_slots(self):
        with pytest.raises(ImageFormatError):
            image_from_record({**RECORD, "pixels": [0, 1, 2, 256]})

    def test_inverted_cycle(self):
        cycles = [{"low": 5, "high": 2, "rate": 1}]
        with pytest.raises(ImageFormatError, match="cycle"):
            image_from_record({**RECORD, "cycles": cycles})

    def test_malformed_cycle(self):
        with pytest.raises(ImageFormatError, match="cycle"):
            image_from_record({**RECORD, "cycles": [{"rate": 1}]})

    def test_bad_color(self):
        with pytest.raises(ImageFormatError):
            image_from_record({**RECORD, "colors": [[0, 0, 300]] * 3})

    @pytest.mark.parametrize(
        "field,value",
        [
            ("pixels", [0, None, 1, 1]),
            ("pixels", ["x", 0, 1, 1]),
            ("pixels", [0, 1.5, 1, 1]),
            ("pixels", None),
            ("colors", [[0, 0]]),
            ("colors", [[0, 0, "x"]]),
            ("colors", [None]),
            ("colors", "red"),
            ("width", "abc"),
            ("width", 2.5),
            ("height", 2.0),
            ("height", None),
        ],
    )
    def test_malformed_fields(self, field, value):
        with pytest.raises(ImageFormatError):
            image_from_record({**RECORD, field: value})


class TestLoadImage:
    def test_json_file(self, tmp_path):
        path = tmp_path / "image.json"
        path.write_text(json.dumps(RECORD))
        assert load_image(path).pixels.tolist() == [0, 1, 2, 1]

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "image.json"
        path.write_text("{width: 2")
        with pytest.raises(ImageFormatError):
            load_image(path)

    def test_bundled_template(self):
        image = load_image(TEMPLATES / "demo_waterfall.js")
        assert (image.width, image.height) == (8, 6)
        assert image.cycles[0] == PaletteCycle(4, 7, 2560, 0)
        assert image.cycles[1].is_reversed
        assert not image.cycles[2].is_active
