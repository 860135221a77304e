"""Tests for utils/display.py"""

import io

from rich.console import Console

from localtypes import RGB
from utils.display import (
    batches_table,
    image_to_rich_text,
    palette_to_rich_text,
    preview_step,
    print_preview,
)
from vectorize import IndexedImage, PaletteCycle, vectorize

PALETTE = [RGB(i, i, i) for i in range(256)]


def test_image_to_rich_text():
    image = IndexedImage.from_pixels(2, 2, [0, 1, 2, 3])
    text = image_to_rich_text(image, PALETTE)
    assert text.plain == "    \n    \n"


def test_image_sampling():
    image = IndexedImage.from_pixels(4, 4, list(range(16)))
    text = image_to_rich_text(image, PALETTE, cell_width=1, step=2)
    assert text.plain == "  \n  \n"


def test_palette_strip():
    assert palette_to_rich_text(PALETTE, [1, 2, 3]).plain == " " * 6


def test_preview_step():
    assert preview_step(IndexedImage.from_pixels(8, 1, [0] * 8), 80) == 1
    assert preview_step(IndexedImage.from_pixels(200, 1, [0] * 200), 80) == 3


def test_batches_table_lists_used_slots():
    image = IndexedImage.from_pixels(3, 1, [4, 4, 7], cycles=[PaletteCycle(4, 7, 10)])
    table = batches_table(vectorize(image))
    assert table.row_count == 2


def test_print_preview():
    buffer = io.StringIO()
    console = Console(file=buffer, width=80, color_system=None)
    print_preview(vectorize(IndexedImage.from_pixels(2, 1, [0, 1])), console=console)
    assert "Polygon batches" in buffer.getvalue()
