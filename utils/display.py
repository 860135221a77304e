"""
Terminal rendering of indexed images and their palettes with rich.
"""

from collections.abc import Sequence
from numbers import Real

from rich.console import Console
from rich.table import Table
from rich.text import Text

from localtypes import RGB
from vectorize import IndexedImage, VectorImage, displayed_palette


def rgb_style(rgb: RGB) -> str:
    red, green, blue = rgb
    return f"on rgb({red},{green},{blue})"


def image_to_rich_text(
    image: IndexedImage, palette: Sequence[RGB], cell_width: int = 2, step: int = 1
) -> Text:
    """Colored blocks, one per `step` x `step` pixels, sampled top-left."""
    text = Text()
    for row in image.rows[::step]:
        for slot in row[::step].tolist():
            text.append(" " * cell_width, style=rgb_style(palette[slot]))
        text.append("\n")
    return text


def palette_to_rich_text(palette: Sequence[RGB], slots: Sequence[int]) -> Text:
    text = Text()
    for slot in slots:
        text.append("  ", style=rgb_style(palette[slot]))
    return text


def preview_step(image: IndexedImage, max_columns: int) -> int:
    """Smallest sampling step fitting the image in max_columns cells."""
    return max(1, -(-image.width // max_columns))


def batches_table(vector_image: VectorImage) -> Table:
    """Per-color summary of runs, batches and vertex entries."""
    table = Table(title="Polygon batches")
    table.add_column("Slot", justify="right")
    table.add_column("Color")
    table.add_column("Runs", justify="right")
    table.add_column("Batches", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Cycle")
    colors = vector_image.image.colors
    for formula in vector_image.formulas:
        slot = formula.slot
        rectangles = vector_image.rectangles[slot]
        if not rectangles:
            continue
        batches = vector_image.batches[slot]
        cycle = formula.cycle
        span = "" if cycle is None else f"{cycle.low}-{cycle.high}"
        table.add_row(
            str(slot),
            palette_to_rich_text(colors, [slot]),
            str(len(rectangles)),
            str(len(batches)),
            str(sum(len(batch) for batch in batches)),
            span,
        )
    return table


def print_preview(
    vector_image: VectorImage, t: Real = 0, console: Console | None = None
) -> None:
    console = console or Console(stderr=True)
    palette = displayed_palette(vector_image.formulas, vector_image.image.colors, t)
    step = preview_step(vector_image.image, console.width // 2)
    console.print(image_to_rich_text(vector_image.image, palette, step=step))
    console.print(batches_table(vector_image))
