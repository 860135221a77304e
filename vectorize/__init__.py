"""
Indexed-color image vectorization.

This package turns a palette image into disjoint per-color polygon batches
and a closed-form description of its palette cycling animation.

Pipeline:
    IndexedImage → Rectangles (runs) → Polygons → PolygonBatches
    PaletteCycles → PaletteSlotFormulas

Example:
    >>> from vectorize import IndexedImage, vectorize
    >>>
    >>> image = IndexedImage.from_pixels(2, 1, [5, 5])
    >>> result = vectorize(image)
    >>> result.rectangles[5]
    [Rectangle(row=0, col_start=0, col_end=2)]
    >>> len(result.batches[5])
    1

Key Types:
    - IndexedImage: Validated input (dimensions, 256 slots palette, cycles, pixels)
    - Rectangle: One-row maximal run of a single color
    - PaletteSlotFormula: Displayed-index function of a slot over time
    - VectorImage: Structured conversion result
"""

from .types import (
    ImageFormatError,
    IndexedImage,
    PaletteCycle,
    Rectangle,
    RectanglesByColor,
    pad_palette,
)

from .coordinates import (
    flip_vertical,
    index_to_xy,
    polygon_to_rectangle,
    rectangle_to_polygon,
    vertex_stride,
    xy_to_index,
)

from .runs import extract_runs, rectangles_cover

from .batching import (
    SEPARATOR,
    VertexBudgetError,
    batch_color,
    batch_polygons,
    split_batch,
)

from .cycling import (
    PaletteSlotFormula,
    displayed_palette,
    encode_palette_cycles,
    find_cycle,
)

from .pipeline import ConversionOptions, VectorImage, vectorize

__all__ = [
    # Types
    "ImageFormatError",
    "IndexedImage",
    "PaletteCycle",
    "Rectangle",
    "RectanglesByColor",
    "pad_palette",
    # Coordinates
    "flip_vertical",
    "index_to_xy",
    "polygon_to_rectangle",
    "rectangle_to_polygon",
    "vertex_stride",
    "xy_to_index",
    # Runs
    "extract_runs",
    "rectangles_cover",
    # Batching
    "SEPARATOR",
    "VertexBudgetError",
    "batch_color",
    "batch_polygons",
    "split_batch",
    # Cycling
    "PaletteSlotFormula",
    "displayed_palette",
    "encode_palette_cycles",
    "find_cycle",
    # Pipeline
    "ConversionOptions",
    "VectorImage",
    "vectorize",
]
