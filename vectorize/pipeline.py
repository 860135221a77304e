"""
Vectorization pipeline: image -> rectangles -> batches, cycles -> slot formulas.

Everything is derived in one call from an immutable image and explicit
options; nothing is kept between calls.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from constants import LOOP_SECONDS, MAX_VERTICES, PALETTE_SIZE, VIEWPORT_MARGIN
from localtypes import Color, PolygonBatch

from .batching import batch_polygons
from .cycling import PaletteSlotFormula, encode_palette_cycles
from .runs import extract_runs, rectangles_cover
from .types import IndexedImage, PaletteCycle, RectanglesByColor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOptions:
    """
    Attributes:
        max_vertices: Entries allowed per polygon batch.
        honor_reverse: Rotate reversed cycles backwards.
        flip_vertical: Convert vertices to a bottom-left origin.
        colors: Only emit polygons for these slots. None means every slot.
        loop_seconds: Length of the time slider driving the animation.
        viewport_margin: Blank border around the image in the output viewport.
    """

    max_vertices: int = MAX_VERTICES
    honor_reverse: bool = True
    flip_vertical: bool = True
    colors: frozenset[Color] | None = None
    loop_seconds: int = LOOP_SECONDS
    viewport_margin: int = VIEWPORT_MARGIN


@dataclass(frozen=True)
class VectorImage:
    """Structured result of a conversion, before serialization."""

    image: IndexedImage
    rectangles: RectanglesByColor
    batches: dict[Color, list[PolygonBatch]]
    formulas: tuple[PaletteSlotFormula, ...]
    options: ConversionOptions = field(default_factory=ConversionOptions)

    @property
    def batch_count(self) -> int:
        return sum(len(batches) for batches in self.batches.values())

    @property
    def vertex_count(self) -> int:
        return sum(len(b) for batches in self.batches.values() for b in batches)

    @property
    def polygon_count(self) -> int:
        return sum(len(rectangles) for rectangles in self.rectangles.values())

    def unused_colors(self) -> list[Color]:
        """Slots no pixel maps to."""
        used = self.image.used_colors()
        return [slot for slot in range(PALETTE_SIZE) if slot not in used]


def vectorize(
    image: IndexedImage,
    options: ConversionOptions = ConversionOptions(),
    cycles: Sequence[PaletteCycle] | None = None,
) -> VectorImage:
    """
    Run the whole extraction on an image.

    Args:
        image: Source image.
        options: Conversion parameters.
        cycles: Overrides the image's own cycles when given.

    Raises:
        VertexBudgetError: If a single polygon exceeds the vertex budget.
    """
    rectangles = extract_runs(image)
    if logger.isEnabledFor(logging.DEBUG):
        assert rectangles_cover(rectangles, image.width, image.height), (
            "Run-length rectangles do not partition the image"
        )

    if options.colors is not None:
        rectangles = {
            color: rects if color in options.colors else []
            for color, rects in rectangles.items()
        }

    batches = batch_polygons(
        rectangles,
        image.width,
        image.height,
        max_vertices=options.max_vertices,
        flip=options.flip_vertical,
    )
    formulas = encode_palette_cycles(
        image.cycles if cycles is None else cycles,
        honor_reverse=options.honor_reverse,
    )

    result = VectorImage(image, rectangles, batches, formulas, options)
    logger.info(f"Dimensions: {image.width}x{image.height}")
    logger.info(
        f"Polygons: {result.polygon_count}, vertices: {result.vertex_count}, "
        f"batches: {result.batch_count}"
    )
    logger.debug(f"Unused palette colors: {result.unused_colors()}")
    return result
