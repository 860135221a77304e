"""
Packing of rectangle outlines into vertex-bounded polygon batches.

Each color's rectangles are drawn as a single path per batch: every polygon
is closed by repeating its first vertex, then followed by a separator that
lifts the pen before the next one. A renderer only accepts a bounded number
of entries per path, so a color with many rectangles is spread across as
many batches as needed, each holding strictly fewer than `max_vertices`
entries.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from constants import MAX_VERTICES, POLYGON_TRAILER
from localtypes import BatchEntry, Color, Height, Polygon, PolygonBatch, Width

from .coordinates import rectangle_to_polygon
from .types import Rectangle

logger = logging.getLogger(__name__)

SEPARATOR: None = None
"""Undefined point breaking the path between two polygons of a batch."""


class VertexBudgetError(ValueError):
    """A single polygon cannot fit in a batch. The conversion must stop."""

    def __init__(self, footprint: int, max_vertices: int) -> None:
        super().__init__(
            f"Polygon needs {footprint} vertex entries, "
            f"which does not fit the budget of {max_vertices} per batch"
        )
        self.footprint = footprint
        self.max_vertices = max_vertices


def batch_color(
    rectangles: Iterable[Rectangle],
    width: Width,
    height: Height,
    max_vertices: int = MAX_VERTICES,
    flip: bool = True,
) -> list[PolygonBatch]:
    """
    Concatenate the outlines of one color's rectangles into batches.

    Raises:
        VertexBudgetError: If one polygon plus its trailer reaches max_vertices.
    """
    batches: list[PolygonBatch] = []
    current: list[BatchEntry] = []
    count = 0

    for rect in rectangles:
        polygon = rectangle_to_polygon(rect, width, height, flip)
        footprint = len(polygon) + POLYGON_TRAILER
        if footprint >= max_vertices:
            raise VertexBudgetError(footprint, max_vertices)
        if count + footprint >= max_vertices:
            batches.append(tuple(current))
            current, count = [], 0
        current.extend(polygon)
        current.append(polygon[0])
        current.append(SEPARATOR)
        count += footprint

    if current:
        batches.append(tuple(current))
    return batches


def batch_polygons(
    rectangles_by_color: Mapping[Color, Sequence[Rectangle]],
    width: Width,
    height: Height,
    max_vertices: int = MAX_VERTICES,
    flip: bool = True,
) -> dict[Color, list[PolygonBatch]]:
    """
    Batch every color. Colors without rectangles get an empty list.

    The budget is checked for all colors before anything is returned, so a
    violation leaves no partial result behind.
    """
    batches = {
        color: batch_color(rectangles, width, height, max_vertices, flip)
        for color, rectangles in rectangles_by_color.items()
    }
    logger.debug(
        f"Packed {sum(len(b) for b in batches.values())} batches "
        f"(max {max_vertices} entries each)"
    )
    return batches


def split_batch(batch: PolygonBatch) -> list[Polygon]:
    """Recover the polygons of a batch, dropping closing repeats and separators."""
    polygons: list[Polygon] = []
    pending: list[int] = []
    for entry in batch:
        if entry is SEPARATOR:
            # pending holds the four corners followed by the closing vertex
            a, b, c, d, _ = pending
            polygons.append((a, b, c, d))
            pending = []
        else:
            pending.append(entry)
    if pending:
        raise ValueError(f"Batch ends with an unterminated polygon: {pending}")
    return polygons
