"""
Run-length extraction of one-row rectangles.

Each row is cut into maximal runs of identical palette slots. Runs never
cross a row boundary, so the shapes stay one pixel tall: merging runs across
rows would be a connected-component problem, which is deliberately not
attempted here.
"""

import logging

import numpy as np

from constants import PALETTE_SIZE
from localtypes import Height, Width

from .types import IndexedImage, Rectangle, RectanglesByColor

logger = logging.getLogger(__name__)


def extract_runs(image: IndexedImage) -> RectanglesByColor:
    """
    Partition the image into maximal horizontal runs, bucketed by color.

    The flat pixel array is walked once in index order. A run starts at every
    row start and wherever the color differs from the previous pixel, and
    extends up to the next start, so every index is consumed exactly once.

    Returns:
        Mapping from every palette slot (0-255) to its rectangles in index order.
        Unused slots map to an empty list.
    """
    rows = image.rows
    starts_mask = np.ones(rows.shape, dtype=bool)
    starts_mask[:, 1:] = rows[:, 1:] != rows[:, :-1]

    starts = np.flatnonzero(starts_mask)
    ends = np.append(starts[1:], image.pixels.size)

    rectangles: RectanglesByColor = {color: [] for color in range(PALETTE_SIZE)}
    for start, end in zip(starts.tolist(), ends.tolist()):
        row, col_start = divmod(start, image.width)
        rectangles[int(image.pixels[start])].append(
            Rectangle(row, col_start, col_start + end - start)
        )

    logger.debug(f"Extracted {len(starts)} runs from {image.width}x{image.height} pixels")
    return rectangles


def rectangles_cover(
    rectangles_by_color: RectanglesByColor, width: Width, height: Height
) -> bool:
    """True if the rectangles are pairwise disjoint and cover the whole grid."""
    seen = np.zeros(width * height, dtype=np.int32)
    for rectangles in rectangles_by_color.values():
        for rect in rectangles:
            if rect.width <= 0 or rect.col_start < 0 or rect.col_end > width:
                return False
            if not 0 <= rect.row < height:
                return False
            indices = rect.indices(width)
            seen[indices.start : indices.stop] += 1
    return bool(np.all(seen == 1))
