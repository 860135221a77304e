"""
Type definitions for indexed-color image vectorization.

This module contains the input-side entities (image, palette cycles) and the
atomic shape produced by run-length extraction.

Coordinate Convention:
    Pixel coordinates use (col, row) order, where:
    - col: x-axis, increases rightward (0 to width-1)
    - row: y-axis, increases downward (0 to height-1)

    Vertices address grid *lines* rather than pixels, so they live in a
    (width + 1) by (height + 1) space. See coordinates.py.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, NamedTuple

import numpy as np
import numpy.typing as npt

from constants import PALETTE_SIZE, REVERSE_DIRECTION
from localtypes import RGB, Color, Palette


class ImageFormatError(ValueError):
    """Raised when an input image record violates its invariants."""


# =============================================================================
# Palette Cycling
# =============================================================================


class PaletteCycle(NamedTuple):
    """
    Rotation of the palette slots low..high (inclusive).

    `rate` is a speed in 1/16384 steps per frame, `reverse` carries the
    direction encoding of the source format (2 means backwards).
    """

    low: Color
    high: Color
    rate: int
    reverse: int = 0

    @property
    def size(self) -> int:
        return self.high - self.low + 1

    @property
    def is_active(self) -> bool:
        return self.rate > 0

    @property
    def is_reversed(self) -> bool:
        return self.reverse == REVERSE_DIRECTION

    def covers(self, slot: Color) -> bool:
        return self.low <= slot <= self.high


# =============================================================================
# Rectangles
# =============================================================================


class Rectangle(NamedTuple):
    """A maximal horizontal run of one color in one row. col_end is exclusive."""

    row: int
    col_start: int
    col_end: int

    @property
    def width(self) -> int:
        return self.col_end - self.col_start

    def indices(self, width: int) -> range:
        """Linear pixel indices covered by the run."""
        start = self.row * width + self.col_start
        return range(start, start + self.width)


type RectanglesByColor = dict[Color, list[Rectangle]]


# =============================================================================
# Image
# =============================================================================


def is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def to_rgb(rgb: Any) -> RGB:
    if isinstance(rgb, str | bytes) or not isinstance(rgb, Sequence) or len(rgb) != 3:
        raise ImageFormatError(f"Color must be a red, green, blue triple, got {rgb!r}")
    if not all(is_integer(component) and 0 <= component <= 255 for component in rgb):
        raise ImageFormatError(f"Color component out of range in {tuple(rgb)}")
    return RGB(*(int(component) for component in rgb))


def pad_palette(colors: Iterable[Sequence[int]]) -> Palette:
    """Return a full 256 slots palette, unused trailing slots being black."""
    palette = [to_rgb(rgb) for rgb in colors]
    if len(palette) > PALETTE_SIZE:
        raise ImageFormatError(
            f"Palette has {len(palette)} colors, at most {PALETTE_SIZE} allowed"
        )
    palette.extend(RGB(0, 0, 0) for _ in range(PALETTE_SIZE - len(palette)))
    return tuple(palette)


@dataclass(frozen=True, eq=False)
class IndexedImage:
    """
    Decoded indexed-color image.

    Attributes:
        width, height: Dimensions in pixels.
        colors: The 256 slots palette.
        cycles: Palette cycling descriptors, in source order.
        pixels: Flat row-major array of palette slots, length width * height.
            Any integer array-like is accepted and stored as uint8.
    """

    width: int
    height: int
    colors: Palette
    cycles: tuple[PaletteCycle, ...] = ()
    pixels: npt.NDArray[np.uint8] = field(
        default_factory=lambda: np.zeros(0, dtype=np.uint8)
    )

    def __post_init__(self) -> None:
        if not (is_integer(self.width) and is_integer(self.height)):
            raise ImageFormatError(
                f"Image dimensions must be integers, got {self.width!r}x{self.height!r}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ImageFormatError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 1 or pixels.size != self.width * self.height:
            raise ImageFormatError(
                f"Expected {self.width * self.height} pixels for a "
                f"{self.width}x{self.height} image, got {pixels.size}"
            )
        if pixels.dtype.kind not in "iu":
            raise ImageFormatError(
                f"Pixel values must be integers, got {pixels.dtype} values"
            )
        if pixels.min() < 0 or pixels.max() >= PALETTE_SIZE:
            raise ImageFormatError(
                f"Pixel values must be palette slots in [0, {PALETTE_SIZE - 1}]"
            )
        if len(self.colors) != PALETTE_SIZE:
            raise ImageFormatError(
                f"Palette must have {PALETTE_SIZE} slots, got {len(self.colors)}"
            )
        for cycle in self.cycles:
            if not 0 <= cycle.low <= cycle.high < PALETTE_SIZE:
                raise ImageFormatError(f"Invalid cycle range in {cycle}")
        object.__setattr__(self, "pixels", pixels.astype(np.uint8))

    @classmethod
    def from_pixels(
        cls,
        width: int,
        height: int,
        pixels: Iterable[int],
        colors: Iterable[Sequence[int]] = (),
        cycles: Iterable[PaletteCycle] = (),
    ) -> "IndexedImage":
        """Build an image from plain Python values."""
        try:
            values = np.asarray(list(pixels))
        except (TypeError, ValueError) as error:
            raise ImageFormatError(f"Unreadable pixel array: {error}") from error
        return cls(
            width=width,
            height=height,
            colors=pad_palette(colors),
            cycles=tuple(cycles),
            pixels=values,
        )

    @property
    def rows(self) -> npt.NDArray[np.uint8]:
        """Pixels as a (height, width) view."""
        return self.pixels.reshape(self.height, self.width)

    def used_colors(self) -> frozenset[Color]:
        return frozenset(int(color) for color in np.unique(self.pixels))
