"""
Type definitions for palette image vectorization.

This module contains all custom types shared throughout the project,
organized by their primary use cases.
"""

from __future__ import annotations

from typing import NamedTuple

# Data Type
type Json = dict[str, None | int | float | str | bool | list[Json] | dict[str, Json]]


# Color-related types
type Color = int  # Palette slot (0-255)


class RGB(NamedTuple):
    red: int
    green: int
    blue: int


type Palette = tuple[RGB, ...]


# Coordinate systems
class Coord(NamedTuple):
    col: int
    row: int


# Vertex system
type Vertex = int  # Grid-line index in the (width + 1)-stride space
type Polygon = tuple[Vertex, Vertex, Vertex, Vertex]
type BatchEntry = Vertex | None  # None is the separator sentinel
type PolygonBatch = tuple[BatchEntry, ...]

# Type aliases for improving code readability
Height = int
Width = int
Stride = int


__all__ = [
    # Data
    "Json",
    # Color types
    "Color",
    "RGB",
    "Palette",
    # Coordinate types
    "Coord",
    # Vertex types
    "Vertex",
    "Polygon",
    "BatchEntry",
    "PolygonBatch",
    # Type aliases
    "Height",
    "Width",
    "Stride",
]
