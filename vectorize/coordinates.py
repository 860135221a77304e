"""
Vertex addressing for run-length rectangles.

A vertex is a single integer encoding a grid-line position (x, y), with
0 <= x <= width and 0 <= y <= height. Grid lines are one more than pixels in
each direction, so the linear encoding uses a stride of width + 1: a
rectangle ending exactly on the right edge (x == width) then has a vertex
distinct from column 0 of the next row.

The renderer uses a bottom-left origin while images are stored top-left
first, hence the vertical flip y -> height - y. Applying it twice with the
same height gives back the original vertex.
"""

from localtypes import Coord, Height, Polygon, Stride, Vertex, Width

from .types import Rectangle


def vertex_stride(width: Width) -> Stride:
    return width + 1


def index_to_xy(index: Vertex, stride: Stride) -> Coord:
    return Coord(index % stride, index // stride)


def xy_to_index(col: int, row: int, stride: Stride) -> Vertex:
    return row * stride + col


def flip_vertical(index: Vertex, stride: Stride, height: Height) -> Vertex:
    col, row = index_to_xy(index, stride)
    return xy_to_index(col, height - row, stride)


def rectangle_to_polygon(
    rect: Rectangle, width: Width, height: Height, flip: bool = True
) -> Polygon:
    """
    Outline of a rectangle as its four corner vertices.

    Corners are ordered top-left, bottom-left, bottom-right, top-right in image
    coordinates; the flip only changes their addresses, not their order.
    """
    stride = vertex_stride(width)
    top, bottom = rect.row, rect.row + 1
    corners = (
        xy_to_index(rect.col_start, top, stride),
        xy_to_index(rect.col_start, bottom, stride),
        xy_to_index(rect.col_end, bottom, stride),
        xy_to_index(rect.col_end, top, stride),
    )
    if flip:
        return (
            flip_vertical(corners[0], stride, height),
            flip_vertical(corners[1], stride, height),
            flip_vertical(corners[2], stride, height),
            flip_vertical(corners[3], stride, height),
        )
    return corners


def polygon_to_rectangle(
    polygon: Polygon, width: Width, height: Height, flip: bool = True
) -> Rectangle:
    """Inverse of rectangle_to_polygon."""
    stride = vertex_stride(width)
    top_left, _, bottom_right, _ = polygon
    if flip:
        top_left = flip_vertical(top_left, stride, height)
        bottom_right = flip_vertical(bottom_right, stride, height)
    col_start, row = index_to_xy(top_left, stride)
    col_end, _ = index_to_xy(bottom_right, stride)
    return Rectangle(row, col_start, col_end)
