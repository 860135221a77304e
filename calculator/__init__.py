"""
Serialization of vectorized images into graphing calculator state documents.

Example:
    >>> import json
    >>> from calculator import convert
    >>> from vectorize import IndexedImage
    >>>
    >>> state = convert(IndexedImage.from_pixels(1, 1, [3]))
    >>> print(json.dumps(state, indent=2))
"""

from .latex import (
    UNDEFINED_POINT,
    displayed_index_to_latex,
    polygon_to_latex,
    slot_formula_to_latex,
)
from .state import build_state, convert

__all__ = [
    "UNDEFINED_POINT",
    "displayed_index_to_latex",
    "polygon_to_latex",
    "slot_formula_to_latex",
    "build_state",
    "convert",
]
