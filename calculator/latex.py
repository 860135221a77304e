"""
LaTeX fragments understood by the graphing calculator.

Only plain string building lives here; the values come from the structured
records of the vectorize package.
"""

from collections.abc import Iterable, Sequence

from constants import TIME_BASE
from localtypes import RGB, BatchEntry, Stride
from vectorize import SEPARATOR, PaletteSlotFormula

# Indexing an empty list yields an undefined point, which breaks the path
UNDEFINED_POINT = "[][1]"

TIME_VARIABLE = "T"
PALETTE_FUNCTION = "Q"
CHANNEL_LISTS = ("R", "G", "B")


def left_right(body: str, left: str = "(", right: str = ")") -> str:
    return f"\\left{left}{body}\\right{right}"


def point_to_latex(x: str, y: str) -> str:
    return left_right(f"{x},{y}")


def list_to_latex(values: Iterable[object]) -> str:
    return left_right(",".join(str(value) for value in values), "[", "]")


def opname_call_to_latex(name: str, *args: str) -> str:
    return f"\\operatorname{{{name}}}" + left_right(",".join(args))


def slot_color_name(slot: int) -> str:
    return f"P_{{{slot}}}"


def vertex_to_latex(entry: BatchEntry) -> str:
    return UNDEFINED_POINT if entry is SEPARATOR else str(entry)


def polygon_to_latex(batch: Sequence[BatchEntry], stride: Stride) -> str:
    """
    A batch as a polygon over a list comprehension decoding each vertex:

        polygon([(mod(i, stride), floor(i / stride)) for i = [...]])
    """
    point = point_to_latex(
        opname_call_to_latex("mod", "i", str(stride)),
        opname_call_to_latex("floor", f"\\frac{{i}}{{{stride}}}"),
    )
    vertices = ",".join(vertex_to_latex(entry) for entry in batch)
    return opname_call_to_latex(
        "polygon",
        left_right(
            point + " \\operatorname{for} i=" + left_right(vertices, "[", "]"),
            "[",
            "]",
        ),
    )


def channel_list_to_latex(name: str, colors: Sequence[RGB], channel: int) -> str:
    return f"{name}=" + list_to_latex(rgb[channel] for rgb in colors)


def palette_function_to_latex() -> str:
    """Q(n) = rgb(R[n+1], G[n+1], B[n+1]), calculator lists being 1-indexed."""
    channels = [name + left_right("n+1", "[", "]") for name in CHANNEL_LISTS]
    return (
        PALETTE_FUNCTION + left_right("n") + "=" + opname_call_to_latex("rgb", *channels)
    )


def displayed_index_to_latex(formula: PaletteSlotFormula) -> str:
    """Expression of the displayed index in terms of the time variable."""
    if formula.cycle is None:
        return str(formula.slot)
    phase = opname_call_to_latex(
        "floor", f"\\frac{{{formula.speed}{TIME_VARIABLE}}}{{{TIME_BASE}}}"
    )
    rotated = opname_call_to_latex(
        "mod", f"{phase}+{formula.offset}", str(formula.period)
    )
    return f"{formula.cycle.low}+{rotated}"


def slot_formula_to_latex(formula: PaletteSlotFormula) -> str:
    return (
        slot_color_name(formula.slot)
        + "="
        + PALETTE_FUNCTION
        + left_right(displayed_index_to_latex(formula))
    )
