"""
Assembly of the graphing calculator state document.

The document groups expressions in collapsed folders:
    - Time: the T slider, playing and looping forever
    - Palette: the R, G, B channel lists, Q(n) and one P_{i} color per slot
    - Polygons: one polygon per batch, filled with its slot color

Polygon colors refer to P_{i}, so they follow the cycling palette as T moves.
"""

import logging
from collections.abc import Sequence

from constants import STATE_VERSION
from localtypes import Json
from vectorize import (
    ConversionOptions,
    IndexedImage,
    PaletteCycle,
    VectorImage,
    vectorize,
    vertex_stride,
)

from .latex import (
    CHANNEL_LISTS,
    TIME_VARIABLE,
    channel_list_to_latex,
    palette_function_to_latex,
    polygon_to_latex,
    slot_color_name,
    slot_formula_to_latex,
)

logger = logging.getLogger(__name__)

TIME_FOLDER = "time"
PALETTE_FOLDER = "palette"
POLYGON_FOLDER = "polygons"


def folder(folder_id: str, title: str) -> Json:
    return {"type": "folder", "id": folder_id, "title": title, "collapsed": True}


def expression(expression_id: str, folder_id: str, latex: str, **extra) -> Json:
    return {
        "type": "expression",
        "id": expression_id,
        "folderId": folder_id,
        "latex": latex,
        **extra,
    }


def time_expressions(loop_seconds: int) -> list[Json]:
    slider: Json = {
        "hardMin": True,
        "hardMax": True,
        "min": "0",
        "max": str(loop_seconds),
        "loopMode": "LOOP_FORWARD",
        "isPlaying": True,
        "animationPeriod": loop_seconds * 1000,
    }
    return [
        folder(TIME_FOLDER, "Time"),
        expression("time-slider", TIME_FOLDER, f"{TIME_VARIABLE}=0", slider=slider),
    ]


def palette_expressions(vector_image: VectorImage) -> list[Json]:
    colors = vector_image.image.colors
    expressions = [folder(PALETTE_FOLDER, "Palette")]
    for channel, name in enumerate(CHANNEL_LISTS):
        expressions.append(
            expression(
                f"palette-{name.lower()}",
                PALETTE_FOLDER,
                channel_list_to_latex(name, colors, channel),
            )
        )
    expressions.append(
        expression("palette-rgb", PALETTE_FOLDER, palette_function_to_latex())
    )
    for formula in vector_image.formulas:
        expressions.append(
            expression(
                f"slot-{formula.slot}", PALETTE_FOLDER, slot_formula_to_latex(formula)
            )
        )
    return expressions


def polygon_expressions(vector_image: VectorImage) -> list[Json]:
    stride = vertex_stride(vector_image.image.width)
    expressions = [folder(POLYGON_FOLDER, "Polygons")]
    for color, batches in vector_image.batches.items():
        for index, batch in enumerate(batches):
            expressions.append(
                expression(
                    f"polygon-{color}-{index}",
                    POLYGON_FOLDER,
                    polygon_to_latex(batch, stride),
                    colorLatex=slot_color_name(color),
                    lines=False,
                    fillOpacity="1",
                )
            )
    return expressions


def viewport(image: IndexedImage, margin: int) -> Json:
    return {
        "xmin": -margin,
        "ymin": -margin,
        "xmax": image.width + margin,
        "ymax": image.height + margin,
    }


def build_state(vector_image: VectorImage) -> Json:
    """Serialize a conversion result into a calculator state document."""
    options = vector_image.options
    expressions = [
        *time_expressions(options.loop_seconds),
        *palette_expressions(vector_image),
        *polygon_expressions(vector_image),
    ]
    logger.debug(f"State document holds {len(expressions)} expressions")
    return {
        "version": STATE_VERSION,
        "graph": {"viewport": viewport(vector_image.image, options.viewport_margin)},
        "expressions": {"list": expressions},
    }


def convert(
    image: IndexedImage,
    options: ConversionOptions = ConversionOptions(),
    cycles: Sequence[PaletteCycle] | None = None,
) -> Json:
    """
    Convert an image into a calculator state document.

    Raises:
        VertexBudgetError: If a single polygon exceeds the vertex budget. No
            document is produced in that case.
    """
    return build_state(vectorize(image, options, cycles))
