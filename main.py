"""
Convert palette-cycling images into graphing calculator states.

Usage:
    python main.py --template demo_waterfall > state.json
    python main.py --input image.json --output state.json --colors 3 4
    python main.py --list

The resulting JSON can be loaded in the calculator page with:

    setTimeout(async () => {
      const stateString = await navigator.clipboard.readText();
      Calc.setState(JSON.parse(stateString));
    }, 1000);
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from calculator import build_state
from localtypes import Json
from templates import available_templates, discover_templates, get_template
from utils.display import print_preview
from utils.loader import load_image
from vectorize import (
    ConversionOptions,
    ImageFormatError,
    VectorImage,
    VertexBudgetError,
    vectorize,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)


def vectorize_source(
    template: str | None = None,
    input_path: Path | None = None,
    options: ConversionOptions = ConversionOptions(),
) -> VectorImage:
    """
    Vectorize a registered template or an image file.

    Raises:
        KeyError: Unknown template.
        ImageFormatError: Malformed image file.
        VertexBudgetError: A polygon does not fit the vertex budget.
    """
    if input_path is not None:
        logger.info(f"Converting image file: {input_path}")
        image = load_image(input_path)
    elif template is not None:
        source = get_template(template)
        logger.info(f"Converting template: {source.description}")
        image = source.load()
        options = source.configure(options)
    else:
        raise ValueError("Either a template or an input path is required")

    return vectorize(image, options)


def write_state(state: Json, output: Path | None) -> None:
    text = json.dumps(state, indent=2)
    if output is None:
        print(text)
        return
    with open(output, "w") as file:
        file.write(text)
    logger.info(f"State written to {output}")


def main(argv: list[str] | None = None) -> None:
    """Parse the command line, convert and write the state document."""
    parser = argparse.ArgumentParser(description="Vectorize palette-cycling images")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--template", help="Registered template name")
    source.add_argument("--input", type=Path, help="Image file (.json or .js)")
    source.add_argument("--list", action="store_true", help="List templates and exit")
    parser.add_argument("--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument(
        "--max-vertices",
        type=int,
        default=ConversionOptions.max_vertices,
        help="Vertex entries allowed per polygon",
    )
    parser.add_argument(
        "--ignore-reverse",
        action="store_true",
        help="Rotate every cycle forwards",
    )
    parser.add_argument(
        "--no-flip", action="store_true", help="Keep the top-left origin"
    )
    parser.add_argument(
        "--colors",
        type=int,
        nargs="+",
        help="Only emit polygons for these palette slots",
    )
    parser.add_argument(
        "--loop-seconds",
        type=int,
        default=ConversionOptions.loop_seconds,
        help="Length of the looping time slider",
    )
    parser.add_argument(
        "--preview", action="store_true", help="Print the image and batch summary"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    discover_templates()

    if args.list:
        for name in available_templates():
            print(name)
        return

    options = ConversionOptions(
        max_vertices=args.max_vertices,
        honor_reverse=not args.ignore_reverse,
        flip_vertical=not args.no_flip,
        colors=frozenset(args.colors) if args.colors else None,
        loop_seconds=args.loop_seconds,
    )

    try:
        vector_image = vectorize_source(args.template, args.input, options)
    except (KeyError, FileNotFoundError, ImageFormatError, VertexBudgetError) as error:
        logger.error(f"Conversion aborted: {error}")
        sys.exit(1)

    if args.preview:
        print_preview(vector_image)

    write_state(build_state(vector_image), args.output)


if __name__ == "__main__":
    main()

