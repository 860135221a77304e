"""
Module used to import indexed images from disk.

Two formats are accepted:
    - .json: a plain object {width, height, colors, cycles, pixels}
    - .js:   a template script wrapping that object in a function call,
             `CanvasCycle.processImage({...});`. The object literal may use
             bare keys. The script is parsed, never executed.
"""

import json
import re
from pathlib import Path
from typing import Any

from vectorize import ImageFormatError, IndexedImage, PaletteCycle

REQUIRED_KEYS = ("width", "height", "colors", "pixels")

BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_]\w*)\s*:")
TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def script_to_record(script: str) -> dict[str, Any]:
    """Extract the object literal passed to the template's call."""
    start, end = script.find("{"), script.rfind("}")
    if start == -1 or end < start:
        raise ImageFormatError("No object literal found in template script")
    literal = script[start : end + 1]
    try:
        return json.loads(literal)
    except json.JSONDecodeError:
        pass
    literal = TRAILING_COMMA.sub(r"\1", BARE_KEY.sub(r'\1"\2":', literal))
    try:
        return json.loads(literal)
    except json.JSONDecodeError as error:
        raise ImageFormatError(f"Unreadable template object: {error}") from error


def record_to_cycles(raw_cycles: list[dict[str, Any]]) -> list[PaletteCycle]:
    return [
        PaletteCycle(
            low=int(cycle["low"]),
            high=int(cycle["high"]),
            rate=int(cycle.get("rate", 0)),
            reverse=int(cycle.get("reverse", 0)),
        )
        for cycle in raw_cycles
    ]


def image_from_record(record: dict[str, Any]) -> IndexedImage:
    """Validate an input record and build the image."""
    missing = [key for key in REQUIRED_KEYS if key not in record]
    if missing:
        raise ImageFormatError(f"Image record is missing keys: {', '.join(missing)}")
    try:
        cycles = record_to_cycles(record.get("cycles", []))
    except (KeyError, TypeError, ValueError) as error:
        raise ImageFormatError(f"Malformed cycle descriptor: {error}") from error

    for key in ("colors", "pixels"):
        if not isinstance(record[key], list):
            raise ImageFormatError(f"Image record {key} must be a list")

    colors = record["colors"]
    image = IndexedImage.from_pixels(
        width=record["width"],
        height=record["height"],
        pixels=record["pixels"],
        colors=colors,
        cycles=cycles,
    )
    if image.pixels.size and int(image.pixels.max()) >= len(colors):
        raise ImageFormatError(
            f"Pixel refers to slot {int(image.pixels.max())} "
            f"but the palette only has {len(colors)} colors"
        )
    return image


def load_record(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    with open(path, "r") as file:
        content = file.read()
    if path.suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as error:
            raise ImageFormatError(f"Invalid JSON in {path}: {error}") from error
    return script_to_record(content)


def load_image(path: str | Path) -> IndexedImage:
    return image_from_record(load_record(path))
