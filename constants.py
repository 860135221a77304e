"""
Global constants used throughout the project
"""

from pathlib import Path
from typing import Final

PALETTE_SIZE: Final[int] = 256

# Coordinate entries allowed in a single polygon expression
MAX_VERTICES: Final[int] = 2000

# Entries appended after each polygon: the closing vertex and the separator
POLYGON_TRAILER: Final[int] = 2

# Cycle rates are expressed in 1/16384 of a step per frame at 60 frames per second
TIME_BASE: Final[int] = 16384
FRAMES_PER_SECOND: Final[int] = 60

# Value of a cycle's `reverse` field meaning "rotate backwards"
REVERSE_DIRECTION: Final[int] = 2

# Output document defaults
STATE_VERSION: Final[int] = 9
VIEWPORT_MARGIN: Final[int] = 10
LOOP_SECONDS: Final[int] = 600

TEMPLATES: Final[Path] = Path(__file__).parent / "images"
