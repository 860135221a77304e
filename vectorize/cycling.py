"""
Closed-form palette cycling.

A cycle rotates the colors displayed by the slots low..high. Rather than
mutating the palette frame after frame, every slot gets a periodic function
of the time t (in seconds) giving the slot whose static color it currently
shows:

    period           = high - low + 1
    phase(t)         = floor(direction * 60 * rate * t / 16384)
    displayed(i, t)  = low + (phase(t) + i - low) mod period

`mod` is the non-negative modulo, so backwards cycles stay in range.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from numbers import Real

from constants import FRAMES_PER_SECOND, PALETTE_SIZE, TIME_BASE
from localtypes import RGB, Color

from .types import PaletteCycle


@dataclass(frozen=True)
class PaletteSlotFormula:
    """Displayed-index function of one palette slot. Static when cycle is None."""

    slot: Color
    cycle: PaletteCycle | None = None
    direction: int = 1

    @property
    def is_static(self) -> bool:
        return self.cycle is None

    @property
    def period(self) -> int:
        return 1 if self.cycle is None else self.cycle.size

    @property
    def speed(self) -> int:
        """Signed numerator of the phase, in TIME_BASE units per second."""
        if self.cycle is None:
            return 0
        return self.direction * FRAMES_PER_SECOND * self.cycle.rate

    @property
    def offset(self) -> int:
        """Position of the slot inside its cycle."""
        return 0 if self.cycle is None else self.slot - self.cycle.low

    def phase(self, t: Real) -> int:
        return math.floor(self.speed * t / TIME_BASE)

    def displayed_index(self, t: Real) -> Color:
        if self.cycle is None:
            return self.slot
        return self.cycle.low + (self.phase(t) + self.offset) % self.period


def find_cycle(cycles: Iterable[PaletteCycle], slot: Color) -> PaletteCycle | None:
    """First active cycle covering the slot. Overlaps are resolved by order."""
    return next(
        (cycle for cycle in cycles if cycle.is_active and cycle.covers(slot)), None
    )


def encode_palette_cycles(
    cycles: Sequence[PaletteCycle],
    honor_reverse: bool = True,
    palette_size: int = PALETTE_SIZE,
) -> tuple[PaletteSlotFormula, ...]:
    """
    Build one formula per palette slot.

    Args:
        cycles: Cycle descriptors in source order.
        honor_reverse: When False, every cycle rotates forwards regardless of
            its reverse flag.
        palette_size: Number of slots to encode.
    """
    formulas = []
    for slot in range(palette_size):
        cycle = find_cycle(cycles, slot)
        if cycle is None:
            formulas.append(PaletteSlotFormula(slot))
            continue
        direction = -1 if honor_reverse and cycle.is_reversed else 1
        formulas.append(PaletteSlotFormula(slot, cycle, direction))
    return tuple(formulas)


def displayed_palette(
    formulas: Sequence[PaletteSlotFormula], colors: Sequence[RGB], t: Real
) -> tuple[RGB, ...]:
    """Colors shown by every slot at time t."""
    return tuple(colors[formula.displayed_index(t)] for formula in formulas)
