"""Tests for vectorize/cycling.py"""

from fractions import Fraction

import pytest

from localtypes import RGB
from vectorize import (
    PaletteCycle,
    PaletteSlotFormula,
    displayed_palette,
    encode_palette_cycles,
    find_cycle,
)

WATERFALL = PaletteCycle(low=10, high=12, rate=1536, reverse=0)

# Time for a rate 1536 cycle to advance by exactly one slot
ONE_STEP = Fraction(16384, 60 * 1536)


class TestSlotFormula:
    def test_static_slot(self):
        formula = PaletteSlotFormula(7)
        assert formula.is_static
        assert formula.period == 1
        assert [formula.displayed_index(t) for t in (0, 1.5, 1000)] == [7, 7, 7]

    def test_phase(self):
        formula = PaletteSlotFormula(10, WATERFALL)
        assert formula.phase(0) == 0
        assert formula.phase(ONE_STEP) == 1
        # 60 * 1536 / 16384 == 5.625 steps per second
        assert formula.phase(1) == 5

    def test_negative_phase_stays_in_range(self):
        formula = PaletteSlotFormula(10, WATERFALL, direction=-1)
        assert formula.phase(ONE_STEP) == -1
        assert formula.displayed_index(ONE_STEP) == 12


class TestEncodePaletteCycles:
    def test_one_formula_per_slot(self):
        formulas = encode_palette_cycles([WATERFALL])
        assert [f.slot for f in formulas] == list(range(256))

    def test_cycle_at_rest(self):
        formulas = encode_palette_cycles([WATERFALL])
        assert [formulas[i].displayed_index(0) for i in (10, 11, 12)] == [10, 11, 12]

    def test_cycle_advances_one_step(self):
        formulas = encode_palette_cycles([WATERFALL])
        shown = [formulas[i].displayed_index(ONE_STEP) for i in (10, 11, 12)]
        assert shown == [11, 12, 10]

    def test_cycle_wraps_after_period(self):
        formulas = encode_palette_cycles([WATERFALL])
        assert formulas[11].displayed_index(3 * ONE_STEP) == 11

    def test_uncovered_slots_are_static(self):
        formulas = encode_palette_cycles([WATERFALL])
        for slot in (0, 9, 13, 255):
            assert formulas[slot].is_static
            assert formulas[slot].displayed_index(ONE_STEP * 17) == slot

    def test_zero_rate_is_ignored(self):
        formulas = encode_palette_cycles([PaletteCycle(0, 5, 0)])
        assert all(formula.is_static for formula in formulas)

    def test_reverse_honored(self):
        formulas = encode_palette_cycles([WATERFALL._replace(reverse=2)])
        assert formulas[10].direction == -1
        assert formulas[10].displayed_index(ONE_STEP) == 12

    def test_reverse_ignored(self):
        formulas = encode_palette_cycles(
            [WATERFALL._replace(reverse=2)], honor_reverse=False
        )
        assert formulas[10].direction == 1
        assert formulas[10].displayed_index(ONE_STEP) == 11

    def test_first_match_wins(self):
        first, second = PaletteCycle(0, 3, 100), PaletteCycle(2, 5, 200)
        formulas = encode_palette_cycles([first, second])
        assert formulas[2].cycle == first
        assert formulas[4].cycle == second

    @pytest.mark.parametrize("reverse", [0, 2])
    def test_displayed_index_in_range(self, reverse):
        cycle = PaletteCycle(32, 47, 2731, reverse)
        formulas = encode_palette_cycles([cycle])
        times = [Fraction(n, 7) for n in range(-50, 200)] + [0.1 * n for n in range(100)]
        for slot in range(32, 48):
            for t in times:
                assert 32 <= formulas[slot].displayed_index(t) <= 47


class TestFindCycle:
    def test_skips_inactive_cycles(self):
        active = PaletteCycle(0, 5, 10)
        assert find_cycle([PaletteCycle(0, 5, 0), active], 1) == active

    def test_no_cycle(self):
        assert find_cycle([PaletteCycle(0, 5, 10)], 6) is None


class TestDisplayedPalette:
    def test_rotates_colors(self):
        colors = [RGB(i, i, i) for i in range(256)]
        formulas = encode_palette_cycles([WATERFALL])
        palette = displayed_palette(formulas, colors, ONE_STEP)
        assert palette[10:13] == (RGB(11, 11, 11), RGB(12, 12, 12), RGB(10, 10, 10))
        assert palette[9] == RGB(9, 9, 9)
