"""Tests for the grid scanner."""

import numpy as np
import pytest

from src.encoder import encode
from src.glyphs import GlyphKind, tokens
from src.grid import BooleanGrid, ConsumptionMask
from src.scanner import iter_glyphs, scan


def _stamp(canvas, value, x, y):
    pixels = encode(value)
    h, w = pixels.shape
    canvas[y : y + h, x : x + w] |= pixels


class TestScan:
    def test_scan_order_is_row_major(self, ordered_grid):
        glyphs = scan(ordered_grid)
        assert [(g.x, g.y) for g in glyphs] == [(3, 2), (12, 2), (2, 10)]
        assert tokens(glyphs) == [3, 4096, 2]

    def test_glyph_extents(self, ordered_grid):
        glyphs = scan(ordered_grid)
        assert [(g.dx, g.dy) for g in glyphs] == [(3, 3), (5, 5), (3, 3)]
        assert all(g.kind == GlyphKind.COMMAND for g in glyphs)

    def test_variable_token(self, variable_grid):
        glyphs = scan(variable_grid)
        assert len(glyphs) == 1
        assert glyphs[0].kind == GlyphKind.VARIABLE
        assert tokens(glyphs) == [1]

    def test_integers_are_not_tokens(self):
        grid = BooleanGrid.from_strings(
            [
                ".......",
                ".......",
                "...##..",
                "..###..",
                "..#....",
                ".......",
                ".......",
            ]
        )
        glyphs = scan(grid)
        assert len(glyphs) == 1
        assert glyphs[0].kind == GlyphKind.INTEGER
        assert glyphs[0].value == 3
        assert tokens(glyphs) == []

    def test_sign_row_is_consumed(self):
        grid = BooleanGrid.from_strings(
            [
                ".......",
                ".......",
                "...##..",
                "..###..",
                "..#....",
                "..#....",
                ".......",
                ".......",
            ]
        )
        mask = ConsumptionMask.for_grid(grid)
        glyphs = scan(grid, mask)
        assert [g.value for g in glyphs] == [-3]
        assert mask.is_consumed(2, 5)

    def test_empty_grid(self):
        grid = BooleanGrid.from_array(np.zeros((8, 8), dtype=bool))
        mask = ConsumptionMask.for_grid(grid)
        assert scan(grid, mask) == []
        assert mask.consumed_count == 0

    def test_boundary_cells_are_never_anchors(self):
        # Glyph anchored in the last two columns is outside the scanned interior
        canvas = np.zeros((8, 8), dtype=bool)
        canvas[2, 6:8] = True
        canvas[2:4, 6] = True
        assert scan(BooleanGrid.from_array(canvas)) == []

    def test_premarked_cells_are_skipped(self, ordered_grid):
        mask = ConsumptionMask.for_grid(ordered_grid)
        mask.mark(12, 2, 1, 1)
        glyphs = scan(ordered_grid, mask)
        assert tokens(glyphs) == [3, 2]

    def test_mask_shape_mismatch_raises(self, ordered_grid):
        with pytest.raises(ValueError, match="does not match"):
            scan(ordered_grid, ConsumptionMask(3, 3))

    @pytest.mark.parametrize("size", [12, 30])
    def test_smallest_command_glyph(self, size):
        canvas = np.zeros((size, size), dtype=bool)
        _stamp(canvas, 1, 2, 2)
        glyphs = scan(BooleanGrid.from_array(canvas))
        assert tokens(glyphs) == [1]
        assert [(g.x, g.y, g.dx, g.dy) for g in glyphs] == [(2, 2, 2, 2)]
        assert glyphs[0].kind == GlyphKind.COMMAND

    def test_same_input_same_result(self, ordered_grid):
        assert scan(ordered_grid) == scan(ordered_grid)


class TestDisjointness:
    def test_boxes_do_not_overlap(self):
        canvas = np.zeros((24, 24), dtype=bool)
        for value, x, y in [(5, 2, 2), (255, 8, 2), (70000, 15, 3), (12, 3, 12), (146, 10, 14)]:
            _stamp(canvas, value, x, y)
        grid = BooleanGrid.from_array(canvas)
        mask = ConsumptionMask.for_grid(grid)

        glyphs = scan(grid, mask)

        assert tokens(glyphs) == [5, 255, 70000, 12, 146]
        seen: set[tuple[int, int]] = set()
        for glyph in glyphs:
            cells = set(glyph.cells())
            assert not cells & seen
            seen |= cells
        assert len(seen) == mask.consumed_count
        assert seen == {(int(x), int(y)) for y, x in zip(*np.nonzero(mask.to_array()))}


class TestIterGlyphs:
    def test_lazy_marking(self, ordered_grid):
        mask = ConsumptionMask.for_grid(ordered_grid)
        glyphs = iter_glyphs(ordered_grid, mask)
        first = next(glyphs)
        assert (first.x, first.y) == (3, 2)
        assert mask.consumed_count == 9
