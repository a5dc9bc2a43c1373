"""Glyph decoder.

Decodes the glyph that starts at a given anchor cell by:
1. Checking the anchor shape (foreground to the right and below, background
   to the left and above)
2. Growing the frame along its top row and left column to find its size
3. Reading the (delta-1) x (delta-1) body row-major as an unsigned magnitude
4. Applying the sign cell just below the left column
5. For full-frame commands at the top level, decoding the frame interior
   with inverted polarity as the index of a variable reference

Polarity is the pixel state treated as foreground: 1 for the normal scan,
0 inside a variable frame whose colors are inverted.
"""

from __future__ import annotations

import numpy as np
import structlog

from .config import MAX_FRAME_DELTA
from .glyphs import GlyphKind, GlyphMatch
from .grid import SET, BooleanGrid

logger = structlog.get_logger(__name__)

TOP_LEVEL_POLARITY = SET

# Smallest frame with an interior cell for an embedded variable glyph
MIN_VARIABLE_DELTA = 3


def is_anchor(grid: BooleanGrid, x: int, y: int, polarity: int) -> bool:
    """True if a glyph of the given polarity starts at (x, y)."""
    return (
        grid.cell(x + 1, y) == polarity
        and grid.cell(x, y + 1) == polarity
        and grid.cell(x - 1, y) != polarity
        and grid.cell(x, y - 1) != polarity
    )


def measure_delta(
    grid: BooleanGrid,
    x: int,
    y: int,
    polarity: int,
    max_delta: int = MAX_FRAME_DELTA,
) -> int:
    """Grow the frame from (x, y) until its top row or left column ends.

    Growth also stops at the grid edge and at ``max_delta``.
    """
    delta = 1
    while delta < max_delta:
        if x + delta >= grid.width or y + delta >= grid.height:
            break
        if grid.cell(x + delta, y) != polarity or grid.cell(x, y + delta) != polarity:
            break
        delta += 1
    return delta


def read_magnitude(grid: BooleanGrid, x: int, y: int, delta: int, polarity: int) -> int:
    """Unsigned value of the body block below-right of (x, y).

    Body offset (cx, cy) contributes bit ``cy * (delta - 1) + cx``.
    """
    side = delta - 1
    value = 0
    for cy in range(side):
        for cx in range(side):
            if grid.cell(x + 1 + cx, y + 1 + cy) == polarity:
                value += 1 << (cy * side + cx)
    return value


def is_full_frame(grid: BooleanGrid, x: int, y: int, delta: int, polarity: int = SET) -> bool:
    """True if the frame's border is entirely foreground.

    The right edge is only checked at row y+1, not along its whole span.
    Existing transmissions were produced against this exact rule.
    """
    for i in range(delta):
        if grid.cell(x, y + i) != polarity:
            return False
        if grid.cell(x + delta - 1, y + 1) != polarity:
            return False
        if grid.cell(x + i, y) != polarity:
            return False
        if grid.cell(x + i, y + delta - 1) != polarity:
            return False
    return True


def try_decode(
    grid: BooleanGrid,
    x: int,
    y: int,
    polarity: int = TOP_LEVEL_POLARITY,
    max_delta: int = MAX_FRAME_DELTA,
) -> GlyphMatch | None:
    """Decode the glyph anchored at (x, y), if there is one.

    Args:
        grid: Grid to read.
        x, y: Candidate anchor.
        polarity: Foreground pixel state (1 at top level, 0 inside a
            variable frame).
        max_delta: Runaway guard for frame growth.

    Returns:
        GlyphMatch with extent, value and kind, or None if no glyph
        starts here.

    Raises:
        IndexError: If decoding would read outside the grid.
    """
    if not is_anchor(grid, x, y, polarity):
        return None

    command = grid.cell(x, y) == polarity
    kind = GlyphKind.COMMAND if command else GlyphKind.INTEGER

    delta = measure_delta(grid, x, y, polarity, max_delta)
    value = read_magnitude(grid, x, y, delta, polarity)

    # Sign cell sits one past the left column
    negative = grid.cell(x, y + delta) == polarity
    if negative:
        value = -value

    # A 2x2 frame has no interior to hold a variable index
    if (
        command
        and polarity == TOP_LEVEL_POLARITY
        and delta >= MIN_VARIABLE_DELTA
        and is_full_frame(grid, x, y, delta, polarity)
    ):
        # Inner glyph must fit inside the frame's interior
        inner = try_decode(grid, x + 1, y + 1, 1 - polarity, delta - 2)
        if inner is None:
            logger.warning("embedded_glyph_not_recognized", x=x + 1, y=y + 1, outer_value=value)
        else:
            logger.debug("variable_resolved", x=x, y=y, index=inner.value)
            kind = GlyphKind.VARIABLE
            value = inner.value

    return GlyphMatch(dx=delta, dy=delta + 1 if negative else delta, value=value, kind=kind)


def decode_symbol(pixels: np.ndarray) -> int:
    """Read back the magnitude of a standalone encoded glyph.

    ``pixels`` is a square frame as produced by ``encoder.encode``. Only
    extent and payload are read; sign and variable handling do not apply.
    """
    side = int(np.asarray(pixels).shape[0])
    grid = BooleanGrid.from_array(np.pad(np.asarray(pixels, dtype=bool), 2))
    delta = measure_delta(grid, 2, 2, SET, max(MAX_FRAME_DELTA, side + 1))
    return read_magnitude(grid, 2, 2, delta, SET)
