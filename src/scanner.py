"""Raster scan of a grid for glyphs.

Walks the interior of the grid top-to-bottom, left-to-right, asking the
decoder whether a glyph starts at each unconsumed cell. Every decoded glyph's
bounding box is marked consumed before the scan moves on, so no pixel is
decoded twice and the emitted glyphs never overlap.

The outermost row/column and the last two rows/columns are never anchors:
they only bound the sign cell of glyphs near the edge.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from .config import MAX_FRAME_DELTA
from .decoder import TOP_LEVEL_POLARITY, try_decode
from .glyphs import Glyph, GlyphKind
from .grid import BooleanGrid, ConsumptionMask

logger = structlog.get_logger(__name__)


def iter_glyphs(
    grid: BooleanGrid,
    mask: ConsumptionMask,
    max_delta: int = MAX_FRAME_DELTA,
) -> Iterator[Glyph]:
    """Yield glyphs in scan order, marking each one in ``mask``.

    Raises:
        ValueError: If the mask does not match the grid's shape.
    """
    if (mask.width, mask.height) != (grid.width, grid.height):
        raise ValueError(
            f"Mask {mask.width}x{mask.height} does not match grid {grid.width}x{grid.height}"
        )

    for y in range(1, grid.height - 2):
        for x in range(1, grid.width - 2):
            if mask.is_consumed(x, y):
                continue
            match = try_decode(grid, x, y, TOP_LEVEL_POLARITY, max_delta)
            if match is None:
                continue
            mask.mark(x, y, match.dx, match.dy)
            yield Glyph.at(x, y, match)


def scan(
    grid: BooleanGrid,
    mask: ConsumptionMask | None = None,
    max_delta: int = MAX_FRAME_DELTA,
) -> list[Glyph]:
    """Decode every glyph in the grid.

    Args:
        grid: Grid to scan.
        mask: Consumption mask to fill. A fresh one is used if omitted.
        max_delta: Runaway guard for frame growth.

    Returns:
        Glyphs in ascending-y, then ascending-x anchor order.
    """
    if mask is None:
        mask = ConsumptionMask.for_grid(grid)

    logger.info("scan_started", width=grid.width, height=grid.height)
    glyphs = list(iter_glyphs(grid, mask, max_delta))

    counts = {kind.value: 0 for kind in GlyphKind}
    for glyph in glyphs:
        counts[glyph.kind.value] += 1
    logger.info("scan_complete", glyphs=len(glyphs), consumed=mask.consumed_count, **counts)
    return glyphs
