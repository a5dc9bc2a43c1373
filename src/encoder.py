"""Glyph encoder.

Builds the pixel pattern for a non-negative integer, the inverse of the
decoder's payload step:

1. Pick the smallest side d with d*d >= bit length of the value (d >= 1)
2. Set row 0 and column 0 of a (d+1) x (d+1) square as the frame
3. Set body cell (1+cx, 1+cy) for every 1 bit at position cx + cy*d

No sign cell is ever emitted, so only non-negative values can be encoded.

Also lays out reference sheets of encoded glyphs for the renderer.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
import structlog

logger = structlog.get_logger(__name__)

# Symbol sheet geometry, in grid cells
SHEET_OFFSET = 2
SHEET_GAP = 4
SHEET_COLUMNS = 3


def frame_side(value: int) -> int:
    """Body side length d needed to hold ``value``.

    Equal to ceil(sqrt(ceil(log2(value + 1)))), with 0 mapped to 1.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    bits = value.bit_length()
    if bits <= 1:
        return 1
    return math.isqrt(bits - 1) + 1


def encode(value: int) -> np.ndarray:
    """Encode a non-negative integer as a square glyph.

    Args:
        value: Value to encode.

    Returns:
        Boolean array of shape (d+1, d+1), indexed [y, x].

    Raises:
        ValueError: If value is negative.
    """
    d = frame_side(value)
    pixels = np.zeros((d + 1, d + 1), dtype=bool)
    pixels[0, :] = True
    pixels[:, 0] = True

    for cy in range(d):
        for cx in range(d):
            if (value >> (cx + cy * d)) & 1:
                pixels[1 + cy, 1 + cx] = True

    return pixels


@dataclass(frozen=True)
class SheetEntry:
    """One encoded glyph placed on a symbol sheet.

    Attributes:
        code: Encoded value.
        pixels: Encoded glyph, indexed [y, x].
        x: Left column of the first copy.
        y: Top row.
    """

    code: int
    pixels: np.ndarray
    x: int
    y: int

    @property
    def side(self) -> int:
        return int(self.pixels.shape[0])

    def column_x(self, column: int, pitch: int) -> int:
        """Left column of copy number ``column``."""
        return self.x + pitch * column


@dataclass
class SymbolSheet:
    """Layout of encoded glyphs, one row per code, three copies per row.

    Column 0 is the bare glyph, column 1 is labelled with the raw code and
    column 2 with its mnemonic.

    Attributes:
        entries: Placed glyphs in ascending code order.
        width: Sheet width in grid cells.
        height: Sheet height in grid cells.
        pitch: Horizontal distance between copies.
    """

    entries: list[SheetEntry] = field(default_factory=list)
    width: int = 0
    height: int = 0
    pitch: int = 0


def layout_sheet(codes: Iterable[int]) -> SymbolSheet:
    """Lay out encoded glyphs for every code, smallest code first.

    Raises:
        ValueError: If any code is negative.
    """
    ordered = sorted(set(codes))
    images = [encode(code) for code in ordered]

    max_side = max((image.shape[0] for image in images), default=0)
    pitch = max_side + SHEET_GAP

    entries: list[SheetEntry] = []
    y0 = SHEET_OFFSET
    for code, image in zip(ordered, images):
        entries.append(SheetEntry(code=code, pixels=image, x=SHEET_OFFSET, y=y0))
        y0 += image.shape[0] + SHEET_GAP

    sheet = SymbolSheet(entries=entries, width=SHEET_COLUMNS * pitch, height=y0, pitch=pitch)
    logger.debug("sheet_laid_out", codes=len(entries), width=sheet.width, height=sheet.height)
    return sheet
