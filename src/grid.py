"""Boolean pixel grids for glyph decoding.

A BooleanGrid is the rectified, downsampled picture the codec reads. It is
stored as a read-only numpy array indexed ``[y, x]`` but always addressed
through ``cell(x, y)``, which refuses coordinates outside the grid instead of
letting numpy wrap negative indices around.

The ConsumptionMask records which cells already belong to a decoded glyph.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

# Pixel states
CLEAR = 0
SET = 1


@dataclass(frozen=True)
class BooleanGrid:
    """Immutable black/white pixel grid.

    Attributes:
        pixels: Read-only boolean array of shape (height, width).
    """

    pixels: np.ndarray

    @classmethod
    def from_array(cls, array: np.ndarray) -> BooleanGrid:
        """Build a grid from any 2-D array of truthy/falsy values."""
        pixels = np.array(array, dtype=bool)
        if pixels.ndim != 2:
            raise ValueError(f"Grid must be 2-dimensional, got shape {pixels.shape}")
        pixels.setflags(write=False)
        return cls(pixels)

    @classmethod
    def from_strings(cls, rows: Iterable[str], on: str = "#") -> BooleanGrid:
        """Build a grid from text rows, ``on`` marking set cells.

        Args:
            rows: One string per row, all of equal length.
            on: Character treated as a set pixel. Anything else is clear.

        Raises:
            ValueError: If rows are empty or ragged.
        """
        rows = list(rows)
        if not rows:
            raise ValueError("Empty grid")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All grid rows must have the same length")
        return cls.from_array(np.array([[ch == on for ch in row] for row in rows], dtype=bool))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def cell(self, x: int, y: int) -> int:
        """Return the pixel state (0 or 1) at (x, y).

        Raises:
            IndexError: If (x, y) lies outside the grid.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return SET if self.pixels[y, x] else CLEAR


class ConsumptionMask:
    """Cells already claimed by a decoded glyph.

    Owned by a single scanning pass; never share one between scans.
    """

    def __init__(self, width: int, height: int) -> None:
        self._consumed = np.zeros((height, width), dtype=bool)

    @classmethod
    def for_grid(cls, grid: BooleanGrid) -> ConsumptionMask:
        return cls(grid.width, grid.height)

    @property
    def width(self) -> int:
        return int(self._consumed.shape[1])

    @property
    def height(self) -> int:
        return int(self._consumed.shape[0])

    @property
    def consumed_count(self) -> int:
        """Number of consumed cells."""
        return int(np.count_nonzero(self._consumed))

    def is_consumed(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} mask")
        return bool(self._consumed[y, x])

    def mark(self, x: int, y: int, dx: int, dy: int) -> None:
        """Mark the box [x, x+dx) x [y, y+dy) as consumed.

        Raises:
            IndexError: If any part of the box lies outside the mask.
        """
        if x < 0 or y < 0 or dx < 0 or dy < 0 or x + dx > self.width or y + dy > self.height:
            raise IndexError(
                f"Box ({x}, {y}, {dx}, {dy}) outside {self.width}x{self.height} mask"
            )
        self._consumed[y : y + dy, x : x + dx] = True

    def to_array(self) -> np.ndarray:
        """Copy of the mask as a boolean array indexed [y, x]."""
        return self._consumed.copy()
