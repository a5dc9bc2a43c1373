"""Shared fixtures for glyphscan tests."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from src.encoder import encode
from src.grid import BooleanGrid

# Variable reference: full 4x4 frame whose inverted interior decodes to 1
VARIABLE_ROWS = [
    ".........",
    ".........",
    "..####...",
    "..##.#...",
    "..#..#...",
    "..####...",
    ".........",
    ".........",
    ".........",
]


def stamp(canvas: np.ndarray, pixels: np.ndarray, x: int, y: int) -> None:
    """Copy an encoded glyph into a canvas with its anchor at (x, y)."""
    h, w = pixels.shape
    canvas[y : y + h, x : x + w] |= pixels


@pytest.fixture
def ordered_grid() -> BooleanGrid:
    """Three command glyphs of different sizes: 3 at (3, 2), 4096 at (12, 2), 2 at (2, 10)."""
    canvas = np.zeros((16, 20), dtype=bool)
    stamp(canvas, encode(3), 3, 2)
    stamp(canvas, encode(4096), 12, 2)
    stamp(canvas, encode(2), 2, 10)
    return BooleanGrid.from_array(canvas)


@pytest.fixture
def variable_grid() -> BooleanGrid:
    return BooleanGrid.from_strings(VARIABLE_ROWS)


@pytest.fixture
def write_png():
    """Return a function writing a grid as a black/white PNG, ``scale`` pixels per cell."""

    def _write(path: Path, grid: BooleanGrid, scale: int = 4) -> Path:
        block = np.ones((scale, scale), dtype=np.uint8)
        gray = np.kron(grid.pixels.astype(np.uint8), block) * 255
        Image.fromarray(gray).convert("RGB").save(path, format="PNG")
        return path

    return _write
