#!/usr/bin/env python3
"""Basic usage example for glyphscan.

Draws a few encoded glyphs onto a blank grid, decodes them back into a
token stream and writes an overlay SVG plus a symbol sheet.

Usage:
    python examples/basic_usage.py
"""

import os
import sys

import numpy as np

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.encoder import encode, layout_sheet
from src.glyphs import tokens
from src.grid import BooleanGrid
from src.renderer import render_sheet_svg, render_svg
from src.scanner import scan
from src.symbols import DEFAULT_SYMBOLS


def example_scan():
    """Encode three codes, place them on a grid and scan them back."""
    print("=" * 60)
    print("Example 1: Encode, place and scan")
    print("=" * 60)

    canvas = np.zeros((12, 24), dtype=bool)
    x = 2
    for code in [146, 12, 401]:
        pixels = encode(code)
        side = pixels.shape[0]
        canvas[2 : 2 + side, x : x + side] |= pixels
        print(f"  Placed {code:>5} at x={x}, side {side}")
        x += side + 2

    grid = BooleanGrid.from_array(canvas)
    glyphs = scan(grid)
    print(f"  Tokens:      {tokens(glyphs)}")
    print(f"  Mnemonics:   {[DEFAULT_SYMBOLS.label(g.kind, g.value) for g in glyphs]}")

    svg = render_svg(grid, glyphs)
    with open("example_overlay.svg", "w") as f:
        f.write(svg)
    print("  Saved:       example_overlay.svg")
    print()


def example_sheet():
    """Write a reference sheet of every known symbol."""
    print("=" * 60)
    print("Example 2: Symbol sheet")
    print("=" * 60)

    sheet = layout_sheet(DEFAULT_SYMBOLS.codes())
    print(f"  Codes:       {[entry.code for entry in sheet.entries]}")
    print(f"  Sheet size:  {sheet.width}x{sheet.height} cells")

    with open("example_symbols.svg", "w") as f:
        f.write(render_sheet_svg(sheet))
    print("  Saved:       example_symbols.svg")
    print()


if __name__ == "__main__":
    example_scan()
    example_sheet()
