"""SVG and PNG rendering for decoded glyph grids.

Two pictures are produced:
- Overlays: the decoded grid drawn pixel by pixel, with a translucent box
  over every glyph and its label centred on top
- Symbol sheets: encoded reference glyphs for a set of codes, each shown
  bare, with its raw code and with its mnemonic

Box colors by kind:
- integer: green
- command: yellow
- variable: blue
"""

from __future__ import annotations

from xml.sax.saxutils import escape

import numpy as np
import structlog

from .encoder import SymbolSheet
from .glyphs import Glyph, GlyphKind
from .grid import BooleanGrid
from .symbols import DEFAULT_SYMBOLS, SymbolTable

logger = structlog.get_logger(__name__)

# Pixel fill colors
CLEAR_COLOR = "#333333"
SET_COLOR = "white"
BACKGROUND_COLOR = "black"

KIND_COLORS = {
    GlyphKind.INTEGER: "green",
    GlyphKind.COMMAND: "yellow",
    GlyphKind.VARIABLE: "blue",
}

# Overlay boxes extend this many SVG units past the glyph on every side
BOX_SHIFT = 2

LABEL_STYLE = " ".join(
    [
        "paint-order: stroke;",
        "fill: white;",
        "stroke: black;",
        "stroke-width: 2px;",
        "font: 18px bold sans;",
    ]
)


def _open_svg(width: int, height: int, zoom: int) -> list[str]:
    return [
        f"<svg xmlns='http://www.w3.org/2000/svg' version='1.1' "
        f"width='{width * zoom}' height='{height * zoom}'>",
        f"  <rect width='100%' height='100%' style='fill:{BACKGROUND_COLOR}'/>",
    ]


def _pixel(x: int, y: int, color: str, zoom: int) -> str:
    return (
        f"  <rect x='{x * zoom}' y='{y * zoom}' width='{zoom - 1}' height='{zoom - 1}' "
        f"style='fill:{color}'/>"
    )


def _annotation(
    x: int, y: int, dx: int, dy: int, text: str, kind: GlyphKind, zoom: int
) -> list[str]:
    """Translucent box over a glyph plus its centred label."""
    return [
        f"  <rect x='{x * zoom - BOX_SHIFT}' y='{y * zoom - BOX_SHIFT}' "
        f"width='{dx * zoom + 2 * BOX_SHIFT}' height='{dy * zoom + 2 * BOX_SHIFT}' "
        f"style='fill:{KIND_COLORS[kind]};opacity:0.5'/>",
        f"  <text x='{x * zoom + (dx // 2) * zoom}' y='{y * zoom + (dy // 2) * zoom}' "
        f"dominant-baseline='middle' text-anchor='middle' fill='white' "
        f"style='{LABEL_STYLE}'>{escape(text)}</text>",
    ]


def render_svg(
    grid: BooleanGrid,
    glyphs: list[Glyph],
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    zoom: int = 8,
) -> str:
    """Render a decoded grid with glyph overlays as an SVG string.

    Args:
        grid: Decoded grid.
        glyphs: Glyphs found in the grid.
        symbols: Mnemonics for command labels.
        zoom: SVG units per grid cell.

    Returns:
        Complete SVG document as a string.
    """
    svg_parts = _open_svg(grid.width, grid.height, zoom)

    for y in range(grid.height):
        for x in range(grid.width):
            color = SET_COLOR if grid.pixels[y, x] else CLEAR_COLOR
            svg_parts.append(_pixel(x, y, color, zoom))

    for glyph in glyphs:
        text = symbols.label(glyph.kind, glyph.value)
        svg_parts.extend(
            _annotation(glyph.x, glyph.y, glyph.dx, glyph.dy, text, glyph.kind, zoom)
        )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug(
        "svg_rendered",
        width=grid.width,
        height=grid.height,
        glyph_count=len(glyphs),
        zoom=zoom,
    )

    return svg_content


def render_sheet_svg(
    sheet: SymbolSheet,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    zoom: int = 8,
) -> str:
    """Render a symbol sheet as an SVG string.

    Every cell starts clear; glyph pixels are drawn in the set color.
    """
    svg_parts = _open_svg(sheet.width, sheet.height, zoom)

    for y in range(sheet.height):
        for x in range(sheet.width):
            svg_parts.append(_pixel(x, y, CLEAR_COLOR, zoom))

    for entry in sheet.entries:
        ys, xs = np.nonzero(entry.pixels)
        for column in range(3):
            x0 = entry.column_x(column, sheet.pitch)
            for py, px in zip(ys, xs):
                svg_parts.append(_pixel(x0 + int(px), entry.y + int(py), SET_COLOR, zoom))

            if column == 1:
                text = str(entry.code)
            elif column == 2:
                text = symbols.label(GlyphKind.COMMAND, entry.code)
            else:
                continue
            svg_parts.extend(
                _annotation(x0, entry.y, entry.side, entry.side, text, GlyphKind.COMMAND, zoom)
            )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug("sheet_rendered", codes=len(sheet.entries), zoom=zoom)
    return svg_content


def render_png(svg: str, scale: float = 1.0) -> bytes:
    """Rasterize an SVG document to PNG bytes via CairoSVG."""
    import cairosvg

    png_bytes = cairosvg.svg2png(bytestring=svg.encode("utf-8"), scale=scale)

    logger.debug("png_rendered", scale=scale, bytes=len(png_bytes))
    return png_bytes
