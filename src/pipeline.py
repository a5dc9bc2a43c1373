"""File-level decoding and symbol sheet generation.

Glues the loader, scanner and renderer together: decode one image into an
overlay SVG, decode every image in a folder, and draw reference sheets for
sets of codes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from .config import ScanSettings
from .encoder import layout_sheet
from .glyphs import Glyph, tokens
from .grid import ConsumptionMask
from .loader import load_grid
from .renderer import render_png, render_sheet_svg, render_svg
from .scanner import scan
from .symbols import DEFAULT_SYMBOLS, SymbolTable

logger = structlog.get_logger(__name__)


@dataclass
class DecodeReport:
    """Outcome of decoding one image.

    Attributes:
        input_path: Source image.
        output_path: Overlay SVG written for it.
        width: Grid width in cells.
        height: Grid height in cells.
        glyphs: Every glyph found, in scan order.
    """

    input_path: Path
    output_path: Path
    width: int
    height: int
    glyphs: list[Glyph] = field(default_factory=list)

    @property
    def tokens(self) -> list[int]:
        """Command and variable values in scan order."""
        return tokens(self.glyphs)


def default_output_path(input_path: str | Path, output_dir: str | Path = "output") -> Path:
    """Overlay path for an input image: ``<output_dir>/<stem>.svg``.

    Raises:
        ValueError: If the input is not a .png file.
    """
    path = Path(input_path)
    if path.suffix != ".png":
        raise ValueError(f"Expected a .png input, got '{path.name}'")
    return Path(output_dir) / f"{path.stem}.svg"


def decode_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    settings: ScanSettings | None = None,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    png: bool = False,
) -> DecodeReport:
    """Decode one image and write its overlay SVG.

    Args:
        input_path: Source image.
        output_path: Overlay destination. Defaults to
            ``default_output_path(input_path, settings.output_dir)``.
        settings: Scan settings.
        symbols: Mnemonics for overlay labels.
        png: Also write a PNG rendering next to the SVG.

    Returns:
        DecodeReport for the image.

    Raises:
        MalformedImageError: If the image is not a clean black/white raster.
        ValueError: If no output path is given and the input is not a .png.
    """
    settings = settings or ScanSettings()
    input_path = Path(input_path)
    if output_path is None:
        output_path = default_output_path(input_path, settings.output_dir)
    output_path = Path(output_path)

    logger.info("decode_file", input=str(input_path), output=str(output_path))

    grid = load_grid(input_path, scale=settings.scale)
    glyphs = scan(grid, ConsumptionMask.for_grid(grid), max_delta=settings.max_delta)

    svg = render_svg(grid, glyphs, symbols, zoom=settings.zoom)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(svg, encoding="utf-8")
    if png:
        output_path.with_suffix(".png").write_bytes(render_png(svg))

    return DecodeReport(
        input_path=input_path,
        output_path=output_path,
        width=grid.width,
        height=grid.height,
        glyphs=glyphs,
    )


def collect_codes(
    folder: str | Path,
    settings: ScanSettings | None = None,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
) -> set[int]:
    """Decode every .png in ``folder`` and gather the token values seen."""
    settings = settings or ScanSettings()
    codes: set[int] = set()
    for path in sorted(Path(folder).glob("*.png")):
        report = decode_file(path, settings=settings, symbols=symbols)
        codes.update(report.tokens)

    logger.info("codes_collected", folder=str(folder), codes=len(codes))
    return codes


def write_symbol_sheet(
    codes: Iterable[int],
    path: str | Path,
    symbols: SymbolTable = DEFAULT_SYMBOLS,
    zoom: int = 8,
) -> Path:
    """Render encoded glyphs for ``codes`` to an SVG sheet at ``path``.

    Negative codes have no encoding and are left off the sheet.
    """
    codes = set(codes)
    negative = sorted(code for code in codes if code < 0)
    if negative:
        logger.warning("sheet_skipped_negative_codes", codes=negative)

    sheet = layout_sheet(code for code in codes if code >= 0)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_sheet_svg(sheet, symbols, zoom=zoom), encoding="utf-8")

    logger.info("sheet_written", path=str(path), codes=len(sheet.entries))
    return path
