"""Run settings for glyph scanning and rendering."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# Largest frame the decoder will grow before giving up on a runaway edge.
MAX_FRAME_DELTA = 10


class ScanSettings(BaseModel):
    """Settings shared by the pipeline and the CLI."""

    scale: int = Field(
        default=4,
        ge=1,
        description="Source pixels per grid cell (the loader samples every Nth pixel)",
    )
    zoom: int = Field(
        default=8,
        ge=2,
        description="SVG units per grid cell in rendered output",
    )
    max_delta: int = Field(
        default=MAX_FRAME_DELTA,
        ge=2,
        description="Upper bound on glyph frame growth",
    )
    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for overlay SVGs when no output path is given",
    )
    sheet_name: str = Field(
        default="all_symbols.svg",
        description="File name of the symbol reference sheet",
    )
