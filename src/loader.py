"""Image loading for glyph scanning.

Turns a black/white raster (typically a PNG) into a BooleanGrid by sampling
one source pixel per grid cell. Only pure black and pure white pixels are
accepted; anything else means the image is not a clean transmission and is
rejected before decoding starts.
"""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
import structlog
from PIL import Image, UnidentifiedImageError

from .grid import BooleanGrid

logger = structlog.get_logger(__name__)

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


class MalformedImageError(ValueError):
    """Raised when an image cannot be mapped onto a boolean grid."""


def _open_image(source: str | Path | bytes) -> Image.Image:
    try:
        if isinstance(source, bytes):
            return Image.open(io.BytesIO(source))
        return Image.open(source)
    except (UnidentifiedImageError, OSError) as e:
        raise MalformedImageError(f"Cannot open image: {e}") from e


def grid_from_rgb(rgb: np.ndarray, scale: int = 4) -> BooleanGrid:
    """Sample an (H, W, 3) RGB array every ``scale`` pixels.

    Raises:
        MalformedImageError: If a sampled pixel is neither black nor white.
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    height = rgb.shape[0] // scale
    width = rgb.shape[1] // scale
    sampled = rgb[: height * scale : scale, : width * scale : scale, :3]

    black = np.all(sampled == BLACK, axis=-1)
    white = np.all(sampled == WHITE, axis=-1)
    bad = ~(black | white)
    if np.any(bad):
        ys, xs = np.nonzero(bad)
        y, x = int(ys[0]), int(xs[0])
        pixel = tuple(int(c) for c in sampled[y, x])
        raise MalformedImageError(
            f"Unexpected pixel {pixel} at ({x * scale}, {y * scale}); "
            "only black and white are allowed"
        )

    return BooleanGrid.from_array(white)


def load_grid(source: str | Path | bytes, scale: int = 4) -> BooleanGrid:
    """Load an image and downsample it to a boolean grid.

    Args:
        source: Image path or raw image bytes.
        scale: Source pixels per grid cell.

    Returns:
        BooleanGrid with white pixels set.

    Raises:
        MalformedImageError: If the image cannot be opened or contains
            colors other than black and white.
    """
    with _open_image(source) as img:
        rgb = np.array(img.convert("RGB"))

    logger.info(
        "image_loaded",
        source=str(source) if not isinstance(source, bytes) else f"<{len(source)} bytes>",
        pixel_width=rgb.shape[1],
        pixel_height=rgb.shape[0],
        scale=scale,
    )
    return grid_from_rgb(rgb, scale)
