"""Decoded glyph records.

A glyph is one token of the pixel program: a bare integer, a command
(opcode) or a variable reference. The codec reports a GlyphMatch for an
anchor; the scanner pins it to its anchor position as a Glyph.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class GlyphKind(Enum):
    """Classification of a decoded glyph."""

    INTEGER = "integer"
    COMMAND = "command"
    VARIABLE = "variable"


@dataclass(frozen=True)
class GlyphMatch:
    """Result of decoding the glyph that starts at some anchor.

    Attributes:
        dx: Width of the glyph's bounding box.
        dy: Height of the bounding box, including the sign row when set.
        value: Signed decoded value (variable index for variables).
        kind: Integer, command or variable.
    """

    dx: int
    dy: int
    value: int
    kind: GlyphKind


@dataclass(frozen=True)
class Glyph:
    """A glyph located in the grid.

    Attributes:
        x: Anchor column.
        y: Anchor row.
        dx: Bounding box width.
        dy: Bounding box height (sign row included).
        value: Signed decoded value.
        kind: Integer, command or variable.
    """

    x: int
    y: int
    dx: int
    dy: int
    value: int
    kind: GlyphKind

    @classmethod
    def at(cls, x: int, y: int, match: GlyphMatch) -> Glyph:
        return cls(x=x, y=y, dx=match.dx, dy=match.dy, value=match.value, kind=match.kind)

    @property
    def is_token(self) -> bool:
        """True if the glyph belongs to the token stream."""
        return self.kind in (GlyphKind.COMMAND, GlyphKind.VARIABLE)

    def cells(self) -> Iterator[tuple[int, int]]:
        """Every (x, y) cell inside the bounding box."""
        for cy in range(self.y, self.y + self.dy):
            for cx in range(self.x, self.x + self.dx):
                yield cx, cy


def tokens(glyphs: Iterable[Glyph]) -> list[int]:
    """Values of command and variable glyphs, in the order given."""
    return [glyph.value for glyph in glyphs if glyph.is_token]
