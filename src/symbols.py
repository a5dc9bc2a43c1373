"""Mnemonic names for known command codes.

The table is display-only: the renderer asks it for labels, the codec never
looks at it. Codes without a mnemonic (or with an empty one) are shown as
their raw number.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .glyphs import GlyphKind


@dataclass(frozen=True)
class SymbolTable:
    """Immutable mapping from integer codes to mnemonics.

    Attributes:
        names: Read-only code -> mnemonic mapping.
    """

    names: Mapping[int, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self.lookup(code) is not None

    def __len__(self) -> int:
        return len(self.names)

    def lookup(self, code: int) -> str | None:
        """Mnemonic for ``code``, or None if it has no (non-empty) name."""
        name = self.names.get(code)
        return name or None

    def codes(self) -> list[int]:
        """All codes in the table, ascending."""
        return sorted(self.names)

    def label(self, kind: GlyphKind, value: int) -> str:
        """Display text for a glyph of the given kind and value."""
        if kind == GlyphKind.INTEGER:
            return str(value)
        if kind == GlyphKind.VARIABLE:
            return f"x{value}"
        return self.lookup(value) or f":{value}"


DEFAULT_SYMBOLS = SymbolTable(
    {
        0: "ap",
        12: "==",
        146: "mul",
        417: "inc",
        401: "dec",
        365: "sum",
        # Seen in transmissions, meaning not yet known
        485: "",
        501: "",
        65193: "",
        65161: "",
        64745: "",
    }
)
