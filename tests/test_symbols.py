"""Tests for the symbol table and glyph records."""

import pytest

from src.glyphs import Glyph, GlyphKind, GlyphMatch, tokens
from src.symbols import DEFAULT_SYMBOLS, SymbolTable


class TestSymbolTable:
    def test_known_mnemonic(self):
        assert DEFAULT_SYMBOLS.lookup(146) == "mul"
        assert DEFAULT_SYMBOLS.lookup(0) == "ap"

    def test_unknown_code(self):
        assert DEFAULT_SYMBOLS.lookup(7) is None

    def test_empty_mnemonic_counts_as_unknown(self):
        assert DEFAULT_SYMBOLS.lookup(485) is None
        assert 485 not in DEFAULT_SYMBOLS
        assert 417 in DEFAULT_SYMBOLS

    def test_codes_sorted(self):
        assert DEFAULT_SYMBOLS.codes() == sorted(DEFAULT_SYMBOLS.codes())
        assert len(DEFAULT_SYMBOLS.codes()) == len(DEFAULT_SYMBOLS) == 11

    def test_immutable(self):
        with pytest.raises(TypeError):
            DEFAULT_SYMBOLS.names[1] = "one"

    def test_copies_source_mapping(self):
        source = {1: "one"}
        table = SymbolTable(source)
        source[2] = "two"
        assert table.lookup(2) is None


class TestLabels:
    def test_integer_label(self):
        assert DEFAULT_SYMBOLS.label(GlyphKind.INTEGER, -42) == "-42"

    def test_integer_ignores_mnemonic(self):
        assert DEFAULT_SYMBOLS.label(GlyphKind.INTEGER, 146) == "146"

    def test_command_label(self):
        assert DEFAULT_SYMBOLS.label(GlyphKind.COMMAND, 12) == "=="

    def test_unknown_command_label(self):
        assert DEFAULT_SYMBOLS.label(GlyphKind.COMMAND, 65193) == ":65193"
        assert DEFAULT_SYMBOLS.label(GlyphKind.COMMAND, 3) == ":3"

    def test_variable_label(self):
        assert DEFAULT_SYMBOLS.label(GlyphKind.VARIABLE, 2) == "x2"


class TestGlyph:
    def test_at(self):
        glyph = Glyph.at(4, 5, GlyphMatch(dx=3, dy=4, value=-3, kind=GlyphKind.INTEGER))
        assert (glyph.x, glyph.y, glyph.dx, glyph.dy) == (4, 5, 3, 4)
        assert glyph.value == -3

    def test_is_token(self):
        def make(kind):
            return Glyph(x=1, y=1, dx=2, dy=2, value=0, kind=kind)

        assert not make(GlyphKind.INTEGER).is_token
        assert make(GlyphKind.COMMAND).is_token
        assert make(GlyphKind.VARIABLE).is_token

    def test_cells(self):
        glyph = Glyph(x=2, y=3, dx=2, dy=3, value=0, kind=GlyphKind.INTEGER)
        assert list(glyph.cells()) == [(2, 3), (3, 3), (2, 4), (3, 4), (2, 5), (3, 5)]

    def test_tokens_keep_order_and_drop_integers(self):
        glyphs = [
            Glyph(x=1, y=1, dx=2, dy=2, value=9, kind=GlyphKind.COMMAND),
            Glyph(x=5, y=1, dx=2, dy=2, value=4, kind=GlyphKind.INTEGER),
            Glyph(x=1, y=5, dx=2, dy=2, value=1, kind=GlyphKind.VARIABLE),
            Glyph(x=5, y=5, dx=2, dy=2, value=0, kind=GlyphKind.COMMAND),
        ]
        assert tokens(glyphs) == [9, 1, 0]
