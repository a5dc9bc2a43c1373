"""glyphscan -- decoder/encoder for nested square pixel glyphs.

Reads a black/white pixel grid, finds the square glyphs drawn on it and
turns them into a token stream of integers, commands and variable
references. The encoder draws any non-negative integer back as a glyph so
reference sheets can be rendered for inspection.
"""
