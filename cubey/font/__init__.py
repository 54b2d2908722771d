"""Bitmap font atlas baking"""

from .atlas import (
    FIRST_CHAR,
    CHAR_COUNT,
    FontAtlas,
    GlyphMetrics,
    bake,
    load_font,
    read_font_file,
)

__all__ = [
    "FIRST_CHAR",
    "CHAR_COUNT",
    "FontAtlas",
    "GlyphMetrics",
    "bake",
    "load_font",
    "read_font_file",
]
