"""
Font atlas baking (Pillow + numpy)

=============================================================================
WHAT IS A FONT ATLAS?
=============================================================================

OpenGL cannot draw text. Instead, every glyph we may need is rasterised
ONCE into a single texture (the atlas), and each character on screen is
drawn as a small textured quad that samples its glyph's rectangle:

    +--------------------------------+
    | ! " # $ % & ' ( ) * + , - . / 0|   <- row 0
    |1 2 3 4 5 6 7 8 9 : ; < = > ? @ |   <- row 1
    |A B C D E F G H ...             |
    |                                |
    +--------------------------------+

Alongside the bitmap we keep per-glyph METRICS:

    (x0, y0)-(x1, y1)  where the glyph lives in the atlas, in pixels
    (xoff, yoff)       where its top-left corner sits relative to the pen
    advance            how far the pen moves after drawing it

All offsets are in pixels, Y DOWN, relative to the baseline:

            xoff
         |<---->|
    -----+------+======+---- top of glyph   (yoff is negative here)
         |      |  ##  |
         |      | #  # |
    pen->*------+######+---- baseline
         |<------------------->|
                advance

=============================================================================
PACKING
=============================================================================

Glyphs are packed in a single deterministic pass, left to right with a
1-pixel gutter, wrapping to a new row below the tallest glyph so far:

    x, y = 1, 1
    for glyph in range:
        if it does not fit on this row: start a new row
        if the new row does not fit:    BakeError (atlas too small)

Identical font bytes and parameters always produce the same bitmap and
the same metrics.

=============================================================================
"""

import io
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..errors import BakeError, FontFileError

logger = logging.getLogger(__name__)

# Space through DEL: the printable ASCII block
FIRST_CHAR = 32
CHAR_COUNT = 96

# Empty pixels between neighbouring glyphs
GUTTER = 1


@dataclass(frozen=True)
class GlyphMetrics:
    x0: int
    y0: int
    x1: int
    y1: int
    xoff: float
    yoff: float
    advance: float

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0


@dataclass(frozen=True, eq=False)
class FontAtlas:
    """
    A baked atlas: single-channel bitmap plus metrics for a codepoint range.

    The bitmap is read-only once baked. `texture` is 0 until upload()
    returns a copy carrying the GPU handle.
    """
    width: int
    height: int
    bitmap: np.ndarray
    glyphs: Tuple[GlyphMetrics, ...]
    first_char: int = FIRST_CHAR
    pixel_height: float = 0.0
    texture: int = 0

    @property
    def count(self) -> int:
        return len(self.glyphs)

    def contains(self, codepoint: int) -> bool:
        return self.first_char <= codepoint < self.first_char + self.count

    def glyph(self, codepoint: int) -> Optional[GlyphMetrics]:
        """Metrics for a codepoint, or None when it was not baked"""
        if not self.contains(codepoint):
            return None
        return self.glyphs[codepoint - self.first_char]

    def upload(self, ctx) -> "FontAtlas":
        """
        Upload the bitmap as a one-channel texture.

        The GPU copy keeps the single-channel meaning: sampling yields
        coverage in .r and nothing else.
        """
        texture = ctx.upload_texture(self.bitmap)
        return replace(self, texture=texture)

    def release(self, ctx) -> None:
        ctx.delete_texture(self.texture)


def read_font_file(path: Union[str, Path]) -> bytes:
    """
    Read a font file into memory.

    Raises FontFileError if the file is missing, unreadable or empty.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FontFileError(path, e.strerror or str(e)) from e

    if not data:
        raise FontFileError(path, "file is empty")
    return data


def bake(font_bytes: bytes, pixel_height: float,
         atlas_width: int, atlas_height: int,
         first_char: int = FIRST_CHAR, count: int = CHAR_COUNT) -> FontAtlas:
    """
    Rasterise `count` glyphs starting at `first_char` into a new atlas.

    Parameters:
    -----------
    font_bytes : bytes
        Contents of a TrueType/OpenType file
    pixel_height : float
        Font size in pixels
    atlas_width, atlas_height : int
        Atlas dimensions in pixels
    first_char, count : int
        The contiguous codepoint range to bake

    Raises:
    -------
    BakeError on non-positive sizes, unusable font data, or when the
    range does not fit in the atlas.
    """
    if pixel_height <= 0:
        raise BakeError(f"pixel height must be positive, got {pixel_height}")
    if atlas_width <= 0 or atlas_height <= 0:
        raise BakeError(
            f"atlas size must be positive, got {atlas_width}x{atlas_height}")
    if count <= 0 or first_char < 0:
        raise BakeError(f"invalid glyph range: first={first_char} count={count}")

    try:
        font = ImageFont.truetype(io.BytesIO(font_bytes), pixel_height)
    except (OSError, ValueError) as e:
        raise BakeError(f"not a usable font: {e}") from e

    atlas = Image.new("L", (atlas_width, atlas_height), 0)
    glyphs = []

    x, y = GUTTER, GUTTER
    bottom_y = GUTTER

    for codepoint in range(first_char, first_char + count):
        char = chr(codepoint)
        glyph_image, left, top = _rasterise(font, char)
        gw, gh = glyph_image.size if glyph_image is not None else (0, 0)

        # Row exhausted: wrap below the tallest glyph of this row
        if x + gw + GUTTER >= atlas_width:
            x = GUTTER
            y = bottom_y
        if x + gw + GUTTER >= atlas_width or y + gh + GUTTER >= atlas_height:
            raise BakeError(
                f"atlas {atlas_width}x{atlas_height} too small: ran out of "
                f"space at codepoint {codepoint} "
                f"({codepoint - first_char} of {count} glyphs placed)")

        if glyph_image is not None:
            atlas.paste(glyph_image, (x, y))

        glyphs.append(GlyphMetrics(
            x0=x, y0=y, x1=x + gw, y1=y + gh,
            xoff=float(left), yoff=float(top),
            advance=float(font.getlength(char)),
        ))

        x += gw + GUTTER
        bottom_y = max(bottom_y, y + gh + GUTTER)

    bitmap = np.array(atlas, dtype=np.uint8)
    bitmap.setflags(write=False)

    logger.info("Baked %d glyphs at %spx into %dx%d atlas (%d pixel rows used)",
                count, pixel_height, atlas_width, atlas_height, bottom_y)

    return FontAtlas(
        width=atlas_width,
        height=atlas_height,
        bitmap=bitmap,
        glyphs=tuple(glyphs),
        first_char=first_char,
        pixel_height=pixel_height,
    )


def _rasterise(font: ImageFont.FreeTypeFont, char: str):
    """
    Draw one glyph tightly cropped.

    Returns (image or None, left, top); left/top are the ink box corner
    relative to the pen on the baseline. Blank glyphs such as the space
    have no image but still have an advance.
    """
    # getbbox spans the pen origin to the advance, not just the ink
    left, top, right, bottom = (int(v) for v in font.getbbox(char, anchor="ls"))
    if right <= left or bottom <= top:
        return None, 0, 0

    image = Image.new("L", (right - left, bottom - top), 0)
    ImageDraw.Draw(image).text((-left, -top), char, font=font,
                               fill=255, anchor="ls")

    ink = image.getbbox()
    if ink is None:
        return None, 0, 0
    return image.crop(ink), left + ink[0], top + ink[1]


def load_font(path: Union[str, Path], pixel_height: float,
              atlas_width: int, atlas_height: int,
              first_char: int = FIRST_CHAR,
              count: int = CHAR_COUNT) -> FontAtlas:
    """Read a font file and bake it (read_font_file + bake)"""
    return bake(read_font_file(path), pixel_height,
                atlas_width, atlas_height, first_char, count)
