"""
Text overlay rendering from a baked font atlas

=============================================================================
HOW A STRING BECOMES PIXELS
=============================================================================

    "Hi"
     |
     |  for each character, left to right:
     v
    GlyphMetrics  --(pen, scale)-->  Quad (6 vertices x [x, y, u, v])
                                       |
                                       |  overwrite the stream buffer
                                       v
                                     glDrawArrays(GL_TRIANGLES, 0, 6)

The pen starts at the caller's origin ON THE BASELINE and moves right by
each glyph's advance. Characters outside the baked range are skipped
entirely: no quad, no draw, no pen movement.

=============================================================================
ONE DRAW PER GLYPH
=============================================================================

By default every glyph is uploaded and drawn on its own. That costs one
buffer upload and one draw call per character, which is nothing for a
one-line overlay, and it keeps strict left-to-right ordering trivially.

batched=True switches to SpriteBatch-style accumulation: all quads of
one render() call go into the buffer and are drawn together, flushing
early only when the buffer is full. Ordering and pen movement are the
same in both modes.

=============================================================================
QUAD LAYOUT
=============================================================================

Screen space is Y-down (see TextRenderer.set_viewport), so y0 is the
top edge and y1 the bottom edge:

    (x0,y0)------(x1,y0)        Triangle 1: top-left, bottom-left, bottom-right
       |  \\        |           Triangle 2: top-left, bottom-right, top-right
       |    \\      |
       |      \\    |
    (x0,y1)------(x1,y1)

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .. import transforms
from ..font.atlas import FontAtlas, GlyphMetrics
from ..shaders import TEXT_FRAGMENT_SHADER, TEXT_VERTEX_SHADER
from .context import RenderContext, VertexAttribute, VertexBuffer
from .shader_program import ShaderProgram, build_program

WHITE = (1.0, 1.0, 1.0)


@dataclass
class PenPosition:
    x: float = 0.0
    y: float = 0.0


class GlyphQuadStreamer:
    """
    Builds glyph quads and streams them through one dynamic vertex buffer.

    The buffer is allocated once, sized for `capacity` quads, and owned
    exclusively by this streamer.
    """

    FLOATS_PER_VERTEX = 4       # [x, y, u, v]
    VERTICES_PER_QUAD = 6       # Two triangles, no index buffer
    FLOATS_PER_QUAD = FLOATS_PER_VERTEX * VERTICES_PER_QUAD

    def __init__(self, ctx: RenderContext, capacity: int = 1):
        if capacity < 1:
            raise ValueError("capacity must be at least one quad")
        self.ctx = ctx
        self.capacity = capacity
        self.buffer: VertexBuffer = ctx.allocate_buffer(
            stride=self.FLOATS_PER_VERTEX,
            attributes=[VertexAttribute(location=0, components=4)],
            size=capacity * self.FLOATS_PER_QUAD * 4,
            dynamic=True,
        )

    @classmethod
    def build_quad(cls, atlas: FontAtlas, glyph: GlyphMetrics,
                   pen: PenPosition, scale: float) -> np.ndarray:
        """
        Compute one glyph's screen quad at the pen.

        Returns a (6, 4) float32 array of [x, y, u, v] rows. The pen is
        not moved here.
        """
        x0 = pen.x + glyph.xoff * scale
        y0 = pen.y + glyph.yoff * scale
        x1 = x0 + glyph.width * scale
        y1 = y0 + glyph.height * scale

        s0 = glyph.x0 / atlas.width
        t0 = glyph.y0 / atlas.height
        s1 = glyph.x1 / atlas.width
        t1 = glyph.y1 / atlas.height

        return np.array([
            [x0, y0, s0, t0],
            [x0, y1, s0, t1],
            [x1, y1, s1, t1],

            [x0, y0, s0, t0],
            [x1, y1, s1, t1],
            [x1, y0, s1, t0],
        ], dtype=np.float32)

    def draw(self, quads: np.ndarray) -> None:
        """Overwrite the buffer with `quads` and draw them in one call"""
        quad_count = len(quads) // self.VERTICES_PER_QUAD
        self.ctx.stream_buffer_data(self.buffer, quads)
        self.ctx.draw_triangles(self.buffer,
                                quad_count * self.VERTICES_PER_QUAD)

    def release(self) -> None:
        self.ctx.delete_buffer(self.buffer)


class TextRenderer:
    """
    Draws single-line strings with a baked FontAtlas.

    ==========================================================================
    USAGE
    ==========================================================================

    ```python
    atlas = load_font("arial.ttf", 48, 512, 512).upload(ctx)
    text = TextRenderer(ctx, atlas)

    # Every frame, after the 3-D pass:
    ctx.set_depth_test(False)
    text.set_viewport(fb_width, fb_height)
    text.render("Hello", 25, 50, scale=1.0, color=(1, 1, 1))
    ```

    The atlas must already be uploaded; the renderer only binds it.
    ==========================================================================
    """

    BATCH_CAPACITY = 256

    def __init__(self, ctx: RenderContext, atlas: FontAtlas,
                 program: Optional[ShaderProgram] = None,
                 batched: bool = False):
        self.ctx = ctx
        self.atlas = atlas
        self.batched = batched
        if program is None:
            program = build_program(ctx, TEXT_VERTEX_SHADER, TEXT_FRAGMENT_SHADER)
        self.program = program
        self.streamer = GlyphQuadStreamer(
            ctx, capacity=self.BATCH_CAPACITY if batched else 1)
        self.pen = PenPosition()
        self.projection = np.eye(4, dtype=np.float32)

    def set_viewport(self, width: int, height: int) -> None:
        """
        Match the overlay projection to the framebuffer.

        left=0, right=width, bottom=height, top=0: (0, 0) is the top-left
        corner and Y grows downward, the same convention as the glyph
        metrics.
        """
        self.projection = transforms.ortho(0, width, height, 0, -1.0, 1.0)

    def measure(self, text: str, scale: float = 1.0) -> float:
        """Total advance of the renderable characters of `text`"""
        total = 0.0
        for char in text:
            glyph = self.atlas.glyph(ord(char))
            if glyph is not None:
                total += glyph.advance * scale
        return total

    def render(self, text: str, x: float, y: float, scale: float = 1.0,
               color: Tuple[float, float, float] = WHITE) -> None:
        """
        Draw `text` with the pen starting at (x, y) on the baseline.

        Draw calls issued (unbatched) == number of in-range characters.
        Afterwards self.pen holds the final pen position.
        """
        self.pen = PenPosition(x, y)
        if not text:
            return

        drawing = self.program.ok
        bound = False

        pending = []
        for char in text:
            glyph = self.atlas.glyph(ord(char))
            if glyph is None:
                continue

            quad = GlyphQuadStreamer.build_quad(self.atlas, glyph,
                                                self.pen, scale)
            self.pen.x += glyph.advance * scale

            if not drawing:
                continue
            if not bound:
                self._bind(color)
                bound = True
            if not self.batched:
                self.streamer.draw(quad)
                continue

            pending.append(quad)
            if len(pending) == self.streamer.capacity:
                self.streamer.draw(np.concatenate(pending))
                pending = []

        if pending:
            self.streamer.draw(np.concatenate(pending))

    def _bind(self, color) -> None:
        handle = self.program.handle
        self.ctx.use_program(handle)
        self.ctx.set_uniform_matrix(handle, "projection", self.projection)
        self.ctx.set_uniform_vec3(handle, "textColor", color)
        self.ctx.set_uniform_int(handle, "atlas", 0)
        self.ctx.bind_texture(self.atlas.texture, 0)

    def release(self) -> None:
        self.streamer.release()
        self.ctx.delete_program(self.program.handle)
