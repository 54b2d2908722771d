from __future__ import annotations

import io
import itertools
from typing import Any

import numpy as np
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from cubey.errors import CompileError, LinkError
from cubey.renderer.context import RenderContext, ShaderStage, VertexBuffer

UNITS_PER_EM = 1000
ASCENT = 800
DESCENT = -200


def _box(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def glyph_box_width(codepoint: int) -> int:
    """Outline width in font units; varies so packing is not uniform."""
    return 300 + (codepoint % 5) * 50


def build_test_font() -> bytes:
    """
    A TrueType font where every printable ASCII glyph is a solid box.

    Space is blank, other glyphs are 700 units tall with a 50 unit left
    bearing and an advance 100 units wider than the box.
    """
    glyph_order = [".notdef", "space"]
    cmap = {32: "space"}
    glyphs = {".notdef": _box(50, 0, 450, 700), "space": TTGlyphPen(None).glyph()}
    metrics = {".notdef": (500, 50), "space": (250, 0)}

    for codepoint in range(33, 127):
        name = f"uni{codepoint:04X}"
        width = glyph_box_width(codepoint)
        glyph_order.append(name)
        cmap[codepoint] = name
        glyphs[name] = _box(50, 0, 50 + width, 700)
        metrics[name] = (width + 100, 50)

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "CubeyTest", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, sTypoDescender=DESCENT,
                usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()

    out = io.BytesIO()
    fb.save(out)
    return out.getvalue()


class RecordingContext(RenderContext):
    """
    RenderContext that records calls instead of touching a GPU.

    Handles are small increasing integers. `fail_compile` lists the stages
    whose compilation should fail; `fail_link` makes every link fail.
    """

    def __init__(self, fail_compile: tuple[ShaderStage, ...] = (),
                 fail_link: bool = False) -> None:
        self.fail_compile = set(fail_compile)
        self.fail_link = fail_link
        self._handles = itertools.count(1)

        self.live_stages: set[int] = set()
        self.programs: set[int] = set()
        self.textures: dict[int, np.ndarray] = {}
        self.buffers: list[VertexBuffer] = []
        self.uploads: list[tuple[VertexBuffer, np.ndarray]] = []
        self.draws: list[tuple[str, VertexBuffer, int]] = []
        self.uniforms: dict[tuple[int, str], Any] = {}
        self.events: list[str] = []
        self.bound_program = 0
        self.bound_texture = 0
        self.depth_test = True

    # shaders

    def compile_stage(self, source, stage):
        if stage in self.fail_compile:
            raise CompileError("0:4(1): error: syntax error, unexpected '}'",
                               stage.value)
        handle = next(self._handles)
        self.live_stages.add(handle)
        return handle

    def delete_stage(self, handle):
        self.live_stages.discard(handle)

    def link_program(self, vertex, fragment):
        assert vertex in self.live_stages and fragment in self.live_stages
        if self.fail_link:
            raise LinkError("error: vertex output 'Color' not consumed")
        handle = next(self._handles)
        self.programs.add(handle)
        return handle

    def delete_program(self, handle):
        self.programs.discard(handle)

    # textures

    def upload_texture(self, pixels):
        handle = next(self._handles)
        self.textures[handle] = np.array(pixels)
        return handle

    def delete_texture(self, handle):
        self.textures.pop(handle, None)

    def bind_texture(self, handle, slot=0):
        self.bound_texture = handle

    # buffers

    def allocate_buffer(self, stride, attributes, size=None, data=None,
                        indices=None, dynamic=False):
        if data is not None:
            size = np.asarray(data, dtype=np.float32).nbytes
        buffer = VertexBuffer(
            vao=next(self._handles), vbo=next(self._handles), size=size,
            stride=stride, ebo=next(self._handles) if indices is not None else 0,
            index_count=0 if indices is None else len(indices),
        )
        self.buffers.append(buffer)
        return buffer

    def stream_buffer_data(self, buffer, data):
        data = np.array(data, dtype=np.float32)
        assert data.nbytes <= buffer.size
        self.uploads.append((buffer, data))
        self.events.append("upload")

    def delete_buffer(self, buffer):
        self.buffers.remove(buffer)

    # drawing

    def draw_triangles(self, buffer, vertex_count):
        self.draws.append(("triangles", buffer, vertex_count))
        self.events.append("draw")

    def draw_indexed(self, buffer, index_count):
        self.draws.append(("indexed", buffer, index_count))
        self.events.append("draw")

    # state

    def use_program(self, program):
        self.bound_program = program

    def set_uniform_matrix(self, program, name, matrix):
        self.uniforms[(program, name)] = np.array(matrix)

    def set_uniform_vec3(self, program, name, value):
        self.uniforms[(program, name)] = tuple(value)

    def set_uniform_int(self, program, name, value):
        self.uniforms[(program, name)] = value

    def set_depth_test(self, enabled):
        self.depth_test = enabled

    def enable_blending(self):
        self.events.append("blend")

    def clear(self, color):
        self.events.append("clear")

    def viewport(self, width, height):
        self.events.append(f"viewport {width}x{height}")
