"""
PyOpenGL implementation of the rendering context

Must be created AFTER an OpenGL context has been made current (GLFW does
that in the application). Importing this module loads the system GL
library, so code that only needs the abstract interface imports
.context instead.
"""

import ctypes
import logging
from typing import Dict, Tuple

import numpy as np
from OpenGL.GL import *

from ..errors import CompileError, LinkError
from .context import FLOAT_SIZE, RenderContext, ShaderStage, VertexBuffer

logger = logging.getLogger(__name__)


class GLRenderContext(RenderContext):
    """
    RenderContext backed by PyOpenGL.

    Uniform locations are cached per (program, name).
    """

    _STAGE_TYPES = {
        ShaderStage.VERTEX: GL_VERTEX_SHADER,
        ShaderStage.FRAGMENT: GL_FRAGMENT_SHADER,
    }

    def __init__(self):
        self._uniform_cache: Dict[Tuple[int, str], int] = {}
        logger.info("OpenGL context: %s", glGetString(GL_VERSION).decode())

    # =========================================================================
    # SHADERS
    # =========================================================================

    def compile_stage(self, source: str, stage: ShaderStage) -> int:
        shader = glCreateShader(self._STAGE_TYPES[stage])
        glShaderSource(shader, source)
        glCompileShader(shader)

        if not glGetShaderiv(shader, GL_COMPILE_STATUS):
            log = _decode_log(glGetShaderInfoLog(shader))
            glDeleteShader(shader)
            raise CompileError(log or "no diagnostic output", stage.value)
        return shader

    def delete_stage(self, handle: int) -> None:
        glDeleteShader(handle)

    def link_program(self, vertex: int, fragment: int) -> int:
        program = glCreateProgram()
        glAttachShader(program, vertex)
        glAttachShader(program, fragment)
        glLinkProgram(program)

        if not glGetProgramiv(program, GL_LINK_STATUS):
            log = _decode_log(glGetProgramInfoLog(program))
            glDeleteProgram(program)
            raise LinkError(log or "no diagnostic output")

        # Stages can be detached once linked; deleting them is the caller's job
        glDetachShader(program, vertex)
        glDetachShader(program, fragment)
        return program

    def delete_program(self, handle: int) -> None:
        if handle:
            glDeleteProgram(handle)
        self._uniform_cache = {
            key: loc for key, loc in self._uniform_cache.items()
            if key[0] != handle
        }

    # =========================================================================
    # TEXTURES
    # =========================================================================

    def upload_texture(self, pixels: np.ndarray) -> int:
        """
        Upload a coverage bitmap as a one-channel GL_R8 texture.

        =======================================================================
        ROW ORDER
        =======================================================================

        Unlike images loaded from disk, the atlas is NOT flipped: row 0 of
        the bitmap becomes v=0, and the glyph metrics compute v the same
        way, so the two agree without a flip.

        =======================================================================
        UNPACK ALIGNMENT
        =======================================================================

        OpenGL assumes each uploaded row starts on a 4-byte boundary. A
        one-byte-per-pixel bitmap whose width is not a multiple of 4 would
        shear diagonally, so alignment is dropped to 1 for the upload.
        """
        if pixels.ndim != 2:
            raise ValueError("atlas bitmap must be 2-D (single channel)")
        height, width = pixels.shape
        data = np.ascontiguousarray(pixels, dtype=np.uint8)

        texture = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, texture)

        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)

        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(
            GL_TEXTURE_2D,
            0,                  # Mipmap level
            GL_R8,              # One 8-bit channel on the GPU
            width, height,
            0,                  # Border (must be 0)
            GL_RED,             # Input is one channel
            GL_UNSIGNED_BYTE,
            data
        )
        glPixelStorei(GL_UNPACK_ALIGNMENT, 4)

        glBindTexture(GL_TEXTURE_2D, 0)
        logger.debug("Uploaded %dx%d R8 texture %d", width, height, texture)
        return texture

    def delete_texture(self, handle: int) -> None:
        if handle:
            glDeleteTextures([handle])

    def bind_texture(self, handle: int, slot: int = 0) -> None:
        glActiveTexture(GL_TEXTURE0 + slot)
        glBindTexture(GL_TEXTURE_2D, handle)

    # =========================================================================
    # BUFFERS
    # =========================================================================

    def allocate_buffer(self, stride, attributes, size=None, data=None,
                        indices=None, dynamic=False) -> VertexBuffer:
        if data is None and size is None:
            raise ValueError("allocate_buffer needs either size or data")
        if data is not None:
            data = np.ascontiguousarray(data, dtype=np.float32)
            size = data.nbytes

        usage = GL_DYNAMIC_DRAW if dynamic else GL_STATIC_DRAW

        # The VAO "records" the attribute setup and the element buffer binding
        vao = glGenVertexArrays(1)
        vbo = glGenBuffers(1)
        glBindVertexArray(vao)

        glBindBuffer(GL_ARRAY_BUFFER, vbo)
        glBufferData(GL_ARRAY_BUFFER, size, data, usage)

        stride_bytes = stride * FLOAT_SIZE
        for attribute in attributes:
            glEnableVertexAttribArray(attribute.location)
            glVertexAttribPointer(
                attribute.location,
                attribute.components,
                GL_FLOAT,
                GL_FALSE,
                stride_bytes,
                ctypes.c_void_p(attribute.offset * FLOAT_SIZE)
            )

        ebo = 0
        index_count = 0
        if indices is not None:
            indices = np.ascontiguousarray(indices, dtype=np.uint32)
            ebo = glGenBuffers(1)
            glBindBuffer(GL_ELEMENT_ARRAY_BUFFER, ebo)
            glBufferData(GL_ELEMENT_ARRAY_BUFFER, indices.nbytes, indices,
                         GL_STATIC_DRAW)
            index_count = len(indices)

        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        logger.debug("Allocated %d-byte %s buffer (vao=%d)",
                     size, "dynamic" if dynamic else "static", vao)
        return VertexBuffer(vao=vao, vbo=vbo, size=size, stride=stride,
                            ebo=ebo, index_count=index_count)

    def stream_buffer_data(self, buffer: VertexBuffer,
                           data: np.ndarray) -> None:
        data = np.ascontiguousarray(data, dtype=np.float32)
        if data.nbytes > buffer.size:
            raise ValueError(
                f"{data.nbytes} bytes do not fit a {buffer.size}-byte buffer")

        # glBufferSubData reuses the existing allocation
        glBindBuffer(GL_ARRAY_BUFFER, buffer.vbo)
        glBufferSubData(GL_ARRAY_BUFFER, 0, data.nbytes, data)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

    def delete_buffer(self, buffer: VertexBuffer) -> None:
        glDeleteVertexArrays(1, [buffer.vao])
        names = [buffer.vbo] + ([buffer.ebo] if buffer.ebo else [])
        glDeleteBuffers(len(names), names)

    # =========================================================================
    # DRAWING
    # =========================================================================

    def draw_triangles(self, buffer: VertexBuffer, vertex_count: int) -> None:
        glBindVertexArray(buffer.vao)
        glDrawArrays(GL_TRIANGLES, 0, vertex_count)
        glBindVertexArray(0)

    def draw_indexed(self, buffer: VertexBuffer, index_count: int) -> None:
        glBindVertexArray(buffer.vao)
        glDrawElements(GL_TRIANGLES, index_count, GL_UNSIGNED_INT, None)
        glBindVertexArray(0)

    # =========================================================================
    # STATE
    # =========================================================================

    def use_program(self, program: int) -> None:
        glUseProgram(program)

    def _uniform_location(self, program: int, name: str) -> int:
        key = (program, name)
        if key not in self._uniform_cache:
            self._uniform_cache[key] = glGetUniformLocation(program, name)
        return self._uniform_cache[key]

    def set_uniform_matrix(self, program, name, matrix) -> None:
        # Row-major numpy -> column-major GL
        column_major = np.ascontiguousarray(matrix.T, dtype=np.float32)
        glUniformMatrix4fv(self._uniform_location(program, name), 1,
                           GL_FALSE, column_major)

    def set_uniform_vec3(self, program, name, value) -> None:
        glUniform3f(self._uniform_location(program, name), *value)

    def set_uniform_int(self, program, name, value) -> None:
        glUniform1i(self._uniform_location(program, name), value)

    def set_depth_test(self, enabled: bool) -> None:
        if enabled:
            glEnable(GL_DEPTH_TEST)
        else:
            glDisable(GL_DEPTH_TEST)

    def enable_blending(self) -> None:
        # final = src * src_alpha + dst * (1 - src_alpha)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

    def clear(self, color) -> None:
        glClearColor(*color)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

    def viewport(self, width: int, height: int) -> None:
        glViewport(0, 0, width, height)


def _decode_log(log) -> str:
    if isinstance(log, bytes):
        log = log.decode("utf-8", errors="replace")
    return (log or "").strip()
