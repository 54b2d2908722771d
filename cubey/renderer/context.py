"""
Rendering context: the narrow seam between the renderers and OpenGL

=============================================================================
WHY A CONTEXT OBJECT?
=============================================================================

The text and cube renderers only need a handful of GPU capabilities:

    compile stage / link program   -> ShaderProgramBuilder
    upload texture                 -> FontAtlas.upload()
    allocate buffer / stream data  -> GlyphQuadStreamer, CubeRenderer
    draw                           -> GlyphQuadStreamer, CubeRenderer

Routing every call through a RenderContext keeps all OpenGL state in one
place and lets the layout logic (pen advance, quad generation, draw call
counts) be tested against a recording fake without a window or a GPU.

GLRenderContext (gl_context.py) is the real implementation, built on
PyOpenGL. This module does not import OpenGL at all.

=============================================================================
VERTEX LAYOUT
=============================================================================

Buffers are described by a float stride and a list of attributes:

    text quad vertex  [x, y, u, v]          stride 4, one vec4 at location 0
    cube vertex       [x, y, z, r, g, b]    stride 6, vec3 @0 and vec3 @1

Offsets and strides are in FLOATS here; the GL implementation converts
them to bytes.

=============================================================================
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

FLOAT_SIZE = 4


class ShaderStage(Enum):
    VERTEX = "vertex"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class VertexAttribute:
    """One vertex shader input: location, component count, float offset"""
    location: int
    components: int
    offset: int = 0


@dataclass
class VertexBuffer:
    """
    GPU vertex storage owned by exactly one renderer.

    vao/vbo/ebo are raw GL names (ebo is 0 when the buffer is not indexed).
    size is the vertex storage capacity in bytes.
    """
    vao: int
    vbo: int
    size: int
    stride: int
    ebo: int = 0
    index_count: int = 0


class RenderContext(ABC):
    """Capability set the renderers depend on"""

    # --- shaders -----------------------------------------------------------

    @abstractmethod
    def compile_stage(self, source: str, stage: ShaderStage) -> int:
        """Compile one stage. Raises CompileError with the driver log."""

    @abstractmethod
    def delete_stage(self, handle: int) -> None: ...

    @abstractmethod
    def link_program(self, vertex: int, fragment: int) -> int:
        """Link two compiled stages. Raises LinkError with the driver log."""

    @abstractmethod
    def delete_program(self, handle: int) -> None: ...

    # --- textures ----------------------------------------------------------

    @abstractmethod
    def upload_texture(self, pixels: np.ndarray) -> int:
        """Upload a 2-D uint8 single-channel bitmap, rows top to bottom."""

    @abstractmethod
    def delete_texture(self, handle: int) -> None: ...

    @abstractmethod
    def bind_texture(self, handle: int, slot: int = 0) -> None: ...

    # --- buffers -----------------------------------------------------------

    @abstractmethod
    def allocate_buffer(self, stride: int,
                        attributes: Sequence[VertexAttribute],
                        size: Optional[int] = None,
                        data: Optional[np.ndarray] = None,
                        indices: Optional[np.ndarray] = None,
                        dynamic: bool = False) -> VertexBuffer:
        """
        Create a vertex buffer.

        Either `size` (bytes, contents undefined) or `data` must be given.
        `indices` (uint32) adds an element buffer.
        """

    @abstractmethod
    def stream_buffer_data(self, buffer: VertexBuffer,
                           data: np.ndarray) -> None:
        """Overwrite the start of the buffer with `data` (float32)."""

    @abstractmethod
    def delete_buffer(self, buffer: VertexBuffer) -> None: ...

    # --- drawing -----------------------------------------------------------

    @abstractmethod
    def draw_triangles(self, buffer: VertexBuffer, vertex_count: int) -> None: ...

    @abstractmethod
    def draw_indexed(self, buffer: VertexBuffer, index_count: int) -> None: ...

    # --- state -------------------------------------------------------------

    @abstractmethod
    def use_program(self, program: int) -> None: ...

    @abstractmethod
    def set_uniform_matrix(self, program: int, name: str,
                           matrix: np.ndarray) -> None:
        """Send a row-major 4x4 matrix to a mat4 uniform."""

    @abstractmethod
    def set_uniform_vec3(self, program: int, name: str,
                         value: Tuple[float, float, float]) -> None: ...

    @abstractmethod
    def set_uniform_int(self, program: int, name: str, value: int) -> None: ...

    @abstractmethod
    def set_depth_test(self, enabled: bool) -> None: ...

    @abstractmethod
    def enable_blending(self) -> None: ...

    @abstractmethod
    def clear(self, color: Tuple[float, float, float, float]) -> None: ...

    @abstractmethod
    def viewport(self, width: int, height: int) -> None: ...
