"""
Rotating cube renderer

The cube is 6 faces x 4 corners = 24 vertices, so each face can carry its
own flat colour (shared corners would blend colours across faces). Each
face is two triangles through an index buffer:

    3-------2
    |     / |     indices: 0, 1, 2,  2, 3, 0
    |   /   |
    | /     |
    0-------1

Vertex format, 6 floats (24 bytes):

    [x, y, z, r, g, b]
     ^^^^^^^  ^^^^^^^
     location 0   location 1
"""

from typing import Optional

import numpy as np

from .. import transforms
from ..rotation import RotationState
from ..shaders import CUBE_FRAGMENT_SHADER, CUBE_VERTEX_SHADER
from .context import RenderContext, VertexAttribute
from .shader_program import ShaderProgram, build_program

# fmt: off
CUBE_VERTICES = np.array([
    # positions          colours
    -0.5, -0.5, -0.5,    1.0, 0.0, 0.0,   # Red (back)
     0.5, -0.5, -0.5,    1.0, 0.0, 0.0,
     0.5,  0.5, -0.5,    1.0, 0.0, 0.0,
    -0.5,  0.5, -0.5,    1.0, 0.0, 0.0,

    -0.5, -0.5,  0.5,    0.0, 1.0, 0.0,   # Green (front)
     0.5, -0.5,  0.5,    0.0, 1.0, 0.0,
     0.5,  0.5,  0.5,    0.0, 1.0, 0.0,
    -0.5,  0.5,  0.5,    0.0, 1.0, 0.0,

    -0.5,  0.5,  0.5,    0.0, 0.0, 1.0,   # Blue (left)
    -0.5,  0.5, -0.5,    0.0, 0.0, 1.0,
    -0.5, -0.5, -0.5,    0.0, 0.0, 1.0,
    -0.5, -0.5,  0.5,    0.0, 0.0, 1.0,

     0.5,  0.5,  0.5,    1.0, 1.0, 0.0,   # Yellow (right)
     0.5,  0.5, -0.5,    1.0, 1.0, 0.0,
     0.5, -0.5, -0.5,    1.0, 1.0, 0.0,
     0.5, -0.5,  0.5,    1.0, 1.0, 0.0,

    -0.5, -0.5, -0.5,    1.0, 0.0, 1.0,   # Magenta (bottom)
     0.5, -0.5, -0.5,    1.0, 0.0, 1.0,
     0.5, -0.5,  0.5,    1.0, 0.0, 1.0,
    -0.5, -0.5,  0.5,    1.0, 0.0, 1.0,

    -0.5,  0.5, -0.5,    0.0, 1.0, 1.0,   # Cyan (top)
     0.5,  0.5, -0.5,    0.0, 1.0, 1.0,
     0.5,  0.5,  0.5,    0.0, 1.0, 1.0,
    -0.5,  0.5,  0.5,    0.0, 1.0, 1.0,
], dtype=np.float32)
# fmt: on

CUBE_INDICES = np.array(
    [i for face in range(6)
     for i in (face * 4 + 0, face * 4 + 1, face * 4 + 2,
               face * 4 + 2, face * 4 + 3, face * 4 + 0)],
    dtype=np.uint32,
)

FLOATS_PER_VERTEX = 6


def model_matrix(rotation: RotationState) -> np.ndarray:
    """Rotate about X, then about Y (in the X-rotated frame)"""
    return transforms.rotate_x(rotation.angle_x) @ transforms.rotate_y(rotation.angle_y)


class CubeRenderer:
    """Owns the static cube buffers and draws the cube once per frame"""

    def __init__(self, ctx: RenderContext, program: Optional[ShaderProgram] = None):
        self.ctx = ctx
        if program is None:
            program = build_program(ctx, CUBE_VERTEX_SHADER, CUBE_FRAGMENT_SHADER)
        self.program = program
        self.buffer = ctx.allocate_buffer(
            stride=FLOATS_PER_VERTEX,
            attributes=[
                VertexAttribute(location=0, components=3, offset=0),
                VertexAttribute(location=1, components=3, offset=3),
            ],
            data=CUBE_VERTICES,
            indices=CUBE_INDICES,
        )
        self.mvp = np.eye(4, dtype=np.float32)

    def draw(self, rotation: RotationState, view: np.ndarray,
             projection: np.ndarray) -> None:
        self.mvp = (projection @ view @ model_matrix(rotation)).astype(np.float32)
        if not self.program.ok:
            return

        handle = self.program.handle
        self.ctx.use_program(handle)
        self.ctx.set_uniform_matrix(handle, "mvp", self.mvp)
        self.ctx.draw_indexed(self.buffer, len(CUBE_INDICES))

    def release(self) -> None:
        self.ctx.delete_buffer(self.buffer)
        self.ctx.delete_program(self.program.handle)
