"""
4x4 transform matrices (numpy, float32)

=============================================================================
CONVENTIONS
=============================================================================

Matrices are stored ROW-MAJOR and act on column vectors:

    clip = projection @ view @ model @ [x, y, z, 1]

OpenGL expects column-major data, so callers transpose (.T) when sending a
matrix to a uniform with transpose=GL_FALSE. The rendering context does
this for them.

Angles are in DEGREES, matching the rotation state and the overlay text.

=============================================================================
"""

import math

import numpy as np


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


def ortho(left: float, right: float, bottom: float, top: float,
          near: float = -1.0, far: float = 1.0) -> np.ndarray:
    """
    Orthographic projection.

    Maps X [left, right], Y [bottom, top] and Z [near, far] to [-1, 1].
    Passing bottom=height, top=0 gives the Y-down screen space the text
    overlay uses.
    """
    mat = np.zeros((4, 4), dtype=np.float32)

    mat[0, 0] = 2.0 / (right - left)
    mat[1, 1] = 2.0 / (top - bottom)
    mat[2, 2] = -2.0 / (far - near)
    mat[3, 3] = 1.0

    mat[0, 3] = -(right + left) / (right - left)
    mat[1, 3] = -(top + bottom) / (top - bottom)
    mat[2, 3] = -(far + near) / (far - near)

    return mat


def perspective(fov_degrees: float, aspect: float,
                near: float, far: float) -> np.ndarray:
    """
    Perspective projection with a vertical field of view.

    Right-handed, camera looking down -Z, depth mapped to [-1, 1].
    """
    f = 1.0 / math.tan(math.radians(fov_degrees) / 2.0)

    mat = np.zeros((4, 4), dtype=np.float32)
    mat[0, 0] = f / aspect
    mat[1, 1] = f
    mat[2, 2] = (far + near) / (near - far)
    mat[2, 3] = (2.0 * far * near) / (near - far)
    mat[3, 2] = -1.0
    return mat


def translate(x: float, y: float, z: float) -> np.ndarray:
    mat = identity()
    mat[0, 3] = x
    mat[1, 3] = y
    mat[2, 3] = z
    return mat


def rotate(angle_degrees: float, axis) -> np.ndarray:
    """
    Rotation about an arbitrary axis (Rodrigues' formula).

    The axis does not need to be normalised.
    """
    x, y, z = np.asarray(axis, dtype=np.float64) / np.linalg.norm(axis)
    theta = math.radians(angle_degrees)
    c = math.cos(theta)
    s = math.sin(theta)
    t = 1.0 - c

    mat = identity()
    mat[:3, :3] = [
        [t * x * x + c,     t * x * y - s * z, t * x * z + s * y],
        [t * x * y + s * z, t * y * y + c,     t * y * z - s * x],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c],
    ]
    return mat


def rotate_x(angle_degrees: float) -> np.ndarray:
    return rotate(angle_degrees, (1.0, 0.0, 0.0))


def rotate_y(angle_degrees: float) -> np.ndarray:
    return rotate(angle_degrees, (0.0, 1.0, 0.0))
