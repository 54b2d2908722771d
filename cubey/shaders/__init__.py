"""GLSL shader sources"""

from .sources import (
    CUBE_VERTEX_SHADER,
    CUBE_FRAGMENT_SHADER,
    TEXT_VERTEX_SHADER,
    TEXT_FRAGMENT_SHADER,
)

__all__ = [
    "CUBE_VERTEX_SHADER",
    "CUBE_FRAGMENT_SHADER",
    "TEXT_VERTEX_SHADER",
    "TEXT_FRAGMENT_SHADER",
]
