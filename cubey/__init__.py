"""
Cubey - rotating cube with a bitmap-font text overlay (GLFW/OpenGL)

Requirements:
    pip install glfw PyOpenGL pillow numpy
"""

from .config import CubeyConfig
from .errors import BakeError, CompileError, CubeyError, FontFileError, LinkError, ShaderError
from .font import FontAtlas, GlyphMetrics, bake, load_font, read_font_file
from .rotation import RotationState

__version__ = "1.0.0"
__all__ = [
    "CubeyConfig",
    "CubeyError",
    "ShaderError",
    "CompileError",
    "LinkError",
    "BakeError",
    "FontFileError",
    "FontAtlas",
    "GlyphMetrics",
    "bake",
    "load_font",
    "read_font_file",
    "RotationState",
]
