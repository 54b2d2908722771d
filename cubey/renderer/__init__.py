# ============================================
# cubey/renderer/__init__.py
# ============================================
"""OpenGL rendering components"""

from .context import RenderContext, ShaderStage, VertexAttribute, VertexBuffer
from .shader_program import ShaderProgram, build_program, compile_stage, link
from .text_renderer import GlyphQuadStreamer, PenPosition, TextRenderer
from .cube_renderer import CubeRenderer

__all__ = [
    "RenderContext",
    "ShaderStage",
    "VertexAttribute",
    "VertexBuffer",
    "ShaderProgram",
    "build_program",
    "compile_stage",
    "link",
    "GlyphQuadStreamer",
    "PenPosition",
    "TextRenderer",
    "CubeRenderer",
]
