"""Shader builds against a real driver; skipped without a display or GL."""

import pytest

glfw = pytest.importorskip("glfw")

from cubey.renderer import build_program  # noqa: E402
from cubey.shaders import (  # noqa: E402
    CUBE_FRAGMENT_SHADER,
    CUBE_VERTEX_SHADER,
    TEXT_FRAGMENT_SHADER,
    TEXT_VERTEX_SHADER,
)


@pytest.fixture(scope="module")
def gl():
    try:
        initialised = glfw.init()
    except Exception:
        initialised = False
    if not initialised:
        pytest.skip("GLFW could not be initialised")
    glfw.window_hint(glfw.VISIBLE, glfw.FALSE)
    glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
    glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
    glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
    glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)
    window = glfw.create_window(64, 64, "test", None, None)
    if not window:
        glfw.terminate()
        pytest.skip("no OpenGL 3.3 context available")
    glfw.make_context_current(window)

    from cubey.renderer.gl_context import GLRenderContext

    yield GLRenderContext()

    glfw.destroy_window(window)
    glfw.terminate()


@pytest.mark.parametrize(
    "vertex, fragment",
    [(CUBE_VERTEX_SHADER, CUBE_FRAGMENT_SHADER), (TEXT_VERTEX_SHADER, TEXT_FRAGMENT_SHADER)],
)
def test_embedded_programs_link(gl, vertex: str, fragment: str) -> None:
    program = build_program(gl, vertex, fragment)
    assert program.handle != 0
    assert program.log == ""
    gl.delete_program(program.handle)


def test_missing_semicolon_is_reported(gl) -> None:
    broken = CUBE_VERTEX_SHADER.replace("Color = aColor;", "Color = aColor")
    program = build_program(gl, broken, CUBE_FRAGMENT_SHADER)
    assert program.handle == 0
    assert program.log != ""


def test_single_channel_upload(gl) -> None:
    import numpy as np

    pixels = np.arange(15, dtype=np.uint8).reshape(3, 5)
    texture = gl.upload_texture(pixels)
    assert texture != 0
    gl.delete_texture(texture)
