"""
Cubey - Main Application (GLFW Version)
"""

import logging
import random
from pathlib import Path

import glfw
from OpenGL.GL import GL_TRUE

from . import transforms
from .config import CubeyConfig
from .errors import WindowError
from .font import load_font
from .renderer import CubeRenderer, TextRenderer
from .renderer.gl_context import GLRenderContext
from .rotation import RotationState

logger = logging.getLogger(__name__)

# Arrow key -> (d_angle_x, d_angle_y), scaled by config.key_step
KEY_NUDGES = {
    glfw.KEY_UP: (-1.0, 0.0),
    glfw.KEY_DOWN: (1.0, 0.0),
    glfw.KEY_LEFT: (0.0, -1.0),
    glfw.KEY_RIGHT: (0.0, 1.0),
}


def overlay_text(rotation: RotationState) -> str:
    return (f"Arrow keys control the rotation "
            f"({rotation.angle_x:.1f}, {rotation.angle_y:.1f})")


class CubeyApp:
    """Rotating cube with a text overlay - GLFW version"""

    def __init__(self, config: CubeyConfig):
        self.config = config

        if not glfw.init():
            raise WindowError("Could not initialize GLFW")

        # Request OpenGL 3.3 Core
        glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
        glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
        glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
        glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, GL_TRUE)

        self.window = glfw.create_window(
            config.window_width, config.window_height, config.title,
            None, None
        )
        if not self.window:
            glfw.terminate()
            raise WindowError("Could not create GLFW window")

        glfw.make_context_current(self.window)
        glfw.swap_interval(1 if config.vsync else 0)

        glfw.set_key_callback(self.window, self._key_callback)
        glfw.set_framebuffer_size_callback(self.window, self._resize_callback)

        self.pressed_keys = set()

        try:
            self._init_rendering()
        except Exception:
            glfw.terminate()
            raise

    def _init_rendering(self):
        config = self.config
        self.ctx = GLRenderContext()
        self.ctx.enable_blending()

        self.cube = CubeRenderer(self.ctx)

        # Without an atlas there is no overlay: a bake failure propagates
        font_path = Path(config.font_path)
        self.atlas = load_font(
            font_path, config.font_pixel_height,
            config.atlas_width, config.atlas_height
        ).upload(self.ctx)
        self.text = TextRenderer(self.ctx, self.atlas)

        self.rotation = RotationState.random(
            config.speed_range, random.Random(config.seed))
        self.view = transforms.translate(0.0, 0.0, -config.camera_distance)
        self.projection = transforms.perspective(
            config.fov_degrees, config.window_width / config.window_height,
            config.near_plane, config.far_plane)

        width, height = glfw.get_framebuffer_size(self.window)
        self._resize_callback(self.window, width, height)

        logger.info("Rotation speeds: %.2f, %.2f deg/frame",
                    self.rotation.speed_x, self.rotation.speed_y)

    # === GLFW Callbacks ===

    def _key_callback(self, window, key, scancode, action, mods):
        """Track held keys; Escape requests close"""
        if action == glfw.PRESS:
            self.pressed_keys.add(key)
            if key == glfw.KEY_ESCAPE:
                glfw.set_window_should_close(window, True)
        elif action == glfw.RELEASE:
            self.pressed_keys.discard(key)

    def _resize_callback(self, window, width, height):
        """Handle framebuffer resize (ignored while minimised)"""
        if width <= 0 or height <= 0:
            return
        self.ctx.viewport(width, height)
        self.text.set_viewport(width, height)
        self.projection = transforms.perspective(
            self.config.fov_degrees, width / height,
            self.config.near_plane, self.config.far_plane)

    # === Frame ===

    def process_input(self):
        step = self.config.key_step
        for key, (dx, dy) in KEY_NUDGES.items():
            if key in self.pressed_keys:
                self.rotation.nudge(dx * step, dy * step)

    def draw(self):
        config = self.config

        self.ctx.set_depth_test(True)
        self.ctx.clear(config.clear_color)
        self.cube.draw(self.rotation, self.view, self.projection)

        # 2-D overlay always on top
        self.ctx.set_depth_test(False)
        x, y = config.text_origin
        self.text.render(overlay_text(self.rotation), x, y,
                         config.text_scale, config.text_color)

    def run(self):
        """Main application loop"""
        try:
            while not glfw.window_should_close(self.window):
                self.process_input()
                self.rotation.advance()
                self.draw()
                glfw.swap_buffers(self.window)
                glfw.poll_events()
        finally:
            self.close()

    def close(self):
        self.text.release()
        self.cube.release()
        self.atlas.release(self.ctx)
        glfw.destroy_window(self.window)
        glfw.terminate()
