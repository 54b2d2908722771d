"""
Exception types raised by the renderer and the font baker.

Shader errors are recoverable: the program builder catches them, logs the
driver diagnostics and hands back a zero handle. Bake errors are not; the
overlay cannot be drawn without an atlas, so they reach the caller.
"""

from typing import Optional


class CubeyError(Exception):
    """Base class for every error raised by this package"""


class WindowError(CubeyError):
    """GLFW could not be initialised or the window could not be created"""


class ShaderError(CubeyError):
    """
    A shader stage failed to compile or a program failed to link.

    Attributes:
    -----------
    stage : str or None
        "vertex", "fragment", or None for link failures
    log : str
        The driver's info log, verbatim
    """

    def __init__(self, log: str, stage: Optional[str] = None):
        self.stage = stage
        self.log = log
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"{self.stage} shader failed: {self.log}"


class CompileError(ShaderError):
    def _describe(self) -> str:
        return f"{self.stage} shader compilation failed:\n{self.log}"


class LinkError(ShaderError):
    def __init__(self, log: str):
        super().__init__(log, stage=None)

    def _describe(self) -> str:
        return f"shader program linking failed:\n{self.log}"


class BakeError(CubeyError):
    """The font atlas could not be produced"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class FontFileError(BakeError):
    """The font file is missing, unreadable or empty"""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"cannot read font file '{path}': {reason}")
