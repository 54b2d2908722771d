"""
Shader program building

=============================================================================
LIFECYCLE OF A SHADER PROGRAM
=============================================================================

    vertex source ---compile---> vertex stage ---+
                                                 +--link--> program
    fragment source -compile---> fragment stage -+

The stages are only needed until the link attempt finishes. They are
acquired inside context managers so they are deleted on EVERY path:
success, compile failure of the other stage, or link failure.

=============================================================================
FAILURE POLICY
=============================================================================

A broken shader should not take the demo down. build_program() logs the
driver diagnostics and returns a ShaderProgram whose handle is 0; the
renderer holding it draws nothing. compile_stage() and link() raise, for
callers that want to handle the error themselves.

=============================================================================
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from ..errors import ShaderError
from .context import RenderContext, ShaderStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShaderProgram:
    """A linked program handle and the diagnostics of its build"""
    handle: int
    log: str = ""

    @property
    def ok(self) -> bool:
        return self.handle != 0

    def __bool__(self) -> bool:
        return self.ok


def compile_stage(ctx: RenderContext, source: str, stage: ShaderStage) -> int:
    """Compile one stage. Raises CompileError."""
    return ctx.compile_stage(source, stage)


def link(ctx: RenderContext, vertex: int, fragment: int) -> int:
    """Link two compiled stages. Raises LinkError."""
    return ctx.link_program(vertex, fragment)


@contextmanager
def _compiled_stage(ctx: RenderContext, source: str,
                    stage: ShaderStage) -> Iterator[int]:
    handle = compile_stage(ctx, source, stage)
    try:
        yield handle
    finally:
        ctx.delete_stage(handle)


def build_program(ctx: RenderContext, vertex_source: str,
                  fragment_source: str) -> ShaderProgram:
    """
    Compile and link a vertex/fragment pair.

    Returns:
    --------
    ShaderProgram with a nonzero handle and an empty log on success, or
    handle 0 and the driver's diagnostic text on failure.
    """
    try:
        with _compiled_stage(ctx, vertex_source, ShaderStage.VERTEX) as vs, \
                _compiled_stage(ctx, fragment_source, ShaderStage.FRAGMENT) as fs:
            handle = link(ctx, vs, fs)
    except ShaderError as e:
        logger.error("%s", e)
        return ShaderProgram(handle=0, log=e.log)

    return ShaderProgram(handle=handle)
