import logging

import pytest

from cubey.errors import CompileError, LinkError
from cubey.renderer import ShaderStage, build_program, compile_stage, link
from cubey.shaders import CUBE_FRAGMENT_SHADER, CUBE_VERTEX_SHADER

from .helpers import RecordingContext


def test_valid_pair_links() -> None:
    ctx = RecordingContext()
    program = build_program(ctx, CUBE_VERTEX_SHADER, CUBE_FRAGMENT_SHADER)

    assert program.handle != 0
    assert program.ok
    assert program.log == ""
    assert program.handle in ctx.programs
    assert ctx.live_stages == set()


@pytest.mark.parametrize("stage", [ShaderStage.VERTEX, ShaderStage.FRAGMENT])
def test_compile_failure_returns_zero_handle(stage: ShaderStage, caplog: pytest.LogCaptureFixture) -> None:
    ctx = RecordingContext(fail_compile=(stage,))
    with caplog.at_level(logging.ERROR):
        program = build_program(ctx, CUBE_VERTEX_SHADER, CUBE_FRAGMENT_SHADER)

    assert program.handle == 0
    assert not program
    assert "syntax error" in program.log
    assert ctx.live_stages == set()
    assert ctx.programs == set()
    assert f"{stage.value} shader compilation failed" in caplog.text


def test_link_failure_releases_stages(caplog: pytest.LogCaptureFixture) -> None:
    ctx = RecordingContext(fail_link=True)
    with caplog.at_level(logging.ERROR):
        program = build_program(ctx, CUBE_VERTEX_SHADER, CUBE_FRAGMENT_SHADER)

    assert program.handle == 0
    assert "not consumed" in program.log
    assert ctx.live_stages == set()
    assert "linking failed" in caplog.text


def test_low_level_calls_raise() -> None:
    ctx = RecordingContext(fail_compile=(ShaderStage.VERTEX,))
    with pytest.raises(CompileError) as excinfo:
        compile_stage(ctx, "void main() {}", ShaderStage.VERTEX)
    assert excinfo.value.stage == "vertex"

    ctx = RecordingContext(fail_link=True)
    vs = compile_stage(ctx, CUBE_VERTEX_SHADER, ShaderStage.VERTEX)
    fs = compile_stage(ctx, CUBE_FRAGMENT_SHADER, ShaderStage.FRAGMENT)
    with pytest.raises(LinkError) as link_info:
        link(ctx, vs, fs)
    assert link_info.value.stage is None
