from __future__ import annotations

from pathlib import Path

import pytest

from cubey.font import FontAtlas, bake

from .helpers import RecordingContext, build_test_font


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    return build_test_font()


@pytest.fixture
def font_file(tmp_path: Path, font_bytes: bytes) -> Path:
    path = tmp_path / "test.ttf"
    path.write_bytes(font_bytes)
    return path


@pytest.fixture(scope="session")
def atlas(font_bytes: bytes) -> FontAtlas:
    """The test font baked at 48px into a 512x512 atlas."""
    return bake(font_bytes, 48, 512, 512)


@pytest.fixture
def ctx() -> RecordingContext:
    return RecordingContext()
