"""
Application settings

All tunables live in one dataclass. Defaults reproduce the classic demo:
a 900x700 window, a 48px font baked into a 512x512 atlas, and the
overlay drawn at (25, 50).

Usage:
    config = CubeyConfig.from_argv(sys.argv[1:])
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


@dataclass
class CubeyConfig:
    # Window
    window_width: int = 900
    window_height: int = 700
    title: str = "Cubey (GLFW)"
    vsync: bool = True
    clear_color: Tuple[float, float, float, float] = (0.1, 0.1, 0.1, 1.0)

    # Font atlas
    font_path: str = "arial.ttf"
    font_pixel_height: float = 48.0
    atlas_width: int = 512
    atlas_height: int = 512

    # Overlay
    text_origin: Tuple[float, float] = (25.0, 50.0)
    text_scale: float = 1.0
    text_color: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    # Camera
    fov_degrees: float = 45.0
    near_plane: float = 0.1
    far_plane: float = 100.0
    camera_distance: float = 3.0

    # Rotation, in degrees per frame
    key_step: float = 2.0
    speed_range: Tuple[float, float] = (0.1, 2.0)
    seed: Optional[int] = None

    log_level: int = logging.WARNING

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "CubeyConfig":
        """
        Build a config from command line arguments.

        Accepted forms:
            [font.ttf] [--seed N] [--verbose]

        Raises ValueError on unknown options or a malformed seed.
        """
        config = cls()
        positional: List[str] = []

        args = list(argv)
        i = 0
        while i < len(args):
            arg = args[i]
            if arg in ("-v", "--verbose"):
                config.log_level = logging.DEBUG
            elif arg == "--seed":
                if i + 1 >= len(args):
                    raise ValueError("--seed requires a value")
                try:
                    config.seed = int(args[i + 1])
                except ValueError:
                    raise ValueError(f"invalid seed: {args[i + 1]!r}") from None
                i += 1
            elif arg.startswith("-"):
                raise ValueError(f"unknown option: {arg}")
            else:
                positional.append(arg)
            i += 1

        if len(positional) > 1:
            raise ValueError("expected at most one font path")
        if positional:
            config.font_path = positional[0]
        return config
