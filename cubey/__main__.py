#!/usr/bin/env python3

"""
Cubey - a rotating cube with a live text overlay

Usage:
    python -m cubey [font.ttf] [--seed N] [--verbose]

Controls:
    Up/Down     - Rotate about X
    Left/Right  - Rotate about Y
    ESC         - Quit
"""

import logging
import sys

from .config import CubeyConfig
from .errors import CubeyError


def main(argv=None):
    try:
        config = CubeyConfig.from_argv(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(__doc__)
        print(f"Error: {e}")
        return 2

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        from .app import CubeyApp
        app = CubeyApp(config)
    except CubeyError as e:
        print(f"Error: {e}")
        return 1

    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
