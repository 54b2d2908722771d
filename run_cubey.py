#!/usr/bin/env python3
"""
Cubey - GLFW Version

Usage:
    python run_cubey.py [font.ttf] [--seed N] [--verbose]

Example:
    python run_cubey.py /usr/share/fonts/truetype/dejavu/DejaVuSans.ttf

Controls:
    Up/Down      - Rotate about X
    Left/Right   - Rotate about Y
    ESC          - Quit

Requirements:
    pip install glfw PyOpenGL PyOpenGL_accelerate pillow numpy
"""

import sys

from cubey.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
