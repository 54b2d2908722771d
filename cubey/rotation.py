"""
Cube rotation state

Two angles (degrees) about the X and Y axes. Each frame they grow by a
fixed per-frame speed, and the arrow keys nudge them further.

Wrap-around is a RESET, not a modulo: as soon as an angle's magnitude
goes past 360 it snaps to exactly 0. At fractional speeds that is a
small visible jump (e.g. 360.7 -> 0.0 instead of 0.7).
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

LIMIT_DEGREES = 360.0


@dataclass
class RotationState:
    angle_x: float = 0.0
    angle_y: float = 0.0
    speed_x: float = 0.0
    speed_y: float = 0.0

    @classmethod
    def random(cls, speed_range: Tuple[float, float] = (0.1, 2.0),
               rng: Optional[random.Random] = None) -> "RotationState":
        """Start at rest with both speeds drawn uniformly from speed_range"""
        rng = rng or random.Random()
        low, high = speed_range
        return cls(speed_x=rng.uniform(low, high),
                   speed_y=rng.uniform(low, high))

    def nudge(self, dx: float, dy: float) -> None:
        """Apply a keyboard adjustment (degrees)"""
        self.angle_x += dx
        self.angle_y += dy

    def advance(self) -> None:
        """Add one frame's worth of speed, then reset overflowing angles"""
        self.angle_x = _reset_if_overflowing(self.angle_x + self.speed_x)
        self.angle_y = _reset_if_overflowing(self.angle_y + self.speed_y)

    @property
    def angles(self) -> Tuple[float, float]:
        return self.angle_x, self.angle_y


def _reset_if_overflowing(angle: float) -> float:
    if angle > LIMIT_DEGREES or angle < -LIMIT_DEGREES:
        return 0.0
    return angle
