"""Geometry and unit helpers shared by every entity.

All bounding boxes in the game are `Rect` values; the overlap test and the
entity `bounds` properties never use ad-hoc dict or tuple rectangles.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle. Origin top-left, y grows downward."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, padding: float) -> "Rect":
        """Shrink the rectangle by `padding` on every side."""
        return Rect(
            x=self.x + padding,
            y=self.y + padding,
            width=self.width - padding * 2,
            height=self.height - padding * 2,
        )


def overlaps(a: Rect, b: Rect) -> bool:
    """Strict AABB intersection. Rectangles that only touch do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def to_pixels_per_second(speed_kmh: float, pixels_per_meter: float) -> float:
    """Convert a speed in km/h to screen pixels per second."""
    meters_per_second = speed_kmh * 1000 / 3600
    return meters_per_second * pixels_per_meter


def random_int_inclusive(rng: np.random.Generator, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi], both ends inclusive.

    Args:
        rng: Random source.
        lo: Lower bound.
        hi: Upper bound, must be >= lo.

    Raises:
        ValueError: If lo > hi.
    """
    if lo > hi:
        raise ValueError(f"random_int_inclusive: lo ({lo}) > hi ({hi})")
    return int(rng.integers(lo, hi, endpoint=True))
