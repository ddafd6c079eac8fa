# ui/selector/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Sampled pixel value as (r, g, b, a), each channel in 0..255.
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Point:
    """
    Integer position in image pixel space (origin at the image's top-left corner).

    Points produced by the coordinate mapper are not clamped, so they may lie
    outside the image until a bounds check runs.
    """
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle described by two corners.

    Always built through geometry.normalize(), which guarantees
    origin.x <= end.x and origin.y <= end.y. Corners are inclusive: a rect from
    (0, 0) to (width, height) is the whole image.
    """
    origin: Point
    end: Point

    @property
    def width(self) -> int:
        return self.end.x - self.origin.x

    @property
    def height(self) -> int:
        return self.end.y - self.origin.y

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_RECT


# "No selection" sentinel: both corners at (-1, -1).
EMPTY_RECT = Rect(Point(-1, -1), Point(-1, -1))


def clamp_int(v: int, lo: int, hi: int) -> int:
    """
    Pin a pixel coordinate between lo and hi, both ends allowed.

    Used to keep a drawing corner inside the image when the pointer leaves the
    viewport while the grab is active.
    """
    return max(lo, min(hi, v))
