"""Planar angle and distance helpers shared by form checks and rep detection."""

from __future__ import annotations

import math
from typing import Protocol


class Point(Protocol):
    x: float
    y: float


def calculate_angle(p1: Point, p2: Point, p3: Point) -> float:
    """Angle in degrees at vertex ``p2`` formed by ``p1``-``p2``-``p3``.

    The difference of the two ray bearings is folded back into [0, 180] so the
    result is the interior angle regardless of which side the rays fall on.
    Coincident points yield 0.
    """
    radians = math.atan2(p3.y - p2.y, p3.x - p2.x) - math.atan2(p1.y - p2.y, p1.x - p2.x)
    angle = abs(math.degrees(radians))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def calculate_distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)
