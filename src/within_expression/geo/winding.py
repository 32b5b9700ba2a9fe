"""Winding classifier."""

from __future__ import annotations

from .types import Point


def is_left(p0: Point, p1: Point, p2: Point) -> float:
    """Test if a point is left, on or right of an infinite line.

    Returns a positive value when ``p2`` is left of the line through ``p0``
    and ``p1``, a negative value when it is right of it and zero when the
    three points are collinear.
    """
    return (p1.x - p0.x) * (p2.y - p0.y) - (p2.x - p0.x) * (p1.y - p0.y)
