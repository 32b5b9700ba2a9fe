"""Polygon helper utilities."""

from __future__ import annotations

from collections.abc import Iterable

from .types import Point, Polygon
from .winding import is_left


def point_within_polygon(point: Point, polygon: Polygon) -> bool:
    """Check if a point is within a polygon using the winding number."""
    # See http://geomalgorithms.com/a03-_inclusion.html
    # Every ring is tested on its own, holes are not subtracted.
    winding_number = 0
    for ring in polygon:
        for i in range(len(ring) - 1):
            start, end = ring[i], ring[i + 1]
            if start.y <= point.y:
                # upward crossing
                if end.y > point.y and is_left(start, end, point) > 0:
                    winding_number += 1
            elif end.y <= point.y and is_left(start, end, point) < 0:
                # downward crossing
                winding_number -= 1
        if winding_number != 0:
            return True
    return False


def points_within_polygon(points: Iterable[Point], polygon: Polygon) -> bool:
    """Check if all points are within a polygon."""
    result = False
    for point in points:
        result = point_within_polygon(point, polygon)
        if not result:
            return False
    return result
