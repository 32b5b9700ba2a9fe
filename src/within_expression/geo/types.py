"""Geometry types."""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple


class Point(NamedTuple):
    """Point with double precision coordinates."""

    x: float
    y: float


Ring = Sequence[Point]
Polygon = Sequence[Ring]


def to_polygon(
    coordinates: Sequence[Sequence[Sequence[float]]],
) -> tuple[tuple[Point, ...], ...]:
    """Convert GeoJSON polygon coordinates to rings of points."""
    return tuple(
        tuple(Point(float(position[0]), float(position[1])) for position in ring)
        for ring in coordinates
    )
