"""Vector tile geometry conversion."""

from __future__ import annotations

from math import atan, exp, inf, pi
from typing import TYPE_CHECKING

from shapely.errors import GEOSException  # type: ignore[import-untyped]
from shapely.geometry import (  # type: ignore[import-untyped]
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry  # type: ignore[import-untyped]

from . import EXTENT
from .feature import FeatureType, GeometryCollection, GeometryTileFeature, TilePoint

if TYPE_CHECKING:
    from .id import CanonicalTileID


class GeometryConversionError(ValueError):
    """Feature geometry can not be converted."""


def signed_area(ring: list[TilePoint]) -> float:
    """Get signed area of a ring (shoelace formula)."""
    total = 0.0
    j = len(ring) - 1
    for i in range(len(ring)):
        p1 = ring[i]
        p2 = ring[j]
        total += (p2[0] - p1[0]) * (p1[1] + p2[1])
        j = i
    return total


def classify_rings(rings: GeometryCollection) -> list[GeometryCollection]:
    """Group rings into polygons based on their winding order."""
    if len(rings) <= 1:
        return [rings]

    polygons: list[GeometryCollection] = []
    polygon: GeometryCollection = []
    ccw = 0
    for ring in rings:
        area = signed_area(ring)
        if area == 0:
            continue

        orientation = -1 if area < 0 else 1
        if ccw == 0:
            ccw = orientation

        # a ring with the outer orientation starts a new polygon
        if ccw == orientation and polygon:
            polygons.append(polygon)
            polygon = []

        polygon.append(ring)

    if polygon:
        polygons.append(polygon)

    return polygons


def convert_geometry(
    feature: GeometryTileFeature,
    canonical: CanonicalTileID,
    extent: int = EXTENT,
) -> BaseGeometry:
    """Convert feature geometry from tile coordinates to longitude/latitude."""
    size = extent * 2**canonical.z
    x0 = extent * canonical.x
    y0 = extent * canonical.y

    def to_lon_lat(point: TilePoint) -> tuple[float, float]:
        y2 = 180 - (point[1] + y0) * 360 / size
        try:
            mercator = exp(y2 * pi / 180)
        except OverflowError:
            # far north of the tile, latitude saturates at 90
            mercator = inf
        return (
            (point[0] + x0) * 360 / size - 180,
            atan(mercator) * 360 / pi - 90,
        )

    geometries = feature.get_geometries()
    feature_type = feature.get_type()

    try:
        if feature_type == FeatureType.Point:
            points = [to_lon_lat(p) for p in geometries[0]] if geometries else []
            if len(points) == 1:
                return Point(points[0])
            return MultiPoint(points)

        if feature_type == FeatureType.LineString:
            lines = [[to_lon_lat(p) for p in line] for line in geometries]
            if len(lines) == 1:
                return LineString(lines[0])
            return MultiLineString(lines)

        if feature_type == FeatureType.Polygon:
            polygons = [
                [[to_lon_lat(p) for p in ring] for ring in polygon]
                for polygon in classify_rings(geometries)
                if polygon
            ]
            if len(polygons) == 1:
                return Polygon(polygons[0][0], polygons[0][1:])
            return MultiPolygon([(polygon[0], polygon[1:]) for polygon in polygons])
    except (GEOSException, ArithmeticError, ValueError, TypeError) as e:
        raise GeometryConversionError(str(e)) from e

    err = f"Unsupported feature type: {feature_type!r}"
    raise GeometryConversionError(err)
