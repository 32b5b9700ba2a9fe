"""Feature geometry containment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shapely.geometry import MultiPoint  # type: ignore[import-untyped]
from shapely.geometry import Point as ShapelyPoint  # type: ignore[import-untyped]

from within_expression.tile import EXTENT
from within_expression.tile.geometry import GeometryConversionError, convert_geometry

from .polygons import point_within_polygon, points_within_polygon
from .types import Point, Polygon

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry  # type: ignore[import-untyped]

    from within_expression.expression.conversion import GeoJSON
    from within_expression.tile.feature import GeometryTileFeature
    from within_expression.tile.id import CanonicalTileID


def geometry_within_polygon(geometry: BaseGeometry, polygon: Polygon) -> bool:
    """Check if a converted feature geometry is within a polygon."""
    match geometry:
        case ShapelyPoint():
            return point_within_polygon(Point(geometry.x, geometry.y), polygon)
        case MultiPoint():
            return points_within_polygon(
                (Point(p.x, p.y) for p in geometry.geoms),
                polygon,
            )
        case _:
            # lines and polygons are not supported
            return False


def feature_within_geojson(
    feature: GeometryTileFeature,
    canonical: CanonicalTileID,
    geojson: GeoJSON,
    extent: int = EXTENT,
) -> bool:
    """Check if a tile feature is within a GeoJSON polygon."""
    if geojson.type != "Polygon":
        return False

    try:
        geometry = convert_geometry(feature, canonical, extent)
    except GeometryConversionError:
        return False

    return geometry_within_polygon(geometry, geojson.polygon)
