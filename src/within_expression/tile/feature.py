"""Vector tile features."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Protocol

TilePoint = tuple[int, int]
GeometryCollection = list[list[TilePoint]]


class FeatureType(IntEnum):
    """Vector tile feature geometry type."""

    Unknown = 0
    Point = 1
    LineString = 2
    Polygon = 3


class GeometryTileFeature(Protocol):
    """Feature as stored in a vector tile."""

    def get_type(self) -> FeatureType:
        """Get feature geometry type."""
        ...

    def get_geometries(self) -> GeometryCollection:
        """Get feature geometries in tile coordinates."""
        ...


class TileFeature:
    """Vector tile feature."""

    def __init__(
        self,
        feature_type: FeatureType,
        geometries: GeometryCollection,
        properties: dict[str, Any] | None = None,
        feature_id: str | None = None,
    ) -> None:
        """Initialise vector tile feature."""
        self.type = feature_type
        self.geometries = geometries
        self.properties = properties or {}
        self.id = feature_id

    def __repr__(self) -> str:
        """Represent feature as string."""
        return f"{self.id}: {self.type.name} ({len(self.geometries)} geometries)"

    def get_type(self) -> FeatureType:
        """Get feature geometry type."""
        return self.type

    def get_geometries(self) -> GeometryCollection:
        """Get feature geometries in tile coordinates."""
        return self.geometries

    def to_dict(self) -> dict[str, Any]:
        """Get dictionary with class properties."""
        return {
            "id": self.id,
            "type": self.type.name,
            "geometry": [[list(point) for point in line] for line in self.geometries],
            "properties": self.properties,
        }

    @classmethod
    def from_dict(cls, dictionary: dict[str, Any]) -> TileFeature:
        """Read TileFeature from a dictionary."""
        type_name = dictionary.get("type")
        if not isinstance(type_name, str) or type_name not in FeatureType.__members__:
            err = f"'type' needs to be one of {', '.join(FeatureType.__members__)}"
            raise ValueError(err)

        geometry = dictionary.get("geometry", [])
        if not isinstance(geometry, list) or not all(
            isinstance(line, list) for line in geometry
        ):
            err = "'geometry' needs to be a list of lists of points"
            raise ValueError(err)

        properties = dictionary.get("properties")
        if properties is None:
            properties = {}
        if not isinstance(properties, dict):
            err = "'properties' needs to be an object"
            raise ValueError(err)

        feature_id = dictionary.get("id")
        return cls(
            FeatureType[type_name],
            [[(int(point[0]), int(point[1])) for point in line] for line in geometry],
            properties,
            str(feature_id) if feature_id is not None else None,
        )
