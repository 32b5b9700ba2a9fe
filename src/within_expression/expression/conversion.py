"""Conversion of configuration values."""

from __future__ import annotations

from json import dumps
from math import isfinite
from numbers import Real
from typing import Any

from within_expression.geo.types import Point, to_polygon

COORDINATES_DEPTH = {
    "Point": 0,
    "MultiPoint": 1,
    "LineString": 1,
    "MultiLineString": 2,
    "Polygon": 2,
    "MultiPolygon": 3,
}


class ConversionError(ValueError):
    """Value can not be converted."""

    def __init__(self, message: str) -> None:
        """Initialise conversion error."""
        super().__init__(message)
        self.message = message


def is_array(value: Any) -> bool:  # noqa: ANN401
    """Check if the value is an array."""
    return isinstance(value, list | tuple)


def array_length(value: list[Any] | tuple[Any, ...]) -> int:
    """Get array length."""
    return len(value)


def array_member(value: list[Any] | tuple[Any, ...], index: int) -> Any:  # noqa: ANN401
    """Get array member."""
    return value[index]


def is_object(value: Any) -> bool:  # noqa: ANN401
    """Check if the value is an object."""
    return isinstance(value, dict)


def object_member(value: dict[str, Any], key: str) -> Any | None:  # noqa: ANN401
    """Get object member if it exists."""
    return value.get(key)


def to_string(value: Any) -> str | None:  # noqa: ANN401
    """Get string value if the value is a string."""
    if isinstance(value, str):
        return value
    return None


class GeoJSON:
    """Converted GeoJSON geometry."""

    def __init__(self, geometry: dict[str, Any]) -> None:
        """Initialise GeoJSON geometry."""
        self._geometry = geometry
        self.type: str = geometry["type"]
        self.polygon: tuple[tuple[Point, ...], ...] = (
            to_polygon(geometry["coordinates"]) if self.type == "Polygon" else ()
        )

    def __repr__(self) -> str:
        """Represent GeoJSON as string."""
        return f"GeoJSON({self.stringify()})"

    def __eq__(self, other: object) -> bool:
        """Compare GeoJSON geometries."""
        if not isinstance(other, GeoJSON):
            return NotImplemented
        return self._geometry == other._geometry

    def __hash__(self) -> int:
        """Hash GeoJSON geometry."""
        return hash(self.stringify())

    def to_dict(self) -> dict[str, Any]:
        """Get dictionary with the geometry."""
        return _copy(self._geometry)

    def stringify(self) -> str:
        """Get GeoJSON text."""
        return dumps(self._geometry, separators=(",", ":"))


def _copy(value: Any) -> Any:  # noqa: ANN401
    if isinstance(value, dict):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_copy(v) for v in value]
    return value


def _convert_position(value: Any) -> list[float]:  # noqa: ANN401
    if not is_array(value) or array_length(value) < 2:  # noqa: PLR2004
        err = "coordinates must be an array of at least two numbers"
        raise ConversionError(err)
    position: list[float] = []
    for member in value:
        if isinstance(member, bool) or not isinstance(member, Real):
            err = "coordinates must be numbers"
            raise ConversionError(err)
        try:
            number = float(member)
        except OverflowError as e:
            err = "coordinates must be finite numbers"
            raise ConversionError(err) from e
        if not isfinite(number):
            err = "coordinates must be finite numbers"
            raise ConversionError(err)
        position.append(number)
    return position


def _convert_coordinates(value: Any, depth: int) -> list[Any]:  # noqa: ANN401
    if depth == 0:
        return _convert_position(value)
    if not is_array(value):
        err = "coordinates must be an array"
        raise ConversionError(err)
    return [_convert_coordinates(member, depth - 1) for member in value]


def _convert_geometry(value: Any) -> dict[str, Any]:  # noqa: ANN401
    if not is_object(value):
        err = "GeoJSON geometry must be an object"
        raise ConversionError(err)

    geometry_type = to_string(object_member(value, "type"))
    if geometry_type is None:
        err = "GeoJSON geometry must have a type property"
        raise ConversionError(err)

    if geometry_type == "GeometryCollection":
        geometries = object_member(value, "geometries")
        if not is_array(geometries):
            err = "GeometryCollection must have a geometries array"
            raise ConversionError(err)
        return {
            "type": geometry_type,
            "geometries": [_convert_geometry(member) for member in geometries],
        }

    if geometry_type not in COORDINATES_DEPTH:
        err = f"{geometry_type} geometry type not supported"
        raise ConversionError(err)

    coordinates = object_member(value, "coordinates")
    if coordinates is None:
        err = "coordinates property not found"
        raise ConversionError(err)

    return {
        "type": geometry_type,
        "coordinates": _convert_coordinates(
            coordinates,
            COORDINATES_DEPTH[geometry_type],
        ),
    }


def to_geojson(value: Any) -> GeoJSON:  # noqa: ANN401
    """Convert a configuration value to a GeoJSON geometry."""
    return GeoJSON(_convert_geometry(value))
