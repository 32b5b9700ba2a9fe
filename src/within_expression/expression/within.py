"""Within expression."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from within_expression.geo.adapter import feature_within_geojson
from within_expression.tile.feature import FeatureType

from .conversion import (
    ConversionError,
    GeoJSON,
    array_length,
    array_member,
    is_array,
    is_object,
    object_member,
    to_geojson,
    to_string,
)
from .expression import Expression, Kind, ValueType

if TYPE_CHECKING:
    from .context import EvaluationContext, ParsingContext

POLYGON_REQUIRED = (
    "'Within' expression requires valid geojson source"
    " that contains polygon geometry type."
)
POINT_ONLY = "Within expression currently only support 'Point' geometry type"


def _parse_value(value: Any, ctx: ParsingContext) -> GeoJSON | None:  # noqa: ANN401
    if is_object(value) and to_string(object_member(value, "type")) == "Polygon":
        try:
            return to_geojson(value)
        except ConversionError as e:
            ctx.error(e.message)
    ctx.error(POLYGON_REQUIRED)
    return None


class Within(Expression):
    """Check if a feature is within a polygon."""

    def __init__(self, geojson: GeoJSON) -> None:
        """Initialise within expression."""
        super().__init__(Kind.Within, ValueType.Boolean)
        self.geojson = geojson

    def __repr__(self) -> str:
        """Represent expression as string."""
        return f"Within({self.geojson.stringify()})"

    def evaluate(self, params: EvaluationContext) -> bool:
        """Evaluate the expression for a feature."""
        if params.feature is None or params.canonical is None:
            return False

        if params.feature.get_type() == FeatureType.Point:
            return feature_within_geojson(
                params.feature,
                params.canonical,
                self.geojson,
                params.extent,
            )

        params.diagnostics.warning(POINT_ONLY)
        return False

    def serialize(self) -> list[Any]:
        """Serialize expression to a configuration value."""
        return [self.get_operator(), self.geojson.stringify()]

    @classmethod
    def parse(cls, value: Any, ctx: ParsingContext) -> Within | None:  # noqa: ANN401
        """Parse within expression from a configuration value."""
        if not is_array(value):
            return None

        # ["within", polygon]
        length = array_length(value)
        if length != 2:  # noqa: PLR2004
            ctx.error(
                "'Within' expression requires exactly one argument, "
                f"but found {length - 1} instead.",
            )
            return None

        geojson = _parse_value(array_member(value, 1), ctx.concat(1))
        if geojson is None:
            return None
        return cls(geojson)
