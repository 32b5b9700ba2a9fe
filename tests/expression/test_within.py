"""Within expression tests."""

from __future__ import annotations

from json import loads
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from conftest import RecordingDiagnostics

POLYGON = {
    "type": "Polygon",
    "coordinates": [[[-10, -10], [10, -10], [10, 10], [-10, 10], [-10, -10]]],
}
POLYGON_REQUIRED = (
    "'Within' expression requires valid geojson source"
    " that contains polygon geometry type."
)


def _parse(value: object):  # noqa: ANN202
    from within_expression.expression.context import ParsingContext
    from within_expression.expression.within import Within

    ctx = ParsingContext()
    return Within.parse(value, ctx), ctx


def test_parse() -> None:
    """Test parsing a polygon."""
    from within_expression.expression.expression import Kind, ValueType
    from within_expression.expression.within import Within

    expression, ctx = _parse(["within", POLYGON])

    assert isinstance(expression, Within)
    assert not ctx.errors
    assert expression.kind is Kind.Within
    assert expression.type is ValueType.Boolean
    assert expression.get_operator() == "within"
    assert expression.geojson.type == "Polygon"


@pytest.mark.parametrize(
    ("value", "found"),
    [
        (["within"], 0),
        (["within", POLYGON, POLYGON], 2),
    ],
)
def test_parse_arity(value: list, found: int) -> None:
    """Test parsing with wrong argument count."""
    expression, ctx = _parse(value)

    assert expression is None
    assert len(ctx.errors) == 1
    assert ctx.errors[0].message == (
        "'Within' expression requires exactly one argument, "
        f"but found {found} instead."
    )


@pytest.mark.parametrize(
    "value",
    [
        {"type": "LineString", "coordinates": [[0, 0], [1, 1]]},
        {"coordinates": POLYGON["coordinates"]},
        {"type": 3},
        "Polygon",
        None,
    ],
)
def test_parse_schema(value: object) -> None:
    """Test parsing without a polygon."""
    expression, ctx = _parse(["within", value])

    assert expression is None
    assert [error.message for error in ctx.errors] == [POLYGON_REQUIRED]
    assert ctx.errors[0].key == "[1]"


def test_parse_conversion_error() -> None:
    """Test converter errors are reported."""
    expression, ctx = _parse(["within", {"type": "Polygon"}])

    assert expression is None
    assert [error.message for error in ctx.errors] == [
        "coordinates property not found",
        POLYGON_REQUIRED,
    ]
    assert "[1]: coordinates property not found" in ctx.get_combined_error_message()


def test_parse_not_array() -> None:
    """Test parsing a non-array value."""
    expression, ctx = _parse(POLYGON)

    assert expression is None
    assert not ctx.errors


def test_evaluate(diagnostics: RecordingDiagnostics) -> None:
    """Test evaluating point features."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    canonical = CanonicalTileID(0, 0, 0)

    def evaluate(feature: TileFeature) -> bool:
        return expression.evaluate(
            EvaluationContext(feature, canonical, diagnostics),
        )

    assert evaluate(TileFeature(FeatureType.Point, [[(4096, 4096)]]))
    assert not evaluate(TileFeature(FeatureType.Point, [[(0, 0)]]))
    assert evaluate(TileFeature(FeatureType.Point, [[(4096, 4096), (4200, 4000)]]))
    assert not evaluate(TileFeature(FeatureType.Point, [[(4096, 4096), (0, 0)]]))
    assert not evaluate(TileFeature(FeatureType.Point, []))
    assert not diagnostics.warnings


def test_evaluate_other_tile(diagnostics: RecordingDiagnostics) -> None:
    """Test tile coordinates are reprojected with the tile ID."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    feature = TileFeature(FeatureType.Point, [[(0, 8192)]])

    assert expression.evaluate(
        EvaluationContext(feature, CanonicalTileID(1, 1, 0), diagnostics),
    )
    assert not expression.evaluate(
        EvaluationContext(feature, CanonicalTileID(1, 0, 0), diagnostics),
    )


@pytest.mark.parametrize("feature_type", ["LineString", "Polygon"])
def test_evaluate_unsupported(
    diagnostics: RecordingDiagnostics,
    feature_type: str,
) -> None:
    """Test non-point features warn and evaluate to false."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    feature = TileFeature(
        FeatureType[feature_type],
        [[(4096, 4096), (4100, 4096), (4100, 4100), (4096, 4096)]],
    )

    result = expression.evaluate(
        EvaluationContext(feature, CanonicalTileID(0, 0, 0), diagnostics),
    )

    assert result is False
    assert diagnostics.warnings == [
        "Within expression currently only support 'Point' geometry type",
    ]


def test_evaluate_missing_context(diagnostics: RecordingDiagnostics) -> None:
    """Test missing feature or tile ID silently evaluates to false."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    feature = TileFeature(FeatureType.LineString, [[(4096, 4096), (4100, 4100)]])

    assert expression.evaluate(EvaluationContext(diagnostics=diagnostics)) is False
    assert (
        expression.evaluate(EvaluationContext(feature, None, diagnostics)) is False
    )
    assert (
        expression.evaluate(
            EvaluationContext(None, CanonicalTileID(0, 0, 0), diagnostics),
        )
        is False
    )
    assert not diagnostics.warnings


def test_evaluate_default_diagnostics(caplog: pytest.LogCaptureFixture) -> None:
    """Test warnings are logged by default."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    feature = TileFeature(FeatureType.LineString, [[(4096, 4096), (4100, 4100)]])

    with caplog.at_level("WARNING", logger="within_expression"):
        assert not expression.evaluate(
            EvaluationContext(feature, CanonicalTileID(0, 0, 0)),
        )

    assert "only support 'Point' geometry type" in caplog.text


def test_serialize() -> None:
    """Test serialization."""
    expression, _ = _parse(["within", POLYGON])

    operator, geojson = expression.serialize()

    assert operator == "within"
    assert loads(geojson) == {
        "type": "Polygon",
        "coordinates": [
            [[-10.0, -10.0], [10.0, -10.0], [10.0, 10.0], [-10.0, 10.0], [-10.0, -10.0]],
        ],
    }


def test_serialize_round_trip(diagnostics: RecordingDiagnostics) -> None:
    """Test parsing the serialized expression evaluates the same."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.feature import FeatureType, TileFeature
    from within_expression.tile.id import CanonicalTileID

    expression, _ = _parse(["within", POLYGON])
    operator, geojson = expression.serialize()
    parsed, ctx = _parse([operator, loads(geojson)])

    assert not ctx.errors
    assert parsed.geojson == expression.geojson
    assert parsed.serialize() == expression.serialize()

    canonical = CanonicalTileID(2, 1, 1)
    for x in range(0, 8192, 512):
        for y in range(0, 8192, 512):
            params = EvaluationContext(
                TileFeature(FeatureType.Point, [[(x, y)]]),
                canonical,
                diagnostics,
            )
            assert parsed.evaluate(params) == expression.evaluate(params)


def test_evaluate_plain_feature_type(diagnostics: RecordingDiagnostics) -> None:
    """Test features reporting their type as a plain integer."""
    from within_expression.expression.context import EvaluationContext
    from within_expression.tile.id import CanonicalTileID

    class PlainFeature:
        def get_type(self) -> int:
            return 1

        def get_geometries(self) -> list[list[tuple[int, int]]]:
            return [[(4096, 4096)]]

    expression, _ = _parse(["within", POLYGON])

    assert expression.evaluate(
        EvaluationContext(PlainFeature(), CanonicalTileID(0, 0, 0), diagnostics),
    )
    assert not diagnostics.warnings
