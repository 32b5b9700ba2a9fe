"""Style expressions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .context import EvaluationContext, ParsingContext, ParsingError
from .conversion import array_length, array_member, is_array, is_object, to_string
from .expression import Expression
from .within import Within

EXPRESSION_REGISTRY: dict[str, Callable[[Any, ParsingContext], Expression | None]] = {
    "within": Within.parse,
}


def _type_name(value: Any) -> str:  # noqa: ANN401
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_array(value):
        return "array"
    if is_object(value):
        return "object"
    return type(value).__name__


def parse_expression(
    value: Any,  # noqa: ANN401
    ctx: ParsingContext,
) -> Expression | None:
    """Parse an expression from a configuration value."""
    if not is_array(value):
        ctx.error(f"Expected an array, but found {_type_name(value)} instead.")
        return None

    if array_length(value) == 0:
        ctx.error(
            "Expected an array with at least one element. "
            'If you wanted a literal array, use ["literal", []].',
        )
        return None

    operator = array_member(value, 0)
    name = to_string(operator)
    if name is None:
        ctx.error(
            "Expression name must be a string, "
            f"but found {_type_name(operator)} instead.",
            "[0]",
        )
        return None

    parser = EXPRESSION_REGISTRY.get(name)
    if parser is None:
        ctx.error(f'Unknown expression "{name}".', "[0]")
        return None

    return parser(value, ctx)


__all__ = [
    "EvaluationContext",
    "Expression",
    "ParsingContext",
    "ParsingError",
    "Within",
    "parse_expression",
]
