"""Expression base."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .context import EvaluationContext


class Kind(StrEnum):
    """Expression kind."""

    Within = "within"


class ValueType(StrEnum):
    """Expression result type."""

    Boolean = "boolean"


class Expression:
    """Style expression."""

    def __init__(self, kind: Kind, value_type: ValueType) -> None:
        """Initialise expression."""
        self.kind = kind
        self.type = value_type

    def get_operator(self) -> str:
        """Get expression operator name."""
        return self.kind.value

    def evaluate(self, params: EvaluationContext) -> Any:  # noqa: ANN401
        """Evaluate expression."""
        raise NotImplementedError

    def serialize(self) -> list[Any]:
        """Serialize expression to a configuration value."""
        raise NotImplementedError
