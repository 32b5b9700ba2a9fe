"""Expression parsing and evaluation contexts."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, Protocol

from within_expression.tile import EXTENT

if TYPE_CHECKING:
    from within_expression.tile.feature import GeometryTileFeature
    from within_expression.tile.id import CanonicalTileID


class Diagnostics(Protocol):
    """Receiver of non-fatal evaluation diagnostics."""

    def warning(self, msg: str, *args: Any) -> None:  # noqa: ANN401
        """Report a warning."""
        ...


class ParsingError:
    """Expression parsing error."""

    def __init__(self, message: str, key: str = "") -> None:
        """Initialise parsing error."""
        self.message = message
        self.key = key

    def __repr__(self) -> str:
        """Represent parsing error as string."""
        if self.key:
            return f"{self.key}: {self.message}"
        return self.message


class ParsingContext:
    """Expression parsing context."""

    def __init__(self, key: str = "", errors: list[ParsingError] | None = None) -> None:
        """Initialise parsing context."""
        self.key = key
        self.errors: list[ParsingError] = errors if errors is not None else []

    def error(self, message: str, key: str | None = None) -> None:
        """Report a parsing error."""
        self.errors.append(ParsingError(message, self.key + (key or "")))

    def concat(self, index: int) -> ParsingContext:
        """Get a child context for an array member, sharing the errors."""
        return ParsingContext(f"{self.key}[{index}]", self.errors)

    def get_combined_error_message(self) -> str:
        """Get all errors as one message."""
        return "\n".join(repr(error) for error in self.errors)


@dataclass(frozen=True)
class EvaluationContext:
    """Expression evaluation context."""

    feature: GeometryTileFeature | None = None
    canonical: CanonicalTileID | None = None
    diagnostics: Diagnostics = field(
        default_factory=lambda: getLogger("within_expression"),
    )
    extent: int = EXTENT
