"""Canonical tile ID."""

from __future__ import annotations


class CanonicalTileID:
    """Canonical tile ID."""

    def __init__(self, z: int, x: int, y: int) -> None:
        """Initialise canonical tile ID."""
        if z < 0:
            err = f"Invalid zoom level: {z}"
            raise ValueError(err)
        dim = 1 << z
        if not 0 <= x < dim or not 0 <= y < dim:
            err = f"Tile coordinates out of range for zoom level {z}: {x}/{y}"
            raise ValueError(err)

        self.z = z
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        """Represent tile ID as string."""
        return f"{self.z}/{self.x}/{self.y}"

    def __eq__(self, other: object) -> bool:
        """Compare tile IDs."""
        if not isinstance(other, CanonicalTileID):
            return NotImplemented
        return (self.z, self.x, self.y) == (other.z, other.x, other.y)

    def __hash__(self) -> int:
        """Hash tile ID."""
        return hash((self.z, self.x, self.y))

    @classmethod
    def from_string(cls, value: str) -> CanonicalTileID:
        """Read tile ID from a 'z/x/y' string."""
        parts = value.strip().split("/")
        if len(parts) != 3:  # noqa: PLR2004
            err = f"Tile ID needs to be in 'z/x/y' format, got '{value}'"
            raise ValueError(err)
        z, x, y = (int(part) for part in parts)
        return cls(z, x, y)
