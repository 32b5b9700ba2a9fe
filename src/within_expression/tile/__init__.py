"""Vector tile data utilities."""

EXTENT: int = 8192
