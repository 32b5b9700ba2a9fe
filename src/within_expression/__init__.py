"""Within expression for map style evaluation."""

__version__ = "0.1.0"
