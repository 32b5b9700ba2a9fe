"""Geometry primitives and containment tests."""
