"""SVG reading into cubic Bezier shapes, with numeric helpers for meshing."""

__version__ = "0.1.0"