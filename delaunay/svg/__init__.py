"""A small SVG reader that turns shapes into cubic Bezier paths."""

__all__ = ["colors", "model", "parser", "pathdata", "styles", "transform", "values", "xml"]