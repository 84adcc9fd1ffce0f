"""Drawing surfaces, shape variants and the radial compositor."""

from mandalascope.visualizers.canvas import Canvas, PygameCanvas, hsb_to_rgba
from mandalascope.visualizers.compositor import RadialCompositor, ResolvedLayer
from mandalascope.visualizers.shapes import SHAPES, Shape, ShapeGeometry, ShapeStyle, get_shape

__all__ = [
    "Canvas",
    "PygameCanvas",
    "hsb_to_rgba",
    "RadialCompositor",
    "ResolvedLayer",
    "SHAPES",
    "Shape",
    "ShapeGeometry",
    "ShapeStyle",
    "get_shape",
]
