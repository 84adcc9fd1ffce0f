"""
Shape variants drawn at each layer × segment position.

Geometry sits along the local +x axis at ``final_radius``; the
compositor's rotation provides the symmetry. Every variant sets its
complete style inside its own push/pop, so nothing it sets survives
the call.
"""

import abc
import math
from dataclasses import dataclass

from mandalascope.visualizers.canvas import Canvas


@dataclass(frozen=True)
class ShapeGeometry:
    """Resolved geometry for one layer."""

    final_radius: float  # Animated and scaled radius
    base_radius: float  # Radius as generated


@dataclass(frozen=True)
class ShapeStyle:
    """Resolved style for one layer."""

    hue: float
    stroke_weight: float
    brightness: float = 90.0
    saturation: float = 90.0


class Shape(abc.ABC):
    """One shape variant."""

    type_id: int = -1
    name: str = ""

    def draw(self, canvas: Canvas, geometry: ShapeGeometry, style: ShapeStyle):
        """Draw with fully isolated style and transform."""
        canvas.push()
        try:
            self.render(canvas, geometry, style)
        finally:
            canvas.pop()

    @abc.abstractmethod
    def render(self, canvas: Canvas, geometry: ShapeGeometry, style: ShapeStyle):
        pass

    def _outline(self, canvas: Canvas, style: ShapeStyle):
        """Translucent stroke, no fill."""
        canvas.stroke_weight(style.stroke_weight)
        canvas.stroke(style.hue, style.saturation, style.brightness, 0.8)
        canvas.no_fill()


SHAPES: dict[int, Shape] = {}


def register_shape(cls: type[Shape]) -> type[Shape]:
    """Class decorator adding a variant to the registry under its ``type_id``."""
    SHAPES[cls.type_id] = cls()
    return cls


@register_shape
class EllipseDot(Shape):
    type_id = 0
    name = "ellipse"

    def render(self, canvas, geometry, style):
        r, base = geometry.final_radius, geometry.base_radius
        self._outline(canvas, style)
        canvas.ellipse(r, 0, base * 0.2, base * 0.5)
        canvas.fill(style.hue, style.saturation, 100)
        canvas.no_stroke()
        canvas.circle(r, 0, style.stroke_weight)


@register_shape
class Spoke(Shape):
    type_id = 1
    name = "line"

    def render(self, canvas, geometry, style):
        self._outline(canvas, style)
        canvas.line(0, 0, geometry.final_radius, 0)


@register_shape
class Arc(Shape):
    type_id = 2
    name = "arc"

    def render(self, canvas, geometry, style):
        d = geometry.final_radius * 1.5
        self._outline(canvas, style)
        canvas.arc(0, 0, d, d, -30, 30)


@register_shape
class MirroredBezier(Shape):
    type_id = 3
    name = "bezier"

    def render(self, canvas, geometry, style):
        r = geometry.final_radius
        offset = geometry.base_radius * 0.5
        self._outline(canvas, style)
        canvas.bezier(0, 0, offset, -offset, r - offset, -offset, r, 0)
        canvas.bezier(0, 0, offset, offset, r - offset, offset, r, 0)


@register_shape
class Petal(Shape):
    type_id = 4
    name = "petal"

    def render(self, canvas, geometry, style):
        r = geometry.final_radius
        self._outline(canvas, style)
        canvas.curve(r, 0, r * 0.9, 0, r * 0.8, r * 0.2, r * 0.7, r * 0.3)
        canvas.curve(r, 0, r * 0.9, 0, r * 0.8, -r * 0.2, r * 0.7, -r * 0.3)


@register_shape
class TriangleFan(Shape):
    type_id = 5
    name = "triangle"

    def render(self, canvas, geometry, style):
        r = geometry.final_radius
        canvas.no_stroke()
        canvas.fill(style.hue, max(0.0, style.saturation - 10), style.brightness, 0.5)
        canvas.triangle(0, 0, r, -10, r, 10)


@register_shape
class DotRing(Shape):
    type_id = 6
    name = "dots"
    count = 12

    def render(self, canvas, geometry, style):
        r = geometry.final_radius
        canvas.no_stroke()
        canvas.fill(style.hue, style.saturation, style.brightness, 0.7)
        for k in range(self.count):
            angle = math.radians(k * 360 / self.count)
            canvas.circle(r * math.cos(angle), r * math.sin(angle), style.stroke_weight * 1.5)


class SingleDot(Shape):
    """Older take on variant 6: one dot at the tip of the segment."""

    type_id = 6
    name = "dot"

    def render(self, canvas, geometry, style):
        canvas.no_stroke()
        canvas.fill(style.hue, style.saturation, style.brightness, 0.7)
        canvas.circle(geometry.final_radius, 0, style.stroke_weight * 2)


LEGACY_SHAPES: dict[int, Shape] = {SingleDot.type_id: SingleDot()}


def get_shape(shape_type: int, dot_style: str = "ring") -> Shape:
    """Look up a registered variant; ``dot_style="single"`` selects the legacy dot."""
    if dot_style == "single" and shape_type in LEGACY_SHAPES:
        return LEGACY_SHAPES[shape_type]
    return SHAPES[shape_type]
