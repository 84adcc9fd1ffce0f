"""
Drawing primitives with a transform and style stack.

Shapes are described in a local frame (origin at the mandala centre,
+x along the current segment) and the canvas maps them to pixels.
Curves and ellipses are flattened to polylines, so a backend only has
to fill polygons and stroke polylines.
"""

import abc
import colorsys
import math
from dataclasses import dataclass, replace

import numpy as np
import pygame

Color = tuple[int, int, int, int]

# Flattening resolution
ELLIPSE_STEPS = 32
CURVE_STEPS = 24


def hsb_to_rgba(hue: float, saturation: float, brightness: float, alpha: float = 1.0) -> Color:
    """Convert HSB (360, 100, 100, 1) to an 8-bit RGBA tuple."""
    h = (hue % 360) / 360.0
    s = min(1.0, max(0.0, saturation / 100.0))
    v = min(1.0, max(0.0, brightness / 100.0))
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    a = min(1.0, max(0.0, alpha))
    return (int(r * 255), int(g * 255), int(b * 255), int(a * 255))


@dataclass(frozen=True)
class Style:
    """Current stroke/fill state. None disables stroke or fill."""

    stroke: Color | None = (255, 255, 255, 255)
    fill: Color | None = (255, 255, 255, 255)
    weight: float = 1.0


class Canvas(abc.ABC):
    """
    Transform/style stack over an abstract rasteriser.

    ``push`` saves the current transform and style, ``pop`` restores
    both, so anything set between them cannot leak into later draws.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._matrix = np.eye(3)
        self._style = Style()
        self._stack: list[tuple[np.ndarray, Style]] = []

    # --- State -----------------------------------------------------------

    @property
    def style(self) -> Style:
        return self._style

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self):
        self._stack.append((self._matrix.copy(), self._style))

    def pop(self):
        if not self._stack:
            raise RuntimeError("Canvas.pop() without matching push()")
        self._matrix, self._style = self._stack.pop()

    def reset(self):
        """Drop all saved state and return to the identity transform."""
        self._matrix = np.eye(3)
        self._style = Style()
        self._stack.clear()

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height
        self.reset()

    def translate(self, x: float, y: float):
        t = np.array([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ t

    def rotate(self, degrees: float):
        a = math.radians(degrees)
        c, s = math.cos(a), math.sin(a)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ r

    def stroke(self, hue: float, saturation: float, brightness: float, alpha: float = 1.0):
        self._style = replace(self._style, stroke=hsb_to_rgba(hue, saturation, brightness, alpha))

    def no_stroke(self):
        self._style = replace(self._style, stroke=None)

    def fill(self, hue: float, saturation: float, brightness: float, alpha: float = 1.0):
        self._style = replace(self._style, fill=hsb_to_rgba(hue, saturation, brightness, alpha))

    def no_fill(self):
        self._style = replace(self._style, fill=None)

    def stroke_weight(self, weight: float):
        self._style = replace(self._style, weight=float(weight))

    # --- Primitives (local coordinates) ------------------------------------

    def line(self, x1: float, y1: float, x2: float, y2: float):
        self._emit(np.array([[x1, y1], [x2, y2]]), closed=False, fillable=False)

    def ellipse(self, cx: float, cy: float, w: float, h: float):
        t = np.linspace(0.0, 2 * math.pi, ELLIPSE_STEPS, endpoint=False)
        pts = np.column_stack([cx + w / 2 * np.cos(t), cy + h / 2 * np.sin(t)])
        self._emit(pts, closed=True)

    def circle(self, cx: float, cy: float, d: float):
        self.ellipse(cx, cy, d, d)

    def arc(self, cx: float, cy: float, w: float, h: float, start: float, stop: float):
        """Elliptical arc, angles in degrees. Filled arcs are drawn as pie slices."""
        t = np.radians(np.linspace(start, stop, CURVE_STEPS + 1))
        pts = np.column_stack([cx + w / 2 * np.cos(t), cy + h / 2 * np.sin(t)])
        if self._style.fill is not None:
            pie = np.vstack([[cx, cy], pts])
            self._fill(self._to_pixels(pie))
        if self._style.stroke is not None:
            self._stroke(self._to_pixels(pts), closed=False)

    def bezier(self, x1, y1, x2, y2, x3, y3, x4, y4):
        """Cubic Bézier from (x1, y1) to (x4, y4)."""
        t = np.linspace(0.0, 1.0, CURVE_STEPS + 1)[:, None]
        p0, p1, p2, p3 = (np.array(p, dtype=float) for p in ((x1, y1), (x2, y2), (x3, y3), (x4, y4)))
        pts = (
            (1 - t) ** 3 * p0
            + 3 * (1 - t) ** 2 * t * p1
            + 3 * (1 - t) * t ** 2 * p2
            + t ** 3 * p3
        )
        self._emit(pts, closed=False)

    def curve(self, x1, y1, x2, y2, x3, y3, x4, y4):
        """Catmull-Rom segment from (x2, y2) to (x3, y3); the outer points steer it."""
        t = np.linspace(0.0, 1.0, CURVE_STEPS + 1)[:, None]
        p0, p1, p2, p3 = (np.array(p, dtype=float) for p in ((x1, y1), (x2, y2), (x3, y3), (x4, y4)))
        pts = 0.5 * (
            2 * p1
            + (p2 - p0) * t
            + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t ** 2
            + (3 * p1 - p0 - 3 * p2 + p3) * t ** 3
        )
        self._emit(pts, closed=False)

    def triangle(self, x1, y1, x2, y2, x3, y3):
        self._emit(np.array([[x1, y1], [x2, y2], [x3, y3]], dtype=float), closed=True)

    # --- Rasterisation -----------------------------------------------------

    def _to_pixels(self, points: np.ndarray) -> np.ndarray:
        homo = np.column_stack([points, np.ones(len(points))])
        return (homo @ self._matrix.T)[:, :2]

    def _pixel_weight(self) -> float:
        scale = math.sqrt(abs(np.linalg.det(self._matrix[:2, :2])))
        return self._style.weight * scale

    def _emit(self, points: np.ndarray, closed: bool, fillable: bool = True):
        pixels = self._to_pixels(points)
        if fillable and closed and self._style.fill is not None:
            self._fill(pixels)
        if self._style.stroke is not None:
            self._stroke(pixels, closed)

    def _fill(self, pixels: np.ndarray):
        self.fill_polygon(pixels, self._style.fill)

    def _stroke(self, pixels: np.ndarray, closed: bool):
        self.stroke_polyline(pixels, self._style.stroke, self._pixel_weight(), closed)

    @abc.abstractmethod
    def fill_polygon(self, pixels: np.ndarray, color: Color):
        """Fill a polygon given in pixel coordinates."""

    @abc.abstractmethod
    def stroke_polyline(self, pixels: np.ndarray, color: Color, width: float, closed: bool):
        """Stroke a polyline given in pixel coordinates."""


class PygameCanvas(Canvas):
    """Canvas that rasterises onto a per-pixel-alpha pygame Surface."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)

    def resize(self, width: int, height: int):
        super().resize(width, height)
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)

    def clear(self):
        self.surface.fill((0, 0, 0, 0))
        self.reset()

    def _scratch(self, pixels: np.ndarray, pad: float) -> tuple[pygame.Surface | None, tuple[int, int]]:
        """Transparent layer covering the clipped bounding box of ``pixels``."""
        lo = np.floor(pixels.min(axis=0) - pad).astype(int)
        hi = np.ceil(pixels.max(axis=0) + pad).astype(int) + 1
        x0, y0 = max(0, int(lo[0])), max(0, int(lo[1]))
        x1, y1 = min(self.width, int(hi[0])), min(self.height, int(hi[1]))
        if x1 <= x0 or y1 <= y0:
            return None, (x0, y0)
        return pygame.Surface((x1 - x0, y1 - y0), pygame.SRCALPHA), (x0, y0)

    # pygame.draw writes RGBA straight into an SRCALPHA target, so every
    # primitive is drawn on a scratch layer and blitted to get alpha blending.

    def fill_polygon(self, pixels: np.ndarray, color: Color):
        if len(pixels) < 3:
            return
        layer, origin = self._scratch(pixels, 1)
        if layer is None:
            return
        pygame.draw.polygon(layer, color, (pixels - origin).tolist())
        self.surface.blit(layer, origin)

    def stroke_polyline(self, pixels: np.ndarray, color: Color, width: float, closed: bool):
        if len(pixels) < 2:
            return
        line_width = max(1, int(round(width)))
        layer, origin = self._scratch(pixels, line_width)
        if layer is None:
            return
        pygame.draw.lines(layer, color, closed, (pixels - origin).tolist(), line_width)
        self.surface.blit(layer, origin)
