"""
Radial compositor.

Resolves every layer's animated geometry and style once per frame,
then stamps it into each rotational segment around the canvas centre.
"""

from dataclasses import dataclass

from mandalascope.config import MandalaConfig
from mandalascope.core.mapper import VisualParams, lerp_clamped
from mandalascope.core.noise_field import CoherentNoise
from mandalascope.core.palette import Palette
from mandalascope.core.pattern import Pattern
from mandalascope.visualizers.canvas import Canvas
from mandalascope.visualizers.shapes import Shape, ShapeGeometry, ShapeStyle, get_shape


@dataclass(frozen=True)
class ResolvedLayer:
    """A layer ready to draw: which shape, where, and how."""

    shape: Shape
    geometry: ShapeGeometry
    style: ShapeStyle


class RadialCompositor:
    """
    Lays out layers × segments for a pattern.

    Args:
        config: Renderer configuration.
        noise: Coherent noise source for the radius wobble.
    """

    def __init__(self, config: MandalaConfig | None = None, noise: CoherentNoise | None = None):
        self.cfg = config or MandalaConfig()
        self.noise = noise or CoherentNoise()

    def resolve_layers(
        self,
        pattern: Pattern,
        params: VisualParams,
        frame_index: int,
        palette: Palette | None = None,
        scale: float = 1.0,
    ) -> list[ResolvedLayer]:
        """Compute per-layer geometry and style for one frame."""
        cfg = self.cfg
        amp = cfg.noise_amplitude
        n_layers = pattern.layer_count
        resolved = []

        for j, layer in enumerate(pattern.layers):
            noise_factor = self.noise(frame_index * cfg.noise_speed + layer.noise_seed)
            animated_radius = layer.radius + lerp_clamped(noise_factor, 0.0, 1.0, -amp, amp)
            final_radius = animated_radius * scale

            if palette is not None:
                hue = palette.hue(j)
            else:
                hue = (params.hue + j * 20) % 360

            # Outer layers thinner
            stroke = lerp_clamped(
                j, 0, n_layers, params.stroke_weight, params.stroke_weight * 0.5
            )

            resolved.append(ResolvedLayer(
                shape=get_shape(layer.shape_type, cfg.dot_style),
                geometry=ShapeGeometry(final_radius=final_radius, base_radius=layer.radius),
                style=ShapeStyle(
                    hue=hue,
                    stroke_weight=stroke,
                    brightness=params.brightness,
                    saturation=params.saturation,
                ),
            ))

        return resolved

    def render(
        self,
        canvas: Canvas,
        pattern: Pattern,
        params: VisualParams,
        frame_index: int,
        palette: Palette | None = None,
        scale: float = 1.0,
        rotation: float = 0.0,
    ) -> list[ResolvedLayer]:
        """
        Draw the full mandala for one frame.

        Args:
            canvas: Target canvas.
            pattern: Current pattern.
            params: Shared visual parameters for this frame.
            frame_index: Frame counter driving the noise phase.
            palette: Active palette, or None for audio-driven hues.
            scale: Radius multiplier (pointer and/or audio driven).
            rotation: Global rotation in degrees.

        Returns:
            The resolved layers that were drawn.
        """
        assert pattern.segment_count > 0, "segment_count must be positive"

        layers = self.resolve_layers(pattern, params, frame_index, palette, scale)
        angle_step = 360.0 / pattern.segment_count

        canvas.push()
        try:
            canvas.translate(canvas.width / 2, canvas.height / 2)
            canvas.rotate(rotation)

            if self.cfg.draw_order == "layer":
                for item in layers:
                    for i in range(pattern.segment_count):
                        self._stamp(canvas, item, i * angle_step)
            else:
                for i in range(pattern.segment_count):
                    for item in layers:
                        self._stamp(canvas, item, i * angle_step)
        finally:
            canvas.pop()

        return layers

    def _stamp(self, canvas: Canvas, item: ResolvedLayer, angle: float):
        canvas.push()
        canvas.rotate(angle)
        item.shape.draw(canvas, item.geometry, item.style)
        canvas.pop()
