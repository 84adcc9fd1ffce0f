"""
Procedural pattern generation.

A pattern is generated once and then animated every frame: segment
count, base stroke width and a stack of layers, each with its own
radius, shape variant and noise phase.
"""

from dataclasses import dataclass

import numpy as np

from mandalascope.config import MandalaConfig


@dataclass(frozen=True)
class Layer:
    """One concentric ring of shapes."""

    radius: float
    shape_type: int
    noise_seed: float


@dataclass(frozen=True)
class Pattern:
    """Immutable mandala geometry. Layer order is draw order."""

    segment_count: int
    base_stroke_width: float
    layers: tuple[Layer, ...]

    @property
    def layer_count(self) -> int:
        return len(self.layers)


class PatternGenerator:
    """
    Draws new patterns from an explicit random generator.

    The draw order is fixed so that the same seed and canvas size always
    reproduce the same pattern.
    """

    def __init__(self, config: MandalaConfig | None = None):
        self.cfg = config or MandalaConfig()

    def max_radius(self, width: int, height: int) -> float:
        """Upper bound of the base radius draw for a canvas size."""
        return max(self.cfg.min_radius, min(width, height) * self.cfg.radius_fraction)

    def generate(self, rng: np.random.Generator, width: int, height: int) -> Pattern:
        """
        Generate a pattern for a canvas.

        Args:
            rng: Seeded numpy generator; consumed in a fixed order.
            width: Canvas width in pixels.
            height: Canvas height in pixels.

        Returns:
            A new Pattern.
        """
        cfg = self.cfg
        segment_count = int(rng.integers(*cfg.segment_range))
        base_stroke_width = float(rng.uniform(*cfg.stroke_width_range))
        layer_count = int(rng.integers(*cfg.layer_range))

        hi = self.max_radius(width, height)
        layers = []
        for i in range(layer_count):
            radius = float(rng.uniform(cfg.min_radius, hi)) * (1 + i * cfg.radius_growth)
            shape_type = int(rng.integers(0, cfg.num_shape_variants))
            noise_seed = float(rng.uniform(0, 1000))
            layers.append(Layer(radius, shape_type, noise_seed))

        return Pattern(
            segment_count=segment_count,
            base_stroke_width=base_stroke_width,
            layers=tuple(layers),
        )
