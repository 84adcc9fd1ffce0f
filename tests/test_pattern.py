"""Tests for procedural pattern generation."""

import numpy as np
import pytest

from mandalascope.config import MandalaConfig
from mandalascope.core.pattern import Layer, Pattern, PatternGenerator

# (radius, shape_type, noise_seed) per layer for default_rng(42) on 800x600
GOLDEN_SEED_42_LAYERS = [
    (238.89154238050415, 0, 94.177347887649532),
    (304.33245496409921, 4, 761.13970199035293),
    (289.81439130920876, 3, 450.38593789556711),
    (190.7845697301934, 0, 926.76498884860177),
    (306.64052226839391, 2, 443.41419882733112),
    (174.9869078871391, 5, 554.58478701583476),
    (121.6756130515453, 6, 631.66439912206488),
    (444.39757077850356, 5, 354.52596812986837),
    (579.81784380713327, 3, 778.38349707376187),
    (218.12821195946719, 6, 466.7210037270342),
    (149.09207118297584, 3, 683.04895324245467),
    (566.69633689425734, 1, 967.50973243421004),
    (340.70842061310157, 6, 469.55581127580791),
    (270.46691204570141, 2, 129.92150533547164),
    (479.43075968608679, 2, 669.81399468251038),
    (475.06362199371642, 1, 832.67819605783745),
    (693.79829629768233, 0, 832.25980139520107),
]


class TestPatternGenerator:
    def test_same_seed_same_pattern(self):
        generator = PatternGenerator()
        a = generator.generate(np.random.default_rng(7), 800, 600)
        b = generator.generate(np.random.default_rng(7), 800, 600)
        assert a == b

    def test_different_seed_different_pattern(self):
        generator = PatternGenerator()
        a = generator.generate(np.random.default_rng(1), 800, 600)
        b = generator.generate(np.random.default_rng(2), 800, 600)
        assert a != b

    @pytest.mark.parametrize("seed", range(25))
    def test_ranges(self, seed):
        cfg = MandalaConfig()
        pattern = PatternGenerator(cfg).generate(np.random.default_rng(seed), 800, 600)

        assert cfg.segment_range[0] <= pattern.segment_count < cfg.segment_range[1]
        assert cfg.layer_range[0] <= pattern.layer_count < cfg.layer_range[1]
        assert 0.5 <= pattern.base_stroke_width < 3.0
        for layer in pattern.layers:
            assert layer.radius > 0
            assert 0 <= layer.shape_type < cfg.num_shape_variants
            assert 0 <= layer.noise_seed < 1000

    def test_radius_growth_bounds(self):
        """Layer i radius lies in [50, 270] * (1 + 0.15 i) on an 800x600 canvas."""
        pattern = PatternGenerator().generate(np.random.default_rng(3), 800, 600)
        for i, layer in enumerate(pattern.layers):
            growth = 1 + i * 0.15
            assert 50 * growth <= layer.radius <= 270 * growth

    def test_restricted_shape_variants(self):
        cfg = MandalaConfig(num_shape_variants=4)
        pattern = PatternGenerator(cfg).generate(np.random.default_rng(11), 800, 600)
        assert all(layer.shape_type < 4 for layer in pattern.layers)

    def test_tiny_canvas_keeps_positive_radius(self):
        pattern = PatternGenerator().generate(np.random.default_rng(5), 20, 10)
        assert all(layer.radius >= 50 for layer in pattern.layers)

    def test_golden_seed_42(self):
        """Seed 42 on 800x600 reproduces the recorded pattern."""
        pattern = PatternGenerator().generate(np.random.default_rng(42), 800, 600)

        assert pattern.segment_count == 18
        assert pattern.base_stroke_width == pytest.approx(1.5971960993801309)
        assert pattern.layer_count == len(GOLDEN_SEED_42_LAYERS)
        for layer, (radius, shape_type, noise_seed) in zip(pattern.layers, GOLDEN_SEED_42_LAYERS):
            assert layer.radius == pytest.approx(radius)
            assert layer.shape_type == shape_type
            assert layer.noise_seed == pytest.approx(noise_seed)

    def test_draw_order(self):
        """Segments, stroke, layer count, then (radius, shape, noise) per layer."""
        pattern = PatternGenerator().generate(np.random.default_rng(42), 800, 600)

        ref = np.random.default_rng(42)
        segments = int(ref.integers(16, 48))
        stroke = float(ref.uniform(0.5, 3.0))
        n_layers = int(ref.integers(8, 20))
        layers = []
        for i in range(n_layers):
            radius = float(ref.uniform(50, 270)) * (1 + i * 0.15)
            shape = int(ref.integers(0, 7))
            seed = float(ref.uniform(0, 1000))
            layers.append(Layer(radius, shape, seed))

        assert pattern == Pattern(segments, stroke, tuple(layers))

    def test_pattern_is_immutable(self):
        pattern = PatternGenerator().generate(np.random.default_rng(0), 800, 600)
        with pytest.raises(AttributeError):
            pattern.segment_count = 3
