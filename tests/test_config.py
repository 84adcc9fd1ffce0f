"""Tests for configuration handling."""

import pytest

from mandalascope.config import PROFILES, MandalaConfig


class TestMandalaConfig:
    def test_defaults_valid(self):
        cfg = MandalaConfig()
        assert cfg.segment_range == (16, 48)
        assert cfg.history_capacity == 120

    @pytest.mark.parametrize("field,value", [
        ("segment_range", (0, 10)),
        ("segment_range", (10, 10)),
        ("layer_range", (5, 2)),
        ("num_shape_variants", 8),
        ("num_shape_variants", 0),
        ("history_capacity", 0),
        ("smoothing", 0.0),
        ("energy_ceiling", 0.0),
        ("scale_source", "mouse"),
        ("draw_order", "random"),
        ("dot_style", "square"),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError, match=field):
            MandalaConfig(**{field: value})

    def test_from_dict_lists_become_tuples(self):
        cfg = MandalaConfig.from_dict({"segment_range": [12, 48], "layer_range": [5, 20]})
        assert cfg.segment_range == (12, 48)
        assert cfg.layer_range == (5, 20)

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(ValueError, match="mirrors"):
            MandalaConfig.from_dict({"mirrors": 8})

    def test_overrides_win(self):
        cfg = MandalaConfig.from_dict({"fps": 24}, fps=50)
        assert cfg.fps == 50

    @pytest.mark.parametrize("profile", list(PROFILES))
    def test_profiles(self, profile):
        cfg = MandalaConfig.from_profile(profile)
        assert cfg.width == PROFILES[profile]["width"]
        assert cfg.fps == PROFILES[profile]["fps"]

    def test_round_trip_dict(self):
        cfg = MandalaConfig(use_palette=True, draw_order="layer")
        assert MandalaConfig.from_dict(cfg.to_dict()) == cfg
