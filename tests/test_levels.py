"""Tests for offline level extraction."""

import numpy as np
import pytest

from mandalascope.core.levels import AudioLevels, LevelExtractor


class TestLevelExtractor:
    def test_hop_length(self):
        assert LevelExtractor(target_fps=60).compute_hop_length(22050) == 367

    def test_frame_count_matches_duration(self, pulsing_sine):
        y, sr = pulsing_sine
        levels = LevelExtractor(target_fps=30).extract(y, sr)
        assert isinstance(levels, AudioLevels)
        assert levels.n_frames == 60
        assert levels.duration == pytest.approx(2.0)

    def test_levels_bounded(self, pulsing_sine):
        y, sr = pulsing_sine
        levels = LevelExtractor(target_fps=30).extract(y, sr).levels
        assert levels.min() >= 0.0
        assert levels.max() <= 1.0

    def test_follows_loudness(self, pulsing_sine):
        """Loud first second, quiet second: RMS ~0.35 then ~0.035."""
        y, sr = pulsing_sine
        levels = LevelExtractor(target_fps=30).extract(y, sr).levels
        loud = levels[5:25].mean()
        quiet = levels[35:55].mean()
        assert loud == pytest.approx(0.5 / np.sqrt(2), rel=0.1)
        assert loud > quiet * 5

    def test_empty_signal(self):
        levels = LevelExtractor().extract(np.zeros(0, dtype=np.float32), 22050)
        assert levels.n_frames == 0

    def test_process_file(self, temp_audio_file):
        levels = LevelExtractor(target_fps=30).process(temp_audio_file)
        assert levels.sample_rate == 22050
        assert levels.n_frames == 60
