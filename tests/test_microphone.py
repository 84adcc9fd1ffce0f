"""Tests for the live microphone level source (no device required)."""

import numpy as np
import pytest

from mandalascope.io.microphone import MicrophoneLevel


class TestBlockLevel:
    def test_silence(self):
        assert MicrophoneLevel.block_level(np.zeros((1024, 1), dtype=np.float32)) == 0.0

    def test_empty_block(self):
        assert MicrophoneLevel.block_level(np.zeros((0, 1), dtype=np.float32)) == 0.0

    def test_constant_block(self):
        block = np.full((512, 1), 0.25, dtype=np.float32)
        assert MicrophoneLevel.block_level(block) == pytest.approx(0.25)

    def test_gain_clamped(self):
        block = np.full(256, 0.5, dtype=np.float32)
        assert MicrophoneLevel.block_level(block, gain=10.0) == 1.0

    def test_non_finite(self):
        block = np.array([np.nan, 0.1], dtype=np.float32)
        assert MicrophoneLevel.block_level(block) == 0.0


class TestMicrophoneLevel:
    def test_defaults_to_zero(self):
        mic = MicrophoneLevel()
        assert not mic.running
        assert mic.read_level() == 0.0

    def test_callback_stores_latest(self):
        mic = MicrophoneLevel(gain=2.0)
        mic._callback(np.full((64, 1), 0.1, dtype=np.float32), 64, None, None)
        assert mic.read_level() == pytest.approx(0.2)
        mic._callback(np.zeros((64, 1), dtype=np.float32), 64, None, None)
        assert mic.read_level() == 0.0

    def test_stop_without_start(self):
        mic = MicrophoneLevel()
        mic.stop()
        assert not mic.running
