"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for surface tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from mandalascope.config import MandalaConfig
from mandalascope.visualizers.canvas import Canvas

TEST_SR = 22050


class RecordingCanvas(Canvas):
    """Canvas that records every rasterised call instead of drawing."""

    def __init__(self, width: int = 800, height: int = 600):
        super().__init__(width, height)
        self.calls: list[dict] = []

    def fill_polygon(self, pixels, color):
        self.calls.append({"kind": "fill", "pixels": pixels.copy(), "color": color, "width": None})

    def stroke_polyline(self, pixels, color, width, closed):
        self.calls.append({"kind": "stroke", "pixels": pixels.copy(), "color": color, "width": width})


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas(800, 600)


@pytest.fixture
def config() -> MandalaConfig:
    """Small canvas config for fast tests."""
    return MandalaConfig(width=160, height=120, fps=30)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def sample_rate() -> int:
    return TEST_SR


@pytest.fixture
def pulsing_sine(sample_rate: int) -> tuple[np.ndarray, int]:
    """
    A 440Hz tone that is loud for the first second and quiet for the second.

    Returns:
        Tuple of (audio_signal, sample_rate).
    """
    duration = 2.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = np.sin(2 * np.pi * 440.0 * t)
    envelope = np.where(t < 1.0, 0.5, 0.05)
    return (y * envelope).astype(np.float32), sample_rate


@pytest.fixture
def temp_audio_file(tmp_path, pulsing_sine):
    """Write the pulsing sine to a temporary wav file."""
    import soundfile as sf

    y, sr = pulsing_sine
    audio_path = tmp_path / "test_audio.wav"
    sf.write(audio_path, y, sr)
    return audio_path
