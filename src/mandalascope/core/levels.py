"""
Offline level extraction.

Produces the same per-frame "microphone level" the live host reads,
but from an audio file, so a track can be rendered to video with the
identical baseline and mapping logic.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import librosa
import numpy as np


@dataclass
class AudioLevels:
    """Frame-aligned RMS levels of an audio file."""

    levels: np.ndarray  # Shape: (n_frames,), values in [0, 1]
    fps: int
    sample_rate: int
    duration: float

    @property
    def n_frames(self) -> int:
        return len(self.levels)


class LevelExtractor:
    """
    Computes an RMS envelope aligned to a target frame rate.

    Args:
        target_fps: Frames per second of the output envelope.
        sample_rate: Analysis sample rate (22050 is efficient).
    """

    def __init__(self, target_fps: int = 60, sample_rate: int = 22050):
        self.target_fps = target_fps
        self.sample_rate = sample_rate

    def compute_hop_length(self, sr: int) -> int:
        """Hop length in samples that yields ``target_fps`` frames per second."""
        return max(1, int(sr / self.target_fps))

    def load_audio(self, audio_path: Union[str, Path]) -> tuple[np.ndarray, int]:
        y, sr = librosa.load(audio_path, sr=self.sample_rate, mono=True)
        return y, sr

    def extract(self, y: np.ndarray, sr: int) -> AudioLevels:
        """
        Compute frame levels from a mono signal.

        Args:
            y: Audio time series.
            sr: Sample rate of ``y``.

        Returns:
            AudioLevels with one value per output frame.
        """
        hop_length = self.compute_hop_length(sr)
        duration = len(y) / sr if sr else 0.0

        if len(y) == 0:
            levels = np.zeros(0, dtype=np.float32)
        else:
            levels = librosa.feature.rms(y=y, hop_length=hop_length)[0]
            # Keep the envelope exactly as long as the audio at target fps
            n_frames = max(1, int(round(duration * self.target_fps)))
            levels = levels[:n_frames]

        levels = np.nan_to_num(levels, nan=0.0, posinf=0.0, neginf=0.0)
        levels = np.clip(levels, 0.0, 1.0).astype(np.float32)

        return AudioLevels(
            levels=levels,
            fps=self.target_fps,
            sample_rate=sr,
            duration=duration,
        )

    def process(self, audio_path: Union[str, Path]) -> AudioLevels:
        """Load an audio file and extract its level envelope."""
        y, sr = self.load_audio(audio_path)
        return self.extract(y, sr)
