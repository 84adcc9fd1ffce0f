"""
Ambient baseline tracking.

Turns a raw microphone level into "energy above the room": a rolling
mean over the last couple of seconds, lifted by a fixed margin, is
subtracted from an exponentially smoothed level. Microphone gain and
background noise differ everywhere, so only relative events register.
"""

import math

import numpy as np


class RingBuffer:
    """
    Fixed-capacity FIFO of floats with a running sum.

    Push and evict are O(1). The sum is rebuilt from the stored samples
    once per full wrap so that incremental rounding error cannot grow.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._data = np.zeros(capacity, dtype=np.float64)
        self._head = 0  # Next write position
        self._count = 0
        self._sum = 0.0

    def __len__(self) -> int:
        return self._count

    def push(self, value: float) -> float | None:
        """
        Append a sample, evicting the oldest when full.

        Returns:
            The evicted sample, or None while the buffer is filling.
        """
        evicted = None
        if self._count == self.capacity:
            evicted = float(self._data[self._head])
            self._sum -= evicted
        else:
            self._count += 1

        self._data[self._head] = value
        self._sum += value
        self._head = (self._head + 1) % self.capacity

        if self._head == 0:
            self._sum = float(self._data[:self._count].sum())
        return evicted

    @property
    def total(self) -> float:
        return self._sum

    def mean(self) -> float:
        """Mean over the stored samples (0.0 when empty)."""
        if self._count == 0:
            return 0.0
        return self._sum / self._count

    def to_array(self) -> np.ndarray:
        """Samples oldest first."""
        if self._count < self.capacity:
            return self._data[:self._count].copy()
        return np.roll(self._data, -self._head)


class AudioState:
    """Audio levels for the current frame. Created once, updated every tick."""

    def __init__(self, history_capacity: int = 120, baseline_margin: float = 1.2):
        self.raw_level = 0.0
        self.smoothed_level = 0.0
        self.history = RingBuffer(history_capacity)
        self._baseline_margin = baseline_margin

    @property
    def ambient_baseline(self) -> float:
        """Rolling mean lifted by the noise-floor margin."""
        return self.history.mean() * self._baseline_margin


class AmbientBaselineTracker:
    """
    Maintains AudioState from a stream of raw level samples.

    Args:
        capacity: Rolling window length in samples.
        margin: Multiplier applied to the rolling mean.
        smoothing: Single-pole smoothing factor for the level.
    """

    def __init__(self, capacity: int = 120, margin: float = 1.2, smoothing: float = 0.2):
        self.smoothing = smoothing
        self.state = AudioState(capacity, margin)

    @staticmethod
    def sanitize(level) -> float:
        """Missing or non-finite samples count as silence; others clamp to [0, 1]."""
        if level is None:
            return 0.0
        try:
            level = float(level)
        except (TypeError, ValueError):
            return 0.0
        if not math.isfinite(level):
            return 0.0
        return min(1.0, max(0.0, level))

    def _lerp(self, current: float, target: float, factor: float) -> float:
        return current + (target - current) * factor

    def update(self, raw_level) -> float:
        """
        Feed one sample.

        Args:
            raw_level: Latest instantaneous level, nominally in [0, 1].

        Returns:
            Excess energy after the update.
        """
        state = self.state
        level = self.sanitize(raw_level)
        state.raw_level = level
        state.history.push(level)
        state.smoothed_level = self._lerp(state.smoothed_level, level, self.smoothing)
        return self.excess_energy

    @property
    def ambient_baseline(self) -> float:
        return self.state.ambient_baseline

    @property
    def average(self) -> float:
        return self.state.history.mean()

    @property
    def excess_energy(self) -> float:
        return max(0.0, self.state.smoothed_level - self.state.ambient_baseline)
