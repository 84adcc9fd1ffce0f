"""
Audio and pointer to visual parameter mapping.

Every mapping is a clamped linear interpolation with no memory between
frames; smoothing belongs to the baseline tracker.
"""

import math
from dataclasses import dataclass

from mandalascope.config import MandalaConfig


def lerp_clamped(
    value: float,
    in_lo: float,
    in_hi: float,
    out_lo: float,
    out_hi: float,
) -> float:
    """
    Map ``value`` from [in_lo, in_hi] to [out_lo, out_hi] without extrapolating.

    Descending output ranges are allowed. A degenerate input range maps
    everything to ``out_lo``, and so does NaN.
    """
    if in_hi == in_lo:
        return out_lo
    t = (value - in_lo) / (in_hi - in_lo)
    if math.isnan(t):
        t = 0.0
    t = min(1.0, max(0.0, t))
    return out_lo + (out_hi - out_lo) * t


@dataclass(frozen=True)
class VisualParams:
    """Per-frame style parameters shared by every layer."""

    hue: float
    stroke_weight: float
    brightness: float = 90.0
    saturation: float = 90.0
    scale: float = 1.0


@dataclass(frozen=True)
class PointerState:
    """Pointer distance from the canvas centre, 0 (centre) to 1 (corner)."""

    distance: float = 1.0

    @classmethod
    def from_position(cls, x: float, y: float, width: int, height: int) -> "PointerState":
        max_dist = math.hypot(width / 2, height / 2)
        dist = math.hypot(x - width / 2, y - height / 2)
        return cls(lerp_clamped(dist, 0.0, max_dist, 0.0, 1.0))


class AudioFeatureMapper:
    """Maps an energy signal (and pointer distance) to bounded visual parameters."""

    BRIGHTNESS_RANGE = (60.0, 100.0)
    SATURATION_RANGE = (70.0, 100.0)
    SCALE_RANGE = (0.3, 1.2)
    COLOR_CEILING = 0.1  # Input ceiling for brightness/saturation/scale

    POINTER_SCALE_RANGE = (0.2, 1.0)
    ROTATION_SPEED_RANGE = (0.5, 0.01)  # Degrees per frame, centre to corner

    def __init__(self, config: MandalaConfig | None = None):
        self.cfg = config or MandalaConfig()

    def hue(self, energy: float) -> float:
        lo, hi = self.cfg.hue_range
        return lerp_clamped(energy, 0.0, self.cfg.energy_ceiling, lo, hi)

    def stroke_weight(self, energy: float, base_stroke_width: float) -> float:
        return lerp_clamped(
            energy, 0.0, self.cfg.energy_ceiling,
            base_stroke_width, base_stroke_width * self.cfg.stroke_multiplier,
        )

    def brightness(self, energy: float) -> float:
        return lerp_clamped(energy, 0.0, self.COLOR_CEILING, *self.BRIGHTNESS_RANGE)

    def saturation(self, energy: float) -> float:
        return lerp_clamped(energy, 0.0, self.COLOR_CEILING, *self.SATURATION_RANGE)

    def audio_scale(self, energy: float) -> float:
        return lerp_clamped(energy, 0.0, self.COLOR_CEILING, *self.SCALE_RANGE)

    def map(self, energy: float, base_stroke_width: float) -> VisualParams:
        """
        Resolve the shared style for one frame.

        Args:
            energy: Excess energy (or raw level, depending on config).
            base_stroke_width: Stroke width of the current pattern.

        Returns:
            VisualParams with every field inside its declared range.
        """
        if self.cfg.audio_color:
            brightness = self.brightness(energy)
            saturation = self.saturation(energy)
        else:
            brightness = saturation = 90.0

        return VisualParams(
            hue=self.hue(energy),
            stroke_weight=self.stroke_weight(energy, base_stroke_width),
            brightness=brightness,
            saturation=saturation,
            scale=self.audio_scale(energy),
        )

    def pointer_scale(self, pointer: PointerState) -> float:
        return lerp_clamped(pointer.distance, 0.0, 1.0, *self.POINTER_SCALE_RANGE)

    def pointer_rotation_speed(self, pointer: PointerState) -> float:
        """Fast spin with the pointer at the centre, nearly still at the corners."""
        return lerp_clamped(pointer.distance, 0.0, 1.0, *self.ROTATION_SPEED_RANGE)

    def audio_rotation_speed(self, energy: float) -> float:
        slow, fast = self.ROTATION_SPEED_RANGE[1], self.ROTATION_SPEED_RANGE[0]
        return lerp_clamped(energy, 0.0, self.cfg.energy_ceiling, slow, fast)

    def scale_factor(self, params: VisualParams, pointer: PointerState) -> float:
        """Radius multiplier according to ``scale_source``."""
        source = self.cfg.scale_source
        if source == "pointer":
            return self.pointer_scale(pointer)
        if source == "audio":
            return params.scale
        if source == "both":
            return self.pointer_scale(pointer) * params.scale
        return 1.0

    def rotation_speed(self, energy: float, pointer: PointerState) -> float:
        """Global rotation increment in degrees according to ``rotation_source``."""
        source = self.cfg.rotation_source
        if source == "pointer":
            return self.pointer_rotation_speed(pointer)
        if source == "audio":
            return self.audio_rotation_speed(energy)
        return 0.0
