"""
Configuration for the mandala renderer.

A single dataclass holds every tunable, from generator ranges to the
trail fade of the frame renderer. Profiles and JSON overrides are
applied on top of the defaults.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any


# Target profiles: resolution, frame rate and encoder quality
PROFILES = {
    "low": {"width": 1280, "height": 720, "fps": 30, "quality": "fast"},
    "medium": {"width": 1920, "height": 1080, "fps": 60, "quality": "medium"},
    "high": {"width": 3840, "height": 2160, "fps": 60, "quality": "high"},
}

SCALE_SOURCES = ("pointer", "audio", "both", "none")
ROTATION_SOURCES = ("pointer", "audio", "none")
SIGNAL_SOURCES = ("excess", "raw")
DRAW_ORDERS = ("segment", "layer")
DOT_STYLES = ("ring", "single")


@dataclass
class MandalaConfig:
    """Configuration for pattern generation, audio mapping and rendering."""

    width: int = 1280
    height: int = 720
    fps: int = 60

    # Pattern generation (half-open integer ranges)
    segment_range: tuple[int, int] = (16, 48)
    layer_range: tuple[int, int] = (8, 20)
    stroke_width_range: tuple[float, float] = (0.5, 3.0)
    min_radius: float = 50.0
    radius_fraction: float = 0.45  # Of the shorter canvas side
    radius_growth: float = 0.15  # Per-layer radius multiplier step
    num_shape_variants: int = 7
    dot_style: str = "ring"  # "ring" (12 dots) or "single" (legacy)

    # Palettes
    use_palette: bool = False
    palette_count: int = 1000

    # Noise animation
    noise_speed: float = 0.005  # Phase advance per frame
    noise_amplitude: float = 20.0  # Radius wobble in pixels

    # Ambient baseline
    history_capacity: int = 120  # ~2s at 60fps
    baseline_margin: float = 1.2
    smoothing: float = 0.2

    # Audio mapping
    signal_source: str = "excess"  # "excess" or "raw"
    energy_ceiling: float = 0.05
    hue_range: tuple[float, float] = (180.0, 360.0)
    stroke_multiplier: float = 5.0
    audio_color: bool = False  # Drive brightness/saturation from audio
    scale_source: str = "pointer"
    rotation_source: str = "pointer"

    # Compositing
    draw_order: str = "segment"
    trail_alpha: float = 0.1  # Background fade per frame (0-1)
    background_color: tuple[int, int, int] = (0, 0, 0)

    def __post_init__(self):
        self.segment_range = tuple(self.segment_range)
        self.layer_range = tuple(self.layer_range)
        self.stroke_width_range = tuple(self.stroke_width_range)
        self.hue_range = tuple(self.hue_range)
        self.background_color = tuple(self.background_color)

        lo, hi = self.segment_range
        if lo < 1 or hi <= lo:
            raise ValueError(f"segment_range must satisfy 1 <= low < high, got {self.segment_range}")
        lo, hi = self.layer_range
        if lo < 1 or hi <= lo:
            raise ValueError(f"layer_range must satisfy 1 <= low < high, got {self.layer_range}")
        if not 1 <= self.num_shape_variants <= 7:
            raise ValueError(f"num_shape_variants must be in [1, 7], got {self.num_shape_variants}")
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be positive, got {self.history_capacity}")
        if not 0.0 < self.smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {self.smoothing}")
        if self.energy_ceiling <= 0:
            raise ValueError(f"energy_ceiling must be positive, got {self.energy_ceiling}")
        if self.min_radius <= 0:
            raise ValueError(f"min_radius must be positive, got {self.min_radius}")
        if self.palette_count < 1:
            raise ValueError(f"palette_count must be positive, got {self.palette_count}")

        for name, allowed in (
            ("scale_source", SCALE_SOURCES),
            ("rotation_source", ROTATION_SOURCES),
            ("signal_source", SIGNAL_SOURCES),
            ("draw_order", DRAW_ORDERS),
            ("dot_style", DOT_STYLES),
        ):
            value = getattr(self, name)
            if value not in allowed:
                raise ValueError(f"{name} must be one of {allowed}, got {value!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any], **overrides) -> "MandalaConfig":
        """
        Build a config from a plain dict (e.g. a JSON file).

        Args:
            data: Field values keyed by field name.
            **overrides: Values applied on top of ``data``.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        merged = {**data, **overrides}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**merged)

    @classmethod
    def from_profile(cls, profile: str, **overrides) -> "MandalaConfig":
        """Build a config from a named resolution profile."""
        p_cfg = PROFILES[profile]
        base = {"width": p_cfg["width"], "height": p_cfg["height"], "fps": p_cfg["fps"]}
        return cls.from_dict(base, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
