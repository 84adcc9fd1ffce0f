"""
Mandala session: the state owner behind the host callbacks.

Holds the random generator, palette library, current pattern and
palette, the audio state and the global rotation. Hosts call
``initialize`` once, ``on_frame`` every tick, and the two event
handlers between ticks.
"""

import logging
from dataclasses import dataclass

import numpy as np

from mandalascope.config import MandalaConfig
from mandalascope.core.baseline import AmbientBaselineTracker
from mandalascope.core.mapper import AudioFeatureMapper, PointerState, VisualParams
from mandalascope.core.noise_field import CoherentNoise
from mandalascope.core.palette import Palette, PaletteLibrary, build_library, select_random
from mandalascope.core.pattern import Pattern, PatternGenerator
from mandalascope.visualizers.canvas import Canvas
from mandalascope.visualizers.compositor import RadialCompositor

logger = logging.getLogger(__name__)

# Upper bound for seeds drawn on regenerate
_SEED_SPACE = 10_000


@dataclass(frozen=True)
class FrameState:
    """What a frame was drawn with."""

    frame_index: int
    params: VisualParams
    excess_energy: float
    scale: float
    rotation: float


class MandalaSession:
    """
    Owns every piece of mutable state of the renderer.

    Args:
        config: Renderer configuration.
        seed: Initial seed. None draws one from OS entropy.
    """

    def __init__(self, config: MandalaConfig | None = None, seed: int | None = None):
        self.cfg = config or MandalaConfig()
        self.seed = seed if seed is not None else int(np.random.default_rng().integers(0, _SEED_SPACE))
        self.rng = np.random.default_rng(self.seed)
        self.noise = CoherentNoise(self.seed)

        self.generator = PatternGenerator(self.cfg)
        self.mapper = AudioFeatureMapper(self.cfg)
        self.tracker = AmbientBaselineTracker(
            capacity=self.cfg.history_capacity,
            margin=self.cfg.baseline_margin,
            smoothing=self.cfg.smoothing,
        )
        self.compositor = RadialCompositor(self.cfg, self.noise)

        self.width = self.cfg.width
        self.height = self.cfg.height
        self.rotation = 0.0

        self.library: PaletteLibrary = ()
        self.pattern: Pattern | None = None
        self.palette: Palette | None = None

    @property
    def initialized(self) -> bool:
        return self.pattern is not None

    def initialize(self, width: int | None = None, height: int | None = None):
        """Build the palette library and the first pattern."""
        self.width = width or self.width
        self.height = height or self.height
        self.library = build_library(self.rng, self.cfg.palette_count)
        self._regenerate()

    def _regenerate(self):
        # Build both before swapping so a frame never sees a half-new state
        pattern = self.generator.generate(self.rng, self.width, self.height)
        palette = select_random(self.library, self.rng) if self.cfg.use_palette else None
        self.pattern, self.palette = pattern, palette
        logger.debug(
            "New pattern: %d segments, %d layers, stroke %.2f",
            pattern.segment_count, pattern.layer_count, pattern.base_stroke_width,
        )

    def on_regenerate_request(self, seed: int | None = None):
        """Reseed the generator and noise, then replace the pattern."""
        if seed is None:
            seed = int(self.rng.integers(0, _SEED_SPACE))
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.noise.reseed(seed + 1000)
        self._regenerate()
        logger.info("Regenerated pattern with seed %d", seed)

    def on_resize(self, width: int, height: int):
        """Adopt a new canvas size; regenerates once a pattern exists."""
        self.width, self.height = width, height
        if self.pattern is None:
            return
        self._regenerate()
        logger.debug("Resized to %dx%d", width, height)

    def on_frame(
        self,
        frame_index: int,
        audio_level: float | None,
        pointer: PointerState | None = None,
        canvas: Canvas | None = None,
    ) -> FrameState:
        """
        Advance one tick and draw.

        Args:
            frame_index: Explicit frame counter.
            audio_level: Latest raw level; None or non-finite counts as silence.
            pointer: Pointer state; defaults to the far corner (no pointer effect).
            canvas: Canvas to draw on, or None to only advance state.

        Returns:
            FrameState describing the frame.
        """
        if self.pattern is None:
            raise RuntimeError("MandalaSession.initialize() must run before on_frame()")

        pointer = pointer or PointerState()
        excess = self.tracker.update(audio_level)
        if self.cfg.signal_source == "raw":
            signal = self.tracker.state.raw_level
        else:
            signal = excess

        params = self.mapper.map(signal, self.pattern.base_stroke_width)
        self.rotation = (self.rotation + self.mapper.rotation_speed(signal, pointer)) % 360.0
        scale = self.mapper.scale_factor(params, pointer)

        if canvas is not None:
            self.compositor.render(
                canvas,
                self.pattern,
                params,
                frame_index,
                palette=self.palette,
                scale=scale,
                rotation=self.rotation,
            )

        return FrameState(
            frame_index=frame_index,
            params=params,
            excess_energy=excess,
            scale=scale,
            rotation=self.rotation,
        )
