"""Core pattern, palette and audio-signal modules."""

from mandalascope.core.baseline import AmbientBaselineTracker, AudioState, RingBuffer
from mandalascope.core.mapper import AudioFeatureMapper, PointerState, VisualParams, lerp_clamped
from mandalascope.core.noise_field import CoherentNoise
from mandalascope.core.palette import Palette, build_library, select_random
from mandalascope.core.pattern import Layer, Pattern, PatternGenerator

__all__ = [
    "AmbientBaselineTracker",
    "AudioState",
    "RingBuffer",
    "AudioFeatureMapper",
    "PointerState",
    "VisualParams",
    "lerp_clamped",
    "CoherentNoise",
    "Palette",
    "build_library",
    "select_random",
    "Layer",
    "Pattern",
    "PatternGenerator",
]
