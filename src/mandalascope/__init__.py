"""Audio-reactive radial mandala renderer."""

from mandalascope.config import MandalaConfig
from mandalascope.renderer import MandalaRenderer
from mandalascope.session import FrameState, MandalaSession

__version__ = "0.1.0"
__all__ = [
    "MandalaConfig",
    "MandalaRenderer",
    "MandalaSession",
    "FrameState",
]
