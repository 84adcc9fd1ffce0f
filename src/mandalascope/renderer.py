"""
Frame renderer.

Wraps a session with pygame surfaces: a persistent trail surface that
fades a little each frame, and a transparent layer the compositor draws
into before it is blended on top.
"""

from typing import Callable, Iterable, Iterator

import numpy as np
import pygame

from mandalascope.config import MandalaConfig
from mandalascope.core.mapper import PointerState
from mandalascope.session import FrameState, MandalaSession
from mandalascope.visualizers.canvas import PygameCanvas


class MandalaRenderer:
    """
    Renders mandala frames to pygame surfaces and numpy arrays.

    Args:
        config: Renderer configuration. Uses defaults if None.
        seed: Seed for a new session (ignored when ``session`` is given).
        session: Existing session to draw.
    """

    def __init__(
        self,
        config: MandalaConfig | None = None,
        seed: int | None = None,
        session: MandalaSession | None = None,
    ):
        self.session = session or MandalaSession(config, seed)
        self.cfg = self.session.cfg
        if not self.session.initialized:
            self.session.initialize(self.cfg.width, self.cfg.height)

        self.last_frame: FrameState | None = None
        self._allocate(self.session.width, self.session.height)

    def _allocate(self, width: int, height: int):
        self.canvas = PygameCanvas(width, height)
        self.surface = pygame.Surface((width, height))
        self.surface.fill(self.cfg.background_color)
        self.fade = pygame.Surface((width, height))
        self.fade.fill(self.cfg.background_color)
        self.fade.set_alpha(int(round(self.cfg.trail_alpha * 255)))

    @property
    def size(self) -> tuple[int, int]:
        return self.surface.get_size()

    def resize(self, width: int, height: int):
        """Reallocate surfaces and regenerate the pattern for the new size."""
        self._allocate(width, height)
        self.session.on_resize(width, height)

    def render_frame(
        self,
        audio_level: float | None,
        frame_index: int,
        pointer: PointerState | None = None,
    ) -> pygame.Surface:
        """
        Render one frame.

        Args:
            audio_level: Latest raw level.
            frame_index: Frame counter.
            pointer: Pointer state, if any.

        Returns:
            The trail surface with this frame composited on top.
        """
        if self.cfg.trail_alpha > 0:
            self.surface.blit(self.fade, (0, 0))

        self.canvas.clear()
        self.last_frame = self.session.on_frame(frame_index, audio_level, pointer, self.canvas)
        self.surface.blit(self.canvas.surface, (0, 0))
        return self.surface

    def render_levels(
        self,
        levels: Iterable[float],
        progress_callback: Callable[[int, int], None] | None = None,
        total: int | None = None,
    ) -> Iterator[np.ndarray]:
        """
        Render one frame per level sample.

        Args:
            levels: Raw level per frame.
            progress_callback: Optional callback(current, total).
            total: Frame count for progress reporting (defaults to len(levels)).

        Yields:
            (H, W, 3) uint8 RGB frames.
        """
        if total is None and hasattr(levels, "__len__"):
            total = len(levels)

        for i, level in enumerate(levels):
            surface = self.render_frame(float(level), i)
            yield self.surface_to_array(surface)

            if progress_callback:
                progress_callback(i + 1, total or i + 1)

    def surface_to_array(self, surface: pygame.Surface) -> np.ndarray:
        """Convert pygame surface to numpy array for video encoding."""
        # pygame uses (width, height) but numpy expects (height, width)
        arr = pygame.surfarray.array3d(surface)
        arr = np.transpose(arr, (1, 0, 2))
        return np.ascontiguousarray(arr)
