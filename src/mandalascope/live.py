"""
Live window host.

Opens a resizable pygame window, waits for a click to start the
microphone, then renders one frame per display tick. Later clicks
regenerate the pattern; resizing regenerates it for the new size.

Usage:
    mandalascope [options]
"""

import argparse
import logging

import pygame

from mandalascope.cli import add_visual_arguments, build_config, configure_logging
from mandalascope.config import MandalaConfig
from mandalascope.core.mapper import PointerState
from mandalascope.io.microphone import MicrophoneLevel
from mandalascope.renderer import MandalaRenderer

logger = logging.getLogger(__name__)

OVERLAY_TEXT = "Tap or click to start"


class LiveApp:
    """
    Event loop around a MandalaRenderer.

    Regeneration and resize are handled between frames, never during one.
    """

    def __init__(
        self,
        config: MandalaConfig,
        seed: int | None = None,
        microphone: MicrophoneLevel | None = None,
    ):
        self.cfg = config
        self.seed = seed
        self.microphone = microphone or MicrophoneLevel()
        self.started = False
        self.running = False
        self.frame_index = 0
        self.renderer: MandalaRenderer | None = None
        self.screen: pygame.Surface | None = None
        self.clock: pygame.time.Clock | None = None
        self.font: pygame.font.Font | None = None

    def setup(self):
        pygame.init()
        self.screen = pygame.display.set_mode((self.cfg.width, self.cfg.height), pygame.RESIZABLE)
        pygame.display.set_caption("mandalascope")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 36)
        self.renderer = MandalaRenderer(self.cfg, seed=self.seed)
        logger.info("Session seed %d", self.renderer.session.seed)

    def start_audio(self):
        try:
            self.microphone.start()
        except Exception as exc:  # PortAudio raises its own error types
            logger.error("Could not open microphone, running silent: %s", exc)
        self.started = True

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if not self.started:
                self.start_audio()
            else:
                self.renderer.session.on_regenerate_request()
        elif event.type == pygame.VIDEORESIZE:
            self.renderer.resize(event.w, event.h)

    def draw_overlay(self):
        self.screen.fill(self.cfg.background_color)
        text = self.font.render(OVERLAY_TEXT, True, (255, 255, 255))
        rect = text.get_rect(center=(self.screen.get_width() // 2, self.screen.get_height() // 2))
        self.screen.blit(text, rect)

    def tick(self):
        """Render one frame from the latest level and pointer position."""
        width, height = self.renderer.size
        mx, my = pygame.mouse.get_pos()
        pointer = PointerState.from_position(mx, my, width, height)
        level = self.microphone.read_level()
        surface = self.renderer.render_frame(level, self.frame_index, pointer)
        self.screen.blit(surface, (0, 0))
        self.frame_index += 1

    def run(self):
        self.setup()
        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                if not self.running:
                    break

                if self.started:
                    self.tick()
                else:
                    self.draw_overlay()

                pygame.display.flip()
                self.clock.tick(self.cfg.fps)
        finally:
            self.microphone.stop()
            pygame.quit()


def main():
    parser = argparse.ArgumentParser(
        prog="mandalascope",
        description="Live audio-reactive mandala from the microphone",
    )
    parser.add_argument(
        "--device", type=str, default=None,
        help="Input device index or name (default: system default)",
    )
    parser.add_argument(
        "--gain", type=float, default=1.0,
        help="Microphone level multiplier (default: 1.0)",
    )
    add_visual_arguments(parser)

    args = parser.parse_args()
    configure_logging(args.verbose)

    config = build_config(args, "low", fps=60)
    device = int(args.device) if args.device and args.device.isdigit() else args.device
    app = LiveApp(config, seed=args.seed, microphone=MicrophoneLevel(device=device, gain=args.gain))
    app.run()


if __name__ == "__main__":
    main()
