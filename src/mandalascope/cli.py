"""
CLI entry point for offline rendering.

Usage:
    mandalascope-render <audio_file> [options]
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from mandalascope.config import DRAW_ORDERS, PROFILES, ROTATION_SOURCES, SCALE_SOURCES, MandalaConfig
from mandalascope.core.levels import LevelExtractor
from mandalascope.io.encoder import encode_video
from mandalascope.renderer import MandalaRenderer


def configure_logging(verbose: bool = False):
    """Human-readable logs on stderr; DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def add_visual_arguments(parser: argparse.ArgumentParser):
    """Options shared by the live window and the offline renderer."""
    parser.add_argument("--width", type=int, default=None, help="Canvas width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Canvas height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")
    parser.add_argument("--seed", type=int, default=None, help="Pattern seed (default: random)")
    parser.add_argument("--palette", action="store_true", help="Colour layers from an analogous palette")
    parser.add_argument("--audio-color", action="store_true", help="Drive brightness/saturation from audio")
    parser.add_argument(
        "--scale-source", type=str, default=None,
        choices=list(SCALE_SOURCES),
        help="What drives the mandala scale",
    )
    parser.add_argument(
        "--rotation-source", type=str, default=None,
        choices=list(ROTATION_SOURCES),
        help="What drives the global rotation",
    )
    parser.add_argument(
        "--draw-order", type=str, default=None,
        choices=list(DRAW_ORDERS),
        help="Loop nesting of the compositor (default: segment)",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="JSON file with MandalaConfig fields (applied before command-line flags)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def build_config(args: argparse.Namespace, profile: str = "medium", **defaults) -> MandalaConfig:
    """
    Merge profile, JSON config file and command-line flags.

    Exits with an error message when the config file is missing or invalid.
    """
    p_cfg = PROFILES[profile]
    data = {"width": p_cfg["width"], "height": p_cfg["height"], "fps": p_cfg["fps"], **defaults}

    if args.config:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        with open(args.config) as f:
            data.update(json.load(f))

    flags = {
        "width": args.width,
        "height": args.height,
        "fps": args.fps,
        "scale_source": args.scale_source,
        "rotation_source": args.rotation_source,
        "draw_order": args.draw_order,
    }
    data.update({k: v for k, v in flags.items() if v is not None})
    if args.palette:
        data["use_palette"] = True
    if args.audio_color:
        data["audio_color"] = True

    try:
        return MandalaConfig.from_dict(data)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        prog="mandalascope-render",
        description="Render an audio-reactive mandala video from an audio file",
    )

    parser.add_argument(
        "audio",
        type=Path,
        help="Input audio file (wav, mp3, flac)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output MP4 path (default: <audio>_mandala.mp4)",
    )
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=list(PROFILES),
        help="Target profile (low: 720p 30fps, medium: 1080p 60fps, high: 4k 60fps)",
    )
    parser.add_argument(
        "--max-duration", type=float, default=None,
        help="Limit output to N seconds",
    )
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    add_visual_arguments(parser)

    args = parser.parse_args()
    configure_logging(args.verbose)

    if not args.audio.exists():
        print(f"Error: Audio file not found: {args.audio}", file=sys.stderr)
        sys.exit(1)

    # Without a pointer, audio drives scale and rotation by default
    config = build_config(args, args.profile, scale_source="audio", rotation_source="audio")
    quality = args.quality or PROFILES[args.profile]["quality"]

    output = args.output
    if output is None:
        output = args.audio.with_name(f"{args.audio.stem}_mandala.mp4")

    # Step 1: Level envelope
    print(f"Analyzing audio: {args.audio}")
    t0 = time.time()
    levels = LevelExtractor(target_fps=config.fps).process(args.audio)
    print(f"  Duration: {levels.duration:.1f}s")
    print(f"  Frames: {levels.n_frames}")
    print(f"  Analysis took {time.time() - t0:.1f}s")

    frames = levels.levels
    duration = levels.duration
    if args.max_duration is not None:
        max_frames = int(args.max_duration * config.fps)
        if max_frames < len(frames):
            frames = frames[:max_frames]
            duration = args.max_duration
            print(f"  Limiting to {args.max_duration}s ({max_frames} frames)")

    total_frames = len(frames)

    # Step 2: Render + encode
    renderer = MandalaRenderer(config, seed=args.seed)
    pattern = renderer.session.pattern
    print(f"\nRendering {total_frames} frames at {config.width}x{config.height} @ {config.fps}fps")
    print(
        f"  Seed: {renderer.session.seed}, Segments: {pattern.segment_count}, "
        f"Layers: {pattern.layer_count}, Quality: {quality}"
    )

    t1 = time.time()
    try:
        encode_video(
            frame_iterator=renderer.render_levels(frames, progress_callback=_progress_bar),
            output_path=output,
            width=config.width,
            height=config.height,
            fps=config.fps,
            audio_path=args.audio,
            quality=quality,
            duration=duration,
            total_frames=total_frames,
        )
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    elapsed = time.time() - t1
    file_size_mb = output.stat().st_size / 1024 / 1024

    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()
