"""Tests for the FFmpeg video encoder."""

import numpy as np
import pytest

from mandalascope.io.encoder import build_command, encode_video, ffmpeg_available


def _solid_frames(n: int, width: int, height: int, color=(128, 64, 200)):
    """Generate N solid-color frames."""
    frame = np.full((height, width, 3), color, dtype=np.uint8)
    for _ in range(n):
        yield frame.copy()


class TestBuildCommand:
    def test_silent_video(self, tmp_path):
        cmd = build_command(tmp_path / "out.mp4", 320, 240, 30)
        assert "-c:a" not in cmd
        assert cmd[cmd.index("-s") + 1] == "320x240"
        assert cmd[-1] == str(tmp_path / "out.mp4")

    def test_with_audio_and_duration(self, tmp_path):
        cmd = build_command(tmp_path / "out.mp4", 320, 240, 30, audio_path=tmp_path / "a.wav", duration=2.5)
        assert str(tmp_path / "a.wav") in cmd
        assert "-shortest" in cmd
        assert cmd[cmd.index("-t") + 1] == "2.5"

    def test_quality_presets(self, tmp_path):
        cmd = build_command(tmp_path / "out.mp4", 16, 16, 30, quality="fast")
        assert cmd[cmd.index("-preset") + 1] == "ultrafast"


@pytest.mark.skipif(not ffmpeg_available(), reason="ffmpeg not installed")
class TestEncoder:
    def test_produces_mp4(self, tmp_path, temp_audio_file):
        output = tmp_path / "test_output.mp4"
        result = encode_video(
            frame_iterator=_solid_frames(30, 320, 240),
            output_path=output,
            width=320,
            height=240,
            fps=30,
            audio_path=temp_audio_file,
            quality="fast",
            duration=1.0,
        )
        assert result.exists()
        assert result.stat().st_size > 0

    def test_progress_callback(self, tmp_path):
        progress = []
        encode_video(
            frame_iterator=_solid_frames(15, 160, 120),
            output_path=tmp_path / "progress.mp4",
            width=160,
            height=120,
            fps=30,
            quality="fast",
            total_frames=15,
            progress_callback=lambda c, t: progress.append((c, t)),
        )
        assert len(progress) == 15
        assert progress[-1] == (15, 15)

