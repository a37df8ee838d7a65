"""Tests for the ffmpeg pipe encoder."""

import os
import shutil
import sys

import numpy as np
import pytest

from microworld.encoder import QUALITY_PRESETS, encode_video, mux_audio

needs_ffmpeg = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")

# Stands in for ffmpeg: prints a stats line per chunk read unless told not to,
# like the real binary does while encoding.
FAKE_FFMPEG = """#!{python}
import sys

args = sys.argv[1:]
with open({log!r}, "a") as log:
    log.write(" ".join(args) + "\\n")

chatty = "-nostats" not in args
if "pipe:0" in args:
    while True:
        chunk = sys.stdin.buffer.read(4096)
        if not chunk:
            break
        if chatty:
            sys.stderr.write("frame=  12 fps=0.0 q=28.0 size=   0kB time=00:00:00.20 bitrate=N/A speed=0.4x\\n")
            sys.stderr.flush()
open(args[-1], "wb").close()
"""


def _frames(n, width, height):
    for i in range(n):
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[..., 0] = (i * 20) % 256
        yield frame


@pytest.fixture
def fake_ffmpeg(tmp_path, monkeypatch):
    """Put a scripted ffmpeg first on PATH; returns the file its arguments are logged to."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    log = tmp_path / "ffmpeg_args.log"
    script = bin_dir / "ffmpeg"
    script.write_text(FAKE_FFMPEG.format(python=sys.executable, log=str(log)))
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ['PATH']}")
    return log


@pytest.mark.skipif(sys.platform == "win32", reason="needs an executable script on PATH")
class TestFfmpegOutput:
    def test_long_encode_does_not_stall(self, fake_ffmpeg, tmp_path):
        # Enough frames that per-chunk stats would overflow the stderr pipe
        out = encode_video(_frames(2000, 64, 48), tmp_path / "long.mp4", width=64, height=48, fps=60)
        assert out.exists()
        assert "-nostats" in fake_ffmpeg.read_text()

    def test_mux_runs_quiet(self, fake_ffmpeg, tmp_path):
        out = mux_audio(tmp_path / "v.mp4", tmp_path / "a.wav", tmp_path / "muxed.mp4")
        assert out.exists()
        args = fake_ffmpeg.read_text().split()
        assert args[args.index("-loglevel") + 1] == "error"
        assert "-nostats" in args


@needs_ffmpeg
class TestEncoder:
    def test_presets(self):
        assert set(QUALITY_PRESETS) == {"high", "medium", "fast"}

    def test_encodes_mp4(self, tmp_path):
        out = encode_video(_frames(6, 64, 48), tmp_path / "clip.mp4", width=64, height=48, fps=10, quality="fast")
        assert out.exists()
        assert out.stat().st_size > 0

    def test_progress_callback(self, tmp_path):
        calls = []
        encode_video(
            _frames(4, 64, 48), tmp_path / "clip.mp4", width=64, height=48, fps=10,
            quality="fast", total_frames=4, progress_callback=lambda c, t: calls.append((c, t)),
        )
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_creates_parent_dir(self, tmp_path):
        out = encode_video(_frames(2, 64, 48), tmp_path / "a" / "b.mp4", width=64, height=48, fps=10, quality="fast")
        assert out.exists()

    def test_failure_raises(self, tmp_path):
        # yuv420p needs even dimensions
        with pytest.raises(RuntimeError):
            encode_video(_frames(2, 161, 121), tmp_path / "odd.mp4", width=161, height=121, fps=10, quality="medium")
