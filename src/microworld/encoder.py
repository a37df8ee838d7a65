"""
FFmpeg video encoder.

Frames go to ffmpeg as raw RGB over stdin. ffmpeg runs with its progress
stats off: stderr is only read once the pipe is closed, and a full stderr
pipe would stall the encoder.

The session's sound is only complete once the last frame has been
rendered, so audio is never piped alongside the video; mux_audio() adds it
to the finished file instead.
"""

import subprocess
from pathlib import Path
from typing import Iterator


# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def _video_command(output_path: Path, width: int, height: int, fps: int, quality: str) -> list[str]:
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["medium"])
    return [
        "ffmpeg", "-y",
        "-loglevel", "error", "-nostats",
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
        "-c:v", "libx264",
        "-preset", preset,
        "-crf", crf,
        "-pix_fmt", pix_fmt,
        str(output_path),
    ]


def _raise_for_ffmpeg(proc: subprocess.Popen, stderr: bytes):
    if proc.returncode == 0:
        return
    text = stderr.decode("utf-8", errors="replace")
    # ffmpeg writes its banner and stats to stderr too
    problems = [
        line for line in text.splitlines()
        if "error" in line.lower() or "invalid" in line.lower()
    ]
    detail = "\n".join(problems[-5:]) if problems else text[-500:]
    raise RuntimeError(f"ffmpeg exited with code {proc.returncode}: {detail}")


def encode_video(
    frame_iterator: Iterator,
    output_path: Path,
    width: int = 1280,
    height: int = 800,
    fps: int = 60,
    quality: str = "medium",
    total_frames: int | None = None,
    progress_callback: callable = None,
) -> Path:
    """
    Encode frames to a silent MP4.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 numpy arrays.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    proc = subprocess.Popen(
        _video_command(output_path, width, height, fps, quality),
        stdin=subprocess.PIPE,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )

    written = 0
    try:
        for frame in frame_iterator:
            proc.stdin.write(frame.tobytes())
            written += 1
            if progress_callback and total_frames:
                progress_callback(written, total_frames)
    except BrokenPipeError:
        # ffmpeg died early; its stderr says why
        pass
    finally:
        proc.stdin.close()

    stderr = proc.stderr.read()
    proc.wait()
    _raise_for_ffmpeg(proc, stderr)
    return output_path


def mux_audio(video_path: Path, audio_path: Path, output_path: Path) -> Path:
    """Copy the video stream of `video_path` and add `audio_path` as AAC."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = [
        "ffmpeg", "-y",
        "-loglevel", "error", "-nostats",
        "-i", str(video_path),
        "-i", str(audio_path),
        "-c:v", "copy",
        "-c:a", "aac",
        "-b:a", "192k",
        "-shortest",
        str(output_path),
    ]
    proc = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
    _, stderr = proc.communicate()
    _raise_for_ffmpeg(proc, stderr)
    return output_path
