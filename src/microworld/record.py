"""
Headless session capture.

Runs the explorer against an off-screen surface under the dummy SDL video
driver, driven by the autopilot, and encodes the frames to MP4. The tone
bank is rendered offline in lock-step with the frames and muxed in at the
end.
"""

import os
import tempfile
from pathlib import Path
from typing import Iterator

import numpy as np
import pygame
from scipy.io import wavfile

from microworld.app import ExplorerConfig, MicroWorldExplorer
from microworld.autopilot import Autopilot
from microworld.encoder import encode_video, mux_audio


def surface_to_array(surface: pygame.Surface) -> np.ndarray:
    """Convert a pygame surface to an (H, W, 3) uint8 array."""
    # pygame uses (width, height) but numpy expects (height, width)
    arr = pygame.surfarray.array3d(surface)
    return np.ascontiguousarray(np.transpose(arr, (1, 0, 2)))


def samples_for_frame(index: int, sample_rate: int, fps: int) -> int:
    """Audio samples belonging to video frame `index`, without drift."""
    return round((index + 1) * sample_rate / fps) - round(index * sample_rate / fps)


def render_session(
    explorer: MicroWorldExplorer,
    total_frames: int,
    autopilot: Autopilot | None = None,
    audio_chunks: list | None = None,
) -> Iterator[np.ndarray]:
    """
    Render frames as a generator.

    Args:
        explorer: The explorer to drive.
        total_frames: Number of frames to produce.
        autopilot: Optional driver applied before every frame.
        audio_chunks: When given, the tone bank's output for each frame
            is appended here.

    Yields:
        (H, W, 3) uint8 RGB arrays, one per frame.
    """
    surface = pygame.Surface((explorer.width, explorer.height))
    sample_rate = explorer.audio.sample_rate
    fps = explorer.cfg.fps

    for i in range(total_frames):
        if autopilot is not None:
            autopilot.step(explorer)
        explorer.render_frame(surface)

        if audio_chunks is not None:
            audio_chunks.append(explorer.audio.render(samples_for_frame(i, sample_rate, fps)))

        yield surface_to_array(surface)


def record_session(
    config: ExplorerConfig,
    output: Path,
    duration: float,
    quality: str = "medium",
    progress_callback: callable = None,
) -> Path:
    """Render `duration` seconds of an autopiloted session to `output`."""
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    pygame.init()

    explorer = MicroWorldExplorer(config)
    explorer.realtime_audio = False
    if config.audio_enabled:
        explorer.audio.start(realtime=False)

    autopilot = Autopilot.from_config(config, explorer.rng)
    total_frames = max(1, int(duration * config.fps))
    chunks = [] if config.audio_enabled else None

    output = Path(output)
    with tempfile.TemporaryDirectory(prefix="microworld_") as tmp:
        video_path = Path(tmp) / "video.mp4" if chunks is not None else output
        encode_video(
            frame_iterator=render_session(explorer, total_frames, autopilot, chunks),
            output_path=video_path,
            width=config.width,
            height=config.height,
            fps=config.fps,
            quality=quality,
            total_frames=total_frames,
            progress_callback=progress_callback,
        )

        if chunks is not None:
            audio_path = Path(tmp) / "audio.wav"
            wavfile.write(audio_path, explorer.audio.sample_rate, np.concatenate(chunks))
            mux_audio(video_path, audio_path, output)

    return output
