"""
CLI entry point for the Micro-World Explorer.

Usage:
    microworld [options]
    python -m microworld [options]
    microworld --record session.mp4 --duration 20 --drift 0.3
"""

import argparse
import shutil
import sys
import time
from pathlib import Path

from microworld.app import ExplorerConfig, run_window

PROFILES = {
    "low": {"width": 960, "height": 600, "fps": 30, "quality": "fast"},
    "medium": {"width": 1280, "height": 800, "fps": 60, "quality": "medium"},
    "high": {"width": 1920, "height": 1080, "fps": 60, "quality": "high"},
}


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


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="microworld",
        description="Cross-fading zoom through six procedural micro-worlds",
    )

    # Resolution & Profile
    parser.add_argument(
        "-p", "--profile", type=str, default="medium",
        choices=list(PROFILES),
        help="Window profile (low: 960x600 30fps, medium: 1280x800 60fps, high: 1080p 60fps)",
    )
    parser.add_argument("--width", type=int, default=None, help="Window width (overrides profile)")
    parser.add_argument("--height", type=int, default=None, help="Window height (overrides profile)")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second (overrides profile)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the scenes")

    # Behaviour
    parser.add_argument("--no-audio", action="store_true", help="Disable the tone bank")
    parser.add_argument(
        "--max-cells", type=int, default=600,
        help="Upper bound on cells spawned by clicking (default: 600)",
    )
    parser.add_argument(
        "--drift", type=float, default=0.0,
        help="Autopilot zoom speed in layers per second (default: off)",
    )
    parser.add_argument(
        "--auto-click", type=int, default=0, metavar="FRAMES",
        help="Autopilot click every N frames (default: off)",
    )

    # Recording
    parser.add_argument(
        "-o", "--record", type=Path, default=None, metavar="OUTPUT",
        help="Render headless to this MP4 instead of opening a window",
    )
    parser.add_argument(
        "--duration", type=float, default=20.0,
        help="Recording length in seconds (default: 20)",
    )
    parser.add_argument(
        "-q", "--quality", type=str, default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ExplorerConfig:
    p_cfg = PROFILES[args.profile]
    return ExplorerConfig(
        width=p_cfg["width"] if args.width is None else args.width,
        height=p_cfg["height"] if args.height is None else args.height,
        fps=p_cfg["fps"] if args.fps is None else args.fps,
        seed=args.seed,
        audio_enabled=not args.no_audio,
        max_cells=args.max_cells,
        drift=args.drift,
        auto_click_interval=args.auto_click,
    )


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_cells < 1:
        print("Error: --max-cells must be at least 1", file=sys.stderr)
        sys.exit(1)
    for flag in ("width", "height", "fps"):
        value = getattr(args, flag)
        if value is not None and value < 1:
            print(f"Error: --{flag} must be at least 1", file=sys.stderr)
            sys.exit(1)

    config = config_from_args(args)

    if args.record is None:
        run_window(config)
        return

    if args.duration <= 0:
        print("Error: --duration must be positive", file=sys.stderr)
        sys.exit(1)
    if shutil.which("ffmpeg") is None:
        print("Error: ffmpeg not found on PATH (required for --record)", file=sys.stderr)
        sys.exit(1)

    from microworld.record import record_session

    quality = args.quality or PROFILES[args.profile]["quality"]
    total_frames = int(args.duration * config.fps)
    print(f"Recording {total_frames} frames at {config.width}x{config.height} @ {config.fps}fps")
    print(f"  Drift: {config.drift} layers/s, Auto-click: {config.auto_click_interval or 'off'}, Quality: {quality}")

    t0 = time.time()
    output = record_session(
        config,
        args.record,
        duration=args.duration,
        quality=quality,
        progress_callback=_progress_bar,
    )

    elapsed = time.time() - t0
    file_size_mb = output.stat().st_size / 1024 / 1024

    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({total_frames / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()
