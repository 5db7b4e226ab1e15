"""CLI entry point for the video thumbnail grid tool."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from frame_sampling.errors import ThumbGridError
from frame_sampling.models import MAX_GRID, MIN_GRID

from . import __version__
from .config import (
    DEFAULT_COLS,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_WIDTH,
    DEFAULT_QUALITY,
    DEFAULT_ROWS,
    RunConfig,
    load_env_file,
)
from .pipeline import run


def _bounded_int(low: int, high: int | None = None):
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
        if number < low or (high is not None and number > high):
            upper = high if high is not None else "inf"
            raise argparse.ArgumentTypeError(f"{number} is not in range [{low}, {upper}]")
        return number

    return parse


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{number} must be positive")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thumbgrid",
        description="Sample a video at even intervals and save the frames as one padded grid image",
    )
    parser.add_argument("video", nargs="?", type=Path, help="Path to the video file")
    parser.add_argument(
        "-r",
        "--rows",
        type=_bounded_int(MIN_GRID, MAX_GRID),
        default=DEFAULT_ROWS,
        help=f"Number of tile rows, {MIN_GRID}-{MAX_GRID} (default: {DEFAULT_ROWS})",
    )
    parser.add_argument(
        "-c",
        "--cols",
        type=_bounded_int(MIN_GRID, MAX_GRID),
        default=DEFAULT_COLS,
        help=f"Number of tiles per row, {MIN_GRID}-{MAX_GRID} (default: {DEFAULT_COLS})",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (.jpg, .png, .webp) or directory; defaults to <video>_thumb.jpg in the cwd",
    )
    parser.add_argument(
        "-q",
        "--quality",
        type=_bounded_int(1, 100),
        default=DEFAULT_QUALITY,
        help=f"Encoder quality for jpeg/webp, 1-100 (default: {DEFAULT_QUALITY})",
    )
    parser.add_argument(
        "--width",
        type=_bounded_int(1),
        default=DEFAULT_MAX_WIDTH,
        help="Maximum output width; aspect ratio is kept",
    )
    parser.add_argument(
        "--height",
        type=_bounded_int(1),
        default=DEFAULT_MAX_HEIGHT,
        help="Maximum output height; aspect ratio is kept",
    )
    parser.add_argument(
        "--workers",
        type=_bounded_int(1),
        default=None,
        help="Concurrent ffmpeg extractions (default: THUMBGRID_MAX_WORKERS or CPU count)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds to allow each ffmpeg call (default: THUMBGRID_EXTRACT_TIMEOUT or none)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the output path")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    # Load .env if present (ignored if values already in env)
    load_env_file()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    if args.video is None:
        parser.error("the video path is required")
    if not args.video.is_file():
        parser.error(f"video file not found: {args.video}")

    config = RunConfig(
        video=args.video,
        rows=args.rows,
        cols=args.cols,
        output=args.output,
        quality=args.quality,
        max_width=args.width,
        max_height=args.height,
        max_workers=args.workers,
        extract_timeout=args.timeout,
    )

    try:
        output = run(config, log=None if args.quiet else print)
    except ThumbGridError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.quiet:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
