"""ffprobe/ffmpeg wrappers: container metadata and raw RGB24 frames."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Any, Dict

from .errors import ExtractError, ProbeError
from .models import SourceInfo


STDERR_TAIL = 400


def ffmpeg_binary() -> str:
    return os.environ.get("THUMBGRID_FFMPEG") or "ffmpeg"


def ffprobe_binary() -> str:
    return os.environ.get("THUMBGRID_FFPROBE") or "ffprobe"


def _stderr_tail(stderr: bytes | str | None) -> str:
    if not stderr:
        return ""
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    return stderr.strip()[-STDERR_TAIL:]


def _parse_probe_output(raw: str) -> SourceInfo:
    try:
        data: Dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProbeError(f"Could not parse ffprobe output: {exc}") from exc

    streams = data.get("streams") or []
    if not streams:
        raise ProbeError("ffprobe reported no video stream")
    stream = streams[0]

    try:
        width = int(stream["width"])
        height = int(stream["height"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ProbeError(f"Could not read video dimensions from ffprobe: {stream}") from exc

    try:
        duration = float((data.get("format") or {})["duration"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ProbeError("Could not read video duration from ffprobe") from exc

    return SourceInfo(width=width, height=height, duration=duration).validate()


def probe_video(video_path: Path | str, *, ffprobe: str | None = None, timeout: float | None = None) -> SourceInfo:
    """Read width, height, and duration of the first video stream with ffprobe."""

    cmd = [
        ffprobe or ffprobe_binary(),
        "-v",
        "error",
        "-select_streams",
        "v:0",
        "-show_entries",
        "stream=width,height",
        "-show_format",
        "-of",
        "json",
        str(video_path),
    ]
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as exc:
        raise ProbeError(f"Could not run {cmd[0]}; make sure FFmpeg is installed and on PATH") from exc
    except subprocess.CalledProcessError as exc:
        raise ProbeError(f"ffprobe failed for {video_path}: {_stderr_tail(exc.stderr)}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProbeError(f"ffprobe timed out after {timeout}s for {video_path}") from exc

    return _parse_probe_output(result.stdout)


def extract_frame(
    video_path: Path | str,
    timestamp: int,
    *,
    ffmpeg: str | None = None,
    timeout: float | None = None,
) -> bytes:
    """Decode the frame nearest ``timestamp`` seconds and return raw RGB24 bytes.

    Seeking uses ``-noaccurate_seek``, so the frame comes from the nearest
    keyframe rather than the exact timestamp.
    """

    cmd = [
        ffmpeg or ffmpeg_binary(),
        "-ss",
        str(timestamp),
        "-noaccurate_seek",
        "-i",
        str(video_path),
        "-vframes",
        "1",
        "-an",
        "-f",
        "rawvideo",
        "-pix_fmt",
        "rgb24",
        "pipe:1",
    ]
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, timeout=timeout)
    except FileNotFoundError as exc:
        raise ExtractError(
            f"Could not run {cmd[0]}; make sure FFmpeg is installed and on PATH",
            timestamp=timestamp,
        ) from exc
    except subprocess.CalledProcessError as exc:
        raise ExtractError(
            f"ffmpeg failed at {timestamp}s: {_stderr_tail(exc.stderr)}",
            timestamp=timestamp,
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ExtractError(f"ffmpeg timed out after {timeout}s at {timestamp}s", timestamp=timestamp) from exc

    if not result.stdout:
        raise ExtractError(f"ffmpeg returned no frame data at {timestamp}s", timestamp=timestamp)
    return result.stdout


__all__ = ["probe_video", "extract_frame", "ffmpeg_binary", "ffprobe_binary"]
