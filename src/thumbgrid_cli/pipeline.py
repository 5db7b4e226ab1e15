"""Pipeline helpers: probe -> plan -> extract -> compose -> render."""

from __future__ import annotations

import functools
import time
from pathlib import Path
from typing import Callable

from PIL import Image

from frame_sampling import extract_all, extract_frame, plan_timestamps, probe_video
from frame_sampling.errors import ConfigError
from frame_sampling.models import DEFAULT_PADDING, GridSpec, SourceInfo
from frame_sampling.scheduler import Extractor, default_max_workers
from grid_composition import compose_grid, normalize_format, render_canvas

from .config import RunConfig, env_extract_timeout, resolve_output


Probe = Callable[[Path], SourceInfo]
Renderer = Callable[[Image.Image, int, int, str, int], bytes]
Log = Callable[[str], None]


def _quiet(_message: str) -> None:
    return None


def generate_thumbnail_grid(
    video: Path | str,
    *,
    rows: int,
    cols: int,
    max_width: int,
    max_height: int,
    fmt: str,
    quality: int = 75,
    padding: int = DEFAULT_PADDING,
    max_workers: int | None = None,
    probe: Probe | None = None,
    extractor: Extractor | None = None,
    renderer: Renderer | None = None,
    log: Log | None = print,
) -> bytes:
    """Sample ``rows * cols`` frames from ``video`` and return the encoded grid.

    ``probe``, ``extractor`` and ``renderer`` default to the ffprobe, ffmpeg
    and Pillow implementations. Any stage failure propagates as a
    ``ThumbGridError`` subclass; no partial grid is ever rendered.
    """

    probe = probe or probe_video
    extractor = extractor or extract_frame
    renderer = renderer or render_canvas
    log = log or _quiet
    video = Path(video)
    grid = GridSpec(rows=rows, cols=cols, padding=padding).validate()
    workers = default_max_workers() if max_workers is None else max_workers
    fmt = normalize_format(fmt)
    if not 1 <= quality <= 100:
        raise ConfigError(f"Quality must be within [1, 100], got {quality}")
    if workers < 1:
        raise ConfigError(f"Worker count must be >= 1, got {workers}")

    info = probe(video).validate()
    log(f"[probe] {video.name}: {info.width}x{info.height}, {info.duration:.2f}s")

    timestamps = plan_timestamps(info.duration, grid.rows, grid.cols)
    log(f"[plan] {len(timestamps)} frames, last at {timestamps[-1].time}s")

    started = time.monotonic()
    log(f"[extract] starting ({min(workers, len(timestamps))} workers)")

    def _progress(done: int, total: int) -> None:
        log(f"[extract] {done}/{total}")

    frames = extract_all(video, timestamps, extractor=extractor, max_workers=workers, on_frame=_progress)
    log(f"[extract] done in {time.monotonic() - started:.1f}s")

    canvas = compose_grid(frames, info.width, info.height, grid.rows, grid.cols, grid.padding)
    del frames
    log(f"[compose] canvas {canvas.width}x{canvas.height}")

    data = renderer(canvas, max_width, max_height, fmt, quality)
    log(f"[render] {fmt}, {len(data)} bytes")
    return data


def run(config: RunConfig, *, log: Log | None = print) -> Path:
    """Resolve the output target, run the pipeline, and write the image."""

    config.validate()
    output, fmt = resolve_output(config.video, config.output)

    timeout = config.extract_timeout if config.extract_timeout is not None else env_extract_timeout()
    extractor: Extractor = extract_frame
    if timeout is not None:
        extractor = functools.partial(extract_frame, timeout=timeout)

    data = generate_thumbnail_grid(
        config.video,
        rows=config.rows,
        cols=config.cols,
        max_width=config.max_width,
        max_height=config.max_height,
        fmt=fmt,
        quality=config.quality,
        padding=config.padding,
        max_workers=config.max_workers,
        extractor=extractor,
        log=log,
    )
    output.write_bytes(data)
    if log:
        log(f"[done] -> {output}")
    return output


__all__ = ["generate_thumbnail_grid", "run"]
