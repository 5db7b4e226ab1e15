"""Run one extraction per sample timestamp on a bounded thread pool."""

from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from .errors import ConfigError, ExtractError
from .ffmpeg import extract_frame
from .models import Frame, SampleTimestamp


Extractor = Callable[[Path, int], bytes]
ProgressCallback = Callable[[int, int], None]


def default_max_workers() -> int:
    """Concurrency ceiling from ``THUMBGRID_MAX_WORKERS`` or the CPU count."""

    raw = os.environ.get("THUMBGRID_MAX_WORKERS", "").strip()
    if not raw:
        return os.cpu_count() or 4
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"THUMBGRID_MAX_WORKERS must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigError(f"THUMBGRID_MAX_WORKERS must be >= 1, got {value}")
    return value


def _extract_one(extractor: Extractor, source: Path, sample: SampleTimestamp) -> Frame:
    try:
        pixels = bytes(extractor(source, sample.time))
    except ExtractError as exc:
        raise ExtractError(
            f"Frame {sample.position} at {sample.time}s failed: {exc}",
            position=sample.position,
            timestamp=sample.time,
        ) from exc
    except Exception as exc:  # noqa: BLE001 - any extractor failure ends the run
        raise ExtractError(
            f"Frame {sample.position} at {sample.time}s failed: {exc!r}",
            position=sample.position,
            timestamp=sample.time,
        ) from exc
    return Frame(position=sample.position, pixels=pixels)


def extract_all(
    source: Path | str,
    timestamps: Sequence[SampleTimestamp],
    *,
    extractor: Extractor = extract_frame,
    max_workers: int | None = None,
    on_frame: ProgressCallback | None = None,
) -> List[Frame]:
    """Extract every planned frame concurrently and return them ordered by position.

    Tasks finish in whatever order the pool schedules them; the result is
    always sorted by ``position`` so the compositor sees row-major order.
    The first failure (in completion order) is raised as ``ExtractError``.
    Queued tasks are cancelled at that point; tasks already running are left
    to finish and their frames are dropped.
    """

    workers = default_max_workers() if max_workers is None else max_workers
    if workers < 1:
        raise ConfigError(f"max_workers must be >= 1, got {workers}")

    total = len(timestamps)
    if total == 0:
        return []

    source = Path(source)
    frames: List[Frame] = []

    with ThreadPoolExecutor(max_workers=min(workers, total), thread_name_prefix="extract") as pool:
        futures: Dict[Future, SampleTimestamp] = {
            pool.submit(_extract_one, extractor, source, sample): sample for sample in timestamps
        }
        try:
            for future in as_completed(futures):
                frames.append(future.result())
                if on_frame is not None:
                    on_frame(len(frames), total)
        except BaseException:
            for pending in futures:
                pending.cancel()
            raise

    frames.sort(key=lambda frame: frame.position)
    return frames


__all__ = ["extract_all", "default_max_workers", "Extractor"]
