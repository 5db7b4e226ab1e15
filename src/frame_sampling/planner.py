"""Evenly spaced sample timestamps for a rows x cols grid."""

from __future__ import annotations

import math
from typing import List

from .errors import ConfigError
from .models import SampleTimestamp


# Containers often report a duration slightly longer than what actually
# decodes, so the last sample stays inside the first 90% of the video.
SAFETY_MARGIN = 0.9


def plan_timestamps(duration: float, rows: int, cols: int) -> List[SampleTimestamp]:
    """Return one timestamp per grid cell in row-major order.

    Positions run from 1 to ``rows * cols``. Each ``time`` is
    ``floor(position * interval)`` with ``interval = duration / total * 0.9``,
    so times never decrease and never exceed ``duration``. Adjacent cells may
    share a time on very short videos.
    """

    total = rows * cols
    if rows <= 0 or cols <= 0:
        raise ConfigError(f"Grid must have at least one cell, got {rows}x{cols}")
    if not math.isfinite(duration) or duration <= 0:
        raise ConfigError(f"Video duration must be positive, got {duration}")

    interval = (duration / total) * SAFETY_MARGIN
    return [
        SampleTimestamp(position=position, time=math.floor(position * interval))
        for position in range(1, total + 1)
    ]


__all__ = ["plan_timestamps", "SAFETY_MARGIN"]
