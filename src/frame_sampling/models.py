"""Plain records passed between the probe, planner, scheduler, and compositor."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError, ProbeError


DEFAULT_PADDING = 10
MIN_GRID = 1
MAX_GRID = 20


@dataclass(frozen=True)
class SourceInfo:
    """Container metadata reported by ffprobe for the first video stream."""

    width: int
    height: int
    duration: float

    def validate(self) -> "SourceInfo":
        if self.width <= 0:
            raise ProbeError(f"Video width must be positive, got {self.width}")
        if self.height <= 0:
            raise ProbeError(f"Video height must be positive, got {self.height}")
        if not math.isfinite(self.duration) or self.duration <= 0:
            raise ProbeError(f"Video duration must be positive, got {self.duration}")
        return self


@dataclass(frozen=True)
class GridSpec:
    """Grid layout: ``rows`` tile rows, ``cols`` tiles per row."""

    rows: int
    cols: int
    padding: int = DEFAULT_PADDING

    @property
    def total(self) -> int:
        return self.rows * self.cols

    def validate(self) -> "GridSpec":
        for name, value in (("rows", self.rows), ("cols", self.cols)):
            if not MIN_GRID <= value <= MAX_GRID:
                raise ConfigError(f"Grid {name} must be within [{MIN_GRID}, {MAX_GRID}], got {value}")
        if self.padding < 0:
            raise ConfigError(f"Padding must not be negative, got {self.padding}")
        return self

    def canvas_size(self, tile_width: int, tile_height: int) -> Tuple[int, int]:
        """Return ``(width, height)`` of the padded canvas for tiles of the given size."""

        width = tile_width * self.cols + self.padding * (self.cols + 1)
        height = tile_height * self.rows + self.padding * (self.rows + 1)
        return width, height


@dataclass(frozen=True)
class SampleTimestamp:
    position: int  # 1-based, row-major
    time: int  # whole seconds into the source


@dataclass(frozen=True)
class Frame:
    position: int
    pixels: bytes


__all__ = ["SourceInfo", "GridSpec", "SampleTimestamp", "Frame", "DEFAULT_PADDING", "MIN_GRID", "MAX_GRID"]
