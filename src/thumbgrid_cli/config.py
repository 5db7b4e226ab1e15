"""Run configuration, .env loading, and output path resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from frame_sampling.errors import ConfigError, EncodeError
from frame_sampling.models import DEFAULT_PADDING, GridSpec
from grid_composition.renderer import normalize_format


DEFAULT_ROWS = 7
DEFAULT_COLS = 7
DEFAULT_QUALITY = 75
DEFAULT_MAX_WIDTH = 3840
DEFAULT_MAX_HEIGHT = 100000
DEFAULT_SUFFIX = ".jpg"


def load_env_file() -> None:
    """Best-effort load THUMBGRID_* settings from .env files.

    Checks (in order): the project root .env, cwd .env, and HOME/.env.
    Values already in the environment are never overwritten.
    """

    candidates = [
        Path(__file__).resolve().parents[2] / ".env",  # this repo root
        Path.cwd() / ".env",
        Path.home() / ".env",
    ]

    for path in candidates:
        if not path.is_file():
            continue
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in os.environ:
                continue
            os.environ[key] = value.strip().strip("'\"")


def env_extract_timeout() -> float | None:
    """Per-call ffmpeg timeout from ``THUMBGRID_EXTRACT_TIMEOUT`` (seconds)."""

    raw = os.environ.get("THUMBGRID_EXTRACT_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"THUMBGRID_EXTRACT_TIMEOUT must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"THUMBGRID_EXTRACT_TIMEOUT must be positive, got {value}")
    return value


def resolve_output(video: Path, output: Path | None) -> Tuple[Path, str]:
    """Pick the output file and its encoding format.

    No output, or an existing directory, gives ``<video stem>_thumb.jpg``
    in the current directory or that directory. Otherwise the suffix decides
    the format.
    """

    default_name = f"{video.stem}_thumb{DEFAULT_SUFFIX}"
    if output is None:
        target = Path.cwd() / default_name
    elif output.is_dir():
        target = output / default_name
    else:
        target = output

    if not target.suffix:
        raise ConfigError(f"Output path needs a .jpg, .png, or .webp suffix: {target}")
    try:
        fmt = normalize_format(target.suffix)
    except EncodeError as exc:
        raise ConfigError(f"Unsupported output suffix {target.suffix!r} for {target}") from exc

    target.parent.mkdir(parents=True, exist_ok=True)
    return target, fmt


@dataclass
class RunConfig:
    """Settings for one thumbnail grid run."""

    video: Path
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    output: Path | None = None
    quality: int = DEFAULT_QUALITY
    max_width: int = DEFAULT_MAX_WIDTH
    max_height: int = DEFAULT_MAX_HEIGHT
    max_workers: int | None = None
    extract_timeout: float | None = None
    padding: int = DEFAULT_PADDING

    @property
    def grid(self) -> GridSpec:
        return GridSpec(rows=self.rows, cols=self.cols, padding=self.padding)

    def validate(self) -> "RunConfig":
        self.grid.validate()
        if not 1 <= self.quality <= 100:
            raise ConfigError(f"Quality must be within [1, 100], got {self.quality}")
        if self.max_width < 1 or self.max_height < 1:
            raise ConfigError(f"Output bounds must be positive, got {self.max_width}x{self.max_height}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"Worker count must be >= 1, got {self.max_workers}")
        if self.extract_timeout is not None and self.extract_timeout <= 0:
            raise ConfigError(f"Extraction timeout must be positive, got {self.extract_timeout}")
        return self


__all__ = ["RunConfig", "load_env_file", "env_extract_timeout", "resolve_output"]
