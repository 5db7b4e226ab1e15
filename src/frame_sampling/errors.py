"""Error types shared by every stage of the thumbnail grid pipeline."""

from __future__ import annotations


class ThumbGridError(RuntimeError):
    pass


class ConfigError(ThumbGridError):
    """Invalid grid dimensions, duration, worker count, or output target."""


class ProbeError(ThumbGridError):
    """ffprobe failed or returned metadata we cannot use."""


class ExtractError(ThumbGridError):
    """A single frame extraction failed; the whole run is abandoned."""

    def __init__(self, message: str, *, position: int | None = None, timestamp: int | None = None) -> None:
        super().__init__(message)
        self.position = position
        self.timestamp = timestamp


class EncodeError(ThumbGridError):
    def __init__(self, message: str, *, fmt: str | None = None) -> None:
        super().__init__(message)
        self.fmt = fmt


__all__ = ["ThumbGridError", "ConfigError", "ProbeError", "ExtractError", "EncodeError"]
