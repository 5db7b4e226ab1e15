"""Package for video probing, timestamp planning, and parallel frame extraction."""

from .errors import ConfigError, EncodeError, ExtractError, ProbeError, ThumbGridError
from .ffmpeg import extract_frame, probe_video
from .models import DEFAULT_PADDING, Frame, GridSpec, SampleTimestamp, SourceInfo
from .planner import plan_timestamps
from .scheduler import extract_all

__all__ = [
    "ThumbGridError",
    "ConfigError",
    "ProbeError",
    "ExtractError",
    "EncodeError",
    "SourceInfo",
    "GridSpec",
    "SampleTimestamp",
    "Frame",
    "DEFAULT_PADDING",
    "plan_timestamps",
    "probe_video",
    "extract_frame",
    "extract_all",
]
