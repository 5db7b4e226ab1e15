"""Shared fixtures: fake probe/extractor callables that never touch ffmpeg."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Tuple

import pytest

from frame_sampling.models import SourceInfo


WIDTH = 4
HEIGHT = 3


def solid_frame(color: Tuple[int, int, int], width: int = WIDTH, height: int = HEIGHT) -> bytes:
    return bytes(color) * (width * height)


def color_for(timestamp: int) -> Tuple[int, int, int]:
    """Distinct, non-black colour derived from a timestamp."""

    return ((timestamp * 37) % 200 + 50, (timestamp * 11) % 200 + 50, 255)


@pytest.fixture()
def source_info() -> SourceInfo:
    return SourceInfo(width=WIDTH, height=HEIGHT, duration=100.0)


@pytest.fixture()
def fake_probe(source_info: SourceInfo) -> Callable[[Path], SourceInfo]:
    def probe(_path: Path) -> SourceInfo:
        return source_info

    return probe


@pytest.fixture()
def recording_extractor() -> Tuple[Callable[[Path, int], bytes], List[int]]:
    """Extractor returning a solid frame per timestamp and recording the calls."""

    calls: List[int] = []

    def extract(_path: Path, timestamp: int) -> bytes:
        calls.append(timestamp)
        return solid_frame(color_for(timestamp))

    return extract, calls


@pytest.fixture()
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "episode.mp4"
    path.write_bytes(b"\x00")
    return path


@pytest.fixture()
def palette() -> Dict[int, Tuple[int, int, int]]:
    return {1: (255, 0, 0), 2: (0, 255, 0), 3: (0, 0, 255), 4: (255, 255, 0)}
