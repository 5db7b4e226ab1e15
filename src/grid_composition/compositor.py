"""Paste extracted frames onto a single padded canvas."""

from __future__ import annotations

from typing import Sequence, Tuple

from PIL import Image

from frame_sampling.errors import ConfigError
from frame_sampling.models import DEFAULT_PADDING, Frame, GridSpec


BACKGROUND: Tuple[int, int, int] = (0, 0, 0)


def _paste_pixels(canvas: Image.Image, pixels: bytes, origin: Tuple[int, int], width: int, height: int) -> None:
    """Copy as many whole RGB pixels as ``pixels`` holds into the tile at ``origin``.

    A short buffer fills complete rows first, then the leading pixels of the
    next row; everything after that stays at the background colour.
    """

    x, y = origin
    available = min(len(pixels) // 3, width * height)
    full_rows, remainder = divmod(available, width)

    if full_rows:
        block = Image.frombytes("RGB", (width, full_rows), pixels[: full_rows * width * 3])
        canvas.paste(block, (x, y))
    if remainder:
        start = full_rows * width * 3
        partial = Image.frombytes("RGB", (remainder, 1), pixels[start : start + remainder * 3])
        canvas.paste(partial, (x, y + full_rows))


def compose_grid(
    frames: Sequence[Frame],
    source_width: int,
    source_height: int,
    rows: int,
    cols: int,
    padding: int = DEFAULT_PADDING,
) -> Image.Image:
    """Lay ``frames`` out row-major on a new RGB canvas.

    ``frames`` must already be in position order and hold exactly
    ``rows * cols`` entries. Tile ``i`` goes to row ``i // cols`` and column
    ``i % cols``; its top-left corner is
    ``(padding + col * (source_width + padding), padding + row * (source_height + padding))``.
    """

    grid = GridSpec(rows=rows, cols=cols, padding=padding)
    if len(frames) != grid.total:
        raise ConfigError(f"Expected {grid.total} frames for a {rows}x{cols} grid, got {len(frames)}")
    if source_width <= 0 or source_height <= 0:
        raise ConfigError(f"Frame size must be positive, got {source_width}x{source_height}")

    canvas = Image.new("RGB", grid.canvas_size(source_width, source_height), BACKGROUND)

    for index, frame in enumerate(frames):
        row, col = divmod(index, cols)
        origin = (
            padding + col * (source_width + padding),
            padding + row * (source_height + padding),
        )
        _paste_pixels(canvas, frame.pixels, origin, source_width, source_height)

    return canvas


__all__ = ["compose_grid", "BACKGROUND"]
