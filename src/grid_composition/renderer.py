"""Scale the composed canvas into a bounding box and encode it."""

from __future__ import annotations

import io
from typing import Any, Dict

from PIL import Image, ImageOps

from frame_sampling.errors import EncodeError


FORMAT_ALIASES = {"jpg": "jpeg", "jpeg": "jpeg", "png": "png", "webp": "webp"}
SUPPORTED_FORMATS = ("jpeg", "png", "webp")


def normalize_format(fmt: str) -> str:
    """Map a user-facing format or file suffix to ``jpeg``, ``png``, or ``webp``."""

    key = fmt.lower().lstrip(".")
    if key not in FORMAT_ALIASES:
        raise EncodeError(
            f"Unsupported format: {fmt} (choose one of {', '.join(SUPPORTED_FORMATS)})",
            fmt=fmt,
        )
    return FORMAT_ALIASES[key]


def _save_options(fmt: str, quality: int) -> Dict[str, Any]:
    if fmt == "jpeg":
        return {"format": "JPEG", "quality": quality}
    if fmt == "png":
        # quality has no meaning for png
        return {"format": "PNG", "compress_level": 9}
    return {"format": "WEBP", "quality": quality}


def render_canvas(
    canvas: Image.Image,
    max_width: int,
    max_height: int,
    fmt: str,
    quality: int = 75,
) -> bytes:
    """Resize ``canvas`` to fit ``max_width`` x ``max_height`` and encode it.

    The aspect ratio is kept and the result is as large as the box allows,
    so small canvases are enlarged as well as large ones shrunk.

    Returns:
        The encoded image bytes.
    """

    name = normalize_format(fmt)
    if max_width < 1 or max_height < 1:
        raise EncodeError(f"Output bounds must be positive, got {max_width}x{max_height}", fmt=name)
    if not 1 <= quality <= 100:
        raise EncodeError(f"Quality must be within [1, 100], got {quality}", fmt=name)

    image = canvas if canvas.mode == "RGB" else canvas.convert("RGB")
    buffer = io.BytesIO()
    try:
        image = ImageOps.contain(image, (max_width, max_height), method=Image.Resampling.BILINEAR)
        image.save(buffer, **_save_options(name, quality))
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Failed to encode {name} image: {exc}", fmt=name) from exc
    return buffer.getvalue()


__all__ = ["render_canvas", "normalize_format", "SUPPORTED_FORMATS"]
