import pytest

from frame_sampling.errors import ConfigError
from frame_sampling.models import Frame, GridSpec
from grid_composition.compositor import BACKGROUND, compose_grid

from conftest import solid_frame

W, H, P = 4, 3, 2


def _tile_pixels(canvas, row, col, width=W, height=H, padding=P):
    x0 = padding + col * (width + padding)
    y0 = padding + row * (height + padding)
    return {canvas.getpixel((x0 + dx, y0 + dy)) for dx in range(width) for dy in range(height)}


def _frames(palette, width=W, height=H):
    return [Frame(position=p, pixels=solid_frame(palette[p], width, height)) for p in sorted(palette)]


def test_canvas_size_includes_padding(palette):
    canvas = compose_grid(_frames(palette), W, H, 2, 2, P)

    assert canvas.size == (2 * W + 3 * P, 2 * H + 3 * P)
    assert canvas.mode == "RGB"


def test_first_and_last_tile_origins(palette):
    canvas = compose_grid(_frames(palette), W, H, 2, 2, P)

    assert canvas.getpixel((P, P)) == palette[1]
    assert canvas.getpixel((P + W + P, P + H + P)) == palette[4]
    assert canvas.getpixel((P - 1, P)) == BACKGROUND


def test_solid_tiles_read_back_with_background_padding(palette):
    canvas = compose_grid(_frames(palette), W, H, 2, 2, P)

    assert _tile_pixels(canvas, 0, 0) == {palette[1]}
    assert _tile_pixels(canvas, 0, 1) == {palette[2]}
    assert _tile_pixels(canvas, 1, 0) == {palette[3]}
    assert _tile_pixels(canvas, 1, 1) == {palette[4]}

    tile_cells = set()
    for row in range(2):
        for col in range(2):
            x0 = P + col * (W + P)
            y0 = P + row * (H + P)
            tile_cells.update((x0 + dx, y0 + dy) for dx in range(W) for dy in range(H))
    padding_colors = {
        canvas.getpixel((x, y))
        for x in range(canvas.width)
        for y in range(canvas.height)
        if (x, y) not in tile_cells
    }
    assert padding_colors == {BACKGROUND}


def test_row_major_wraps_on_tiles_per_row():
    colors = [(10 * i, 20, 30) for i in range(1, 7)]
    frames = [Frame(position=i + 1, pixels=solid_frame(c)) for i, c in enumerate(colors)]

    canvas = compose_grid(frames, W, H, rows=2, cols=3, padding=P)

    assert canvas.size == GridSpec(rows=2, cols=3, padding=P).canvas_size(W, H)
    assert _tile_pixels(canvas, 0, 2) == {colors[2]}
    assert _tile_pixels(canvas, 1, 0) == {colors[3]}
    assert _tile_pixels(canvas, 1, 2) == {colors[5]}


def test_gradient_frame_keeps_pixel_layout():
    pixels = bytes(v for i in range(W * H) for v in (i, i * 2, i * 3))
    canvas = compose_grid([Frame(position=1, pixels=pixels)], W, H, 1, 1, P)

    for i in range(W * H):
        y, x = divmod(i, W)
        assert canvas.getpixel((P + x, P + y)) == (i, i * 2, i * 3)


def test_short_frame_leaves_missing_pixels_unwritten():
    color = (200, 100, 50)
    # one full row, one more pixel, and a dangling byte
    pixels = bytes(color) * (W + 1) + b"\x07"

    canvas = compose_grid([Frame(position=1, pixels=pixels)], W, H, 1, 1, P)

    assert _tile_pixels(canvas, 0, 0) == {color, BACKGROUND}
    assert all(canvas.getpixel((P + x, P)) == color for x in range(W))
    assert canvas.getpixel((P, P + 1)) == color
    assert canvas.getpixel((P + 1, P + 1)) == BACKGROUND
    assert canvas.getpixel((P, P + 2)) == BACKGROUND


def test_empty_and_oversized_frames(palette):
    frames = [
        Frame(position=1, pixels=b""),
        Frame(position=2, pixels=solid_frame(palette[2]) + b"\xff" * 30),
    ]

    canvas = compose_grid(frames, W, H, 1, 2, P)

    assert _tile_pixels(canvas, 0, 0) == {BACKGROUND}
    assert _tile_pixels(canvas, 0, 1) == {palette[2]}


def test_frame_count_must_match_grid(palette):
    with pytest.raises(ConfigError):
        compose_grid(_frames(palette)[:3], W, H, 2, 2, P)


def test_zero_padding_packs_tiles(palette):
    canvas = compose_grid(_frames(palette), W, H, 2, 2, padding=0)

    assert canvas.size == (2 * W, 2 * H)
    assert canvas.getpixel((W, H)) == palette[4]
