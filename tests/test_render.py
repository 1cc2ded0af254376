import io

import numpy as np
import pytest
from PIL import Image as PILImage

from ocif.errors import InvalidScaleFactor
from ocif.hexfont import HexFont, default_font
from ocif.model import Cell, Image
from ocif.render import render_image, to_png


def white_on_black(character="a"):
    image = Image(1, 1)
    image.set_cell(0, 0, Cell(background=0x000000, foreground=0xFFFFFF, alpha=1.0, character=character))
    return image


def test_canvas_size_scale_1():
    canvas = render_image(white_on_black())
    assert canvas.shape == (16, 8, 4)
    assert canvas.dtype == np.uint8


def test_canvas_size_scale_2():
    assert render_image(white_on_black(), 2).shape == (32, 16, 4)


def test_canvas_size_multi_cell():
    assert render_image(Image(3, 2), 3).shape == (2 * 16 * 3, 3 * 8 * 3, 4)


@pytest.mark.parametrize("scale", [0, -1, 1.5, 2.0, True, "2", None])
def test_invalid_scale(scale):
    with pytest.raises(InvalidScaleFactor, match="Scale must be an integer"):
        render_image(white_on_black(), scale)


def test_accepts_numpy_integer_scale():
    assert render_image(white_on_black(), np.int64(2)).shape == (32, 16, 4)


def test_single_cell_matches_glyph():
    canvas = render_image(white_on_black())
    expected = default_font().rasterize("a", 0xFFFFFF, 0x000000, 1.0)
    np.testing.assert_array_equal(canvas, expected)


def test_nearest_neighbour_upsampling():
    canvas = render_image(white_on_black(), 3)
    glyph = default_font().rasterize("a", 0xFFFFFF, 0x000000, 1.0)
    for py in range(0, 48, 5):
        for px in range(0, 24, 5):
            np.testing.assert_array_equal(canvas[py, px], glyph[py // 3, px // 3])


def test_cells_are_placed_at_their_offsets():
    image = Image(2, 2)
    image.set_cell(1, 1, Cell(background=0xFF0000, alpha=0.0, character=" "))
    canvas = render_image(image, 2)
    assert (canvas[32:, 16:] == [255, 0, 0, 255]).all()
    assert (canvas[:32, :] == [0, 0, 0, 0]).all()


def test_wide_glyph_is_clipped_at_canvas_edge():
    canvas = render_image(white_on_black("⌛"))
    assert canvas.shape == (16, 8, 4)
    wide = default_font().rasterize("⌛", 0xFFFFFF, 0x000000, 1.0)
    np.testing.assert_array_equal(canvas, wide[:, :8])


def test_wide_glyph_overflow_is_painted_over_by_next_cell():
    image = Image(2, 1)
    image.set_cell(0, 0, Cell(character="⌛"))
    image.set_cell(1, 0, Cell(background=0x00FF00, alpha=0.0, character=" "))
    canvas = render_image(image)
    wide = default_font().rasterize("⌛", 0xFFFFFF, 0x000000, 1.0)
    np.testing.assert_array_equal(canvas[:, :8], wide[:, :8])
    assert (canvas[:, 8:] == [0, 255, 0, 255]).all()


def test_custom_font_is_used():
    font = HexFont("0020:ffffffffffffffffffffffffffffffff")
    canvas = render_image(white_on_black(" "), font=font)
    assert (canvas == [255, 255, 255, 255]).all()


def test_to_png():
    data = to_png(white_on_black())
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    png = PILImage.open(io.BytesIO(data))
    assert png.size == (8, 16)
    assert png.mode == "RGBA"


def test_to_png_scaled():
    png = PILImage.open(io.BytesIO(to_png(white_on_black(), 2)))
    assert png.size == (16, 32)


def test_to_png_invalid_scale():
    with pytest.raises(InvalidScaleFactor):
        to_png(white_on_black(), 0)
