import io
import numbers

import numpy as np
from PIL import Image as PILImage

from ocif.errors import InvalidScaleFactor
from ocif.hexfont import GLYPH_HEIGHT, GLYPH_WIDTH, HexFont, default_font
from ocif.model import Image


def _check_scale(scale) -> int:
    if isinstance(scale, bool) or not isinstance(scale, numbers.Integral) or scale < 1:
        raise InvalidScaleFactor(scale)
    return int(scale)


def render_image(image: Image, scale: int = 1, font: HexFont | None = None) -> np.ndarray:
    """Rasterize an image to an RGBA array of shape (height*16*scale, width*8*scale, 4).

    Cells sit on a fixed 8x16 pitch. A wide glyph is drawn 16 pixels wide from
    its cell's left edge; cells are painted row by row, left to right, so the
    cell to its right paints over the overflow. Anything past the canvas edge
    is clipped.
    """
    scale = _check_scale(scale)
    font = font if font is not None else default_font()

    cell_w = GLYPH_WIDTH * scale
    cell_h = GLYPH_HEIGHT * scale
    canvas = np.zeros((image.height * cell_h, image.width * cell_w, 4), dtype=np.uint8)
    canvas_h, canvas_w = canvas.shape[:2]

    for y in range(image.height):
        for x in range(image.width):
            cell = image.get_cell(x, y)
            if cell is None:
                continue
            left = x * cell_w
            top = y * cell_h
            if left >= canvas_w or top >= canvas_h:
                continue
            block = font.rasterize(cell.character, cell.foreground, cell.background, cell.alpha)
            # Nearest-neighbour upsample: destination (px, py) samples source (px // scale, py // scale)
            block = block.repeat(scale, axis=0).repeat(scale, axis=1)
            right = min(left + block.shape[1], canvas_w)
            bottom = min(top + block.shape[0], canvas_h)
            canvas[top:bottom, left:right] = block[: bottom - top, : right - left]
    return canvas


def to_png(image: Image, scale: int = 1, font: HexFont | None = None) -> bytes:
    """Render an image and encode it as an RGBA PNG."""
    canvas = render_image(image, scale, font)
    buffer = io.BytesIO()
    PILImage.fromarray(canvas).save(buffer, format="PNG")
    return buffer.getvalue()
