import threading
from pathlib import Path

import numpy as np

from ocif.palette import to_rgb

GLYPH_WIDTH = 8
GLYPH_HEIGHT = 16
GLYPH_BYTELENGTH = 16

DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_FONT_PATH = DATA_DIR / "font.hex"


class Glyph:
    """A 16-row 1-bit bitmap, 8 columns wide or 16 when wide.

    Bits are packed row-major, most significant bit first.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)

    def __repr__(self) -> str:
        return f"Glyph(width={self.width}, data={self.data.hex()!r})"

    @property
    def is_wide(self) -> bool:
        return len(self.data) > GLYPH_BYTELENGTH

    @property
    def width(self) -> int:
        return GLYPH_WIDTH * 2 if self.is_wide else GLYPH_WIDTH

    def get_pixel(self, x: int, y: int) -> bool:
        width = self.width
        if not (0 <= x < width and 0 <= y < GLYPH_HEIGHT):
            return False
        bit = y * width + x
        byte_index = bit // 8
        if byte_index >= len(self.data):
            return False
        return (self.data[byte_index] >> (7 - bit % 8)) & 1 == 1

    def to_mask(self) -> np.ndarray:
        """Return the glyph as a boolean array of shape (16, width)."""
        expected = GLYPH_HEIGHT * self.width // 8
        raw = np.frombuffer(self.data[:expected].ljust(expected, b"\x00"), dtype=np.uint8)
        return np.unpackbits(raw).reshape(GLYPH_HEIGHT, self.width).astype(bool)


def _parse_table(font_data: str) -> dict[int, Glyph]:
    glyphs: dict[int, Glyph] = {}
    for line in font_data.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(":")
        if len(parts) != 2:
            continue
        try:
            codepoint = int(parts[0], 16)
            data = bytes.fromhex(parts[1])
        except ValueError:
            continue
        glyphs[codepoint] = Glyph(data)
    return glyphs


class HexFont:
    """Codepoint to glyph table read from ``codepoint:glyphhex`` lines."""

    def __init__(self, font_data: str = ""):
        self.glyphs = _parse_table(font_data)

    @classmethod
    def from_path(cls, path: str | Path) -> "HexFont":
        return cls(Path(path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self.glyphs)

    def __contains__(self, char) -> bool:
        return self.get_glyph(char) is not None

    def get_glyph(self, char: str | int) -> Glyph | None:
        if isinstance(char, str):
            if not char:
                return None
            char = ord(char[0])
        return self.glyphs.get(char)

    def rasterize(self, char: str | int, fg_color: int, bg_color: int, alpha: float) -> np.ndarray:
        """Draw one character as an RGBA array of shape (16, width, 4).

        Set bits take the opaque foreground colour. Clear bits take the
        background colour with opacity ``1 - alpha``, so alpha controls only
        how transparent the background is. Unknown characters are drawn as a
        space; with no space glyph either, the block is left blank.
        """
        glyph = self.get_glyph(char) or self.get_glyph(" ")
        if glyph is not None:
            mask = glyph.to_mask()
        else:
            mask = np.zeros((GLYPH_HEIGHT, GLYPH_WIDTH), dtype=bool)

        background = (*to_rgb(bg_color), int(round((1 - min(max(alpha, 0.0), 1.0)) * 255)))
        foreground = (*to_rgb(fg_color), 0xFF)
        block = np.empty((*mask.shape, 4), dtype=np.uint8)
        block[...] = background
        block[mask] = foreground
        return block


_default_font: HexFont | None = None
_default_font_lock = threading.Lock()


def default_font() -> HexFont:
    """Return the shared font built from the bundled table, loading it on first use."""
    global _default_font
    if _default_font is None:
        with _default_font_lock:
            if _default_font is None:
                _default_font = HexFont.from_path(DEFAULT_FONT_PATH)
    return _default_font
