import numpy as np

# Channel levels of the 6x8x5 color cube (red outermost, blue innermost)
RED_LEVELS = (0x00, 0x33, 0x66, 0x99, 0xCC, 0xFF)
GREEN_LEVELS = (0x00, 0x24, 0x49, 0x6D, 0x92, 0xB6, 0xDB, 0xFF)
BLUE_LEVELS = (0x00, 0x40, 0x80, 0xBF, 0xFF)


def from_rgb(r: int, g: int, b: int) -> int:
    return (r << 16) | (g << 8) | b


def to_rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _build_palette() -> tuple[int, ...]:
    cube = [from_rgb(r, g, b) for r in RED_LEVELS for g in GREEN_LEVELS for b in BLUE_LEVELS]
    grays = [0x0F0F0F * k for k in range(1, 17)]
    return tuple(cube + grays)


PALETTE = _build_palette()

# (256, 3) channel table used for vectorised distance search
_PALETTE_RGB = np.array([to_rgb(c) for c in PALETTE], dtype=np.int32)


def find_closest_color(color: int) -> int:
    """Return the palette index nearest to ``color`` by squared RGB distance.

    Exact palette entries map to their own index; ties go to the lowest index.
    """
    diff = _PALETTE_RGB - np.array(to_rgb(color), dtype=np.int32)
    distances = (diff * diff).sum(axis=1)
    # argmin returns the first occurrence of the minimum
    return int(np.argmin(distances))


def quantize(color: int) -> int:
    """Snap a 24-bit color to the nearest palette color."""
    return PALETTE[find_closest_color(color)]
