from dataclasses import dataclass, replace
from pathlib import Path

from ocif.errors import InvalidDimensions

MAGIC = b"OCIF"
DEFAULT_METHOD = 8


@dataclass
class Cell:
    background: int = 0x000000
    foreground: int = 0xFFFFFF
    alpha: float = 1.0
    character: str = " "


class Image:
    """A width x height grid of cells stored row-major."""

    def __init__(self, width: int, height: int, fill: Cell | None = None):
        if width < 1 or height < 1:
            raise InvalidDimensions(width, height)
        self.width = width
        self.height = height
        fill = fill if fill is not None else Cell()
        self.cells = [replace(fill) for _ in range(width * height)]

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (self.width, self.height, self.cells) == (other.width, other.height, other.cells)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell | None:
        if not self._in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        if not self._in_bounds(x, y):
            return
        self.cells[y * self.width + x] = cell

    @classmethod
    def from_bytes(cls, data: bytes) -> "Image":
        from ocif.codec import decode

        return decode(data)

    def to_bytes(self, method: int = DEFAULT_METHOD) -> bytes:
        from ocif.codec import encode

        return encode(self, method)

    @classmethod
    def load(cls, path: str | Path) -> "Image":
        return cls.from_bytes(Path(path).read_bytes())

    def save(self, path: str | Path, method: int = DEFAULT_METHOD) -> None:
        # Encode first so a bad method never leaves a truncated file behind
        data = self.to_bytes(method)
        Path(path).write_bytes(data)
