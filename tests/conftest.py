import pytest

from ocif.model import Cell, Image

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF
YELLOW = 0xFFFF00


@pytest.fixture
def two_cell_image():
    image = Image(2, 1)
    image.set_cell(0, 0, Cell(background=RED, foreground=GREEN, alpha=1.0, character="a"))
    image.set_cell(1, 0, Cell(background=BLUE, foreground=YELLOW, alpha=0.5, character="b"))
    return image
