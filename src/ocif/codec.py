"""Binary OCIF encoding methods 5 to 8.

Method 5 stores every cell in row-major order. Methods 6 to 8 group cells by
alpha, character, background and foreground, then list the rows and columns
that share them. Methods 7 and 8 store every count as ``count - 1`` and
method 8 additionally stores coordinates and dimensions zero-based, which lets
an 8-bit field address 256 rows or columns.
"""

from ocif.cursor import ByteReader, ByteWriter
from ocif.errors import (
    ImageTooLarge,
    InvalidCharacter,
    InvalidDimensions,
    InvalidSignature,
    TruncatedData,
    UnsupportedEncodingMethod,
)
from ocif.model import DEFAULT_METHOD, MAGIC, Cell, Image
from ocif.palette import PALETTE, find_closest_color

SUPPORTED_METHODS = (5, 6, 7, 8)

# Background, foreground and alpha bytes plus at least one character byte
FLAT_CELL_MIN_BYTES = 4


def _range_flags(method: int) -> tuple[int, int]:
    """Return (ext_count, ext_coord) as 0/1 biases for an encoding method."""
    if method not in SUPPORTED_METHODS:
        raise UnsupportedEncodingMethod(method)
    return int(method >= 7), int(method >= 8)


def alpha_to_byte(alpha: float) -> int:
    return int(round(min(max(alpha, 0.0), 1.0) * 255))


def _check_character(char: str) -> str:
    if len(char) != 1:
        raise InvalidCharacter(char)
    return char


def decode(data: bytes) -> Image:
    reader = ByteReader(data)
    if not reader.data.startswith(MAGIC):
        raise InvalidSignature(reader.data[: len(MAGIC)])
    reader.read_bytes(len(MAGIC))

    method = reader.read_u8()
    ext_count, ext_coord = _range_flags(method)

    if method == 5:
        width = reader.read_u16be()
        height = reader.read_u16be()
    else:
        width = reader.read_u8() + ext_coord
        height = reader.read_u8() + ext_coord
    if width < 1 or height < 1:
        raise InvalidDimensions(width, height)

    if method == 5:
        # Refuse to allocate cells for a body that cannot be there
        needed = FLAT_CELL_MIN_BYTES * width * height
        remaining = len(reader.data) - reader.offset
        if remaining < needed:
            raise TruncatedData(reader.offset, needed - remaining)
        image = Image(width, height)
        _decode_flat(reader, image)
    else:
        image = Image(width, height)
        _decode_grouped(reader, image, ext_count, ext_coord)
    return image


def _decode_flat(reader: ByteReader, image: Image) -> None:
    for i in range(len(image.cells)):
        background = PALETTE[reader.read_u8()]
        foreground = PALETTE[reader.read_u8()]
        alpha = reader.read_u8() / 255
        character = reader.read_codepoint()
        image.cells[i] = Cell(background, foreground, alpha, character)


def _decode_grouped(reader: ByteReader, image: Image, ext_count: int, ext_coord: int) -> None:
    for _ in range(reader.read_u8() + ext_count):
        alpha = reader.read_u8() / 255
        for _ in range(reader.read_u16be() + ext_count):
            character = reader.read_codepoint()
            for _ in range(reader.read_u8() + ext_count):
                background = PALETTE[reader.read_u8()]
                for _ in range(reader.read_u8() + ext_count):
                    foreground = PALETTE[reader.read_u8()]
                    for _ in range(reader.read_u8() + ext_count):
                        y = reader.read_u8() - 1 + ext_coord
                        for _ in range(reader.read_u8() + ext_count):
                            x = reader.read_u8() - 1 + ext_coord
                            image.set_cell(x, y, Cell(background, foreground, alpha, character))


def encode(image: Image, method: int = DEFAULT_METHOD) -> bytes:
    ext_count, ext_coord = _range_flags(method)
    writer = ByteWriter()
    writer.write_string(MAGIC.decode("ascii"), "ascii")
    writer.write_u8(method)

    if method == 5:
        if image.width > 0xFFFF or image.height > 0xFFFF:
            raise ImageTooLarge(image.width, image.height, method, 0xFFFF)
        writer.write_u16be(image.width)
        writer.write_u16be(image.height)
        _encode_flat(writer, image)
    else:
        limit = 0xFF + ext_coord
        if image.width > limit or image.height > limit:
            raise ImageTooLarge(image.width, image.height, method, limit)
        writer.write_u8(image.width - ext_coord)
        writer.write_u8(image.height - ext_coord)
        _encode_grouped(writer, group_cells(image), ext_count, ext_coord)
    return writer.getvalue()


def _encode_flat(writer: ByteWriter, image: Image) -> None:
    for cell in image.cells:
        writer.write_u8(find_closest_color(cell.background))
        writer.write_u8(find_closest_color(cell.foreground))
        writer.write_u8(alpha_to_byte(cell.alpha))
        writer.write_string(_check_character(cell.character))


def group_cells(image: Image) -> dict[int, dict[str, dict[int, dict[int, dict[int, list[int]]]]]]:
    """Group cell columns by (alpha byte, character, bg index, fg index, row).

    Every level keeps the order in which its keys were first seen during a
    row-major scan.
    """
    grouped: dict = {}
    for y in range(image.height):
        for x in range(image.width):
            cell = image.cells[y * image.width + x]
            rows = (
                grouped.setdefault(alpha_to_byte(cell.alpha), {})
                .setdefault(_check_character(cell.character), {})
                .setdefault(find_closest_color(cell.background), {})
                .setdefault(find_closest_color(cell.foreground), {})
            )
            rows.setdefault(y, []).append(x)
    return grouped


def _encode_grouped(writer: ByteWriter, grouped: dict, ext_count: int, ext_coord: int) -> None:
    writer.write_u8(len(grouped) - ext_count)
    for alpha, characters in grouped.items():
        writer.write_u8(alpha)
        writer.write_u16be(len(characters) - ext_count)
        for character, backgrounds in characters.items():
            writer.write_string(character)
            writer.write_u8(len(backgrounds) - ext_count)
            for background, foregrounds in backgrounds.items():
                writer.write_u8(background)
                writer.write_u8(len(foregrounds) - ext_count)
                for foreground, rows in foregrounds.items():
                    writer.write_u8(foreground)
                    writer.write_u8(len(rows) - ext_count)
                    for y, columns in rows.items():
                        writer.write_u8(y + 1 - ext_coord)
                        writer.write_u8(len(columns) - ext_count)
                        for x in columns:
                            writer.write_u8(x + 1 - ext_coord)
