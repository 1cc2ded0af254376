import struct

from ocif.errors import FieldOverflow, TruncatedData

# Replacement for a codepoint that cannot be decoded
FALLBACK_CHAR = "?"


def _utf8_length(lead: int) -> int:
    """Sequence length announced by a UTF-8 lead byte, or 0 if it cannot start one."""
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 0


class ByteReader:
    """Sequential reader over an in-memory byte buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def has_more(self) -> bool:
        return self.offset < len(self.data)

    def _take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise TruncatedData(self.offset, end - len(self.data))
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def read_bytes(self, size: int) -> bytes:
        return self._take(size)

    def read_u8(self) -> int:
        (value,) = struct.unpack("B", self._take(1))
        return value

    def read_u16be(self) -> int:
        (value,) = struct.unpack(">H", self._take(2))
        return value

    def read_string(self, length: int, encoding: str = "utf-8") -> str:
        return self._take(length).decode(encoding, errors="replace")

    def read_codepoint(self) -> str:
        """Read one self-delimiting UTF-8 character.

        Malformed or truncated sequences yield ``"?"`` instead of raising, so a
        single bad character never aborts a larger decode. An invalid lead byte
        consumes one byte; a truncated sequence consumes the rest of the buffer.
        """
        if not self.has_more():
            return FALLBACK_CHAR
        length = _utf8_length(self.data[self.offset])
        if length == 0:
            self.offset += 1
            return FALLBACK_CHAR
        if self.offset + length > len(self.data):
            self.offset = len(self.data)
            return FALLBACK_CHAR
        chunk = self.data[self.offset : self.offset + length]
        self.offset += length
        try:
            return chunk.decode("utf-8")
        except UnicodeDecodeError:
            return FALLBACK_CHAR


class ByteWriter:
    """Accumulates big-endian fields into a byte string."""

    def __init__(self):
        self._parts: list[bytes] = []

    def write_u8(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise FieldOverflow(value, "unsigned byte")
        self._parts.append(struct.pack("B", value))

    def write_u16be(self, value: int) -> None:
        if not 0 <= value <= 0xFFFF:
            raise FieldOverflow(value, "unsigned 16-bit field")
        self._parts.append(struct.pack(">H", value))

    def write_string(self, value: str, encoding: str = "utf-8") -> None:
        self._parts.append(value.encode(encoding))

    @property
    def offset(self) -> int:
        return sum(len(part) for part in self._parts)

    def getvalue(self) -> bytes:
        return b"".join(self._parts)
