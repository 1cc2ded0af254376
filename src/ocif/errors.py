class OCIFError(ValueError):
    """Base class for errors raised while reading, writing or rendering OCIF images."""


class InvalidSignature(OCIFError):
    def __init__(self, signature: bytes):
        self.signature = signature
        super().__init__(f"Invalid OCIF signature: {signature!r}")


class UnsupportedEncodingMethod(OCIFError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"Unsupported encoding method: {method}")


class InvalidScaleFactor(OCIFError):
    def __init__(self, scale):
        self.scale = scale
        super().__init__(f"Scale must be an integer greater than or equal to 1, got {scale!r}")


class TruncatedData(OCIFError):
    def __init__(self, offset: int, needed: int):
        self.offset = offset
        self.needed = needed
        super().__init__(f"Unexpected end of data at offset {offset} (needed {needed} more bytes)")


class ImageTooLarge(OCIFError):
    def __init__(self, width: int, height: int, method: int, limit: int):
        self.width = width
        self.height = height
        super().__init__(f"Image {width}x{height} exceeds {limit}x{limit} limit of encoding method {method}")


class InvalidDimensions(OCIFError):
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Image dimensions must be positive, got {width}x{height}")


class FieldOverflow(OCIFError):
    def __init__(self, value: int, field: str):
        self.value = value
        super().__init__(f"Value {value} does not fit in an {field}")


class InvalidCharacter(OCIFError):
    def __init__(self, char: str):
        self.char = char
        super().__init__(f"Cell character must be a single codepoint, got {char!r}")
