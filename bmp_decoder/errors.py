"""Exception hierarchy raised while decoding bitmap files."""

from __future__ import annotations


class BmpError(Exception):
    """Base class for every error raised by the decoder."""


class TruncatedDataError(BmpError, EOFError):
    """The byte source returned fewer bytes than required."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"Unexpected end of data: needed {expected} bytes, got {received}")
        self.expected = expected
        self.received = received


class HeaderError(BmpError, ValueError):
    """The file or info header is malformed or unsupported."""


class BadMagicError(HeaderError):
    def __init__(self, magic: bytes) -> None:
        super().__init__(f"Invalid file type {magic!r}, expected b'BM'")
        self.magic = magic


class UnsupportedVersionError(HeaderError):
    def __init__(self, size: int) -> None:
        super().__init__(f"Unsupported header size {size}")
        self.size = size


class InvalidDimensionError(HeaderError):
    pass


class InvalidPlanesError(HeaderError):
    pass


class InvalidBitDepthError(HeaderError):
    pass


class InvalidCompressionError(HeaderError):
    pass


class PaletteSizeError(HeaderError):
    pass


class ImageTooLargeError(HeaderError):
    pass


class ConfigError(BmpError, ValueError):
    """The header lacks information the decoder needs to proceed."""


class MissingCompressedLengthError(ConfigError):
    pass


class PixelDataError(BmpError, ValueError):
    """The pixel stream references data that does not exist."""


class PaletteIndexOutOfRangeError(PixelDataError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Palette index {index} out of range for palette of {size} colors")
        self.index = index
        self.size = size
