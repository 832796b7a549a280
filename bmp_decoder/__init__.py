"""Decoder for Microsoft bitmap (BMP/DIB) files."""

from .builder import ArrayImageBuilder, ImageBuilder, PillowImageBuilder
from .decoder import decode, decode_file, read_header
from .errors import (
    BadMagicError,
    BmpError,
    ConfigError,
    HeaderError,
    ImageTooLargeError,
    InvalidBitDepthError,
    InvalidCompressionError,
    InvalidDimensionError,
    InvalidPlanesError,
    MissingCompressedLengthError,
    PaletteIndexOutOfRangeError,
    PaletteSizeError,
    PixelDataError,
    TruncatedDataError,
    UnsupportedVersionError,
)
from .headers import BitmapHeader, BitfieldMask, Compression, Version
from .options import DecodeOptions
from .palette import Color, Palette

__all__ = [
    "ArrayImageBuilder",
    "ImageBuilder",
    "PillowImageBuilder",
    "decode",
    "decode_file",
    "read_header",
    "BadMagicError",
    "BmpError",
    "ConfigError",
    "HeaderError",
    "ImageTooLargeError",
    "InvalidBitDepthError",
    "InvalidCompressionError",
    "InvalidDimensionError",
    "InvalidPlanesError",
    "MissingCompressedLengthError",
    "PaletteIndexOutOfRangeError",
    "PaletteSizeError",
    "PixelDataError",
    "TruncatedDataError",
    "UnsupportedVersionError",
    "BitmapHeader",
    "BitfieldMask",
    "Compression",
    "Version",
    "DecodeOptions",
    "Color",
    "Palette",
]
