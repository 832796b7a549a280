"""File header and DIB header parsing.

Every header generation (core, info, V4, V5) is normalized into the same set
of dataclasses so that the pixel decoders never need to know which version a
file was written with.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

from .errors import (
    BadMagicError,
    ImageTooLargeError,
    InvalidBitDepthError,
    InvalidCompressionError,
    InvalidDimensionError,
    InvalidPlanesError,
    PaletteSizeError,
    UnsupportedVersionError,
)
from .options import DEFAULT_OPTIONS, DecodeOptions
from .palette import Palette, read_palette
from .reader import ByteReader

logger = logging.getLogger(__name__)

MAGIC = b"BM"
FILE_HEADER_SIZE = 14
VALID_BIT_DEPTHS = (1, 4, 8, 16, 24, 32)
INDEXED_BIT_DEPTHS = (1, 4, 8)


class Version(Enum):
    """Header generation, keyed by the size of the DIB header."""

    CORE2 = 12
    INFO3 = 40
    V4 = 108
    V5 = 124

    @classmethod
    def from_size(cls, size: int) -> "Version":
        try:
            return cls(size)
        except ValueError:
            raise UnsupportedVersionError(size) from None

    @property
    def header_size(self) -> int:
        return self.value

    @property
    def palette_entry_size(self) -> int:
        return 3 if self is Version.CORE2 else 4


class Compression(IntEnum):
    NONE = 0
    RLE8 = 1
    RLE4 = 2
    BITFIELDS = 3


_COMPRESSION_BIT_DEPTHS = {
    Compression.NONE: VALID_BIT_DEPTHS,
    Compression.RLE8: (8,),
    Compression.RLE4: (4,),
    Compression.BITFIELDS: (16, 32),
}


@dataclass(frozen=True)
class FileHeader:
    magic: bytes
    file_size: int
    data_offset: int


@dataclass(frozen=True)
class CoreHeader:
    version: Version
    width: int
    height: int
    bits_per_pixel: int
    planes: int
    top_down: bool

    @property
    def stride(self) -> int:
        """Size in bytes of one DWORD aligned scanline."""

        return ((self.width * self.bits_per_pixel + 31) // 32) * 4

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class InfoHeader:
    compression: Compression
    image_size: int
    x_pixels_per_meter: int
    y_pixels_per_meter: int
    colors_used: int
    colors_important: int

    @property
    def dpi(self) -> Tuple[Optional[float], Optional[float]]:
        """Horizontal and vertical resolution in dots per inch, if declared."""

        def _to_dpi(ppm: int) -> Optional[float]:
            return round(ppm * 0.0254, 2) if ppm > 0 else None

        return _to_dpi(self.x_pixels_per_meter), _to_dpi(self.y_pixels_per_meter)


@dataclass(frozen=True)
class BitfieldMask:
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 0

    @classmethod
    def for_bit_depth(cls, bits_per_pixel: int) -> "BitfieldMask":
        """Implicit masks used by uncompressed 16 and 32 bit images."""

        if bits_per_pixel == 16:
            return cls(red=0x7C00, green=0x03E0, blue=0x001F)
        if bits_per_pixel == 32:
            return cls(red=0xFF0000, green=0x00FF00, blue=0x0000FF)
        return cls()


@dataclass(frozen=True)
class ColorimetryExtra:
    """CIE XYZ endpoints and gamma values of V4/V5 headers.

    Endpoints are FXPT2DOT30 fixed point numbers and gammas are 16.16 fixed
    point numbers. They are kept for inspection only.
    """

    color_space_type: int
    red_x: int
    red_y: int
    red_z: int
    green_x: int
    green_y: int
    green_z: int
    blue_x: int
    blue_y: int
    blue_z: int
    gamma_red: int
    gamma_green: int
    gamma_blue: int

    @property
    def endpoints(self) -> Tuple[Tuple[float, float, float], ...]:
        scale = float(1 << 30)
        return (
            (self.red_x / scale, self.red_y / scale, self.red_z / scale),
            (self.green_x / scale, self.green_y / scale, self.green_z / scale),
            (self.blue_x / scale, self.blue_y / scale, self.blue_z / scale),
        )

    @property
    def gamma(self) -> Tuple[float, float, float]:
        scale = float(1 << 16)
        return (self.gamma_red / scale, self.gamma_green / scale, self.gamma_blue / scale)


@dataclass(frozen=True)
class IccProfile:
    intent: int
    data_offset: int
    size: int
    reserved: int


@dataclass(frozen=True)
class BitmapHeader:
    """Everything read from the stream before the pixel data."""

    file: FileHeader
    core: CoreHeader
    info: Optional[InfoHeader]
    mask: BitfieldMask
    extra: Optional[ColorimetryExtra]
    profile: Optional[IccProfile]
    palette: Palette
    header_length: int

    @property
    def version(self) -> Version:
        return self.core.version

    @property
    def width(self) -> int:
        return self.core.width

    @property
    def height(self) -> int:
        return self.core.height

    @property
    def bits_per_pixel(self) -> int:
        return self.core.bits_per_pixel

    @property
    def top_down(self) -> bool:
        return self.core.top_down

    @property
    def compression(self) -> Compression:
        return self.info.compression if self.info is not None else Compression.NONE

    @property
    def image_size(self) -> int:
        return self.info.image_size if self.info is not None else 0


def read_file_header(reader: ByteReader) -> FileHeader:
    magic = reader.read_exact(2)
    if magic != MAGIC:
        raise BadMagicError(magic)
    file_size = reader.u32()
    reader.skip(4)  # reserved
    data_offset = reader.u32()
    return FileHeader(magic=magic, file_size=file_size, data_offset=data_offset)


def read_version(reader: ByteReader) -> Version:
    return Version.from_size(reader.u32())


def _checked_abs(value: int, bits: int, name: str) -> int:
    if value == -(1 << (bits - 1)):
        raise InvalidDimensionError(f"Invalid image {name} {value}")
    return abs(value)


def read_core_header(reader: ByteReader, version: Version) -> CoreHeader:
    if version is Version.CORE2:
        bits = 16
        raw_width, raw_height = reader.i16(), reader.i16()
    else:
        bits = 32
        raw_width, raw_height = reader.i32(), reader.i32()

    top_down = raw_height < 0
    width = _checked_abs(raw_width, bits, "width")
    height = _checked_abs(raw_height, bits, "height")

    planes = reader.u16()
    if planes != 1:
        raise InvalidPlanesError(f"Invalid number of planes {planes}")

    bpp = reader.u16()
    if bpp not in VALID_BIT_DEPTHS or (version is Version.CORE2 and bpp in (16, 32)):
        raise InvalidBitDepthError(f"Invalid bits per pixel {bpp} for {version.name} header")

    return CoreHeader(
        version=version,
        width=width,
        height=height,
        bits_per_pixel=bpp,
        planes=planes,
        top_down=top_down,
    )


def read_compression(reader: ByteReader, bits_per_pixel: int) -> Compression:
    code = reader.u32()
    try:
        compression = Compression(code)
    except ValueError:
        raise InvalidCompressionError(f"Invalid compression 0x{code:X} for {bits_per_pixel}-bit") from None
    if bits_per_pixel not in _COMPRESSION_BIT_DEPTHS[compression]:
        raise InvalidCompressionError(f"Invalid compression {compression.name} for {bits_per_pixel}-bit")
    return compression


def read_info_header(reader: ByteReader, compression: Compression) -> InfoHeader:
    return InfoHeader(
        compression=compression,
        image_size=reader.u32(),
        x_pixels_per_meter=reader.i32(),
        y_pixels_per_meter=reader.i32(),
        colors_used=reader.u32(),
        colors_important=reader.u32(),
    )


def read_bitfield_mask(reader: ByteReader, version: Version) -> BitfieldMask:
    red, green, blue = reader.u32(), reader.u32(), reader.u32()
    alpha = reader.u32() if version in (Version.V4, Version.V5) else 0
    return BitfieldMask(red=red, green=green, blue=blue, alpha=alpha)


def resolve_bitfield_mask(
    reader: ByteReader, version: Version, compression: Compression, bits_per_pixel: int
) -> BitfieldMask:
    """Read or infer the channel masks.

    V4 and V5 headers always contain the mask fields, so they are consumed
    even when the image is not bitfield compressed.
    """

    explicit = None
    if version in (Version.V4, Version.V5) or (
        version is Version.INFO3 and compression is Compression.BITFIELDS
    ):
        explicit = read_bitfield_mask(reader, version)

    if compression is Compression.BITFIELDS:
        return explicit
    if compression is Compression.NONE:
        return BitfieldMask.for_bit_depth(bits_per_pixel)
    return BitfieldMask()


def read_colorimetry(reader: ByteReader) -> ColorimetryExtra:
    color_space_type = reader.u32()
    endpoints = [reader.i32() for _ in range(9)]
    gammas = [reader.u32() for _ in range(3)]
    return ColorimetryExtra(color_space_type, *endpoints, *gammas)


def read_icc_profile(reader: ByteReader) -> IccProfile:
    return IccProfile(
        intent=reader.u32(),
        data_offset=reader.u32(),
        size=reader.u32(),
        reserved=reader.u32(),
    )


def palette_size(bits_per_pixel: int, colors_used: int) -> int:
    if colors_used:
        return colors_used
    if bits_per_pixel < 16:
        return 1 << bits_per_pixel
    return 0


def read_bitmap_header(reader: ByteReader, options: DecodeOptions = DEFAULT_OPTIONS) -> BitmapHeader:
    """Parse the file header, the DIB header and the palette from ``reader``."""

    file_header = read_file_header(reader)
    version = read_version(reader)
    core = read_core_header(reader, version)
    logger.debug(
        "%s header: %dx%d, %d bpp, %s",
        version.name,
        core.width,
        core.height,
        core.bits_per_pixel,
        "top-down" if core.top_down else "bottom-up",
    )

    if options.max_pixels is not None and core.pixel_count > options.max_pixels:
        raise ImageTooLargeError(
            f"Image size {core.width}x{core.height} exceeds limit of {options.max_pixels} pixels"
        )

    info = None
    mask = BitfieldMask()
    if version is not Version.CORE2:
        compression = read_compression(reader, core.bits_per_pixel)
        info = read_info_header(reader, compression)
        mask = resolve_bitfield_mask(reader, version, compression, core.bits_per_pixel)
        logger.debug("Compression %s, image size %d bytes", compression.name, info.image_size)

    extra = read_colorimetry(reader) if version in (Version.V4, Version.V5) else None
    profile = read_icc_profile(reader) if version is Version.V5 else None

    count = palette_size(core.bits_per_pixel, info.colors_used if info is not None else 0)
    if count and core.bits_per_pixel not in INDEXED_BIT_DEPTHS:
        raise PaletteSizeError(f"Unexpected palette of {count} colors for {core.bits_per_pixel}-bit image")
    palette = read_palette(
        reader,
        count,
        version.palette_entry_size,
        use_alpha=options.use_palette_alpha,
    )
    logger.debug("Palette with %d colors", len(palette))

    return BitmapHeader(
        file=file_header,
        core=core,
        info=info,
        mask=mask,
        extra=extra,
        profile=profile,
        palette=palette,
        header_length=reader.position,
    )
