"""Scanline decoders for uncompressed pixel data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

from .bitfields import Channels
from .builder import ImageBuilder
from .errors import InvalidCompressionError
from .headers import Compression
from .palette import Palette


class PixelFormat(Enum):
    INDEXED_1 = "indexed-1"
    INDEXED_4 = "indexed-4"
    INDEXED_8 = "indexed-8"
    BITFIELD_16 = "bitfield-16"
    DIRECT_24 = "direct-24"
    BITFIELD_32 = "bitfield-32"
    RLE_4 = "rle-4"
    RLE_8 = "rle-8"

    @classmethod
    def select(cls, bits_per_pixel: int, compression: Compression) -> "PixelFormat":
        if compression is Compression.RLE4 and bits_per_pixel == 4:
            return cls.RLE_4
        if compression is Compression.RLE8 and bits_per_pixel == 8:
            return cls.RLE_8
        if compression in (Compression.NONE, Compression.BITFIELDS):
            try:
                return _UNCOMPRESSED_FORMATS[bits_per_pixel]
            except KeyError:
                pass
        raise InvalidCompressionError(f"No decoder for {compression.name} at {bits_per_pixel}-bit")

    @property
    def is_run_length(self) -> bool:
        return self in (PixelFormat.RLE_4, PixelFormat.RLE_8)


_UNCOMPRESSED_FORMATS = {
    1: PixelFormat.INDEXED_1,
    4: PixelFormat.INDEXED_4,
    8: PixelFormat.INDEXED_8,
    16: PixelFormat.BITFIELD_16,
    24: PixelFormat.DIRECT_24,
    32: PixelFormat.BITFIELD_32,
}


@dataclass(frozen=True)
class RowContext:
    """Per-image state shared by every scanline of one decode call."""

    width: int
    palette: Palette
    channels: Channels


RowDecoder = Callable[[bytes, int, RowContext, ImageBuilder], None]


def decode_1bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    palette = ctx.palette
    for x in range(ctx.width):
        index = (row[x >> 3] >> (7 - (x & 7))) & 0x01
        color = palette[index]
        builder.set_pixel(x, y, color.r, color.g, color.b, color.a)


def decode_4bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    palette = ctx.palette
    for x in range(ctx.width):
        byte = row[x >> 1]
        index = byte & 0x0F if x & 1 else byte >> 4
        color = palette[index]
        builder.set_pixel(x, y, color.r, color.g, color.b, color.a)


def decode_8bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    palette = ctx.palette
    for x in range(ctx.width):
        color = palette[row[x]]
        builder.set_pixel(x, y, color.r, color.g, color.b, color.a)


def decode_16bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    unpack = ctx.channels.unpack
    for x, (raw,) in enumerate(struct.iter_unpack("<H", row[: ctx.width * 2])):
        builder.set_pixel(x, y, *unpack(raw))


def decode_24bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    for x in range(ctx.width):
        offset = x * 3
        b, g, r = row[offset : offset + 3]
        builder.set_pixel(x, y, r, g, b, 255)


def decode_32bpp(row: bytes, y: int, ctx: RowContext, builder: ImageBuilder) -> None:
    unpack = ctx.channels.unpack
    for x, (raw,) in enumerate(struct.iter_unpack("<I", row[: ctx.width * 4])):
        builder.set_pixel(x, y, *unpack(raw))


ROW_DECODERS: Dict[PixelFormat, RowDecoder] = {
    PixelFormat.INDEXED_1: decode_1bpp,
    PixelFormat.INDEXED_4: decode_4bpp,
    PixelFormat.INDEXED_8: decode_8bpp,
    PixelFormat.BITFIELD_16: decode_16bpp,
    PixelFormat.DIRECT_24: decode_24bpp,
    PixelFormat.BITFIELD_32: decode_32bpp,
}
