"""RLE4 and RLE8 decompression.

The compressed stream is a sequence of two byte opcodes ``(count, value)``.
A nonzero ``count`` draws an encoded run; a zero ``count`` introduces an
escape selected by ``value``: end of line, end of bitmap, a cursor delta, or
an absolute run of literal palette indices padded to an even length.
"""

from __future__ import annotations

import logging

from .builder import ImageBuilder
from .errors import MissingCompressedLengthError
from .palette import Palette
from .reader import ByteReader
from .rows import PixelFormat

logger = logging.getLogger(__name__)

END_OF_LINE = 0
END_OF_BITMAP = 1
DELTA = 2


def read_compressed(reader: ByteReader, image_size: int) -> bytes:
    """Read the whole compressed segment declared by the info header."""

    if image_size == 0:
        raise MissingCompressedLengthError("Image data size must be set for run-length compressed bitmaps")
    return reader.read_exact(image_size)


def decode_rle(
    data: bytes,
    fmt: PixelFormat,
    width: int,
    height: int,
    top_down: bool,
    palette: Palette,
    builder: ImageBuilder,
) -> int:
    """Decode ``data`` into ``builder`` and return the number of pixels set.

    Pixels whose cursor falls outside the image are dropped. Decoding stops
    at an end-of-bitmap escape or when an opcode would read past ``data``.
    """

    if not fmt.is_run_length:
        raise ValueError(f"{fmt} is not a run-length format")
    four_bit = fmt is PixelFormat.RLE_4
    size = len(data)
    step = 1 if top_down else -1
    x = 0
    y = 0 if top_down else height - 1
    drawn = 0
    dropped = 0

    def put(index: int) -> None:
        nonlocal x, y, drawn, dropped
        if x >= width:
            x = 0
            y += step
        color = palette[index]
        if 0 <= y < height and x < width:
            builder.set_pixel(x, y, color.r, color.g, color.b, color.a)
            drawn += 1
        else:
            dropped += 1
        x += 1

    i = 0
    while i + 1 < size:
        count, value = data[i], data[i + 1]
        i += 2

        if count:
            if four_bit:
                high, low = value >> 4, value & 0x0F
                for n in range(count):
                    put(low if n & 1 else high)
            else:
                for _ in range(count):
                    put(value)
        elif value == END_OF_LINE:
            x = 0
            y += step
        elif value == END_OF_BITMAP:
            break
        elif value == DELTA:
            if i + 1 >= size:
                break
            x += data[i]
            y += step * data[i + 1]
            i += 2
        else:
            length = (value + 1) // 2 if four_bit else value
            literal = data[i : i + length]
            i += length + (length & 1)
            if four_bit:
                for n in range(min(value, len(literal) * 2)):
                    byte = literal[n >> 1]
                    put(byte & 0x0F if n & 1 else byte >> 4)
            else:
                for index in literal:
                    put(index)

    if dropped:
        logger.debug("Dropped %d run-length pixels outside the %dx%d image", dropped, width, height)
    return drawn
