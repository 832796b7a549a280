"""Decode pipeline tying headers, row decoders and the RLE machine together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional

from .bitfields import Channels
from .builder import ImageBuilder
from .headers import BitmapHeader, read_bitmap_header
from .options import DEFAULT_OPTIONS, DecodeOptions
from .reader import ByteReader
from .rle import decode_rle, read_compressed
from .rows import ROW_DECODERS, PixelFormat, RowContext

logger = logging.getLogger(__name__)


def read_header(source: BinaryIO, options: Optional[DecodeOptions] = None) -> BitmapHeader:
    """Parse and return the headers and palette without decoding any pixel."""

    return read_bitmap_header(ByteReader(source), options or DEFAULT_OPTIONS)


def decode(source: BinaryIO, builder: ImageBuilder, options: Optional[DecodeOptions] = None) -> Any:
    """Decode the bitmap read from ``source`` into ``builder``.

    Returns whatever ``builder.build()`` returns. Any error aborts decoding
    before ``build`` is called.
    """

    options = options or DEFAULT_OPTIONS
    reader = ByteReader(source)
    header = read_bitmap_header(reader, options)
    fmt = PixelFormat.select(header.bits_per_pixel, header.compression)
    logger.debug("Decoding %dx%d image as %s", header.width, header.height, fmt.value)

    if options.honour_data_offset:
        _skip_to_pixel_data(reader, header)

    if fmt.is_run_length:
        data = read_compressed(reader, header.image_size)
        builder.set_size(header.width, header.height)
        decode_rle(
            data,
            fmt,
            header.width,
            header.height,
            header.top_down,
            header.palette,
            builder,
        )
    else:
        builder.set_size(header.width, header.height)
        _decode_rows(reader, header, fmt, builder)

    return builder.build()


def decode_file(path: Path | str, builder: ImageBuilder, options: Optional[DecodeOptions] = None) -> Any:
    with Path(path).open("rb") as fh:
        return decode(fh, builder, options)


def _skip_to_pixel_data(reader: ByteReader, header: BitmapHeader) -> None:
    gap = header.file.data_offset - reader.position
    if gap > 0:
        logger.debug("Skipping %d bytes before pixel data", gap)
        reader.skip(gap)
    elif gap < 0:
        logger.debug(
            "Ignoring data offset %d inside the %d header bytes",
            header.file.data_offset,
            reader.position,
        )


def _decode_rows(reader: ByteReader, header: BitmapHeader, fmt: PixelFormat, builder: ImageBuilder) -> None:
    decode_row = ROW_DECODERS[fmt]
    ctx = RowContext(
        width=header.width,
        palette=header.palette,
        channels=Channels.from_mask(header.mask),
    )
    stride = header.core.stride
    height = header.height

    for file_row in range(height):
        row = reader.read_exact(stride)
        y = file_row if header.top_down else height - 1 - file_row
        decode_row(row, y, ctx, builder)
