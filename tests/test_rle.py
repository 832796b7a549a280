from __future__ import annotations

import io

import pytest

from bmp_decoder.errors import MissingCompressedLengthError, PaletteIndexOutOfRangeError
from bmp_decoder.palette import Color, Palette
from bmp_decoder.reader import ByteReader
from bmp_decoder.rle import decode_rle, read_compressed
from bmp_decoder.rows import PixelFormat

PALETTE = Palette([Color(i, i, i) for i in range(16)])


def run(data, fmt=PixelFormat.RLE_8, width=4, height=2, top_down=False, recorder=None):
    drawn = decode_rle(bytes(data), fmt, width, height, top_down, PALETTE, recorder)
    assert drawn == len(recorder.pixels)
    return [(x, y, r) for x, y, r, _, _, _ in recorder.pixels]


def test_encoded_run_rle8(recorder):
    assert run([3, 7, 0, 1], recorder=recorder) == [(0, 1, 7), (1, 1, 7), (2, 1, 7)]


def test_encoded_run_rle4_alternates_nibbles(recorder):
    pixels = run([3, 0x12, 0, 1], fmt=PixelFormat.RLE_4, recorder=recorder)
    assert pixels == [(0, 1, 1), (1, 1, 2), (2, 1, 1)]


def test_end_of_line_moves_up_for_bottom_up(recorder):
    pixels = run([1, 5, 0, 0, 1, 6, 0, 1], recorder=recorder)
    assert pixels == [(0, 1, 5), (0, 0, 6)]


def test_end_of_line_moves_down_for_top_down(recorder):
    pixels = run([1, 5, 0, 0, 1, 6, 0, 1], top_down=True, recorder=recorder)
    assert pixels == [(0, 0, 5), (0, 1, 6)]


def test_end_of_bitmap_stops_before_remaining_data(recorder):
    pixels = run([1, 5, 0, 1, 4, 9, 4, 9], recorder=recorder)
    assert pixels == [(0, 1, 5)]


def test_delta_moves_cursor(recorder):
    pixels = run([0, 2, 2, 1, 1, 3, 0, 1], recorder=recorder)
    assert pixels == [(2, 0, 3)]


def test_absolute_run_rle8_with_odd_length_is_padded(recorder):
    pixels = run([0, 3, 1, 2, 3, 0xEE, 1, 4, 0, 1], recorder=recorder)
    assert pixels == [(0, 1, 1), (1, 1, 2), (2, 1, 3), (3, 1, 4)]


def test_absolute_run_rle8_even_length_has_no_pad(recorder):
    pixels = run([0, 4, 1, 2, 3, 4, 1, 5], width=8, recorder=recorder)
    assert [p[2] for p in pixels] == [1, 2, 3, 4, 5]


def test_absolute_run_rle4_five_nibbles(recorder):
    data = [0, 5, 0x12, 0x34, 0x50, 0xEE]
    pixels = run(data, fmt=PixelFormat.RLE_4, width=4, height=1, recorder=recorder)
    # the fifth nibble wraps off the single row and is dropped
    assert pixels == [(0, 0, 1), (1, 0, 2), (2, 0, 3), (3, 0, 4)]


def test_absolute_run_rle4_even_byte_count_has_no_pad(recorder):
    data = [0, 3, 0x12, 0x30, 1, 0x99, 0, 1]
    pixels = run(data, fmt=PixelFormat.RLE_4, width=8, recorder=recorder)
    assert [p[2] for p in pixels] == [1, 2, 3, 9]


def test_absolute_run_rle4_odd_byte_count_is_padded(recorder):
    data = [0, 6, 0x12, 0x34, 0x56, 0xEE, 1, 0x77]
    pixels = run(data, fmt=PixelFormat.RLE_4, width=8, recorder=recorder)
    assert [p[2] for p in pixels] == [1, 2, 3, 4, 5, 6, 7]


def test_row_overflow_wraps_to_next_row(recorder):
    pixels = run([6, 1], width=4, height=2, recorder=recorder)
    assert [(x, y) for x, y, _ in pixels] == [(0, 1), (1, 1), (2, 1), (3, 1), (0, 0), (1, 0)]


def test_pixels_outside_image_are_dropped(recorder):
    pixels = run([0, 2, 0, 5, 1, 1, 2, 2], width=2, height=2, recorder=recorder)
    assert pixels == []


def test_encoded_run_index_out_of_range(recorder):
    with pytest.raises(PaletteIndexOutOfRangeError):
        run([1, 16], recorder=recorder)


def test_absolute_run_index_out_of_range(recorder):
    with pytest.raises(PaletteIndexOutOfRangeError):
        run([0, 3, 1, 200, 2, 0], recorder=recorder)
    assert len(recorder.pixels) == 1


def test_truncated_stream_stops_at_buffer_end(recorder):
    pixels = run([1, 3, 0, 5, 4], width=8, recorder=recorder)
    assert [p[2] for p in pixels] == [3, 4]
    recorder.pixels.clear()
    assert run([1, 3, 0], recorder=recorder) == [(0, 1, 3)]
    recorder.pixels.clear()
    assert run([1, 3, 0, 2, 1], recorder=recorder) == [(0, 1, 3)]


def test_rejects_uncompressed_format(recorder):
    with pytest.raises(ValueError):
        decode_rle(b"", PixelFormat.INDEXED_8, 1, 1, False, PALETTE, recorder)


def test_read_compressed_requires_length():
    with pytest.raises(MissingCompressedLengthError):
        read_compressed(ByteReader(io.BytesIO(b"\x00\x01")), 0)
    assert read_compressed(ByteReader(io.BytesIO(b"\x00\x01")), 2) == b"\x00\x01"
