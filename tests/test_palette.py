from __future__ import annotations

import pytest

from bmp_decoder.errors import PaletteIndexOutOfRangeError, PixelDataError
from bmp_decoder.palette import Color, Palette


def test_four_byte_entries_ignore_reserved_byte_by_default():
    palette = Palette.from_bytes(bytes([10, 20, 30, 40, 1, 2, 3, 4]), 4, 2)
    assert list(palette) == [Color(30, 20, 10, 255), Color(3, 2, 1, 255)]


def test_three_byte_entries():
    palette = Palette.from_bytes(bytes([0, 0, 255, 255, 255, 255]), 3, 2)
    assert palette[0] == Color(255, 0, 0, 255)
    assert palette[1] == Color(255, 255, 255, 255)


def test_palette_alpha_policy_flag():
    palette = Palette.from_bytes(bytes([10, 20, 30, 40]), 4, 1, use_alpha=True)
    assert palette[0] == Color(30, 20, 10, 40)
    # three byte entries have nowhere to carry alpha
    palette = Palette.from_bytes(bytes([10, 20, 30]), 3, 1, use_alpha=True)
    assert palette[0].a == 255


def test_out_of_range_index_raises_pixel_data_error():
    palette = Palette([Color(0, 0, 0), Color(255, 255, 255)])
    with pytest.raises(PaletteIndexOutOfRangeError) as excinfo:
        palette[2]
    assert excinfo.value.index == 2
    assert excinfo.value.size == 2
    assert isinstance(excinfo.value, PixelDataError)


def test_empty_palette_rejects_every_index():
    with pytest.raises(PaletteIndexOutOfRangeError):
        Palette()[0]


def test_short_palette_data_is_rejected():
    with pytest.raises(ValueError):
        Palette.from_bytes(b"\x00\x00\x00", 4, 1)
