from __future__ import annotations

import pytest

from bmp_decoder.bitfields import Channel, Channels, trailing_zeros
from bmp_decoder.headers import BitfieldMask


@pytest.mark.parametrize(
    "mask, expected",
    [(0, 0), (0x1F, 0), (0x03E0, 5), (0x7C00, 10), (0xFF000000, 24), (0x80000000, 31)],
)
def test_trailing_zeros(mask, expected):
    assert trailing_zeros(mask) == expected


def test_channel_scale_is_exact_at_extremes():
    channel = Channel.from_mask(0x1F)
    assert channel.shift == 0
    assert channel.max_value == 0x1F
    assert channel.scale(0x1F) == 255
    assert channel.scale(0) == 0


def test_channel_scale_rounds_down():
    channel = Channel.from_mask(0x03E0)
    # 16 / 31 of full scale
    assert channel.scale(16 << 5) == (255 * 16) // 31


def test_empty_mask_yields_default():
    assert Channel.from_mask(0).scale(0xFFFFFFFF) == 0
    assert Channel.from_mask(0, default=255).scale(0) == 255


def test_channels_default_to_opaque_without_alpha_mask():
    channels = Channels.from_mask(BitfieldMask.for_bit_depth(16))
    assert channels.unpack(0xFFFF) == (255, 255, 255, 255)
    assert channels.unpack(0x7C00) == (255, 0, 0, 255)
    assert channels.unpack(0x0000) == (0, 0, 0, 255)


def test_channels_with_alpha_mask():
    channels = Channels.from_mask(BitfieldMask(red=0x00FF0000, green=0x0000FF00, blue=0x000000FF, alpha=0xFF000000))
    assert channels.unpack(0x80102030) == (0x10, 0x20, 0x30, 0x80)


def test_rgb565_layout():
    channels = Channels.from_mask(BitfieldMask(red=0xF800, green=0x07E0, blue=0x001F))
    assert channels.unpack(0x07E0) == (0, 255, 0, 255)
    assert channels.unpack(0xF81F) == (255, 0, 255, 255)
