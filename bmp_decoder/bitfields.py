"""Channel extraction for bitfield-packed 16 and 32 bit pixels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


def trailing_zeros(mask: int) -> int:
    if mask == 0:
        return 0
    return (mask & -mask).bit_length() - 1


@dataclass(frozen=True)
class Channel:
    """One color channel described by a bit mask.

    ``scale`` maps the masked bits linearly onto 0..255; a channel with an
    empty mask always yields ``default``.
    """

    mask: int
    shift: int
    max_value: int
    default: int = 0

    @classmethod
    def from_mask(cls, mask: int, default: int = 0) -> "Channel":
        mask &= 0xFFFFFFFF
        shift = trailing_zeros(mask)
        return cls(mask=mask, shift=shift, max_value=mask >> shift, default=default)

    def scale(self, raw: int) -> int:
        if self.max_value == 0:
            return self.default
        return (255 * ((raw & self.mask) >> self.shift)) // self.max_value


@dataclass(frozen=True)
class Channels:
    red: Channel
    green: Channel
    blue: Channel
    alpha: Channel

    @classmethod
    def from_mask(cls, mask) -> "Channels":
        """Build the four channels from a :class:`~bmp_decoder.headers.BitfieldMask`."""

        return cls(
            red=Channel.from_mask(mask.red),
            green=Channel.from_mask(mask.green),
            blue=Channel.from_mask(mask.blue),
            alpha=Channel.from_mask(mask.alpha, default=255),
        )

    def unpack(self, raw: int) -> Tuple[int, int, int, int]:
        return (
            self.red.scale(raw),
            self.green.scale(raw),
            self.blue.scale(raw),
            self.alpha.scale(raw),
        )
