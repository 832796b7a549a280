"""Indexed color tables."""

from __future__ import annotations

from typing import Iterator, List, NamedTuple, Sequence

from .errors import PaletteIndexOutOfRangeError
from .reader import ByteReader


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


class Palette:
    """Ordered color lookup built from raw (B, G, R[, X]) palette entries."""

    def __init__(self, colors: Sequence[Color] = ()) -> None:
        self._colors: List[Color] = list(colors)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        entry_size: int,
        count: int,
        *,
        use_alpha: bool = False,
    ) -> "Palette":
        if entry_size not in (3, 4):
            raise ValueError(f"Palette entries are 3 or 4 bytes, not {entry_size}")
        if len(data) < entry_size * count:
            raise ValueError("Palette data shorter than the declared color count")

        colors = []
        for idx in range(count):
            offset = idx * entry_size
            b, g, r = data[offset], data[offset + 1], data[offset + 2]
            a = data[offset + 3] if use_alpha and entry_size == 4 else 255
            colors.append(Color(r, g, b, a))
        return cls(colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self._colors)

    def __getitem__(self, index: int) -> Color:
        if index < 0 or index >= len(self._colors):
            raise PaletteIndexOutOfRangeError(index, len(self._colors))
        return self._colors[index]

    def __repr__(self) -> str:
        return f"Palette({len(self._colors)} colors)"


def read_palette(reader: ByteReader, count: int, entry_size: int, *, use_alpha: bool = False) -> Palette:
    """Read ``count`` entries of ``entry_size`` bytes from ``reader``."""

    if count <= 0:
        return Palette()
    data = reader.read_exact(count * entry_size)
    return Palette.from_bytes(data, entry_size, count, use_alpha=use_alpha)
