"""Little-endian primitive reads over a sequential byte source."""

from __future__ import annotations

import struct
from typing import BinaryIO

from .errors import TruncatedDataError

_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")

# Upper bound on a single read from the source.
_CHUNK_SIZE = 64 * 1024


class ByteReader:
    """Read fixed-width integers from ``source`` strictly in file order.

    ``source`` only needs a blocking ``read(n)`` method. Short reads are
    never retried; they raise :class:`TruncatedDataError`.
    """

    def __init__(self, source: BinaryIO) -> None:
        self.source = source
        self.position = 0

    def read_exact(self, size: int) -> bytes:
        if size <= 0:
            return b""
        chunks = []
        received = 0
        while received < size:
            want = min(size - received, _CHUNK_SIZE)
            data = self.source.read(want) or b""
            chunks.append(data)
            received += len(data)
            if len(data) < want:
                raise TruncatedDataError(size, received)
        self.position += size
        return b"".join(chunks)

    def skip(self, size: int) -> None:
        """Discard ``size`` bytes without holding them all in memory."""
        skipped = 0
        while skipped < size:
            want = min(size - skipped, _CHUNK_SIZE)
            data = self.source.read(want) or b""
            skipped += len(data)
            if len(data) < want:
                raise TruncatedDataError(size, skipped)
        self.position += max(size, 0)

    def u8(self) -> int:
        return self.read_exact(1)[0]

    def u16(self) -> int:
        return _U16.unpack(self.read_exact(2))[0]

    def i16(self) -> int:
        return _I16.unpack(self.read_exact(2))[0]

    def u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def i32(self) -> int:
        return _I32.unpack(self.read_exact(4))[0]
