"""Sequential byte reading with line/column tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import BinaryIO

LINE_FEED = 0x0A


@dataclass(frozen=True)
class ScanPosition:
    """Zero-based line and column of a byte in the source."""

    line: int = 0
    column: int = 0

    def advance(self, byte: int) -> ScanPosition:
        """Position of the byte that follows *byte*."""
        if byte == LINE_FEED:
            return ScanPosition(self.line + 1, 0)
        return ScanPosition(self.line, self.column + 1)


def iter_bytes(stream: BinaryIO) -> Iterator[tuple[int, ScanPosition]]:
    """Rewind *stream* and yield each byte with its scan position.

    Reads one byte at a time until a read returns nothing.
    """
    stream.seek(0)
    position = ScanPosition()
    while chunk := stream.read(1):
        byte = chunk[0]
        yield byte, position
        position = position.advance(byte)
