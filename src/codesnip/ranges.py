"""Byte span shared by syntax captures and extracted chunks."""
from __future__ import annotations

from typing import NamedTuple


class ByteRange(NamedTuple):
    """Half-open byte span ``[start, end)`` into the UTF-8 encoded source."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def slice(self, data: bytes) -> bytes:
        return data[self.start : self.end]
