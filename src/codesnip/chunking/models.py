"""Value types produced by the chunk extractor."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, Tuple

from ..ranges import ByteRange


@dataclass(frozen=True)
class Chunk:
    """
    A self-contained, embeddable span of a source file.

    ``content`` holds the formatted prompt rather than the raw source slice,
    while ``range`` points back at the bytes the chunk was derived from so an
    indexed chunk can later be checked for staleness.
    """

    name: str
    range: ByteRange
    content: str
    embedding: Tuple[float, ...] = ()

    def with_embedding(self, vector: Sequence[float]) -> "Chunk":
        """Return a copy of the chunk carrying the given embedding vector."""
        return replace(self, embedding=tuple(float(value) for value in vector))


__all__ = ["ByteRange", "Chunk"]
