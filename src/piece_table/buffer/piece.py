"""Piece descriptors and the buffer tag they carry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BufferKind(str, Enum):
    """Which of the two buffers a piece slices."""

    READ_ONLY = "read_only"
    APPEND = "append"


@dataclass(slots=True)
class Piece:
    """Half-open span ``[start, start + length)`` of one buffer.

    Pieces are mutated in place by the edit engine; use ``copy`` when handing
    one outside the table.
    """

    buffer: BufferKind
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def copy(self) -> "Piece":
        return Piece(self.buffer, self.start, self.length)

    def joins(self, other: "Piece") -> bool:
        """True when ``other`` continues this piece in the same buffer."""

        return self.buffer is other.buffer and self.end == other.start
