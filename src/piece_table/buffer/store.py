"""Storage for the read-only original and the append-only edit buffer."""

from __future__ import annotations

from typing import List, Optional

from piece_table.errors import PieceInvariantError
from piece_table.storage import StringSource, TextSource

from .piece import BufferKind


class BufferStore:
    """Owns the two buffers pieces point into.

    The original content comes from a ``TextSource``. Inserted text is kept as
    a list of chunks and joined lazily, so appending is constant time and the
    joined string is rebuilt only when a read needs it.
    """

    def __init__(self, source: Optional[TextSource] = None) -> None:
        self._source: TextSource = source or StringSource()
        self._original: str = self._source.read()
        self._chunks: List[str] = []
        self._append_length = 0
        self._joined: str = ""

    @property
    def source(self) -> TextSource:
        return self._source

    @property
    def original_length(self) -> int:
        return self._source.length

    @property
    def append_length(self) -> int:
        return self._append_length

    def append(self, text: str) -> int:
        """Append ``text`` and return the offset it starts at."""

        offset = self._append_length
        self._chunks.append(text)
        self._append_length += len(text)
        return offset

    def appended_text(self) -> str:
        if len(self._chunks) > 1:
            self._joined = "".join(self._chunks)
            self._chunks = [self._joined]
        elif self._chunks:
            self._joined = self._chunks[0]
        return self._joined

    def refresh(self) -> str:
        """Fetch the original content again from its source."""

        self._original = self._source.read()
        return self._original

    def read_span(self, start: int, length: int) -> str:
        return _slice(self._original, BufferKind.READ_ONLY, start, length)

    def append_span(self, start: int, length: int) -> str:
        return _slice(self.appended_text(), BufferKind.APPEND, start, length)

    def span(self, kind: BufferKind, start: int, length: int) -> str:
        if kind is BufferKind.READ_ONLY:
            return self.read_span(start, length)
        if kind is BufferKind.APPEND:
            return self.append_span(start, length)
        raise PieceInvariantError(f"Unknown buffer kind {kind!r}")

    def reset(self, source: TextSource, *, content: Optional[str] = None) -> None:
        """Adopt ``source`` as the new original and drop all appended text."""

        self._source = source
        self._original = source.read() if content is None else content
        self._chunks = []
        self._append_length = 0
        self._joined = ""


def _slice(data: str, kind: BufferKind, start: int, length: int) -> str:
    if start < 0 or length < 0 or start + length > len(data):
        raise PieceInvariantError(
            f"Span [{start}, {start + length}) outside {kind.value} buffer "
            f"of length {len(data)}"
        )
    return data[start : start + length]


__all__ = ["BufferStore"]
