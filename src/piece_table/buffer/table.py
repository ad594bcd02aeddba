"""Piece table façade: load, edit, materialize and persist a text buffer."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from piece_table.errors import (
    MissingPersistTargetError,
    PieceInvariantError,
    StoragePath,
)
from piece_table.runtime import telemetry
from piece_table.runtime.settings import Settings
from piece_table.storage import FileSource, StringSource, TextSource, write_text_atomic

from .piece import BufferKind, Piece
from .sequence import PieceSequence
from .store import BufferStore
from .validation import ensure_delete_index, ensure_insert_index, ensure_range


class PieceTable:
    """Editable text kept as pieces over an original and an append buffer.

    Not thread safe: callers sharing an instance must serialize every
    operation on it.
    """

    def __init__(
        self,
        source: Optional[TextSource] = None,
        *,
        name: str = "default",
        settings: Optional[Settings] = None,
    ) -> None:
        self.name = name
        self.settings = settings or Settings.from_env()
        self._store = BufferStore(source)
        self._pieces = PieceSequence(_initial_pieces(self._store.original_length))

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "default", settings: Optional[Settings] = None
    ) -> "PieceTable":
        return cls(StringSource(text), name=name, settings=settings)

    @classmethod
    def from_source(
        cls,
        source: TextSource,
        *,
        name: str = "default",
        settings: Optional[Settings] = None,
    ) -> "PieceTable":
        return cls(source, name=name, settings=settings)

    @classmethod
    def from_path(
        cls,
        path: StoragePath,
        *,
        encoding: Optional[str] = None,
        name: Optional[str] = None,
        settings: Optional[Settings] = None,
    ) -> "PieceTable":
        settings = settings or Settings.from_env()
        source = FileSource.load(
            path,
            encoding=encoding or settings.encoding,
            reread=settings.reread_source,
        )
        return cls(source, name=name or source.path.name, settings=settings)

    # queries

    def __len__(self) -> int:
        return self._pieces.total_length()

    def __repr__(self) -> str:
        return (
            f"PieceTable(name={self.name!r}, length={len(self)}, "
            f"pieces={self.piece_count})"
        )

    def total_length(self) -> int:
        return self._pieces.total_length()

    @property
    def piece_count(self) -> int:
        return len(self._pieces)

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return self._pieces.snapshot()

    @property
    def source(self) -> TextSource:
        return self._store.source

    @property
    def append_buffer(self) -> str:
        return self._store.appended_text()

    # edits

    def insert(self, text: str, at: int) -> None:
        """Insert ``text`` so that it starts at character offset ``at``."""

        if not text:
            return
        ensure_insert_index(at, len(self))
        with telemetry.span(
            "piece_table::insert",
            component="piece_table",
            metadata={"table": self.name, "at": at, "length": len(text)},
        ) as handle:
            append_offset = self._store.append_length
            piece_index, offset = self._pieces.locate(at)
            if offset == 0 and self._extends_last_insert(piece_index, append_offset):
                self._pieces.grow(piece_index - 1, len(text))
                handle.add_metadata("coalesced", True)
            else:
                slot = self._pieces.split(piece_index, offset)
                self._pieces.insert(
                    slot, Piece(BufferKind.APPEND, append_offset, len(text))
                )
            self._store.append(text)

    def delete(self, at: int) -> None:
        """Remove the single character at offset ``at``."""

        ensure_delete_index(at, len(self))
        with telemetry.span(
            "piece_table::delete",
            component="piece_table",
            metadata={"table": self.name, "at": at},
        ):
            self._delete_at(at)

    def delete_range(self, start: int, end: int) -> None:
        """Remove ``[start, end)``; the range is checked before any removal."""

        ensure_range(start, end, len(self))
        if start == end:
            return
        with telemetry.span(
            "piece_table::delete_range",
            component="piece_table",
            metadata={"table": self.name, "start": start, "end": end},
        ):
            for _ in range(end - start):
                self._delete_at(start)

    def _extends_last_insert(self, piece_index: int, append_offset: int) -> bool:
        if not self.settings.coalesce_inserts or piece_index == 0:
            return False
        previous = self._pieces[piece_index - 1]
        return previous.buffer is BufferKind.APPEND and previous.end == append_offset

    def _delete_at(self, at: int) -> None:
        piece_index, offset = self._pieces.locate_char(at)
        piece = self._pieces[piece_index]
        if offset == 0:
            self._pieces.trim_front(piece_index)
            if piece.length == 0:
                self._pieces.remove(piece_index)
                # neighbours may now be contiguous slices of one buffer
                self._pieces.merge_with_next(piece_index - 1)
        elif offset == piece.length - 1:
            self._pieces.trim_back(piece_index)
        else:
            right = self._pieces.split(piece_index, offset)
            self._pieces.trim_front(right)

    # reads

    def materialize(self) -> str:
        """Concatenate every piece's span into the current logical text."""

        with telemetry.span(
            "piece_table::materialize", metadata={"table": self.name}
        ):
            self._store.refresh()
            return "".join(
                self._store.span(piece.buffer, piece.start, piece.length)
                for piece in self._pieces
            )

    def text_range(self, start: int, end: int) -> str:
        """Return ``[start, end)`` reading only the pieces that overlap it."""

        ensure_range(start, end, len(self))
        parts: List[str] = []
        running = 0
        with telemetry.span(
            "piece_table::text_range",
            metadata={"table": self.name, "start": start, "end": end},
        ):
            for piece in self._pieces:
                if running >= end:
                    break
                piece_end = running + piece.length
                if piece_end > start:
                    lo = max(start, running) - running
                    hi = min(end, piece_end) - running
                    parts.append(
                        self._store.span(piece.buffer, piece.start + lo, hi - lo)
                    )
                running = piece_end
        return "".join(parts)

    # persistence

    def persist(self, target: Optional[StoragePath] = None) -> int:
        """Write the materialized text and compact the table against it.

        Without ``target`` the file the table was loaded from is rewritten.
        The table is reset only after the write has succeeded.
        """

        destination = target if target is not None else self._store.source.path
        if destination is None:
            raise MissingPersistTargetError()
        encoding = getattr(self._store.source, "encoding", self.settings.encoding)

        with telemetry.span(
            "piece_table::persist",
            component="piece_table",
            metadata={"table": self.name, "target": destination},
        ):
            text = self.materialize()
            pieces_before = self.piece_count
            written = write_text_atomic(destination, text, encoding=encoding)
            source = FileSource.adopt(
                Path(destination),
                text,
                encoding=encoding,
                reread=self.settings.reread_source,
            )
            self._store.reset(source, content=text)
            self._pieces.replace_all(_initial_pieces(len(text)))
            telemetry.record_event(
                "piece_table.persist",
                data={
                    "table": self.name,
                    "target": destination,
                    "length": written,
                    "pieces_before": pieces_before,
                },
            )
            return written

    def verify(self) -> None:
        """Raise ``PieceInvariantError`` if any piece is empty or out of bounds."""

        total = 0
        for index, piece in enumerate(self._pieces):
            if piece.length <= 0:
                raise PieceInvariantError(f"Piece {index} is empty: {piece!r}")
            limit = (
                self._store.original_length
                if piece.buffer is BufferKind.READ_ONLY
                else self._store.append_length
            )
            if piece.start < 0 or piece.end > limit:
                raise PieceInvariantError(
                    f"Piece {index} {piece!r} exceeds its buffer of length {limit}"
                )
            total += piece.length
        if total != len(self):
            raise PieceInvariantError(
                f"Cached length {len(self)} differs from piece sum {total}"
            )


def _initial_pieces(length: int) -> List[Piece]:
    if length == 0:
        return []
    return [Piece(BufferKind.READ_ONLY, 0, length)]


__all__ = ["PieceTable"]
