"""Ordered piece list and the position resolver that walks it."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from piece_table.errors import InvalidIndexError, PieceInvariantError

from .piece import Piece

Location = Tuple[int, int]  # (piece index, offset within piece)


class PieceSequence:
    """Pieces in document order; concatenated they are the logical text.

    Lookups are linear in the number of pieces. The total length is cached
    and kept current by every mutation that changes it.
    """

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        self._pieces: List[Piece] = [piece for piece in pieces if piece.length > 0]
        self._total = sum(piece.length for piece in self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    def __getitem__(self, index: int) -> Piece:
        return self._pieces[index]

    def total_length(self) -> int:
        return self._total

    def snapshot(self) -> tuple[Piece, ...]:
        return tuple(piece.copy() for piece in self._pieces)

    def locate(self, index: int) -> Location:
        """Resolve a global index to ``(piece_index, offset)``.

        Index ``0`` and any index at or past the end are insertion points:
        ``0`` gives ``(0, 0)`` even with no pieces, the end gives
        ``(len(self), 0)``.
        """

        if index < 0:
            raise InvalidIndexError(
                "Negative index", index=index, length=self._total
            )
        if index >= self._total:
            return len(self._pieces), 0
        running = 0
        for piece_index, piece in enumerate(self._pieces):
            if piece.length <= 0:
                raise PieceInvariantError(
                    f"Piece {piece_index} has non-positive length {piece.length}"
                )
            if index < running + piece.length:
                return piece_index, index - running
            running += piece.length
        raise PieceInvariantError(
            f"Cached length {self._total} exceeds summed piece lengths {running}"
        )

    def locate_char(self, index: int) -> Location:
        """Resolve the index of an existing character; the end is rejected."""

        if not 0 <= index < self._total:
            raise InvalidIndexError(
                "No character at index", index=index, length=self._total
            )
        return self.locate(index)

    def is_border(self, index: int) -> bool:
        """True when ``index`` needs no split to become an insertion point."""

        return self.locate(index)[1] == 0

    def split(self, piece_index: int, offset: int) -> int:
        """Cut a piece at ``offset`` and return where a new piece would go.

        Offsets at either edge leave the piece whole.
        """

        if piece_index >= len(self._pieces):
            return len(self._pieces)
        piece = self._pieces[piece_index]
        if offset <= 0:
            return piece_index
        if offset >= piece.length:
            return piece_index + 1
        right = Piece(piece.buffer, piece.start + offset, piece.length - offset)
        piece.length = offset
        self._pieces.insert(piece_index + 1, right)
        return piece_index + 1

    def insert(self, piece_index: int, piece: Piece) -> None:
        if piece.length <= 0:
            raise PieceInvariantError("Refusing to insert an empty piece")
        self._pieces.insert(piece_index, piece)
        self._total += piece.length

    def grow(self, piece_index: int, amount: int) -> None:
        self._pieces[piece_index].length += amount
        self._total += amount

    def trim_front(self, piece_index: int) -> Piece:
        """Drop the first character of a piece."""

        piece = self._pieces[piece_index]
        piece.start += 1
        piece.length -= 1
        self._total -= 1
        return piece

    def trim_back(self, piece_index: int) -> Piece:
        """Drop the last character of a piece."""

        piece = self._pieces[piece_index]
        piece.length -= 1
        self._total -= 1
        return piece

    def remove(self, piece_index: int) -> Piece:
        piece = self._pieces.pop(piece_index)
        self._total -= piece.length
        return piece

    def merge_with_next(self, piece_index: int) -> bool:
        """Fold piece ``piece_index + 1`` into ``piece_index`` if contiguous."""

        if piece_index < 0 or piece_index + 1 >= len(self._pieces):
            return False
        left, right = self._pieces[piece_index], self._pieces[piece_index + 1]
        if not left.joins(right):
            return False
        left.length += right.length
        del self._pieces[piece_index + 1]
        return True

    def replace_all(self, pieces: Iterable[Piece]) -> None:
        self._pieces = [piece for piece in pieces if piece.length > 0]
        self._total = sum(piece.length for piece in self._pieces)


__all__ = ["Location", "PieceSequence"]
