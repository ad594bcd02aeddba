"""Index guards shared by the edit operations."""

from __future__ import annotations

from piece_table.errors import InvalidIndexError


def ensure_insert_index(index: int, length: int) -> int:
    if index < 0 or index > length:
        raise InvalidIndexError("Insert position out of range", index=index, length=length)
    return index


def ensure_delete_index(index: int, length: int) -> int:
    if length == 0:
        raise InvalidIndexError("Cannot delete from empty text", index=index, length=length)
    if index < 0 or index >= length:
        raise InvalidIndexError("Delete position out of range", index=index, length=length)
    return index


def ensure_range(start: int, end: int, length: int) -> tuple[int, int]:
    if start < 0 or end > length or start > end:
        raise InvalidIndexError(
            f"Range [{start}, {end}) out of bounds", index=start, length=length
        )
    return start, end
