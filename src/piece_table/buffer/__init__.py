"""Piece table data structures: buffers, pieces and the edit engine."""

from .piece import BufferKind, Piece
from .sequence import Location, PieceSequence
from .store import BufferStore
from .table import PieceTable
from .validation import ensure_delete_index, ensure_insert_index, ensure_range

__all__ = [
    "BufferKind",
    "BufferStore",
    "Location",
    "Piece",
    "PieceSequence",
    "PieceTable",
    "ensure_delete_index",
    "ensure_insert_index",
    "ensure_range",
]
