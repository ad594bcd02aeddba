"""Piece table text buffer for incremental editing."""

from .buffer import BufferKind, Piece, PieceTable
from .errors import (
    InvalidIndexError,
    MissingPersistTargetError,
    PieceInvariantError,
    PieceTableError,
    StorageError,
)

__all__ = [
    "BufferKind",
    "InvalidIndexError",
    "MissingPersistTargetError",
    "Piece",
    "PieceInvariantError",
    "PieceTable",
    "PieceTableError",
    "StorageError",
    "adapters",
    "buffer",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
