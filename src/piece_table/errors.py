"""Exceptions raised by piece tables and their storage collaborators."""

from __future__ import annotations

from os import PathLike
from typing import Optional, Union

StoragePath = Union[str, "PathLike[str]"]


class PieceTableError(RuntimeError):
    """Base class for recoverable failures surfaced to callers."""


class InvalidIndexError(PieceTableError, IndexError):
    """Raised when an edit or read targets an offset outside the document."""

    def __init__(self, message: str, *, index: int, length: int) -> None:
        super().__init__(f"{message} (index={index}, length={length})")
        self.index = index
        self.length = length


class PieceInvariantError(AssertionError):
    """A piece descriptor no longer matches the buffers it points into.

    Indicates a bug in the edit engine rather than a caller error, so it is
    kept outside the ``PieceTableError`` hierarchy.
    """


class MissingPersistTargetError(PieceTableError):
    """Raised by ``persist()`` when no destination is known."""

    def __init__(self) -> None:
        super().__init__(
            "No persist target: pass an explicit destination or load from a file"
        )


class StorageError(PieceTableError):
    """Base class for failures of the storage collaborators."""

    def __init__(self, message: str, *, path: Optional[StoragePath] = None) -> None:
        super().__init__(message)
        self.path = path


class SourceNotFoundError(StorageError):
    """The source handle does not name an existing file."""


class SourceUnreadableError(StorageError):
    """The source exists but its content could not be read or decoded."""


class MetadataUnavailableError(StorageError):
    """The source's metadata (size, kind) could not be fetched."""


class SourceChangedError(StorageError):
    """A re-read returned content inconsistent with what was loaded."""


class DestinationUncreatableError(StorageError):
    """The persist destination (or its directory) cannot be created."""


class PermissionDeniedError(StorageError):
    """The persist destination refused the write."""


class WriteFailedError(StorageError):
    """Writing or committing the persisted text failed part way."""


__all__ = [
    "PieceTableError",
    "InvalidIndexError",
    "PieceInvariantError",
    "MissingPersistTargetError",
    "StorageError",
    "SourceNotFoundError",
    "SourceUnreadableError",
    "MetadataUnavailableError",
    "SourceChangedError",
    "DestinationUncreatableError",
    "PermissionDeniedError",
    "WriteFailedError",
]
