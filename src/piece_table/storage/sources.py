"""Read side of the storage boundary: where original content comes from."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

from piece_table.errors import (
    MetadataUnavailableError,
    SourceChangedError,
    SourceNotFoundError,
    SourceUnreadableError,
    StoragePath,
)
from piece_table.runtime import telemetry


class TextSource(Protocol):
    """Supplies the read-only content a piece table is built over."""

    @property
    def length(self) -> int:
        """Character count of the content as loaded."""
        ...

    @property
    def path(self) -> Optional[Path]:
        """Storage handle, or ``None`` for in-memory content."""
        ...

    def read(self) -> str:
        """Return the full current content."""
        ...


@dataclass(frozen=True, slots=True)
class StringSource:
    """In-memory content; never fails to read."""

    text: str = ""

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def path(self) -> Optional[Path]:
        return None

    def read(self) -> str:
        return self.text


@dataclass(slots=True)
class FileSource:
    """Content backed by a file on disk.

    Built through ``FileSource.load``. With ``reread`` on, every ``read``
    fetches the file again and rejects content whose length no longer matches
    the loaded length, since the pieces were cut against that length.
    """

    path: Path
    encoding: str
    length: int
    reread: bool = True
    _text: str = field(default="", repr=False)

    @classmethod
    def load(
        cls, path: StoragePath, *, encoding: str = "utf-8", reread: bool = True
    ) -> "FileSource":
        resolved = Path(path)
        with telemetry.span(
            "storage::load", component="storage", metadata={"path": resolved}
        ):
            _check_metadata(resolved)
            text = _read_file(resolved, encoding)
            telemetry.record_event(
                "storage.load",
                data={"path": resolved, "length": len(text), "encoding": encoding},
            )
            return cls(
                path=resolved,
                encoding=encoding,
                length=len(text),
                reread=reread,
                _text=text,
            )

    @classmethod
    def adopt(
        cls, path: StoragePath, text: str, *, encoding: str = "utf-8", reread: bool = True
    ) -> "FileSource":
        """Wrap a file whose content is already known (e.g. just written)."""

        return cls(
            path=Path(path), encoding=encoding, length=len(text), reread=reread, _text=text
        )

    def read(self) -> str:
        if not self.reread:
            return self._text
        _check_metadata(self.path)
        text = _read_file(self.path, self.encoding)
        if len(text) != self.length:
            raise SourceChangedError(
                f"{self.path} changed since load: expected {self.length} characters, "
                f"found {len(text)}",
                path=self.path,
            )
        return text


def _check_metadata(path: Path) -> os.stat_result:
    try:
        info = path.stat()
    except FileNotFoundError as exc:
        raise SourceNotFoundError(f"{path} does not exist", path=path) from exc
    except OSError as exc:
        raise MetadataUnavailableError(
            f"Cannot stat {path}: {exc.strerror or exc}", path=path
        ) from exc
    if not stat.S_ISREG(info.st_mode):
        raise SourceUnreadableError(f"{path} is not a regular file", path=path)
    return info


def _read_file(path: Path, encoding: str) -> str:
    # newline="" keeps line endings byte-for-byte so persist writes them back
    try:
        with open(path, "r", encoding=encoding, newline="") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise SourceNotFoundError(f"{path} does not exist", path=path) from exc
    except UnicodeDecodeError as exc:
        raise SourceUnreadableError(
            f"{path} is not valid {encoding}: {exc.reason}", path=path
        ) from exc
    except OSError as exc:
        raise SourceUnreadableError(
            f"Cannot read {path}: {exc.strerror or exc}", path=path
        ) from exc


__all__ = ["TextSource", "StringSource", "FileSource"]
