"""Write side of the storage boundary: persisting materialized text."""

from __future__ import annotations

import os
import stat
import tempfile
from contextlib import suppress
from pathlib import Path

from piece_table.errors import (
    DestinationUncreatableError,
    PermissionDeniedError,
    StoragePath,
    WriteFailedError,
)
from piece_table.runtime import telemetry


def write_text_atomic(path: StoragePath, text: str, *, encoding: str = "utf-8") -> int:
    """Replace ``path`` with ``text`` and return the characters written.

    The text goes to a temporary file in the destination directory, is synced,
    then renamed over ``path``; readers see the old or the new content only.
    An existing destination keeps its permission bits.
    """

    target = Path(path)
    directory = target.parent
    if not directory.is_dir():
        raise DestinationUncreatableError(
            f"Directory {directory} does not exist", path=target
        )
    if target.is_dir():
        raise DestinationUncreatableError(f"{target} is a directory", path=target)

    with telemetry.span(
        "storage::write", component="storage", metadata={"path": target}
    ) as handle:
        try:
            fd, temp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{target.name}.", suffix=".tmp"
            )
        except PermissionError as exc:
            raise PermissionDeniedError(
                f"Cannot create files in {directory}", path=target
            ) from exc
        except OSError as exc:
            raise DestinationUncreatableError(
                f"Cannot create a temporary file in {directory}: {exc.strerror or exc}",
                path=target,
            ) from exc

        try:
            with os.fdopen(fd, "w", encoding=encoding, newline="") as stream:
                stream.write(text)
                stream.flush()
                os.fsync(stream.fileno())
            _copy_mode(target, temp_name)
            os.replace(temp_name, target)
        except PermissionError as exc:
            _discard(temp_name)
            raise PermissionDeniedError(
                f"Permission denied writing {target}", path=target
            ) from exc
        except (OSError, UnicodeEncodeError) as exc:
            _discard(temp_name)
            raise WriteFailedError(f"Writing {target} failed: {exc}", path=target) from exc

        handle.add_metadata("length", len(text))
        return len(text)


def _copy_mode(target: Path, temp_name: str) -> None:
    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        return
    os.chmod(temp_name, mode)


def _discard(temp_name: str) -> None:
    with suppress(FileNotFoundError):
        os.unlink(temp_name)


__all__ = ["write_text_atomic"]
