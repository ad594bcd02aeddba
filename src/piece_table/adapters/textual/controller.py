"""UI-agnostic controller mapping key presses onto piece table edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from piece_table.buffer import PieceTable
from piece_table.errors import PieceTableError, StorageError
from piece_table.runtime import telemetry


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorView:
    """Snapshot handed to the host after every key."""

    text: str
    cursor: int
    piece_count: int
    dirty: bool


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update host widgets."""

    update_view: Callable[[EditorView], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class PieceTableController:
    """Owns a cursor over a ``PieceTable`` and applies key presses to it."""

    def __init__(self, table: PieceTable, hooks: TextualUIHooks) -> None:
        self.table = table
        self.hooks = hooks
        self.cursor = 0
        self.dirty = False
        self._actions: Dict[str, Callable[[], str]] = {
            "LEFT": self._move_left,
            "RIGHT": self._move_right,
            "HOME": self._move_home,
            "END": self._move_end,
            "BACKSPACE": self._backspace,
            "DELETE": self._delete_forward,
            "ENTER": lambda: self._insert("\n"),
            "TAB": lambda: self._insert("\t"),
            "SAVE": self.save,
        }
        self._refresh()

    def handle_key(self, key: str, *, text: Optional[str] = None) -> str:
        """Apply one key; printable ``text`` is inserted at the cursor."""

        action = self._actions.get(key.upper())
        if action is not None:
            status = action()
        elif text:
            status = self._insert(text)
        else:
            status = "ignored"
        self.hooks.log(
            f"key -> {key!r} status={status} cursor={self.cursor} "
            f"pieces={self.table.piece_count}"
        )
        self.hooks.update_status(status)
        self._refresh()
        return status

    def save(self, target: Optional[str] = None) -> str:
        try:
            written = self.table.persist(target)
        except PieceTableError as exc:
            telemetry.record_event(
                "editor.save_failed", level="warning", data={"reason": str(exc)}
            )
            return f"save failed: {exc}"
        self.dirty = False
        return f"saved {written} chars"

    def _insert(self, text: str) -> str:
        self.table.insert(text, self.cursor)
        self.cursor += len(text)
        self.dirty = True
        return "insert"

    def _backspace(self) -> str:
        if self.cursor == 0:
            return "bof"
        self.cursor -= 1
        self.table.delete(self.cursor)
        self.dirty = True
        return "delete"

    def _delete_forward(self) -> str:
        if self.cursor >= len(self.table):
            return "eof"
        self.table.delete(self.cursor)
        self.dirty = True
        return "delete"

    def _move_left(self) -> str:
        self.cursor = max(0, self.cursor - 1)
        return "move"

    def _move_right(self) -> str:
        self.cursor = min(len(self.table), self.cursor + 1)
        return "move"

    def _move_home(self) -> str:
        self.cursor = 0
        return "move"

    def _move_end(self) -> str:
        self.cursor = len(self.table)
        return "move"

    def _refresh(self) -> None:
        # on a source failure the host keeps showing the last good view
        try:
            text = self.table.materialize()
        except StorageError as exc:
            telemetry.record_event(
                "editor.refresh_failed", level="warning", data={"reason": str(exc)}
            )
            self.hooks.update_status(f"source error: {exc}")
            return
        self.hooks.update_view(
            EditorView(
                text=text,
                cursor=self.cursor,
                piece_count=self.table.piece_count,
                dirty=self.dirty,
            )
        )


__all__ = ["EditorView", "PieceTableController", "TextualUIHooks"]
