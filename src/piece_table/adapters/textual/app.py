"""Executable Textual app that edits a file through a piece table."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the editor is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use piece_table.adapters.textual.app"
    ) from exc

from piece_table.buffer import PieceTable
from piece_table.runtime import telemetry

from .controller import EditorView, PieceTableController, TextualUIHooks

_SPECIAL_KEYS = {
    "left": "LEFT",
    "right": "RIGHT",
    "home": "HOME",
    "end": "END",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "enter": "ENTER",
    "tab": "TAB",
    "ctrl+s": "SAVE",
}


def render_view(view: EditorView) -> Text:
    """Render text with the cursor cell shown in reverse video."""

    rendered = Text(view.text[: view.cursor])
    under = view.text[view.cursor : view.cursor + 1]
    if under in ("", "\n"):
        rendered.append(" ", style="reverse")
        rendered.append(under)
    else:
        rendered.append(under, style="reverse")
    rendered.append(view.text[view.cursor + 1 :])
    return rendered


class PieceTableApp(App[None]):
    """Minimal editor embedding a piece table."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, table: PieceTable) -> None:
        super().__init__()
        self.table = table
        self.controller: PieceTableController | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("piece_table.editor")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.table.name
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self._logger.debug,
        )
        self.controller = PieceTableController(self.table, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.controller or event.key == "ctrl+q":
            return
        key = _SPECIAL_KEYS.get(event.key)
        if key is not None:
            self.controller.handle_key(key)
        elif event.is_printable and event.character:
            self.controller.handle_key(event.key, text=event.character)
        else:
            return
        event.stop()

    def _update_view(self, view: EditorView) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_view(view))
        self.sub_title = f"{'*' if view.dirty else ''}{view.piece_count} pieces"

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a file through a piece table.")
    parser.add_argument("path", help="File to open; saved in place with ctrl+s")
    parser.add_argument(
        "--encoding",
        default=os.environ.get("PIECE_TABLE_ENCODING", "utf-8"),
        help="Text encoding of the file (default: utf-8)",
    )
    parser.add_argument("--name", default=None, help="Display name for the buffer")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    table = PieceTable.from_path(args.path, encoding=args.encoding, name=args.name)
    PieceTableApp(table).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
