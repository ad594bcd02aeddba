from __future__ import annotations

from pathlib import Path
from typing import List

from piece_table import PieceTable
from piece_table.adapters.textual import EditorView, PieceTableController, TextualUIHooks
from piece_table.runtime import Settings


def make_controller(
    table: PieceTable, views: List[EditorView], statuses: List[str], logs: List[str]
) -> PieceTableController:
    hooks = TextualUIHooks(
        update_view=views.append,
        update_status=statuses.append,
        log=logs.append,
    )
    return PieceTableController(table, hooks)


def test_typing_inserts_at_cursor() -> None:
    views: List[EditorView] = []
    statuses: List[str] = []
    logs: List[str] = []
    controller = make_controller(
        PieceTable.from_text("", settings=Settings()), views, statuses, logs
    )

    for char in "abc":
        controller.handle_key(char, text=char)

    assert views[-1].text == "abc"
    assert views[-1].cursor == 3
    assert views[-1].piece_count == 1
    assert views[-1].dirty is True
    assert statuses == ["insert"] * 3
    assert all(line.startswith("key ->") for line in logs)


def test_cursor_movement_and_deletes() -> None:
    views: List[EditorView] = []
    statuses: List[str] = []
    controller = make_controller(
        PieceTable.from_text("HolaMatias.", settings=Settings()), views, statuses, []
    )

    assert controller.handle_key("BACKSPACE") == "bof"
    for _ in range(4):
        controller.handle_key("RIGHT")
    controller.handle_key(",", text=",")
    controller.handle_key(" ", text=" ")
    assert views[-1].text == "Hola, Matias."

    controller.handle_key("BACKSPACE")
    controller.handle_key("DELETE")
    assert views[-1].text == "Hola,atias."

    controller.handle_key("END")
    assert controller.handle_key("DELETE") == "eof"
    controller.handle_key("HOME")
    assert views[-1].cursor == 0


def test_save_without_target_reports_failure() -> None:
    statuses: List[str] = []
    controller = make_controller(
        PieceTable.from_text("abc", settings=Settings()), [], statuses, []
    )
    controller.handle_key("x", text="x")

    controller.handle_key("SAVE")

    assert statuses[-1].startswith("save failed")
    assert controller.dirty is True


def test_save_persists_loaded_file(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("abc", encoding="utf-8")
    views: List[EditorView] = []
    statuses: List[str] = []
    controller = make_controller(
        PieceTable.from_path(path, settings=Settings()), views, statuses, []
    )

    controller.handle_key("END")
    controller.handle_key("ENTER")

    assert controller.handle_key("SAVE") == "saved 4 chars"
    assert path.read_text(encoding="utf-8") == "abc\n"
    assert views[-1].dirty is False
    assert views[-1].piece_count == 1


def test_source_change_keeps_last_view(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("abc", encoding="utf-8")
    views: List[EditorView] = []
    statuses: List[str] = []
    controller = make_controller(
        PieceTable.from_path(path, settings=Settings()), views, statuses, []
    )
    assert len(views) == 1

    path.write_text("abcd", encoding="utf-8")
    status = controller.handle_key("RIGHT")

    assert status == "move"
    assert controller.cursor == 1
    assert len(views) == 1
    assert views[-1].text == "abc"
    assert statuses[-1].startswith("source error:")
    assert "changed since load" in statuses[-1]
