import random

import pytest

from piece_table import (
    BufferKind,
    InvalidIndexError,
    Piece,
    PieceInvariantError,
    PieceTable,
    PieceTableError,
)
from piece_table.runtime import Settings
from piece_table.storage import StringSource


def make_table(text: str) -> PieceTable:
    return PieceTable.from_text(text, settings=Settings())


@pytest.mark.parametrize(
    "text", ["", "a", "HolaMatias.", "línea uno\nlínea dos\r\n", "emoji 😀 ok"]
)
def test_materialize_after_load_returns_source(text: str) -> None:
    table = make_table(text)

    assert table.materialize() == text
    assert len(table) == len(text)
    assert table.piece_count == (1 if text else 0)


def test_text_range_spans_pieces() -> None:
    table = make_table("HolaMatias.")
    table.insert(",", 4)
    table.insert(" ", 5)

    assert table.text_range(3, 7) == "a, M"
    assert table.text_range(0, len(table)) == table.materialize()
    assert table.text_range(5, 5) == ""


@pytest.mark.parametrize(("start", "end"), [(-1, 2), (2, 1), (0, 12)])
def test_text_range_rejects_bad_bounds(start: int, end: int) -> None:
    with pytest.raises(InvalidIndexError):
        make_table("HolaMatias.").text_range(start, end)


def test_pieces_snapshot_is_detached() -> None:
    table = make_table("abc")
    snapshot = table.pieces
    snapshot[0].length = 1

    assert table.materialize() == "abc"


def test_edits_match_plain_string_model() -> None:
    rng = random.Random(20240611)
    model = "The quick brown fox jumps over the lazy dog"
    table = make_table(model)

    for _ in range(400):
        if model and rng.random() < 0.45:
            at = rng.randrange(len(model))
            table.delete(at)
            model = model[:at] + model[at + 1 :]
        else:
            at = rng.randint(0, len(model))
            text = rng.choice(["a", "bc", " ", "xyz", "\n"])
            table.insert(text, at)
            model = model[:at] + text + model[at:]
        table.verify()

    assert table.materialize() == model
    assert len(table) == len(model)


def test_from_source_accepts_any_text_source() -> None:
    table = PieceTable.from_source(
        StringSource("abc"), name="scratch", settings=Settings()
    )

    table.insert("d", 3)

    assert table.name == "scratch"
    assert table.materialize() == "abcd"
    assert table.source.path is None


def test_out_of_bounds_piece_is_fatal() -> None:
    table = make_table("")
    table._pieces.insert(0, Piece(BufferKind.APPEND, 0, 5))

    with pytest.raises(PieceInvariantError):
        table.materialize()
    with pytest.raises(PieceInvariantError):
        table.text_range(0, 2)
    with pytest.raises(PieceInvariantError):
        table.verify()
    assert not isinstance(PieceInvariantError("x"), PieceTableError)
