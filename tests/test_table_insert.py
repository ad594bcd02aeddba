import pytest

from piece_table import BufferKind, InvalidIndexError, Piece, PieceTable
from piece_table.runtime import Settings

RO = BufferKind.READ_ONLY
APPEND = BufferKind.APPEND


def make_table(text: str = "example text", **settings: object) -> PieceTable:
    return PieceTable.from_text(text, settings=Settings(**settings))


def test_insert_punctuation_into_greeting() -> None:
    table = make_table("HolaMatias.")
    assert len(table) == 11

    table.insert(",", 4)
    assert table.materialize() == "Hola,Matias."

    table.insert(" ", 5)
    assert table.materialize() == "Hola, Matias."
    assert table.piece_count == 3
    table.verify()


def test_insert_mid_piece_splits_around_new_piece() -> None:
    table = make_table("Buenos dias, que buen clima hoy")

    table.insert(" Matias", 11)

    assert table.materialize() == "Buenos dias Matias, que buen clima hoy"
    assert table.piece_count == 3
    assert table.pieces[1] == Piece(APPEND, 0, 7)
    assert table.pieces[0].buffer is RO
    assert table.pieces[2].buffer is RO


def test_insert_into_empty_table() -> None:
    table = make_table("")
    assert table.piece_count == 0

    table.insert("x", 0)

    assert table.materialize() == "x"
    assert table.pieces == (Piece(APPEND, 0, 1),)


def test_insert_start_then_coalesce() -> None:
    table = make_table()

    table.insert("h", 0)
    assert table.materialize() == "hexample text"

    table.insert("amedi ", 1)
    assert table.materialize() == "hamedi example text"
    assert table.piece_count == 2


def test_insert_at_end_coalesces() -> None:
    table = make_table("abc")

    table.insert("d", 3)
    table.insert("e", 4)

    assert table.materialize() == "abcde"
    assert table.pieces == (Piece(RO, 0, 3), Piece(APPEND, 0, 2))


def test_insert_middle_of_append_piece() -> None:
    table = make_table()

    table.insert("h ", 8)
    assert table.materialize() == "example h text"

    table.insert("amedi", 9)
    assert table.materialize() == "example hamedi text"
    assert table.append_buffer == "h amedi"
    table.verify()


def test_typing_keeps_piece_count_constant() -> None:
    table = make_table("hello world")
    cursor = 5

    for char in ", dear":
        table.insert(char, cursor)
        cursor += 1

    assert table.materialize() == "hello, dear world"
    assert table.piece_count == 3


def test_typing_without_coalescing_adds_a_piece_per_insert() -> None:
    table = make_table("ab", coalesce_inserts=False)

    for offset, char in enumerate("xyz", start=2):
        table.insert(char, offset)

    assert table.materialize() == "abxyz"
    assert table.piece_count == 4


def test_no_coalesce_once_append_tail_moved_on() -> None:
    table = make_table("abcdef")

    table.insert("X", 1)
    table.insert("Y", 4)
    table.insert("Z", 2)

    assert table.materialize() == "aXZbcYdef"
    assert table.piece_count == 6
    table.verify()


@pytest.mark.parametrize("index", [-1, 13])
def test_insert_out_of_range_leaves_table_unchanged(index: int) -> None:
    table = make_table()
    before = table.pieces

    with pytest.raises(InvalidIndexError) as info:
        table.insert("x", index)

    assert info.value.index == index
    assert info.value.length == 12
    assert table.pieces == before
    assert table.append_buffer == ""


def test_insert_empty_text_is_noop() -> None:
    table = make_table()

    table.insert("", 99)

    assert table.materialize() == "example text"
    assert table.piece_count == 1


def test_insert_at_total_length_appends_to_multi_piece_table() -> None:
    table = make_table("abcdef")
    table.insert("X", 3)
    table.delete(0)
    assert table.piece_count == 3

    table.insert("!", len(table))

    assert table.materialize() == "bcXdef!"
    assert table.pieces[-1] == Piece(APPEND, 1, 1)
    table.verify()
