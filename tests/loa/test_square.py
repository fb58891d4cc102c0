"""Unit tests for /src/loa/square.py"""

from string import ascii_lowercase

import pytest

from src.loa.square import BOARD_SIZE, SQUARES, Square, sq_at


@pytest.mark.parametrize(
    "col, row, notation",
    [
        (col, row, f"{ascii_lowercase[col]}{row + 1}")
        for col in range(BOARD_SIZE)
        for row in range(BOARD_SIZE)
    ],
)
def test_algebraic_notation(col: int, row: int, notation: str) -> None:
    """'a1' is column 0, row 0. And back again."""
    square = Square.from_algebraic(notation)
    assert (square.col, square.row) == (col, row)
    assert square.to_algebraic() == notation


def test_index_is_row_major() -> None:
    assert Square.from_algebraic("a1").index == 0
    assert Square.from_algebraic("h1").index == 7
    assert Square.from_algebraic("a2").index == 8
    assert Square.from_algebraic("h8").index == 63


def test_index_and_coordinates_are_a_bijection() -> None:
    """Every index maps to a different (col, row), and back to the same index."""
    assert len(SQUARES) == BOARD_SIZE * BOARD_SIZE
    assert len({(sq.col, sq.row) for sq in SQUARES}) == len(SQUARES)
    for index, square in enumerate(SQUARES):
        assert square.index == index
        assert Square.from_index(index) is square
        assert sq_at(square.col, square.row) is square


def test_lookups_share_the_global_table() -> None:
    """Squares handed out by the lookups are the ones in the table, but equal to freshly made ones as well."""
    assert Square.from_algebraic("d4") is sq_at(3, 3)
    assert Square(3, 3) == sq_at(3, 3)
    assert hash(Square(3, 3)) == hash(sq_at(3, 3))


def test_off_board_lookup() -> None:
    with pytest.raises(IndexError):
        sq_at(BOARD_SIZE, 0)
    with pytest.raises(IndexError):
        sq_at(0, -1)

