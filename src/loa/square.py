"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from string import ascii_lowercase

BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    col: int
    row: int
    index: int = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        # frozen dataclass: set the derived field through object.__setattr__
        object.__setattr__(self, "index", self.row * BOARD_SIZE + self.col)

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        col = ord(sq[0]) - ord("a")
        row = int(sq[1]) - 1
        return sq_at(col, row)

    @classmethod
    def from_index(cls, index: int) -> Square:
        return SQUARES[index]

    def to_algebraic(self) -> str:
        return f"{ascii_lowercase[self.col]}{self.row + 1}"

    def __str__(self) -> str:
        return self.to_algebraic()


# All 64 squares, ordered by index. Built once; every lookup hands out these same objects.
SQUARES: tuple[Square, ...] = tuple(
    Square(col, row) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)


def sq_at(col: int, row: int) -> Square:
    """Look up the square at (col, row). Raises IndexError when it is off the board."""
    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        raise IndexError(f"({col}, {row}) is not on the board")
    return SQUARES[row * BOARD_SIZE + col]
