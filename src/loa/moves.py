"""
Moves and the movement rules

A piece moves in a straight line (any of the 8 directions) exactly as many squares as there are pieces,
of either color, on the whole line it moves along (itself included).
It may jump over its own pieces, but not over the opponent's. It may land on an opponent's piece (capturing it),
but not on one of its own.

Legality is tied together by the Board.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Self, Sequence

from src.core.exceptions import IllegalMoveError
from src.loa.geometry import (
    LINES_THROUGH,
    NUM_LINES,
    RAY_INDICES,
    direction,
    distance,
    is_aligned,
    opposite_direction,
    ray,
)
from src.loa.pieces import Mark
from src.loa.square import SQUARES, Square

MOVE_TEXT_LENGTH = 4


class Board(Protocol):
    """Just the parts the movement rules need"""

    def get(self, square: Square) -> Mark: ...


@dataclass(frozen=True)
class Move:
    """A piece going from one square to another.

    The capture flag is a record of what happened, it does not identify the move:
    two moves between the same squares are equal whatever their flags say.
    """

    from_square: Square
    to_square: Square
    is_capture: bool = field(default=False, compare=False)

    @classmethod
    def from_text(cls, text: str) -> Self:
        """
        <from><to> in algebraic notation

        examples:
        * "a1b2": move the piece on a1 to b2
        * "c8h3": move the piece on c8 to h3 (along the anti-diagonal)
        """
        if len(text) != MOVE_TEXT_LENGTH:
            raise IllegalMoveError(f"Cannot read {text!r} as a move.")
        try:
            from_sq = Square.from_algebraic(text[:2])
            to_sq = Square.from_algebraic(text[2:])
        except (IndexError, ValueError) as exc:
            raise IllegalMoveError(f"Cannot read {text!r} as a move.") from exc
        return cls(from_sq, to_sq)

    def to_text(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def as_capture(self) -> Self:
        """Same move, recorded as capturing the piece on the destination"""
        return replace(self, is_capture=True)

    def as_plain(self) -> Self:
        return replace(self, is_capture=False)

    def __str__(self) -> str:
        return self.to_text()


# --- MOVEMENT RULES ---
def line_count(square: Square, direction_index: int, board: Board) -> int:
    """
    Number of pieces on the whole line through the square, along the axis of the direction.
    The square itself always counts (so the minimum is 1).

    Both halves of the line are scanned: direction d and its opposite d + 4.
    """
    count = 1
    for d in (direction_index, opposite_direction(direction_index)):
        count += sum(1 for sq in ray(square, d) if board.get(sq) != Mark.EMPTY)
    return count


def is_blocked(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    A path is blocked when
    * any square in between holds an opponent's piece, or
    * the destination holds one of your own pieces.

    Squares must be aligned.
    """
    mover = board.get(from_square)
    steps = distance(from_square, to_square)
    d = direction(from_square, to_square)
    for between in ray(from_square, d)[: steps - 1]:
        if board.get(between) == mover.opposite():
            return True
    return board.get(to_square) == mover


def is_legal_path(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Moving rule for the piece standing on from_square (whoever's turn it is):
    * the squares are on a common line
    * the distance equals the line count
    * the path is not blocked
    """
    if board.get(from_square) == Mark.EMPTY:
        return False
    if not is_aligned(from_square, to_square):
        return False
    d = direction(from_square, to_square)
    if distance(from_square, to_square) != line_count(from_square, d, board):
        return False
    return not is_blocked(from_square, to_square, board)


# --- MOVE GENERATION ---
# Same rules as above, on raw cells and indices: every leaf of the search generates moves for all pieces.
def line_totals(cells: Sequence[Mark]) -> list[int]:
    """Number of pieces on every line of the board (see geometry.LINES_THROUGH), in one pass over the cells."""
    totals = [0] * NUM_LINES
    for index, mark in enumerate(cells):
        if mark is not Mark.EMPTY:
            for line in LINES_THROUGH[index]:
                totals[line] += 1
    return totals


def target_indices(cells: Sequence[Mark], index: int, totals: Sequence[int]) -> list[int]:
    """Cells the piece on `index` can move to, N first, clockwise. `totals` comes from line_totals(cells)."""
    mover = cells[index]
    if mover is Mark.EMPTY:
        return []
    opponent = mover.opposite()
    lines = LINES_THROUGH[index]
    targets: list[int] = []
    for d, path in enumerate(RAY_INDICES[index]):
        # an occupied square is counted in its own line total
        steps = totals[lines[d % 4]]
        if steps > len(path):
            continue
        target = path[steps - 1]
        if cells[target] is mover:
            continue
        for between in path[: steps - 1]:
            if cells[between] is opponent:
                break
        else:
            targets.append(target)
    return targets


def moves_from(
    square: Square, cells: Sequence[Mark], totals: Optional[Sequence[int]] = None
) -> list[Move]:
    """Legal moves of the piece on the square, one direction at a time (N first, clockwise)."""
    if totals is None:
        totals = line_totals(cells)
    opponent = cells[square.index].opposite()
    return [
        Move(square, SQUARES[target], cells[target] is opponent)
        for target in target_indices(cells, square.index, totals)
    ]
