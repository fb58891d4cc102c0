"""The Board implements all rules that affect the position: legal moves, making/retracting them and who has won."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Self

from src.core.config import DEFAULT_MOVE_LIMIT
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    MoveLimitError,
    NotYourTurnError,
)
from src.loa.connectivity import RegionCache
from src.loa.layout import (
    STANDARD_LAYOUT,
    parse_layout,
    parse_position,
    to_layout,
    to_position,
)
from src.loa.moves import (
    Move,
    is_legal_path,
    line_count,
    line_totals,
    moves_from,
    target_indices,
)
from src.loa.pieces import PLAYER_MARKS, Mark
from src.loa.square import BOARD_SIZE, SQUARES, Square, sq_at


class Result(Enum):
    LIGHT_WINS = "light wins"
    DARK_WINS = "dark wins"
    DRAW = "draw"
    UNDECIDED = "undecided"

    @property
    def is_decisive(self) -> bool:
        return self in (Result.LIGHT_WINS, Result.DARK_WINS)

    @property
    def winning_mark(self) -> Optional[Mark]:
        return _WINNING_MARKS.get(self)

    @classmethod
    def win_for(cls, mark: Mark) -> "Result":
        return cls.LIGHT_WINS if mark == Mark.LIGHT else cls.DARK_WINS


_WINNING_MARKS: dict[Result, Mark] = {
    Result.LIGHT_WINS: Mark.LIGHT,
    Result.DARK_WINS: Mark.DARK,
}


@dataclass(frozen=True)
class Mobility:
    """How free one side's pieces are to move"""

    immobile: int  # pieces without a single legal move
    options: int  # legal moves summed over the pieces that do have one


@dataclass(eq=False)
class Board:
    cells: list[Mark]
    turn: Mark
    moves: list[Move] = field(default_factory=list)
    move_limit: int = 2 * DEFAULT_MOVE_LIMIT  # in plies (both sides together)
    _regions: RegionCache = field(default_factory=RegionCache, init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.cells) != len(SQUARES):
            raise ValueError(f"A board has {len(SQUARES)} cells, got {len(self.cells)}")
        if self.turn not in PLAYER_MARKS:
            raise ValueError(f"Side to move must be light or dark, got {self.turn}")

    # -- CREATION --
    @classmethod
    def standard(cls) -> Self:
        """Standard starting position. Dark moves first."""
        return cls(parse_layout(STANDARD_LAYOUT), Mark.DARK)

    @classmethod
    def from_layout(cls, layout: str, turn: Mark) -> Self:
        return cls(parse_layout(layout), turn)

    @classmethod
    def from_position(cls, position: str) -> Self:
        """'<layout> <w|b>', see src/loa/layout.py"""
        cells, turn = parse_position(position)
        return cls(cells, turn)

    def copy(self) -> Self:
        """Independent board with the same contents, history and limit (caches start empty)."""
        return type(self)(
            cells=list(self.cells),
            turn=self.turn,
            moves=list(self.moves),
            move_limit=self.move_limit,
        )

    def to_layout(self) -> str:
        return to_layout(self.cells)

    def to_position(self) -> str:
        return to_position(self.cells, self.turn)

    # -- CELLS --
    def get(self, square: Square) -> Mark:
        return self.cells[square.index]

    def set(self, square: Square, mark: Mark, next_turn: Optional[Mark] = None) -> None:
        """Put a mark on a square directly (setting up positions). Optionally also change the side to move."""
        self.cells[square.index] = mark
        if next_turn is not None:
            self.turn = next_turn
        self._regions.invalidate()

    def locate(self, mark: Mark) -> list[Square]:
        return [SQUARES[index] for index, occupant in enumerate(self.cells) if occupant is mark]

    def piece_count(self, mark: Mark) -> int:
        return self.cells.count(mark)

    # -- MOVE LIMIT --
    def set_move_limit(self, limit: int) -> None:
        """Limit on the number of moves per side before the game is a draw.
        It must still be possible to reach it: 2 * limit > moves made."""
        if 2 * limit <= self.moves_made:
            raise MoveLimitError(
                f"Move limit {limit} too small: {self.moves_made} moves have already been made."
            )
        self.move_limit = 2 * limit

    # -- LEGALITY --
    def line_count(self, square: Square, direction: int) -> int:
        return line_count(square, direction, self)

    def is_legal(self, from_square: Square, to_square: Square) -> bool:
        """Movement rule for the piece on from_square. Whose turn it is plays no role here."""
        return is_legal_path(from_square, to_square, self)

    def is_legal_move(self, move: Move) -> bool:
        """Same as is_legal. The capture flag of the move is ignored."""
        return self.is_legal(move.from_square, move.to_square)

    def legal_moves_from(self, square: Square) -> list[Move]:
        return moves_from(square, self.cells)

    def legal_moves(self) -> list[Move]:
        """All legal moves for the side to move. Squares are scanned a1, b1, ... h1, a2, ... h8."""
        totals = line_totals(self.cells)
        legal: list[Move] = []
        for square in SQUARES:
            if self.cells[square.index] is self.turn:
                legal.extend(moves_from(square, self.cells, totals))
        return legal

    # -- MAKING / RETRACTING MOVES --
    def make_move(self, move: Move) -> None:
        """
        Apply a legal move for the side to move.

        The capture flag is decided here, from what stands on the destination right now.
        Whatever the flag on the supplied move says does not matter.
        """
        if not self.is_legal_move(move):
            raise IllegalMoveError(f"Move not allowed: {move.to_text()}")
        mover = self.get(move.from_square)
        if mover != self.turn:
            raise NotYourTurnError(
                f"Piece on {move.from_square} belongs to {mover.full_name}, but {self.turn.full_name} is to move."
            )

        captured = self.get(move.to_square) == mover.opposite()
        self.moves.append(move.as_capture() if captured else move.as_plain())
        self.cells[move.to_square.index] = mover
        self.cells[move.from_square.index] = Mark.EMPTY
        self.turn = self.turn.opposite()
        self._regions.invalidate()

    def retract(self) -> Move:
        """Undo the last move. Returns the move that was undone."""
        if not self.moves:
            raise GameStateError("No moves to retract.")
        last = self.moves.pop()
        mover = self.get(last.to_square)
        self.cells[last.from_square.index] = mover
        self.cells[last.to_square.index] = mover.opposite() if last.is_capture else Mark.EMPTY
        self.turn = self.turn.opposite()
        self._regions.invalidate()
        return last

    @property
    def moves_made(self) -> int:
        return len(self.moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    # -- CONNECTIVITY / WINNER --
    def region_sizes(self, mark: Mark) -> list[int]:
        """Sizes of the groups of connected pieces of a side, largest first."""
        return self._regions.sizes(self.cells, mark)

    def pieces_contiguous(self, mark: Mark) -> bool:
        return len(self.region_sizes(mark)) == 1

    def winner(self) -> Result:
        """
        1. Both sides connected at once: the side that just moved wins
        2. One side connected: it wins
        3. Move limit reached: draw
        """
        light_connected = self.pieces_contiguous(Mark.LIGHT)
        dark_connected = self.pieces_contiguous(Mark.DARK)
        if light_connected and dark_connected:
            return Result.win_for(self.turn.opposite())
        if light_connected:
            return Result.LIGHT_WINS
        if dark_connected:
            return Result.DARK_WINS
        if self.moves_made >= self.move_limit:
            return Result.DRAW
        return Result.UNDECIDED

    @property
    def game_over(self) -> bool:
        return self.winner() != Result.UNDECIDED

    # -- MOBILITY --
    def mobility_report(self) -> dict[Mark, Mobility]:
        """Per side: how many pieces cannot move at all, and how many moves the others have."""
        immobile = {mark: 0 for mark in PLAYER_MARKS}
        options = {mark: 0 for mark in PLAYER_MARKS}
        totals = line_totals(self.cells)
        for index, mark in enumerate(self.cells):
            if mark is Mark.EMPTY:
                continue
            num_moves = len(target_indices(self.cells, index, totals))
            if num_moves == 0:
                immobile[mark] += 1
            else:
                options[mark] += num_moves
        return {mark: Mobility(immobile[mark], options[mark]) for mark in PLAYER_MARKS}

    # -- IDENTITY / PRINTING --
    def __eq__(self, other: object) -> bool:
        """Same pieces on the same squares and the same side to move. History does not matter."""
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells and self.turn == other.turn

    def __hash__(self) -> int:
        return hash((tuple(self.cells), self.turn))

    def __str__(self) -> str:
        lines = ["==="]
        for row in range(BOARD_SIZE - 1, -1, -1):
            line = " ".join(self.get(sq_at(col, row)).abbrev for col in range(BOARD_SIZE))
            lines.append(f"    {line}")
        lines.append(f"Next move: {self.turn.full_name}")
        lines.append("===")
        return "\n".join(lines)
