"""
Geometry of the board: the eight compass directions and how squares relate along them.

Directions are numbered clockwise, starting at north:

    7 0 1
    6 . 2
    5 4 3

Direction d and d + 4 point in opposite ways along the same line (axis d % 4).
"""

from typing import Optional

from src.loa.square import BOARD_SIZE, SQUARES, Square

Vector = tuple[int, int]

DIRECTIONS: tuple[Vector, ...] = (
    (0, 1),  # N
    (1, 1),  # NE
    (1, 0),  # E
    (1, -1),  # SE
    (0, -1),  # S
    (-1, -1),  # SW
    (-1, 0),  # W
    (-1, 1),  # NW
)


def opposite_direction(direction: int) -> int:
    return (direction + 4) % 8


def distance(a: Square, b: Square) -> int:
    """Chebyshev distance. Equals the number of steps along a line when a and b are aligned."""
    return max(abs(a.col - b.col), abs(a.row - b.row))


def is_aligned(a: Square, b: Square) -> bool:
    """Two different squares on the same row, column or diagonal"""
    dc = b.col - a.col
    dr = b.row - a.row
    if dc == 0 and dr == 0:
        return False
    return dc == 0 or dr == 0 or abs(dc) == abs(dr)


def direction(a: Square, b: Square) -> int:
    """Direction (0..7) to walk from a to reach b."""
    if not is_aligned(a, b):
        raise ValueError(f"{a} and {b} are not on a common line")
    dc = b.col - a.col
    dr = b.row - a.row
    unit = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
    return DIRECTIONS.index(unit)


def destination(square: Square, direction: int, steps: int) -> Optional[Square]:
    """Walk `steps` squares along the direction. None when that walks off the board."""
    dc, dr = DIRECTIONS[direction]
    col = square.col + dc * steps
    row = square.row + dr * steps
    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        return None
    return SQUARES[row * BOARD_SIZE + col]


def _walk(square: Square, direction: int) -> tuple[Square, ...]:
    squares: list[Square] = []
    current = destination(square, direction, 1)
    while current is not None:
        squares.append(current)
        current = destination(current, direction, 1)
    return tuple(squares)


def _neighbours(square: Square) -> tuple[Square, ...]:
    neighbours = (destination(square, d, 1) for d in range(len(DIRECTIONS)))
    return tuple(n for n in neighbours if n is not None)


def _lines_through(square: Square) -> tuple[int, int, int, int]:
    """
    Ids of the four lines through a square, ordered like the directions (d % 4):
    column (0..7), diagonal (8..22), row (23..30), anti-diagonal (31..45).
    """
    return (
        square.col,
        BOARD_SIZE + square.col - square.row + BOARD_SIZE - 1,
        3 * BOARD_SIZE - 1 + square.row,
        4 * BOARD_SIZE - 1 + square.col + square.row,
    )


# The geometry never changes: rays, neighbours and lines are computed once for every square.
# The *_INDICES tables hold cell indices instead of squares, for the move generator's inner loops.
RAYS: tuple[tuple[tuple[Square, ...], ...], ...] = tuple(
    tuple(_walk(square, d) for d in range(len(DIRECTIONS))) for square in SQUARES
)
RAY_INDICES: tuple[tuple[tuple[int, ...], ...], ...] = tuple(
    tuple(tuple(sq.index for sq in squares) for squares in rays) for rays in RAYS
)
ADJACENT: tuple[tuple[Square, ...], ...] = tuple(_neighbours(square) for square in SQUARES)
ADJACENT_INDICES: tuple[tuple[int, ...], ...] = tuple(
    tuple(sq.index for sq in neighbours) for neighbours in ADJACENT
)
NUM_LINES = 6 * BOARD_SIZE - 2
LINES_THROUGH: tuple[tuple[int, int, int, int], ...] = tuple(
    _lines_through(square) for square in SQUARES
)


def ray(square: Square, direction: int) -> tuple[Square, ...]:
    """All squares from (excluding) the given one up to the edge of the board."""
    return RAYS[square.index][direction]


def adjacent(square: Square) -> tuple[Square, ...]:
    """The (up to 8) orthogonal and diagonal neighbours on the board"""
    return ADJACENT[square.index]
