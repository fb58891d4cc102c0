"""
Static evaluation of a position.

Scores are absolute: positive is good for LIGHT, negative is good for DARK, no matter who is to move.
The search relies on that when it maximizes for light and minimizes for dark.

Terms
-----
* mobility: the side with (clearly) more legal moves gets a bonus
* clusters: fewer groups of pieces is better (only after the opening few moves)
* for the side that just moved:
    * compactness: pieces close to their own center of mass
    * center: center of mass close to the middle of the board
    * corner: a piece stuck in a corner is bad
    * capture: the last move took a piece
"""

from dataclasses import dataclass
from typing import Optional

from src.core.config import EvaluationWeights
from src.loa.board import Board
from src.loa.geometry import distance
from src.loa.pieces import Mark
from src.loa.square import BOARD_SIZE, Square, sq_at

DEFAULT_WEIGHTS = EvaluationWeights()

CENTER_SQUARES: tuple[Square, Square] = (
    Square.from_algebraic("d4"),
    Square.from_algebraic("e5"),
)
CORNER_SQUARES: tuple[Square, ...] = (
    sq_at(0, 0),
    sq_at(BOARD_SIZE - 1, 0),
    sq_at(0, BOARD_SIZE - 1),
    sq_at(BOARD_SIZE - 1, BOARD_SIZE - 1),
)

SIGN: dict[Mark, int] = {Mark.LIGHT: 1, Mark.DARK: -1}


@dataclass(frozen=True)
class Spread:
    """Where one side's pieces are centered and how far (on average) they are from that center."""

    centroid: Square
    average_distance: float


def _centroid_of(pieces: list[Square]) -> Square:
    col = sum(square.col for square in pieces) // len(pieces)
    row = sum(square.row for square in pieces) // len(pieces)
    return sq_at(col, row)


def centroid(board: Board, mark: Mark) -> Optional[Square]:
    """Average column / row of the side's pieces, rounded down onto a square. None without pieces."""
    pieces = board.locate(mark)
    return _centroid_of(pieces) if pieces else None


def spread(board: Board, mark: Mark) -> Optional[Spread]:
    pieces = board.locate(mark)
    if not pieces:
        return None
    center = _centroid_of(pieces)
    total = sum(distance(square, center) for square in pieces)
    return Spread(center, total / len(pieces))


def pieces_in_corners(board: Board, mark: Mark) -> int:
    return sum(1 for square in CORNER_SQUARES if board.get(square) == mark)


def mobility_score(board: Board, weights: EvaluationWeights) -> int:
    report = board.mobility_report()
    difference = report[Mark.LIGHT].options - report[Mark.DARK].options
    if difference > weights.mobility_threshold:
        return weights.mobility
    if -difference > weights.mobility_threshold:
        return -weights.mobility
    return 0


def cluster_score(board: Board, weights: EvaluationWeights) -> int:
    if board.moves_made <= weights.cluster_min_ply:
        return 0
    light_clusters = len(board.region_sizes(Mark.LIGHT))
    dark_clusters = len(board.region_sizes(Mark.DARK))
    return (dark_clusters - light_clusters) * weights.clusters


def compactness_score(side_spread: Spread, weights: EvaluationWeights) -> float:
    return (weights.max_spread - side_spread.average_distance) * weights.compactness


def center_score(side_spread: Spread, weights: EvaluationWeights) -> int:
    closest = min(distance(side_spread.centroid, square) for square in CENTER_SQUARES)
    return weights.center if closest < weights.center_goal else 0


def evaluation_breakdown(
    board: Board, weights: EvaluationWeights = DEFAULT_WEIGHTS
) -> dict[str, int]:
    """Contribution of every term, already signed (positive = good for light)."""
    mover = board.turn.opposite()
    sign = SIGN[mover]

    breakdown = {
        "mobility": mobility_score(board, weights),
        "clusters": cluster_score(board, weights),
        "compactness": 0,
        "center": 0,
        "corner": 0,
        "capture": 0,
    }

    # A side without pieces has no center of mass: those terms are skipped.
    mover_spread = spread(board, mover)
    if mover_spread is not None:
        breakdown["compactness"] = int(sign * compactness_score(mover_spread, weights))
        breakdown["center"] = sign * center_score(mover_spread, weights)

    if pieces_in_corners(board, mover) > 0:
        breakdown["corner"] = -sign * weights.corner

    last_move = board.last_move
    if last_move is not None and last_move.is_capture:
        breakdown["capture"] = sign * weights.capture
    return breakdown


def evaluate(board: Board, weights: EvaluationWeights = DEFAULT_WEIGHTS) -> int:
    return sum(evaluation_breakdown(board, weights).values())
