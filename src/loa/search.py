"""
The machine player: minimax search with alpha-beta pruning.

Scores use the absolute scale of the evaluation (positive = good for light):
light maximizes, dark minimizes.

The search works on ONE private copy of the board, made when the search starts.
Every node applies a move, searches below it and retracts the move again,
so the copy is back in its original state whenever a call returns.
"""

import logging
from typing import Optional

from src.core.config import EngineConfig
from src.core.exceptions import GameStateError, NotYourTurnError
from src.loa.board import Board, Result
from src.loa.evaluation import evaluate
from src.loa.moves import Move
from src.loa.pieces import Mark

logger = logging.getLogger(__name__)

INFINITY = 2**31 - 1
# Any win outranks any evaluation. Adding the remaining depth prefers faster wins (and slower losses).
WINNING_VALUE = INFINITY - 20
DRAW_VALUE = 0


class MachinePlayer:
    """Picks moves by searching a fixed number of plies ahead."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.found_move: Optional[Move] = None
        self.nodes_visited = 0

    @property
    def depth(self) -> int:
        return self.config.search_depth

    def find_move(self, board: Board, side: Mark) -> Optional[Move]:
        """
        Best move for `side` in the position on `board`.
        ---

        * Returns None if the game is already over.
        * The board itself is left untouched, the search runs on a copy.
        """
        if board.game_over:
            logger.warning("Asked for a move, but the game is over: %s", board.winner().value)
            return None
        if side != board.turn:
            raise NotYourTurnError(
                f"Cannot search for {side.full_name}: {board.turn.full_name} is to move."
            )

        work = board.copy()
        self.found_move = None
        self.nodes_visited = 0
        score = self.search(
            work,
            self.depth,
            maximizing=(side == Mark.LIGHT),
            alpha=-INFINITY,
            beta=INFINITY,
            save_move=True,
        )
        logger.debug(
            "%s plays %s (score %d, depth %d, %d nodes)",
            side.full_name,
            self.found_move,
            score,
            self.depth,
            self.nodes_visited,
        )
        return self.found_move

    def search(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        alpha: int,
        beta: int,
        save_move: bool = False,
    ) -> int:
        """
        Value of the position, searching `depth` plies ahead.
        ---

        When `save_move` is set (only at the root), the best move is stored in `found_move`.
        Among moves of equal value, the one enumerated last wins.
        """
        if save_move and board.game_over:
            raise GameStateError("Cannot search a game that is already over.")
        self.nodes_visited += 1

        result = board.winner()
        if result.is_decisive:
            if result == Result.LIGHT_WINS:
                return WINNING_VALUE + depth
            return -WINNING_VALUE - depth
        if result == Result.DRAW:
            return DRAW_VALUE
        if depth == 0:
            return evaluate(board, self.config.weights)

        moves = board.legal_moves()
        if not moves:
            return evaluate(board, self.config.weights)

        best_so_far = -INFINITY if maximizing else INFINITY
        for move in moves:
            child_alpha, child_beta = alpha, beta
            if save_move:
                # Widen the root window by one: a child cut off by the bound then comes back
                # strictly worse than the best so far, never as a false tie. Real ties stay exact.
                if maximizing:
                    child_alpha -= 1
                else:
                    child_beta += 1

            board.make_move(move)
            score = self.search(board, depth - 1, not maximizing, child_alpha, child_beta)
            board.retract()

            if maximizing and score >= best_so_far:
                best_so_far = score
                alpha = max(alpha, score)
            elif not maximizing and score <= best_so_far:
                best_so_far = score
                beta = min(beta, score)
            else:
                continue

            if save_move:
                self.found_move = move
            if beta <= alpha:
                break
        return best_so_far
