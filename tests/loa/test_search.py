"""Unit tests for /src/loa/search.py"""

import logging
import random
import time
from unittest.mock import patch

import pytest

from src.core.config import EngineConfig
from src.core.exceptions import GameStateError, NotYourTurnError
from src.loa.board import Board, Result
from src.loa.evaluation import evaluate
from src.loa.moves import Move
from src.loa.pieces import Mark
from src.loa.search import DRAW_VALUE, INFINITY, WINNING_VALUE, MachinePlayer

# light: a1, h8 / dark: a2, b1, b2, g7, h7. h8g8 is light's only legal move
SINGLE_MOVE_POSITION = "7w/6bb/8/8/8/8/bb6/wb6 w"

# h4e4 connects all pieces of the side to move, for either color
LIGHT_WINS_IN_ONE = "b7/8/8/8/2ww3w/3w4/8/7b w"
DARK_WINS_IN_ONE = "w7/8/8/8/2bb3b/3b4/8/7w b"

# three pieces a side, nothing decided yet
SMALL_POSITION = "2w2b2/8/8/3w4/8/1b6/8/w6b w"


def minimax(board: Board, depth: int, maximizing: bool) -> int:
    """Plain minimax without any pruning, scored the same way as the machine player."""
    result = board.winner()
    if result == Result.LIGHT_WINS:
        return WINNING_VALUE + depth
    if result == Result.DARK_WINS:
        return -WINNING_VALUE - depth
    if result == Result.DRAW:
        return DRAW_VALUE
    moves = board.legal_moves()
    if depth == 0 or not moves:
        return evaluate(board)

    scores = []
    for move in moves:
        board.make_move(move)
        scores.append(minimax(board, depth - 1, not maximizing))
        board.retract()
    return max(scores) if maximizing else min(scores)


def test_depth_comes_from_config() -> None:
    assert MachinePlayer().depth == 4
    assert MachinePlayer(EngineConfig(search_depth=2)).depth == 2


def test_single_legal_move(shallow_config: EngineConfig) -> None:
    board = Board.from_position(SINGLE_MOVE_POSITION)
    machine = MachinePlayer(shallow_config)
    assert machine.find_move(board, Mark.LIGHT) == Move.from_text("h8g8")
    assert machine.nodes_visited == 2  # root + the single child


def test_search_leaves_board_untouched(standard_board: Board) -> None:
    before = standard_board.copy()
    MachinePlayer(EngineConfig(search_depth=2)).find_move(standard_board, Mark.DARK)
    assert standard_board == before
    assert standard_board.moves == before.moves
    assert standard_board.moves_made == 0


def test_found_move_is_legal(standard_board: Board, shallow_config: EngineConfig) -> None:
    move = MachinePlayer(shallow_config).find_move(standard_board, Mark.DARK)
    assert move in standard_board.legal_moves()


@pytest.mark.parametrize(
    "position, side, result",
    [
        (LIGHT_WINS_IN_ONE, Mark.LIGHT, Result.LIGHT_WINS),
        (DARK_WINS_IN_ONE, Mark.DARK, Result.DARK_WINS),
    ],
)
def test_takes_the_win(position: str, side: Mark, result: Result) -> None:
    board = Board.from_position(position)
    move = MachinePlayer(EngineConfig(search_depth=2)).find_move(board, side)
    assert move == Move.from_text("h4e4")

    board.make_move(move)
    assert board.winner() == result


def test_last_of_equal_moves_is_kept(standard_board: Board, shallow_config: EngineConfig) -> None:
    """When every position looks the same, the move enumerated last is the one picked."""
    with patch("src.loa.search.evaluate", return_value=0):
        move = MachinePlayer(shallow_config).find_move(standard_board, Mark.DARK)
    assert move == standard_board.legal_moves()[-1]


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_pruning_does_not_change_the_value(depth: int) -> None:
    board = Board.from_position(SMALL_POSITION)
    machine = MachinePlayer(EngineConfig(search_depth=depth))

    pruned = machine.search(board.copy(), depth, True, -INFINITY, INFINITY)
    assert pruned == minimax(board.copy(), depth, True)


def random_boards(seed: int, count: int) -> list[Board]:
    """Boards with a handful of pieces a side scattered at random, none of them decided yet"""
    rng = random.Random(seed)
    boards = []
    while len(boards) < count:
        light = rng.randint(3, 7)
        dark = rng.randint(3, 7)
        cells = [Mark.EMPTY] * 64
        for number, index in enumerate(rng.sample(range(64), light + dark)):
            cells[index] = Mark.LIGHT if number < light else Mark.DARK
        board = Board(cells, rng.choice([Mark.LIGHT, Mark.DARK]))
        if not board.game_over and board.legal_moves():
            boards.append(board)
    return boards


@pytest.mark.parametrize("depth, seed, count", [(1, 7, 20), (2, 11, 12), (3, 13, 3)])
def test_found_move_has_the_best_value(depth: int, seed: int, count: int) -> None:
    """The chosen move is the last one whose exact minimax value is the best, never one that only looked tied."""
    machine = MachinePlayer(EngineConfig(search_depth=depth))
    for board in random_boards(seed, count):
        maximizing = board.turn is Mark.LIGHT
        values = {}
        for move in board.legal_moves():
            board.make_move(move)
            values[move] = minimax(board, depth - 1, not maximizing)
            board.retract()
        best = max(values.values()) if maximizing else min(values.values())
        last_best = [move for move, value in values.items() if value == best][-1]

        move = machine.find_move(board, board.turn)
        assert values[move] == best, board.to_position()
        assert move == last_best, board.to_position()


def test_default_depth_runs_in_reasonable_time(standard_board: Board) -> None:
    machine = MachinePlayer()
    start = time.perf_counter()
    move = machine.find_move(standard_board, Mark.DARK)
    elapsed = time.perf_counter() - start

    assert move in standard_board.legal_moves()
    assert elapsed < 60.0


def count_nodes(board: Board, depth: int) -> int:
    """Size of the full game tree down to the given depth"""
    if depth == 0 or board.game_over:
        return 1
    total = 1
    for move in board.legal_moves():
        board.make_move(move)
        total += count_nodes(board, depth - 1)
        board.retract()
    return total


def test_pruning_visits_fewer_nodes() -> None:
    board = Board.from_position(SMALL_POSITION)
    machine = MachinePlayer(EngineConfig(search_depth=3))
    machine.find_move(board, Mark.LIGHT)
    assert 1 < machine.nodes_visited < count_nodes(board.copy(), 3)


def test_win_scores_prefer_sooner() -> None:
    board = Board.from_position(LIGHT_WINS_IN_ONE)
    board.make_move(Move.from_text("h4e4"))
    machine = MachinePlayer()
    assert machine.search(board, 3, False, -INFINITY, INFINITY) == WINNING_VALUE + 3
    assert machine.search(board, 1, False, -INFINITY, INFINITY) == WINNING_VALUE + 1


def test_no_move_when_game_over(caplog: pytest.LogCaptureFixture) -> None:
    board = Board.from_position(LIGHT_WINS_IN_ONE)
    board.make_move(Move.from_text("h4e4"))

    with caplog.at_level(logging.WARNING, logger="src.loa.search"):
        assert MachinePlayer().find_move(board, board.turn) is None
    assert "game is over" in caplog.text


def test_root_search_of_finished_game() -> None:
    board = Board.from_position(LIGHT_WINS_IN_ONE)
    board.make_move(Move.from_text("h4e4"))
    with pytest.raises(GameStateError):
        MachinePlayer().search(board, 2, False, -INFINITY, INFINITY, save_move=True)


def test_search_for_the_wrong_side(standard_board: Board) -> None:
    with pytest.raises(NotYourTurnError):
        MachinePlayer().find_move(standard_board, Mark.LIGHT)
