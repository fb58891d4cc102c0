"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.core.config import EngineConfig
from src.db.memory_repository import InMemoryGameRepository
from src.loa.board import Board
from src.loa.layout import STANDARD_LAYOUT
from src.loa.pieces import Mark


@pytest.fixture
def standard_board() -> Board:
    """Standard starting position, dark to move"""
    return Board.standard()


@pytest.fixture
def light_to_move_standard() -> Board:
    return Board.from_layout(STANDARD_LAYOUT, Mark.LIGHT)


@pytest.fixture
def board_from_position() -> Callable[[str], Board]:
    """Call the inner function with a '<layout> <w|b>' string"""

    def _create_board(position: str) -> Board:
        return Board.from_position(position)

    return _create_board


@pytest.fixture
def shallow_config() -> EngineConfig:
    """Searching 4 plies deep in every test takes too long. 1 ply is plenty to check the plumbing."""
    return EngineConfig(search_depth=1)


@pytest.fixture
def memory_repository() -> Generator[InMemoryGameRepository, None, None]:
    """Fresh repository for every test"""
    repo = InMemoryGameRepository()
    yield repo
