from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    EvaluationResponse,
    MoveLimitRequest,
    MoveRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side
from src.loa.layout import STANDARD_POSITION


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_valid_position() -> None:
    """Test that CreateGameRequest accepts a valid '<layout> <side>' string."""
    request = CreateGameRequest(
        player_name="don't hate the player, hate the name.",
        side=Side.DARK,
        starting_position=STANDARD_POSITION,
    )
    assert request.starting_position == STANDARD_POSITION


def test_position_surrounding_whitespace_is_dropped() -> None:
    request = CreateGameRequest(
        player_name="lotsofspace",
        side=Side.LIGHT,
        starting_position=f"  {STANDARD_POSITION}\n",
    )
    assert request.starting_position == STANDARD_POSITION


def test_starting_position_is_optional() -> None:
    """Should be able to not supply a starting position, and validator just returns None."""
    request = CreateGameRequest(
        player_name="don't hate the player, hate the name.",
        side="light",
    )
    assert request.starting_position is None
    assert request.side == Side.LIGHT
    assert request.against_machine is False
    assert request.move_limit is None


@pytest.mark.parametrize(
    "invalid_position",
    [
        "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1",  # side to move missing
        "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 b extra",  # too many space-separated values
        "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 b",  # only 7 ranks
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w",  # chess pieces
        "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 x",  # unknown side
    ],
)
def test_invalid_position(invalid_position: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(
            player_name="don't hate the player, hate the name.",
            side=Side.DARK,
            starting_position=invalid_position,
        )


@pytest.mark.parametrize("limit", [0, -1])
def test_invalid_move_limit(mock_id: UUID, limit: int) -> None:
    with pytest.raises(InvalidRequestError):
        CreateGameRequest(player_name="impatient", side=Side.DARK, move_limit=limit)
    with pytest.raises(InvalidRequestError):
        MoveLimitRequest(game_id=mock_id, limit=limit)


def test_valid_move_limit(mock_id: UUID) -> None:
    assert MoveLimitRequest(game_id=mock_id, limit=1).limit == 1
    assert CreateGameRequest(player_name="patient", side=Side.DARK, move_limit=200).move_limit == 200


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(
        game_id=mock_id, player_name="bladiblidiboo", from_square="b1", to_square="b3"
    )
    assert request.from_square == "b1"
    assert request.to_square == "b3"


def test_square_names_are_normalized(mock_id: UUID) -> None:
    request = MoveRequest(
        game_id=mock_id, player_name="shouty", from_square=" B1", to_square="H1 "
    )
    assert request.from_square == "b1"
    assert request.to_square == "h1"


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # no i-file
        "a9",  # no 9th rank
        "a0",
        "",
    ],
)
def test_invalid_square(mock_id: UUID, square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id, player_name="bladiblidiboo", from_square=square, to_square="b3"
        )
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id, player_name="bladiblidiboo", from_square="b1", to_square=square
        )


def test_evaluation_breakdown_defaults_to_empty(mock_id: UUID) -> None:
    response = EvaluationResponse(game_id=mock_id, score=0)
    assert response.breakdown == {}
