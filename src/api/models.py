"""Requests and Response models"""

import re
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Side, Status
from src.loa.layout import is_valid_position

SideName = str
PlayerName = str

# A square designator: column letter then row digit
SQUARE_PATTERN = re.compile(r"^[a-h][1-8]$")


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    side: Side
    starting_position: Optional[str] = None
    against_machine: bool = False
    move_limit: Optional[int] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        position = value.strip()
        if not is_valid_position(position):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as '<layout> <w|b>' position."
            )
        return position

    @field_validator("move_limit")
    @classmethod
    def validate_move_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError(f"Move limit must be at least 1, got {value}.")
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        square = value.strip().lower()
        if not SQUARE_PATTERN.match(square):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return square


class MachineMoveRequest(BaseModel):
    game_id: UUID


class UndoRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveLimitRequest(BaseModel):
    game_id: UUID
    limit: int

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(f"Move limit must be at least 1, got {value}.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class EvaluationRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[SideName, PlayerName]
    position: str
    starting_position: str
    side_to_move: Side
    move_history: list[str]
    status: Status
    winner: Optional[PlayerName] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    side: Side
    legal_moves: list[str]


class MachineMoveResponse(BaseModel):
    game_id: UUID
    move: str
    game: GameResponse


class UndoResponse(BaseModel):
    game_id: UUID
    retracted: list[str]
    game: GameResponse


class EvaluationResponse(BaseModel):
    """Positive scores favour light, negative scores favour dark."""

    game_id: UUID
    score: int
    breakdown: dict[str, int] = Field(default_factory=dict)
