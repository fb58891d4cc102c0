"""Orchestration of communication from API models to business logic and the repository (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    EvaluationRequest,
    EvaluationResponse,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MachineMoveRequest,
    MachineMoveResponse,
    MoveLimitRequest,
    MoveRequest,
    UndoRequest,
    UndoResponse,
)
from src.core.config import EngineConfig
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.loa.evaluation import evaluation_breakdown
from src.loa.game import Game

logger = logging.getLogger(__name__)


class LoaService:
    """Orchestration of layers for a game of Lines of Action."""

    def __init__(
        self, repository: GameRepository, config: Optional[EngineConfig] = None
    ) -> None:
        self.repo = repository
        self.config = config or EngineConfig()

    # -- Request handling --
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""
        new_game = Game.new_game(
            player=request.player_name,
            side=request.side,
            starting_position=request.starting_position,
            against_machine=request.against_machine,
            move_limit=request.move_limit or self.config.move_limit,
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        game = self._load_game(request.game_id)
        game.register_player(request.player_name)
        return self._store(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used to poll whose turn it is, for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = self._load_game(request.game_id)
        legal_moves = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            side=game.side_to_move,
            legal_moves=legal_moves,
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = self._load_game(request.game_id)
        game.make_move(f"{request.from_square}{request.to_square}", request.player_name)
        return self._store(request.game_id, game)

    def machine_move(self, request: MachineMoveRequest) -> MachineMoveResponse:
        """Let the machine player make its move."""
        game = self._load_game(request.game_id)
        move = game.machine_move(self.config)
        response = self._store(request.game_id, game)
        return MachineMoveResponse(game_id=request.game_id, move=move, game=response)

    def undo_move(self, request: UndoRequest) -> UndoResponse:
        """Take back the player's last move (and the reply to it, if any)."""
        game = self._load_game(request.game_id)
        retracted = game.undo(request.player_name)
        response = self._store(request.game_id, game)
        return UndoResponse(game_id=request.game_id, retracted=retracted, game=response)

    def set_move_limit(self, request: MoveLimitRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.set_move_limit(request.limit)
        return self._store(request.game_id, game)

    def evaluate_position(self, request: EvaluationRequest) -> EvaluationResponse:
        """Static evaluation of the current position (what the machine player sees at its search horizon)."""
        game = self._load_game(request.game_id)
        breakdown = evaluation_breakdown(game.board, self.config.weights)
        return EvaluationResponse(
            game_id=request.game_id,
            score=sum(breakdown.values()),
            breakdown=breakdown,
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        model = game.to_model()
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            position=game.board.to_position(),
            starting_position=model.starting_position,
            side_to_move=game.side_to_move,
            move_history=model.moves,
            status=game.status,
            winner=game.winner,
        )

    def _store(self, game_id: UUID, game: Game) -> GameResponse:
        """Capture the updated state, store it and build the response."""
        self.repo.update_game(game_id, game.to_model())
        return self._create_game_response(game_id, game)

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
