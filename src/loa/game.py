"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything around a turn: whose turn it is, which player is the machine,
and what the status of the game is after the move. The rules themselves live in the Board.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.config import DEFAULT_MOVE_LIMIT, EngineConfig
from src.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from src.core.models import GameModel
from src.core.shared_types import Side, Status
from src.loa.board import Board, Result
from src.loa.layout import STANDARD_POSITION
from src.loa.moves import Move
from src.loa.pieces import PLAYER_MARKS, Mark
from src.loa.search import MachinePlayer

logger = logging.getLogger(__name__)

MACHINE_PLAYER = "machine"

RESULT_TO_STATUS: dict[Result, Status] = {
    Result.LIGHT_WINS: Status.LIGHT_WINS,
    Result.DARK_WINS: Status.DARK_WINS,
    Result.DRAW: Status.DRAW,
    Result.UNDECIDED: Status.IN_PROGRESS,
}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    starting_position: str
    players: dict[Mark, str]
    status: Status
    move_limit: int = DEFAULT_MOVE_LIMIT

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Rebuild a Game from what the Service layer stores: replay the moves on the starting position."""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )

        board = Board.from_position(model.starting_position)
        board.set_move_limit(model.move_limit)
        for move_text in model.moves:
            board.make_move(Move.from_text(move_text))

        players = {
            Mark.from_side(Side(side_name)): player
            for side_name, player in model.registered_players.items()
        }
        return cls(
            board=board,
            starting_position=model.starting_position,
            players=players,
            status=Status(model.status),
            move_limit=model.move_limit,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            starting_position=self.starting_position,
            moves=[move.to_text() for move in self.board.moves],
            registered_players={
                mark.to_side().value: player for mark, player in self.players.items()
            },
            status=self.status.value,
            move_limit=self.move_limit,
        )

    @classmethod
    def new_game(
        cls,
        player: str,
        side: Side,
        starting_position: Optional[str] = None,
        against_machine: bool = False,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ) -> Self:
        """Start a new game with the player playing the indicated side.

        Against the machine, the game can start right away. Otherwise it waits for a second player.
        """
        position = starting_position or STANDARD_POSITION
        board = Board.from_position(position)
        board.set_move_limit(move_limit)

        player_mark = Mark.from_side(side)
        players = {player_mark: player}
        status = Status.WAITING_FOR_PLAYERS
        if against_machine:
            players[player_mark.opposite()] = MACHINE_PLAYER
            status = Status.IN_PROGRESS

        game = cls(
            board=board,
            starting_position=position,
            players=players,
            status=status,
            move_limit=move_limit,
        )
        if status == Status.IN_PROGRESS:
            game._update_game_status()
        logger.info("New game for %s (%s), status: %s", player, side.value, game.status.value)
        return game

    @property
    def winner(self) -> Optional[str]:
        """Name of the winning player, if there is one."""
        winning_mark = self.board.winner().winning_mark
        if winning_mark is None or self.status == Status.WAITING_FOR_PLAYERS:
            return None
        return self.players.get(winning_mark)

    @property
    def side_to_move(self) -> Side:
        return self.board.turn.to_side()

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if player in self.players.values():
            raise GameStateError(f"{player} is already playing in this game. Pick another name.")

        opponent_mark = next(iter(self.players))
        self.players[opponent_mark.opposite()] = player
        logger.info("%s joined as %s", player, opponent_mark.opposite().full_name)
        self._update_game_status()

    def legal_moves(self, player: str) -> list[str]:
        """
        Service will request the set of legal moves.
        ----

        1. Check if the game is still going and it is your turn
        2. Yes? Generate legal moves and return them in text form.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        return [move.to_text() for move in self.board.legal_moves()]

    def make_move(self, move_text: str, player: str) -> None:
        """
        Attempt to make a move
        -----

        1. game must be in progress and it must be your turn
        2. move must be legal
        3. update the board / the status
        """
        self._assert_in_progress()
        self._assert_your_turn(player)

        move = Move.from_text(move_text)
        if self.board.get(move.from_square) != self.board.turn:
            raise IllegalMoveError(f"No {self.board.turn.full_name} piece on {move.from_square}.")
        if not self.board.is_legal_move(move):
            raise IllegalMoveError(f"Move not allowed: {move_text}")

        self.board.make_move(move)
        logger.debug("%s played %s", player, move_text)
        self._update_game_status()

    def machine_move(self, config: Optional[EngineConfig] = None) -> str:
        """Let the machine make its move (it has to be the machine's turn)."""
        self._assert_in_progress()
        self._assert_your_turn(MACHINE_PLAYER)

        machine = MachinePlayer(config)
        move = machine.find_move(self.board, self.board.turn)
        if move is None:
            # cannot happen while the status is in progress
            raise GameStateError("Machine did not find a move.")

        self.board.make_move(move)
        self._update_game_status()
        return move.to_text()

    def undo(self, player: str) -> list[str]:
        """
        Take back your last move.
        ---

        If the opponent already answered it, that answer is taken back as well,
        so it is your turn again afterwards. Returns the moves that were taken back, last one first.
        """
        if self.status == Status.WAITING_FOR_PLAYERS:
            raise GameStateError(f"Game has not started. status: {self.status}")
        player_mark = self._get_player_mark(player)

        plies_back = 1 if self.board.turn != player_mark else 2
        if self.board.moves_made < plies_back:
            raise GameStateError(f"{player} has no move to take back.")

        retracted = [self.board.retract().to_text() for _ in range(plies_back)]
        self._update_game_status()
        return retracted

    def set_move_limit(self, limit: int) -> None:
        self.board.set_move_limit(limit)
        self.move_limit = limit
        if self.status != Status.WAITING_FOR_PLAYERS:
            self._update_game_status()

    # -- PRIVATE HELPERS ---
    def _get_player_mark(self, player: str) -> Mark:
        for mark in PLAYER_MARKS:
            if self.players.get(mark) == player:
                return mark
        raise GameStateError(f"{player} is not playing in this game.")

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = self.players.get(self.board.turn)
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _update_game_status(self) -> None:
        new_status = RESULT_TO_STATUS[self.board.winner()]
        if new_status != self.status and new_status != Status.IN_PROGRESS:
            logger.info("Game over: %s", new_status.value)
        self.status = new_status
