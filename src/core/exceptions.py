"""
Custom exceptions.

Everything raised on purpose by this package derives from GameError, so a caller
(the service layer, or whoever drives it) can catch the whole family in one place.
"""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a game."""


class IllegalMoveError(GameError):
    """Move does not follow the movement rules (or cannot even be read as a move)."""


class NotYourTurnError(GameError):
    """A player (or piece) tried to act while the other side is to move."""


class GameStateError(GameError):
    """The requested action does not make sense in the current state of the game.

    ex) retracting with no moves made, searching a game that is already decided, joining a full game.
    """


class MoveLimitError(GameError):
    """The move limit would already be exceeded by the moves made so far."""


class InvalidLayoutError(GameError):
    """String cannot be interpreted as a board layout / position."""


class InvalidRequestError(GameError):
    """Request data did not pass validation."""


class RepositoryError(GameError):
    """Something went wrong while retrieving or storing a game."""
