"""
Contract for the Service layer.

Domain level data model of information representing a Game.

"""

from dataclasses import dataclass


@dataclass
class GameModel:
    """Lines of Action specific data + game handling info (players, etc.)"""

    starting_position: str
    moves: list[str]
    registered_players: dict[str, str]
    status: str
    move_limit: int
