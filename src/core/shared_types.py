"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    LIGHT_WINS = "light wins"
    DARK_WINS = "dark wins"
    DRAW = "draw"


# --- NOTE: The board engine uses its own Mark enum (src/loa/pieces.py), which also has a value for empty squares.
# --- Side is what the service and API layers talk about: only the two players.


class Side(StrEnum):
    LIGHT = "light"
    DARK = "dark"
