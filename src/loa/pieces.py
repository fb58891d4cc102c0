"""Defines what can occupy a square"""

from enum import Enum
from typing import Self

from src.core.shared_types import Side


class Mark(Enum):
    """Value is the single-character abbreviation used in layouts and board printouts."""

    LIGHT = "w"
    DARK = "b"
    EMPTY = "-"

    def opposite(self) -> "Mark":
        """LIGHT <-> DARK. EMPTY is its own opposite."""
        # NOTE: capture detection compares a destination with the opposite of the mover.
        # Both are never EMPTY at the same time there, as the mover always stands on an occupied square.
        return _OPPOSITES[self]

    @property
    def abbrev(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_abbrev(cls, character: str) -> Self:
        return cls(character)

    @classmethod
    def from_side(cls, side: Side) -> Self:
        return cls[side.name]

    def to_side(self) -> Side:
        if self == Mark.EMPTY:
            raise ValueError("An empty square does not belong to a side")
        return Side[self.name]


_OPPOSITES: dict[Mark, Mark] = {
    Mark.LIGHT: Mark.DARK,
    Mark.DARK: Mark.LIGHT,
    Mark.EMPTY: Mark.EMPTY,
}

PLAYER_MARKS: tuple[Mark, Mark] = (Mark.LIGHT, Mark.DARK)
