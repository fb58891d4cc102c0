"""
Text representation of a whole position (the FEN idea, applied to Lines of Action).

<layout> <side to move>

* The layout lists the ranks from the top (row 8) down to row 1, separated by slashes.
* Within a rank, squares are read from the a-file to the h-file:
  'w' is a light piece, 'b' a dark piece, and a digit (1-8) stands for that many empty squares.
* The side to move is 'w' (light) or 'b' (dark).

ex) the standard starting position, dark to move:
1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1 b
"""

from src.core.exceptions import InvalidLayoutError
from src.loa.pieces import PLAYER_MARKS, Mark
from src.loa.square import BOARD_SIZE, SQUARES, sq_at

STANDARD_LAYOUT = "1bbbbbb1/w6w/w6w/w6w/w6w/w6w/w6w/1bbbbbb1"
STANDARD_POSITION = f"{STANDARD_LAYOUT} {Mark.DARK.abbrev}"
EMPTY_LAYOUT = "/".join(["8"] * BOARD_SIZE)

PIECE_CHARACTERS = {mark.abbrev for mark in PLAYER_MARKS}
EMPTY_RUN_DIGITS = "".join(str(n) for n in range(1, BOARD_SIZE + 1))


def is_valid_layout(layout: str) -> bool:
    """
    Eight ranks, each adding up to exactly eight squares, using only known characters.
    A run of empty squares is written as one digit, so two digits never follow each other.
    """
    ranks = layout.split("/")
    if len(ranks) != BOARD_SIZE:
        return False

    for rank in ranks:
        square_count = 0
        previous_was_digit = False
        for character in rank:
            if character in EMPTY_RUN_DIGITS:
                if previous_was_digit:
                    return False
                square_count += int(character)
                previous_was_digit = True
            elif character in PIECE_CHARACTERS:
                square_count += 1
                previous_was_digit = False
            else:
                return False
        if square_count != BOARD_SIZE:
            return False
    return True


def is_valid_position(position: str) -> bool:
    parts = position.split(" ")
    if len(parts) != 2:
        return False
    layout, side = parts
    return is_valid_layout(layout) and side in PIECE_CHARACTERS


def parse_layout(layout: str) -> list[Mark]:
    """Cells in index order (a1 first, h8 last)."""
    if not is_valid_layout(layout):
        raise InvalidLayoutError(f"Cannot interpret supplied string as a layout: {layout!r}")

    cells = [Mark.EMPTY] * len(SQUARES)
    for rank_idx, rank in enumerate(layout.split("/")):
        # layout is written from the top rank down
        row = BOARD_SIZE - 1 - rank_idx
        col = 0
        for character in rank:
            if character in EMPTY_RUN_DIGITS:
                col += int(character)
            else:
                cells[sq_at(col, row).index] = Mark.from_abbrev(character)
                col += 1
    return cells


def parse_position(position: str) -> tuple[list[Mark], Mark]:
    """Cells + the side to move"""
    if not is_valid_position(position):
        raise InvalidLayoutError(f"Cannot interpret supplied string as a position: {position!r}")
    layout, side = position.split(" ")
    return parse_layout(layout), Mark.from_abbrev(side)


def to_layout(cells: list[Mark]) -> str:
    """Ranks are separated by slashes"""
    return "/".join(_rank_to_layout(cells, row) for row in range(BOARD_SIZE - 1, -1, -1))


def _rank_to_layout(cells: list[Mark], row: int) -> str:
    characters: list[str] = []
    empty_count = 0
    for col in range(BOARD_SIZE):
        mark = cells[sq_at(col, row).index]
        if mark != Mark.EMPTY:
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(mark.abbrev)
        else:
            empty_count += 1

    # an entire empty rank is still written down (as an 8)
    if empty_count > 0:
        characters.append(str(empty_count))
    return "".join(characters)


def to_position(cells: list[Mark], turn: Mark) -> str:
    return f"{to_layout(cells)} {turn.abbrev}"
