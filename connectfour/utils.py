"""
utils.py - Constants, enumerations and helpers shared by the Connect Four game

Coordinates are (column, row) pairs with row 0 at the bottom of a column.
"""

from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from connectfour.debug import debug

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

Coord = Tuple[int, int]  # (column, row)

# Starting cells of the diagonals that are long enough to hold a win.
# Up-right diagonals start on the left and bottom edges, down-right ones on
# the left and top edges.
UP_RIGHT_ANCHORS: Tuple[Coord, ...] = ((0, 2), (0, 1), (0, 0), (1, 0), (2, 0), (3, 0))
DOWN_RIGHT_ANCHORS: Tuple[Coord, ...] = ((0, 3), (0, 4), (0, 5), (1, 5), (2, 5), (3, 5))

# ANSI colors used when rendering pieces in a terminal
PIECE_COLORS = {
    "A": "\033[31m",  # Red
    "B": "\033[33m",  # Yellow
    "RESET": "\033[0m",
}


class Player(Enum):
    """The two players. A always moves first."""
    A = 1
    B = 2

    def opposite(self) -> 'Player':
        return Player.B if self is Player.A else Player.A

    @property
    def color(self) -> str:
        return "Red" if self is Player.A else "Yellow"

    def __str__(self):
        return f"Player {self.name} ({self.color})"


def opposite(player: Player) -> Player:
    """Return the other player."""
    return player.opposite()


class Cell(Enum):
    """State of a single grid cell: empty, or occupied by one player."""
    EMPTY = 0
    A = 1
    B = 2

    @classmethod
    def occupied(cls, player: Player) -> 'Cell':
        return cls(player.value)

    @property
    def player(self) -> Optional[Player]:
        if self is Cell.EMPTY:
            return None
        return Player(self.value)

    def is_empty(self) -> bool:
        return self is Cell.EMPTY

    def symbol(self) -> str:
        return " " if self is Cell.EMPTY else self.name


CELL_VALUES = frozenset(cell.value for cell in Cell)


class GameResult(Enum):
    """Outcome of a position. Always derived from the grid, never stored."""
    IN_PROGRESS = auto()
    DRAW = auto()
    PLAYER_A_WIN = auto()
    PLAYER_B_WIN = auto()

    @classmethod
    def win(cls, player: Player) -> 'GameResult':
        return cls.PLAYER_A_WIN if player is Player.A else cls.PLAYER_B_WIN

    @property
    def winner(self) -> Optional[Player]:
        if self is GameResult.PLAYER_A_WIN:
            return Player.A
        if self is GameResult.PLAYER_B_WIN:
            return Player.B
        return None

    def is_game_over(self) -> bool:
        return self is not GameResult.IN_PROGRESS


class DropError(ValueError):
    """A piece could not be dropped. The board is left untouched."""

    def __init__(self, column, message: str):
        super().__init__(message)
        self.column = column


class InvalidColumn(DropError):
    def __init__(self, column):
        super().__init__(column, f"Column {column!r} is outside 0-{COLS - 1}")


class ColumnFull(DropError):
    def __init__(self, column):
        super().__init__(column, f"Column {column} is full")


class InvariantViolation(RuntimeError):
    """The board grid is malformed. This is a bug, not a user error."""


def is_valid_position(column: int, row: int) -> bool:
    return 0 <= column < COLS and 0 <= row < ROWS


def _walk(start: Coord, step: Coord) -> List[Coord]:
    column, row = start
    d_column, d_row = step
    sequence = []
    while is_valid_position(column, row):
        sequence.append((column, row))
        column += d_column
        row += d_row
    return sequence


def win_sequences() -> Iterator[List[Coord]]:
    """
    Yield every maximal straight line of cells that can hold a win.

    Rows come first, then columns, then the up-right and down-right
    diagonals. Each four-cell alignment on the board falls inside exactly
    one yielded sequence.
    """
    for row in range(ROWS):
        yield [(column, row) for column in range(COLS)]

    for column in range(COLS):
        yield [(column, row) for row in range(ROWS)]

    for anchor in UP_RIGHT_ANCHORS:
        yield _walk(anchor, (1, 1))

    for anchor in DOWN_RIGHT_ANCHORS:
        yield _walk(anchor, (1, -1))


def windows(sequence: Sequence[Coord], size: int = CONNECT_N) -> Iterator[Sequence[Coord]]:
    """Slide a window of ``size`` consecutive cells along a sequence."""
    for start in range(len(sequence) - size + 1):
        yield sequence[start:start + size]


def find_winning_line(grid: np.ndarray) -> Optional[Tuple[Player, List[Coord]]]:
    """
    Find the first run of four cells held by one player.

    Args:
        grid: Board grid indexed ``grid[column, row]``

    Returns:
        The winning player and the four coordinates, or None
    """
    for sequence in win_sequences():
        for window in windows(sequence):
            values = {int(grid[column, row]) for column, row in window}
            if len(values) != 1:
                continue
            value = values.pop()
            if value != Cell.EMPTY.value:
                debug.trace(f"Four in a row for {Player(value).name} at {list(window)}", "board")
                return Player(value), list(window)
    return None


def render_board_ascii(grid: np.ndarray, color: bool = False) -> str:
    """
    Render the grid as ASCII art, top row first.

    Args:
        grid: Board grid indexed ``grid[column, row]``
        color: Wrap pieces in ANSI color codes

    Returns:
        ASCII representation of the board
    """
    lines = ["|" + "-" * (COLS * 2 - 1) + "|"]

    for row in range(ROWS - 1, -1, -1):
        symbols = []
        for column in range(COLS):
            cell = Cell(int(grid[column, row]))
            symbol = cell.symbol()
            if color and not cell.is_empty():
                symbol = f"{PIECE_COLORS[cell.name]}{symbol}{PIECE_COLORS['RESET']}"
            symbols.append(symbol)
        lines.append("|" + " ".join(symbols) + "|")

    lines.append("|" + "-" * (COLS * 2 - 1) + "|")
    lines.append("|" + " ".join(str(column) for column in range(COLS)) + "|")

    return "\n".join(lines)
