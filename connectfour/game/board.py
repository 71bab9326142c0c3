"""
board.py - Board state and core game mechanics for Connect Four

The Board owns the 7x6 grid and whose turn it is. Placing a piece and
passing the turn are separate operations; the game controller decides when
to pass the turn. The result of a position is recomputed from the grid on
every request.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, CELL_VALUES, Cell, ColumnFull, Coord,
                               GameResult, InvalidColumn, InvariantViolation, Player,
                               find_winning_line, is_valid_position, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    ``grid`` is indexed ``grid[column, row]`` with row 0 at the bottom and
    holds ``Cell`` values as integers.
    """

    def __init__(self):
        """Initialize an empty board with player A to move."""
        self.reset()

    def reset(self) -> None:
        """Replace the whole state with a fresh empty board."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((COLS, ROWS), dtype=np.int8)
        self.turn = Player.A

    @classmethod
    def from_position(cls, values: Sequence[int], turn: Player = Player.A) -> 'Board':
        """
        Build a board from 42 cell values listed row by row from the top.

        Raises:
            ValueError: if the position has the wrong length or an unknown value
        """
        if len(values) != ROWS * COLS:
            raise ValueError(f"Position must have {ROWS * COLS} values, got {len(values)}")
        unknown = set(int(v) for v in values) - CELL_VALUES
        if unknown:
            raise ValueError(f"Unknown cell values in position: {sorted(unknown)}")

        board = cls()
        # Rows arrive top first; flip so row 0 is the bottom, then transpose to [column, row].
        rows = np.array(values, dtype=np.int8).reshape(ROWS, COLS)
        board.grid = np.ascontiguousarray(rows[::-1].T)
        board.turn = turn
        return board

    def copy(self) -> 'Board':
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.turn = self.turn
        return new_board

    # Commands

    def drop_piece(self, column: int) -> int:
        """
        Drop a piece for the player to move into a column.

        The turn is not passed; see ``switch_turn``.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The row the piece landed in

        Raises:
            InvalidColumn: if the column is not an integer in 0..6
            ColumnFull: if the column already holds six pieces
        """
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)) \
                or not 0 <= column < COLS:
            debug.debug(f"Rejected drop: column {column!r} out of range", "board")
            raise InvalidColumn(column)

        column = int(column)
        row = self.column_height(column)
        if row >= ROWS:
            debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFull(column)

        self.grid[column, row] = Cell.occupied(self.turn).value
        debug.debug(f"{self.turn.name} dropped into column {column}, row {row}", "board")
        return row

    def switch_turn(self) -> None:
        self.turn = self.turn.opposite()
        debug.trace(f"Turn passed to {self.turn.name}", "board")

    # Queries

    def cell(self, column: int, row: int) -> Cell:
        if not is_valid_position(column, row):
            raise IndexError(f"No cell at column {column}, row {row}")
        return Cell(int(self.grid[column, row]))

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Yield ``(column, row, cell)`` for every cell, bottom row first."""
        for column in range(COLS):
            for row in range(ROWS):
                yield column, row, self.cell(column, row)

    def column_height(self, column: int) -> int:
        """Number of pieces in a column."""
        return int(np.count_nonzero(self.grid[column] != Cell.EMPTY.value))

    def is_full(self) -> bool:
        return not np.any(self.grid == Cell.EMPTY.value)

    def get_valid_moves(self) -> List[int]:
        """Columns that can still take a piece (ignores whether the game is over)."""
        return [column for column in range(COLS) if self.column_height(column) < ROWS]

    def _check_invariants(self) -> None:
        if self.grid.shape != (COLS, ROWS):
            raise InvariantViolation(f"Grid has shape {self.grid.shape}, expected {(COLS, ROWS)}")
        unknown = set(np.unique(self.grid).tolist()) - CELL_VALUES
        if unknown:
            raise InvariantViolation(f"Grid holds values that are not cells: {sorted(unknown)}")

    def _winning_line(self) -> Optional[Tuple[Player, List[Coord]]]:
        self._check_invariants()
        return find_winning_line(self.grid)

    def calculate_result(self) -> GameResult:
        """
        Work out the result of the current position.

        A win is checked before a draw, so a full board containing four in
        a row is a win.

        Raises:
            InvariantViolation: if the grid is malformed
        """
        winning = self._winning_line()
        if winning is not None:
            return GameResult.win(winning[0])
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def get_winning_line(self) -> List[Coord]:
        """
        Get the cells of the winning line.

        Returns:
            List of (column, row) positions, or an empty list if nobody has won
        """
        winning = self._winning_line()
        return winning[1] if winning else []

    def get_state(self) -> np.ndarray:
        return self.grid.copy()

    def render(self, color: bool = False) -> str:
        return render_board_ascii(self.grid, color=color)

    def __str__(self) -> str:
        return self.render()
