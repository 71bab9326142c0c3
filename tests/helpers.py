from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, Cell, Player


def drawn_board() -> Board:
    """A full board with no four in a row anywhere."""
    board = Board()
    for column in range(COLS):
        for row in range(ROWS):
            stripe = (column // 2) % 2
            board.grid[column, row] = Cell.A.value if stripe ^ (row % 2) == 0 else Cell.B.value
    return board


def force_drops(board: Board, player: Player, columns) -> None:
    """Drop pieces for one player without passing the turn between them."""
    board.turn = player
    for column in columns:
        board.drop_piece(column)
