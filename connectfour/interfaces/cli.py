"""
cli.py - Command-line interface for Connect Four

Hot-seat play for two people at one terminal, plus commands to inspect a
board position and to benchmark the board engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame
from connectfour.utils import ROWS, COLS, Cell, GameResult

HEADING = "Connect – 4"

INSTRUCTIONS = (
    "In this game there are two players, A and B, A having the red pieces and B having "
    "the yellow pieces. The way you play this game is by dropping a piece in any of the "
    "columns. The goal of the game is to make any sequence of four pieces horizontally, "
    "vertically, or diagonally."
)

QUIT = "q"
RESET = "r"


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value} must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Two-player Connect Four',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play a hot-seat game
    python run.py play

    # Play with debug logging
    python run.py play --debug_level debug

    # Inspect a position (42 values, top row first: 0 empty, 1 A, 2 B)
    python run.py test --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,1,1,1,2,2,2

    # Benchmark the board engine
    python run.py benchmark --iterations 5000
    """
    )
    parser.add_argument('command',
        choices=['play', 'test', 'benchmark'],
        help='play (interactive game), test (inspect a position), benchmark (performance)')
    parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='error',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    parser.add_argument('--log_file',
        type=str,
        help='Also write log messages to this file')
    parser.add_argument('--position',
        type=str,
        help=f'Board position to inspect, {ROWS * COLS} comma-separated values (used with test)')
    parser.add_argument('--iterations',
        type=positive_int,
        default=1000,
        help='Number of iterations (used with benchmark)')
    parser.add_argument('--no-color',
        action='store_true',
        help='Disable colored pieces (used with play)')
    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure the debug level from args.debug or args.debug_level."""
    debug.set_from_string('debug' if args.debug else args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self, args: Optional[argparse.Namespace] = None):
        self.game = ConnectFourGame()
        self.args = args

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging flags."""
        self.args = build_parser().parse_args(argv)
        configure_debug(self.args)

    def run(self) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def _use_color(self) -> bool:
        return not getattr(self.args, 'no_color', False) and sys.stdout.isatty()

    def show(self) -> None:
        print(self.game.render(color=self._use_color()))
        print(self.game.status_text())

    def play_game(self) -> None:
        """Play a Connect Four game between two people."""
        print(HEADING)
        print(INSTRUCTIONS)
        print(f"Enter a column number (0-{COLS - 1}) to drop a piece, "
              f"'{RESET}' to reset, '{QUIT}' to quit.")

        self.game.reset()
        self.show()

        while True:
            try:
                user_input = input("> ").strip().lower()
            except EOFError:
                print()
                return

            if user_input == QUIT:
                print("Quitting game.")
                return

            if user_input == RESET:
                self.game.reset()
                print("Game reset.")
                self.show()
                continue

            try:
                column = int(user_input)
            except ValueError:
                print(f"Invalid input. Enter a column number, '{RESET}' or '{QUIT}'.")
                continue

            if self.game.is_game_over():
                print(f"The game is over. Enter '{RESET}' to play again or '{QUIT}' to quit.")
                continue

            if not self.game.play(column):
                print(f"Invalid move: {self.game.last_error}")
                continue

            self.show()

    def test_position(self) -> None:
        """Inspect a board position given on the command line."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return

        try:
            values = [int(v) for v in self.args.position.split(',')]
            board = Board.from_position(values)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return

        print("Loaded position:")
        print(board.render())

        result = board.calculate_result()
        print(f"\nResult: {result.name}")
        if result.winner is not None:
            print(f"Winner: {result.winner}")
            print(f"Winning line: {board.get_winning_line()}")

        empty_count = sum(1 for _, _, cell in board.cells() if cell is Cell.EMPTY)
        print(f"Empty spaces: {empty_count}")
        if result is GameResult.IN_PROGRESS:
            print(f"Valid moves: {board.get_valid_moves()}")

    def benchmark(self) -> None:
        """Time the board engine."""
        iterations = self.args.iterations
        if iterations < 1:
            print(f"Iterations must be at least 1, got {iterations}")
            return

        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        board = Board()
        for _ in range(12):
            board.drop_piece(random.choice(board.get_valid_moves()))
            board.switch_turn()

        debug.start_timer("result_check")
        for _ in range(iterations):
            board.calculate_result()
        result_time = debug.end_timer("result_check")
        print(f"Result checks: {result_time:.6f} seconds total, "
              f"{result_time / iterations * 1000:.6f} ms per check")

        games = max(1, iterations // 10)
        total_moves = 0
        debug.start_timer("game_simulation")
        for _ in range(games):
            game = ConnectFourGame()
            while not game.is_game_over():
                game.play(random.choice(game.get_valid_moves()))
            total_moves += game.move_count
        simulation_time = debug.end_timer("game_simulation")
        print(f"Played {games} random games with {total_moves} moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games * 1000:.6f} ms per game")


def main():
    cli = SimpleCLI()
    cli.run()


if __name__ == "__main__":
    main()
