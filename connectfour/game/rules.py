"""
rules.py - Game flow and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which turns the board primitives into a playable game
2. ConnectFourEnv, a gymnasium-compatible wrapper where both players act
   through step()
"""

from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, DropError, GameResult, Player


class ConnectFourGame:
    """
    Two-player Connect Four game.

    A drop that succeeds and leaves the game in progress passes the turn.
    A drop that wins or fills the board ends the game, and every further
    drop is refused until ``reset``.
    """

    def __init__(self):
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()
        self.move_count = 0
        self.last_error: Optional[DropError] = None

    def reset(self) -> None:
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.move_count = 0
        self.last_error = None

    def play(self, column: int) -> bool:
        """
        Drop a piece for the current player.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if a piece was placed, False if the move was refused
        """
        self.last_error = None

        if self.is_game_over():
            debug.debug(f"Ignoring move in column {column}: game is over", "game")
            return False

        try:
            self.board.drop_piece(column)
        except DropError as e:
            debug.debug(f"Move refused: {e}", "game")
            self.last_error = e
            return False

        self.move_count += 1
        result = self.board.calculate_result()
        if result is GameResult.IN_PROGRESS:
            self.board.switch_turn()
        else:
            debug.info(f"Game over after {self.move_count} moves: {result.name}", "game")

        return True

    def get_result(self) -> GameResult:
        return self.board.calculate_result()

    def is_game_over(self) -> bool:
        return self.get_result().is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self.get_result().winner

    def get_current_player(self) -> Player:
        return self.board.turn

    def get_valid_moves(self) -> List[int]:
        """Columns that accept a piece right now; empty once the game is over."""
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def status_text(self) -> str:
        result = self.get_result()
        if result is GameResult.IN_PROGRESS:
            return f"Turn: {self.board.turn}"
        if result is GameResult.DRAW:
            return "It's a Draw!"
        return f"{result.winner} Won!"

    def render(self, color: bool = False) -> str:
        return self.board.render(color=color)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Both players act through ``step``; the reward is from the point of view
    of the player who made the move.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None):
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(low=0, high=2, shape=(COLS, ROWS), dtype=np.int8)

        self.game = ConnectFourGame()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Drop a piece for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        was_over = self.game.is_game_over()

        if not self.game.play(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, was_over, False, info

        result = self.game.get_result()
        if result.winner is not None:
            reward = self.reward_win
        elif result is GameResult.DRAW:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, result.is_game_over(), False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        return {
            'valid_moves': self.game.get_valid_moves(),
            'current_player': self.game.get_current_player().name,
            'game_result': self.game.get_result().name,
            'moves_made': self.game.move_count,
            'winning_line': self.game.board.get_winning_line(),
        }
