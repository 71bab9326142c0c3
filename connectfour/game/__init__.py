"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board engine and the game flow built on it.
"""

from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'ConnectFourGame', 'ConnectFourEnv']
