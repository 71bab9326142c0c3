"""
connectfour - Two-player Connect Four

This package provides the board engine, the game flow built on it, a
Gymnasium environment wrapper and a text interface for hot-seat play.
"""

# Version number
__version__ = '0.1.0'
