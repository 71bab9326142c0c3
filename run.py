#!/usr/bin/env python3
"""
run.py - Main entry point for the two-player Connect Four game
"""

from connectfour.interfaces.cli import SimpleCLI


def main(argv=None):
    """Main entry point for the Connect Four game."""
    cli = SimpleCLI()
    cli.parse_args(argv)
    cli.run()


if __name__ == "__main__":
    main()
