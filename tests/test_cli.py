import argparse

import pytest

import run
from connectfour.debug import DebugLevel, debug
from connectfour.interfaces.cli import SimpleCLI, build_parser
from connectfour.utils import GameResult, Player


@pytest.fixture
def feed_input(monkeypatch):
    def _feed(*lines):
        remaining = list(lines)

        def fake_input(prompt=""):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        monkeypatch.setattr("builtins.input", fake_input)

    return _feed


def make_cli(**kwargs):
    defaults = dict(command="play", no_color=True, position=None, iterations=10)
    defaults.update(kwargs)
    return SimpleCLI(argparse.Namespace(**defaults))


def test_play_until_win_then_quit(feed_input, capsys):
    feed_input("0", "0", "1", "1", "2", "2", "3", "4", "q")
    cli = make_cli()

    cli.run()

    out = capsys.readouterr().out
    assert "Player A (Red) Won!" in out
    assert "The game is over" in out
    assert "Quitting game." in out
    assert cli.game.get_result() is GameResult.PLAYER_A_WIN


def test_bad_input_and_full_column_do_not_end_session(feed_input, capsys):
    feed_input("x", "9", *["5"] * 7, "1")
    cli = make_cli()

    cli.run()

    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Column 9 is outside 0-6" in out
    assert "Column 5 is full" in out
    assert cli.game.move_count == 7
    assert cli.game.get_current_player() is Player.B


def test_reset_command_starts_over(feed_input, capsys):
    feed_input("0", "r")
    cli = make_cli()

    cli.run()

    assert "Game reset." in capsys.readouterr().out
    assert cli.game.move_count == 0
    assert cli.game.get_current_player() is Player.A


def test_test_command_reports_win(capsys):
    position = ",".join(["0"] * 35 + ["1", "1", "1", "1", "2", "2", "2"])
    cli = make_cli(command="test", position=position)

    cli.run()

    out = capsys.readouterr().out
    assert "Result: PLAYER_A_WIN" in out
    assert "Winning line: [(0, 0), (1, 0), (2, 0), (3, 0)]" in out
    assert "Empty spaces: 35" in out


def test_test_command_reports_parse_errors(capsys):
    cli = make_cli(command="test", position="1,2,x")

    cli.run()

    assert "Error parsing position" in capsys.readouterr().out


def test_benchmark_runs(capsys):
    cli = make_cli(command="benchmark", iterations=20)

    cli.run()

    out = capsys.readouterr().out
    assert "Board initialization" in out
    assert "Played 2 random games" in out


def test_run_main_configures_debug_level(feed_input, capsys):
    feed_input("q")
    try:
        run.main(["play", "--debug_level", "warning", "--no-color"])
        assert debug.level is DebugLevel.WARNING
    finally:
        debug.configure(level=DebugLevel.ERROR)

    assert "Quitting game." in capsys.readouterr().out


@pytest.mark.parametrize("iterations", [0, -5])
def test_benchmark_rejects_non_positive_iterations(iterations, capsys):
    cli = make_cli(command="benchmark", iterations=iterations)

    cli.run()

    assert "Iterations must be at least 1" in capsys.readouterr().out


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_parser_rejects_bad_iterations(value):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["benchmark", "--iterations", value])


def test_parse_args_applies_logging_flags(tmp_path):
    log_file = tmp_path / "cli.log"
    cli = SimpleCLI()
    try:
        cli.parse_args(["test", "--debug_level", "info", "--log_file", str(log_file),
                        "--position", "1,2"])
        assert debug.level is DebugLevel.INFO
        assert cli.args.command == "test"
        assert cli.args.iterations == 1000
    finally:
        debug.configure(level=DebugLevel.ERROR, log_file="")

    assert log_file.exists()


def test_parse_args_debug_flag_wins_over_level():
    cli = SimpleCLI()
    try:
        cli.parse_args(["play", "--debug", "--debug_level", "warning"])
        assert debug.level is DebugLevel.DEBUG
    finally:
        debug.configure(level=DebugLevel.ERROR)
