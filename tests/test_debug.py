import logging

import pytest

from connectfour.debug import DebugLevel, DebugManager

LOGGER_NAME = "connectfour_test"


class RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def manager():
    mgr = DebugManager(logger_name=LOGGER_NAME)
    yield mgr
    mgr.configure(log_file="")


@pytest.fixture
def recorded():
    handler = RecordingHandler()
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(handler)
    yield handler.messages
    logger.removeHandler(handler)


def test_level_filtering(manager, recorded):
    manager.configure(level=DebugLevel.WARNING)

    manager.info("hidden", "board")
    manager.warning("shown", "board")

    assert recorded == ["[board] shown"]


def test_component_filtering(manager, recorded):
    manager.configure(level=DebugLevel.DEBUG, components=["game"])

    manager.debug("from board", "board")
    manager.debug("from game", "game")

    assert recorded == ["[game] from game"]


def test_none_level_is_silent(manager, recorded):
    manager.configure(level=DebugLevel.NONE)

    manager.error("nothing", "board")

    assert recorded == []


def test_file_logging(manager, tmp_path):
    log_file = tmp_path / "game.log"
    manager.configure(level=DebugLevel.INFO, log_file=str(log_file))

    manager.info("written", "cli")
    manager.configure(log_file="")

    assert "[cli] written" in log_file.read_text()


def test_timers(manager):
    assert manager.end_timer("never") is None

    manager.start_timer("work")
    elapsed = manager.end_timer("work")
    assert elapsed is not None and elapsed >= 0


def test_set_from_string(manager):
    assert manager.set_from_string("trace")
    assert manager.level is DebugLevel.TRACE
    assert not manager.set_from_string("loud")
    assert manager.level is DebugLevel.TRACE
