import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from creepy.logger import LOGGER_NAME, configure


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure()


def test_logs_go_to_stderr_only_by_default():
    lg = configure(level="DEBUG")

    assert lg.name == LOGGER_NAME
    assert lg.level == logging.DEBUG
    assert not lg.propagate
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stderr


def test_log_file_is_added_and_handlers_are_replaced(tmp_path):
    log_file = tmp_path / "creepy.log"
    configure(log_file=log_file)
    lg = configure(level="WARNING", log_file=log_file, log_format="%(levelname)s:%(message)s")

    assert len(lg.handlers) == 2
    assert isinstance(lg.handlers[1], RotatingFileHandler)

    lg.info("hidden")
    lg.warning("crawling %s", "https://x.test/")
    for handler in lg.handlers:
        handler.flush()
    assert log_file.read_text(encoding="utf-8") == "WARNING:crawling https://x.test/\n"
