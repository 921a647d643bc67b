# File: tests/test_logger.py
import logging
import sys

import pytest

from site_corpus.logger import LOGGER_NAME, configure


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure()


def test_configure_replaces_handlers():
    configure(level="DEBUG")
    lg = configure(level="WARNING")

    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.level == logging.WARNING
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stdout
    assert lg.propagate is False


def test_configure_appends_when_asked():
    configure()
    lg = configure(replace_handlers=False)
    assert len(lg.handlers) == 2


def test_log_file_written_in_new_directory(tmp_path):
    log_file = tmp_path / "logs" / "crawl.log"
    lg = configure(level="INFO", log_file=log_file, log_format="%(levelname)s %(message)s")
    lg.info("Crawl started")
    for handler in lg.handlers:
        handler.flush()

    assert log_file.read_text(encoding="utf-8") == "INFO Crawl started\n"
