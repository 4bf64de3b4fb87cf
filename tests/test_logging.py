import logging
from pathlib import Path

import pytest

from railgun_client.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def _reset_package_logging():
    yield
    reset_logging()


def test_configure_logging_writes_package_records_to_file(tmp_path: Path):
    log_path = tmp_path / "logs" / "railgun-client.log"

    configure_logging("debug", log_path=log_path)
    logging.getLogger("railgun_client.client").debug("hello railgun")
    for handler in logging.getLogger("railgun_client").handlers:
        handler.flush()

    assert logging.getLogger("railgun_client").level == logging.DEBUG
    content = log_path.read_text(encoding="utf-8")
    assert "| DEBUG | railgun_client.client | hello railgun" in content


def test_configure_logging_leaves_root_logger_alone():
    root = logging.getLogger()
    handlers_before = list(root.handlers)
    level_before = root.level

    configure_logging("WARNING")

    assert root.handlers == handlers_before
    assert root.level == level_before
    assert logging.getLogger("aiohttp.client").handlers == []


def test_configure_logging_replaces_previous_handlers():
    configure_logging("INFO")
    configure_logging("INFO")

    assert len(logging.getLogger("railgun_client").handlers) == 1


def test_log_network_attaches_aiohttp_client_logger():
    configure_logging("DEBUG", log_network=True)

    network_logger = logging.getLogger("aiohttp.client")
    assert network_logger.level == logging.DEBUG
    assert network_logger.handlers == logging.getLogger("railgun_client").handlers

    reset_logging()

    assert network_logger.handlers == []
    assert network_logger.level == logging.NOTSET


def test_unknown_level_falls_back_to_info():
    configure_logging("chatty")

    assert logging.getLogger("railgun_client").level == logging.INFO
