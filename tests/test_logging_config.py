"""JSON logging configuration tests."""

import io
import json
import logging

import pytest

from cardsmith.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_records_are_json_lines(restore_root_logger):
    stream = io.StringIO()
    setup_logging("DEBUG", stream=stream)

    logging.getLogger("cardsmith.test").info("page scraped", extra={"fragment_count": 3})

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["message"] == "page scraped"
    assert record["level"] == "INFO"
    assert record["logger"] == "cardsmith.test"
    assert record["fragment_count"] == 3
    assert "timestamp" in record


def test_httpx_quieted(restore_root_logger):
    setup_logging("DEBUG", stream=io.StringIO())
    assert logging.getLogger("httpx").level == logging.WARNING
