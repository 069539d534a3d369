"""Tests for Loguru configuration."""

import logging

import pytest
from loguru import logger

from sports_venues.logging.setup import setup_logging


@pytest.fixture
def captured():
    setup_logging("INFO")
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)


def test_standard_logging_is_intercepted(captured):
    logging.getLogger("some.library").warning("table fetch slow")
    records = [r for r in captured if r["message"] == "table fetch slow"]
    assert records
    assert records[0]["level"].name == "WARNING"


def test_httpx_quietened_below_debug(captured):
    assert logging.getLogger("httpx").level == logging.WARNING
