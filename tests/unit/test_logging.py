"""Unit tests for structured logging setup."""

import io
import json
import logging

import pytest

from fundarb.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Tests for handler and renderer wiring."""

    def test_json_lines_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", json_format=True, stream=stream)
        get_logger("ledger_test").info("deposit_recorded", amount=10.0)
        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "deposit_recorded"
        assert record["amount"] == 10.0
        assert record["logger"] == "fundarb.ledger_test"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging("WARNING", json_format=True, stream=stream)
        get_logger("level_test").info("ignored")
        assert stream.getvalue() == ""

    def test_unknown_level_defaults_to_info(self) -> None:
        setup_logging("chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO

    def test_single_handler(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Tests for logger namespacing."""

    def test_prefixed(self) -> None:
        stream = io.StringIO()
        setup_logging(json_format=True, stream=stream)
        get_logger("core.orders").warning("x")
        assert json.loads(stream.getvalue())["logger"] == "fundarb.core.orders"

    def test_already_namespaced(self) -> None:
        stream = io.StringIO()
        setup_logging(json_format=True, stream=stream)
        get_logger("fundarb.main").warning("x")
        assert json.loads(stream.getvalue())["logger"] == "fundarb.main"
