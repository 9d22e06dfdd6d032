"""Tests for the logging setup."""

import importlib
import logging

import pytest
import structlog

from btcli.log import coerce_level, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)
    structlog.reset_defaults()


class TestCoerceLevel:
    """Tests for level names and numbers."""

    def test_name_ignores_case(self):
        assert coerce_level("debug") == logging.DEBUG

    def test_number_passes_through(self):
        assert coerce_level(15) == 15

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Invalid log level: loud"):
            coerce_level("loud")


class TestConfigureLogging:
    """Tests for where log output ends up."""

    def test_importing_configures_nothing(self, restore_logging):
        structlog.reset_defaults()
        importlib.reload(importlib.import_module("btcli.log"))

        assert not structlog.is_configured()

    def test_unconfigured_logger_keeps_stdout_clean(self, restore_logging, capsys, caplog):
        structlog.reset_defaults()

        get_logger("btcli.early").warning("early message")

        assert capsys.readouterr().out == ""
        assert "early message" in caplog.text

    def test_records_go_to_stderr(self, restore_logging, capsys):
        configure_logging("DEBUG")

        get_logger("btcli.configured").debug("hello", key="v")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello" in captured.err
        assert "key=v" in captured.err

    def test_level_filters_records(self, restore_logging, capsys):
        configure_logging("WARNING")

        get_logger("btcli.quiet").info("not shown")

        assert "not shown" not in capsys.readouterr().err
