"""Unit tests for the logging configuration."""

import logging
from pathlib import Path

import pytest
import structlog

from crop_forecast.logging import bind_run_context, configure_logging


def test_configure_logging(mocker):
    """Test that the logging is configured correctly."""
    mock_basic_config = mocker.patch("logging.basicConfig")
    configure_logging(level="DEBUG")
    mock_basic_config.assert_called_with(
        level=logging.DEBUG, format="%(message)s", stream=mocker.ANY
    )

    configure_logging(level="warning", json_output=True)
    mock_basic_config.assert_called_with(
        level=logging.WARNING, format="%(message)s", stream=mocker.ANY
    )

    with pytest.raises(ValueError, match="Unsupported log level"):
        configure_logging(level="verbose")

    # Reset logging configuration
    structlog.reset_defaults()


def test_bind_run_context_replaces_previous_run():
    """Only the current command's context is merged into events."""
    structlog.contextvars.bind_contextvars(command="inspect", item="Rice")
    bind_run_context("forecast", Path("data/rice.csv"), method="linear")
    assert structlog.contextvars.get_contextvars() == {
        "command": "forecast",
        "source": str(Path("data/rice.csv")),
        "method": "linear",
    }
    structlog.contextvars.clear_contextvars()
