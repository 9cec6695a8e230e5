"""
test_logging_config.py — Tests for provider_dispatch/logging_config.py

Verifies Loguru setup, stdlib logging interception, and request
context binding. Uses loguru's sink capture for assertions.

Called by: pytest
Depends on: provider_dispatch/logging_config.py
"""

import logging
import os
from unittest.mock import patch

import pytest
from loguru import logger

from provider_dispatch.config import Settings
from provider_dispatch.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _clean_loguru():
    """Remove all handlers before/after each test for isolation."""
    logger.remove()
    yield
    logger.remove()


def test_setup_logging_adds_handler():
    """setup_logging() should add at least one Loguru handler."""
    assert len(logger._core.handlers) == 0
    setup_logging()
    assert len(logger._core.handlers) > 0


def test_stdlib_logging_intercepted():
    """After setup, stdlib logging.getLogger() messages go through Loguru."""
    setup_logging()

    # Add test sink AFTER setup (setup calls logger.remove() internally)
    messages = []
    logger.add(lambda m: messages.append(str(m)), format="{message}")

    logging.getLogger("dispatch.test").warning("intercepted message")

    assert any("intercepted message" in m for m in messages)


def test_log_level_from_env():
    """LOG_LEVEL env var controls the stdout sink's minimum level."""
    with patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}):
        with patch("loguru.logger.add") as mock_add:
            setup_logging()
    assert mock_add.call_args_list[0].kwargs["level"] == "WARNING"


def test_log_level_from_settings(monkeypatch):
    """Without LOG_LEVEL in the environment, settings.log_level applies."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    with patch(
        "provider_dispatch.logging_config.get_settings",
        return_value=Settings(log_level="error"),
    ):
        with patch("loguru.logger.add") as mock_add:
            setup_logging()
    assert mock_add.call_args_list[0].kwargs["level"] == "ERROR"


def test_context_binding():
    """logger.contextualize() adds fields to log records."""
    records = []
    logger.add(lambda m: records.append(m.record), format="{message}")

    with logger.contextualize(request_id="abc123"):
        logger.info("request log")

    assert records[-1]["extra"].get("request_id") == "abc123"


def test_context_not_leaked():
    """Context fields should not persist after contextualize block exits."""
    records = []
    logger.add(lambda m: records.append(m.record), format="{message}")

    with logger.contextualize(request_id="abc123"):
        logger.info("inside")
    logger.info("outside")

    assert "request_id" not in records[-1]["extra"]


def test_production_mode_uses_serialize(monkeypatch):
    """APP_ENV=production switches stdout to JSON lines."""
    monkeypatch.setenv("APP_ENV", "production")
    with patch("loguru.logger.add") as mock_add:
        setup_logging()
    serialize_calls = [c for c in mock_add.call_args_list if c.kwargs.get("serialize") is True]
    assert len(serialize_calls) == 1


def test_development_mode_is_colorized(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    with patch("loguru.logger.add") as mock_add:
        setup_logging()
    assert mock_add.call_args_list[0].kwargs.get("colorize") is True
    assert "serialize" not in mock_add.call_args_list[0].kwargs


def test_production_mode_from_settings(monkeypatch):
    """Settings.is_production decides the sink format."""
    monkeypatch.delenv("APP_ENV", raising=False)
    with patch(
        "provider_dispatch.logging_config.get_settings",
        return_value=Settings(app_env=" Production "),
    ):
        with patch("loguru.logger.add") as mock_add:
            setup_logging()
    assert mock_add.call_args_list[0].kwargs.get("serialize") is True
