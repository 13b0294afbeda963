"""Shared fixtures."""

import os

import pytest

from formcraft.core.config import get_config, reset_config
from formcraft.utils.logger import LogLevel, MemoryHandler, get_logger


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Each test starts from default configuration."""
    for key in list(os.environ):
        if key.startswith("FORMCRAFT_"):
            monkeypatch.delenv(key)
    reset_config()
    yield get_config()
    reset_config()


@pytest.fixture
def captured_logs():
    """Collect records from the validation logger at DEBUG level."""
    logger = get_logger("formcraft.validation")
    handler = MemoryHandler()
    previous = logger.level
    logger.level = LogLevel.DEBUG
    logger.add_handler(handler)
    yield handler.records
    logger.remove_handler(handler)
    logger.level = previous
