"""Tests for the structured logger."""

import io
import json

import pytest

from formcraft.utils.logger import (
    JsonFormatter,
    Logger,
    LogLevel,
    MemoryHandler,
    StreamHandler,
    TextFormatter,
)


def test_level_filtering():
    handler = MemoryHandler()
    logger = Logger("test", level=LogLevel.WARNING, handlers=[handler])
    logger.info("ignored")
    logger.warning("kept")
    assert [r.message for r in handler.records] == ["kept"]


def test_context_is_merged():
    handler = MemoryHandler()
    logger = Logger("test", level=LogLevel.DEBUG, handlers=[handler])
    child = logger.with_context(form="signup")
    child.debug("checked", field="email")
    assert handler.records[0].context == {"form": "signup", "field": "email"}


def test_text_formatter():
    stream = io.StringIO()
    logger = Logger(
        "test",
        level=LogLevel.DEBUG,
        handlers=[StreamHandler(stream, formatter=TextFormatter("[{level}] {message}"))],
    )
    logger.info("Rule failed", rule="email")
    assert stream.getvalue() == "[INFO] Rule failed rule=email\n"


def test_json_formatter():
    stream = io.StringIO()
    logger = Logger(
        "test",
        level=LogLevel.DEBUG,
        handlers=[StreamHandler(stream, formatter=JsonFormatter())],
    )
    logger.warning("Bad pattern", pattern="(")
    data = json.loads(stream.getvalue())
    assert data["level"] == "WARNING"
    assert data["context"] == {"pattern": "("}


def test_broken_handler_does_not_raise(capsys):
    class Broken(MemoryHandler):
        def emit(self, record):
            raise RuntimeError("boom")

    logger = Logger("test", level=LogLevel.DEBUG, handlers=[Broken()])
    logger.error("still fine")
    assert "boom" in capsys.readouterr().err


@pytest.mark.parametrize("name, level", [("debug", LogLevel.DEBUG), ("ERROR", LogLevel.ERROR), (30, LogLevel.WARNING)])
def test_parse_level(name, level):
    assert LogLevel.parse(name) is level


def test_parse_unknown_level():
    with pytest.raises(ValueError):
        LogLevel.parse("loud")
