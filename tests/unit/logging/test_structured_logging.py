from __future__ import annotations

import io
import json
import logging
from enum import Enum

import pytest

from wirebox.logging import (
    LoggingSettings,
    LogLevel,
    StructuredFormatter,
    WireboxLogger,
    get_logger,
)


class Color(Enum):
    RED = "red"


@pytest.fixture
def enable_logging():
    logging.disable(logging.NOTSET)


def capture(logger: WireboxLogger, json_format: bool = False) -> io.StringIO:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter(json_format=json_format, include_timestamp=False))
    logger.stdlib_logger.handlers = [handler]
    return stream


def test_log_level_conversions():
    assert LogLevel.from_string(" debug ") is LogLevel.DEBUG
    assert LogLevel.ERROR.to_stdlib_level() == logging.ERROR
    with pytest.raises(ValueError):
        LogLevel.from_string("LOUD")


def test_logging_settings_from_environment(monkeypatch):
    monkeypatch.setenv("WIREBOX_LOGGING_LEVEL", "info")
    monkeypatch.setenv("WIREBOX_LOGGING_JSON_FORMAT", "true")

    settings = LoggingSettings.load()

    assert settings.level == "INFO"
    assert settings.json_format is True


def test_logging_settings_reject_unknown_level():
    with pytest.raises(ValueError):
        LoggingSettings(level="LOUD")


def test_text_format_appends_context(enable_logging):
    logger = get_logger("wirebox.tests.text", level="DEBUG")
    stream = capture(logger)

    logger.info("Registered service", service_key="Cow", lifetime="Scoped", note="two words")

    assert stream.getvalue().strip() == (
        'Registered service [INFO] wirebox.tests.text '
        'service_key=Cow lifetime=Scoped note="two words"'
    )


def test_json_format(enable_logging):
    logger = get_logger("wirebox.tests.json", level=LogLevel.DEBUG)
    stream = capture(logger, json_format=True)

    logger.warning("Rejected", color=Color.RED, count=2)

    data = json.loads(stream.getvalue())
    assert data == {
        "message": "Rejected",
        "level": "WARNING",
        "logger": "wirebox.tests.json",
        "color": "red",
        "count": 2,
    }


def test_level_filters_records(enable_logging):
    logger = get_logger("wirebox.tests.level", level="WARNING")
    stream = capture(logger)

    logger.debug("hidden")
    logger.info("hidden")

    assert stream.getvalue() == ""
    assert not logger.is_enabled_for(LogLevel.INFO)
    logger.set_level("DEBUG")
    assert logger.is_enabled_for(LogLevel.DEBUG)


def test_bind_and_context(enable_logging):
    logger = get_logger("wirebox.tests.bind", level="DEBUG")
    stream = capture(logger)
    bound = logger.bind(collection="services")

    with logger.context(request="r1"):
        bound.info("Loaded")
    bound.info("Outside")

    lines = stream.getvalue().splitlines()
    assert lines[0].endswith("request=r1 collection=services")
    assert lines[1].endswith("collection=services")
    assert "request" not in lines[1]


def test_error_with_exception_info(enable_logging):
    logger = get_logger("wirebox.tests.exc", level="DEBUG")
    stream = capture(logger, json_format=True)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.error("Failed", exc_info=True)

    data = json.loads(stream.getvalue())
    assert "RuntimeError: boom" in data["exception"]


def test_file_handler(tmp_path):
    log_file = tmp_path / "wirebox.log"
    settings = LoggingSettings(
        level="INFO", console_enabled=False, file_enabled=True, file_path=str(log_file)
    )

    logger = WireboxLogger("wirebox.tests.file", settings=settings)

    handlers = logger.stdlib_logger.handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.FileHandler)
    assert logger.stdlib_logger.propagate is False
    handlers[0].close()
