"""Tests for logging helpers."""

import io
import logging

import pytest

from pyimgconv import load_config, registry
from pyimgconv.utils import create_console_logger, get_library_logger, resolve_level
from pyimgconv.utils.logger import SUCCESS_LEVEL_NUM, ColoredFormatter


@pytest.fixture
def package_level():
    logger = logging.getLogger("pyimgconv")
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_library_logger_is_silent_by_default():
    logger = get_library_logger("pyimgconv.tests.silent")

    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
    assert logger.level == logging.NOTSET


@pytest.mark.parametrize(
    "level, expected",
    [
        ("DEBUG", logging.DEBUG),
        (" warning ", logging.WARNING),
        ("success", SUCCESS_LEVEL_NUM),
        (logging.ERROR, logging.ERROR),
        ("CHATTY", logging.INFO),
    ],
)
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_console_logger_writes_to_stream():
    stream = io.StringIO()
    logger = create_console_logger("pyimgconv.tests.console", level="DEBUG", stream=stream)

    logger.debug("decoded")

    assert logger.level == logging.DEBUG
    assert not logger.propagate
    assert isinstance(logger.handlers[0].formatter, ColoredFormatter)
    assert "decoded" in stream.getvalue()
    # StringIO is not a terminal
    assert "\033[" not in stream.getvalue()


def test_console_logger_is_not_duplicated():
    stream = io.StringIO()
    first = create_console_logger("pyimgconv.tests.twice", stream=stream)
    second = create_console_logger("pyimgconv.tests.twice", stream=stream)

    assert first is second
    assert len(second.handlers) == 1


def test_load_config_sets_package_level(package_level):
    try:
        load_config(["logging.level=DEBUG"])
        assert package_level.level == logging.DEBUG
        assert get_library_logger("pyimgconv.engine").isEnabledFor(logging.DEBUG)

        load_config(["logging.level=WARNING"])
        assert not get_library_logger("pyimgconv.engine").isEnabledFor(logging.INFO)
    finally:
        registry.unregister("config")


def test_success_level(caplog):
    logger = logging.getLogger("pyimgconv.tests.success")
    logger.setLevel(logging.INFO)

    with caplog.at_level(logging.INFO, logger="pyimgconv.tests.success"):
        logger.success("converted")

    assert caplog.records[-1].levelno == SUCCESS_LEVEL_NUM
    assert caplog.records[-1].getMessage() == "converted"
