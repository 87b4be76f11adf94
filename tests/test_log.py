import argparse
import logging

import pytest

from fenris.log import (
    LoggingConfig,
    LogLevel,
    add_logging_arguments,
    configure_logging,
    get_logger,
    initialize_logging,
    log_level_to_string,
    set_log_level,
)


@pytest.fixture
def cleanup():
    names = []
    yield names
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


@pytest.mark.parametrize(
    "level, text",
    [
        (LogLevel.TRACE, "trace"),
        (LogLevel.DEBUG, "debug"),
        (LogLevel.INFO, "info"),
        (LogLevel.WARN, "warn"),
        (LogLevel.ERROR, "error"),
        (LogLevel.CRITICAL, "critical"),
        (LogLevel.OFF, "off"),
    ],
)
def test_log_level_to_string(level, text):
    assert log_level_to_string(level) == text


def test_log_level_to_string_unknown_defaults_to_info():
    assert log_level_to_string(42) == "info"


def test_console_logging_format(capsys, cleanup):
    cleanup.append("console_logger")
    assert initialize_logging(LoggingConfig(level=LogLevel.INFO), "console_logger")
    get_logger("console_logger").info("hello there")
    out = capsys.readouterr().out
    assert "[console_logger] [info] hello there" in out
    assert out.startswith("[")


def test_level_filters_messages(capsys, cleanup):
    cleanup.append("filtered_logger")
    assert initialize_logging(LoggingConfig(level=LogLevel.WARN), "filtered_logger")
    logger = get_logger("filtered_logger")
    logger.info("quiet")
    logger.warning("loud")
    out = capsys.readouterr().out
    assert "quiet" not in out
    assert "[warning] loud" in out


def test_file_logging(tmp_path, cleanup):
    cleanup.append("file_logger")
    path = tmp_path / "out.log"
    config = LoggingConfig(
        level=LogLevel.DEBUG,
        console_logging=False,
        file_logging=True,
        log_file_path=str(path),
    )
    assert initialize_logging(config, "file_logger")
    get_logger("file_logger").debug("written to disk")
    for handler in get_logger("file_logger").handlers:
        handler.flush()
    assert "[file_logger] [debug] written to disk" in path.read_text()


def test_file_logging_bad_path_fails(tmp_path, capsys, cleanup):
    cleanup.append("bad_file_logger")
    config = LoggingConfig(
        console_logging=False,
        file_logging=True,
        log_file_path=str(tmp_path / "missing" / "x.log"),
    )
    assert initialize_logging(config, "bad_file_logger") is False
    assert "Logging initialization failed" in capsys.readouterr().err


def test_get_logger_unknown_returns_default(cleanup):
    cleanup.append("known_logger")
    initialize_logging(LoggingConfig(console_logging=False), "known_logger")
    known = get_logger("known_logger")
    assert known.name == "known_logger"
    assert get_logger("never_initialised_name") is not known


def test_set_log_level_applies_to_loggers(cleanup):
    cleanup.append("level_logger")
    initialize_logging(LoggingConfig(level=LogLevel.INFO, console_logging=False), "level_logger")
    logger = get_logger("level_logger")
    set_log_level(LogLevel.ERROR)
    assert logger.getEffectiveLevel() == logging.ERROR
    set_log_level(LogLevel.INFO)
    assert logger.getEffectiveLevel() == logging.INFO


def test_configure_logging_from_arguments(capsys, cleanup):
    cleanup.append("cli_logger")
    parser = add_logging_arguments(argparse.ArgumentParser())
    args = parser.parse_args(["--log-level", "debug"])
    assert configure_logging(args, "cli_logger")
    get_logger("cli_logger").debug("from cli")
    assert "[cli_logger] [debug] from cli" in capsys.readouterr().out


def test_configure_logging_disables_console(capsys, cleanup):
    cleanup.append("silent_logger")
    parser = add_logging_arguments(argparse.ArgumentParser())
    args = parser.parse_args(["--no-console-log"])
    assert configure_logging(args, "silent_logger")
    get_logger("silent_logger").info("hidden")
    assert "hidden" not in capsys.readouterr().out


def test_configure_logging_invalid_level(capsys):
    parser = add_logging_arguments(argparse.ArgumentParser())
    args = parser.parse_args(["--log-level", "bogus"])
    assert configure_logging(args, "invalid_logger") is False
    assert "Invalid log level: bogus" in capsys.readouterr().err