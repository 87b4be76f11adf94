"""Named loggers with console and rotating-file output."""

from __future__ import annotations

import argparse
import enum
import logging
import logging.handlers
import sys
from dataclasses import dataclass

__all__ = [
    "LogLevel",
    "LoggingConfig",
    "initialize_logging",
    "add_logging_arguments",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "log_level_to_string",
]

DEFAULT_LOGGER_NAME = "fenris"
TRACE = 5


class LogLevel(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    CRITICAL = 5
    OFF = 6


_PY_LEVELS = {
    LogLevel.TRACE: TRACE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.OFF: logging.CRITICAL + 10,
}

_LEVEL_NAMES = {
    LogLevel.TRACE: "trace",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warn",
    LogLevel.ERROR: "error",
    LogLevel.CRITICAL: "critical",
    LogLevel.OFF: "off",
}

_LEVELS_BY_NAME = {name: level for level, name in _LEVEL_NAMES.items()}

_RECORD_LABELS = {
    TRACE: "trace",
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}


@dataclass
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    console_logging: bool = True
    file_logging: bool = False
    log_file_path: str = "fenris.log"
    max_file_size: int = 5 * 1024 * 1024
    max_files: int = 3


class _Formatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(
            "[%(asctime)s.%(msecs)03d] [%(name)s] [%(level_label)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        record.level_label = _RECORD_LABELS.get(record.levelno, record.levelname.lower())
        return super().format(record)


_loggers: dict[str, logging.Logger] = {}
_default_logger: logging.Logger = logging.getLogger()


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def initialize_logging(config: LoggingConfig, logger_name: str = DEFAULT_LOGGER_NAME) -> bool:
    """Set up the named logger from ``config``; return False if that fails."""
    global _default_logger
    level = _PY_LEVELS[LogLevel(config.level)]
    formatter = _Formatter()
    handlers: list[logging.Handler] = []
    try:
        if config.console_logging:
            handlers.append(logging.StreamHandler(sys.stdout))
        if config.file_logging:
            handlers.append(
                logging.handlers.RotatingFileHandler(
                    config.log_file_path,
                    maxBytes=config.max_file_size,
                    backupCount=config.max_files,
                )
            )
    except OSError as exc:
        for handler in handlers:
            handler.close()
        print(f"Logging initialization failed: {exc}", file=sys.stderr)
        return False

    logger = logging.getLogger(logger_name)
    _reset_handlers(logger)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    _loggers[logger_name] = logger
    if logger_name == DEFAULT_LOGGER_NAME:
        _default_logger = logger
    return True


def add_logging_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add the logging options read by configure_logging to ``parser``."""
    parser.add_argument(
        "--log-level",
        default="info",
        help="log level: trace, debug, info, warn, error, critical or off",
    )
    parser.add_argument("--no-console-log", action="store_true", help="disable console logging")
    parser.add_argument("--file-log", action="store_true", help="enable logging to a file")
    parser.add_argument("--log-file", default="fenris.log", help="path of the log file")
    return parser


def configure_logging(args: argparse.Namespace, log_name: str = DEFAULT_LOGGER_NAME) -> bool:
    """Initialise logging from parsed command-line options."""
    level = _LEVELS_BY_NAME.get(args.log_level)
    if level is None:
        print(f"Invalid log level: {args.log_level}", file=sys.stderr)
        return False
    config = LoggingConfig(
        level=level,
        console_logging=not args.no_console_log,
        file_logging=args.file_log,
        log_file_path=args.log_file,
    )
    return initialize_logging(config, log_name)


def get_logger(logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return an initialised logger by name, or the default logger."""
    return _loggers.get(logger_name, _default_logger)


def set_log_level(level: LogLevel) -> None:
    """Set the level of every initialised logger and of the default logger."""
    py_level = _PY_LEVELS[LogLevel(level)]
    for logger in _loggers.values():
        logger.setLevel(py_level)
    _default_logger.setLevel(py_level)


def log_level_to_string(level: LogLevel) -> str:
    """Return the lower-case name of a level, "info" if it is unknown."""
    try:
        return _LEVEL_NAMES[LogLevel(level)]
    except ValueError:
        return "info"