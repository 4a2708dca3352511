"""
Logging for Buddy's Treehouse.

Every module logs under the ``treehouse`` tree via ``get_logger``. Nothing
is configured at import; hosts (the CLI) call ``setup_logging`` once.
Console records go to stderr so command output on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Literal, Mapping, TextIO

ROOT_LOGGER_NAME = "treehouse"
LOG_FILENAME = "treehouse.log"

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class TreehouseFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL component: message``, with the level colored on a TTY.

    The ``treehouse.`` prefix is dropped from logger names, so a record from
    ``treehouse.store`` shows as ``store``.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[2m",       # dim
        logging.INFO: "\033[34m",       # blue
        logging.WARNING: "\033[33m",    # yellow
        logging.ERROR: "\033[31;1m",    # bold red
        logging.CRITICAL: "\033[41m",   # red background
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = False):
        super().__init__(fmt="%(asctime)s %(levelname)-7s %(component)s: %(message)s", datefmt="%H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        record.component = record.name.removeprefix(f"{ROOT_LOGGER_NAME}.")
        text = super().format(record)
        if not self.use_colors:
            return text
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return text
        return text.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, use_colors: bool) -> None:
    handler.setLevel(level)
    handler.setFormatter(TreehouseFormatter(use_colors=use_colors))
    logger.addHandler(handler)


def setup_logging(
    level: LogLevelName = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: str = LOG_FILENAME,
    stream: TextIO | None = None,
) -> logging.Logger:
    """(Re)configure the ``treehouse`` logger tree.

    Existing handlers are closed and replaced, so calling this twice does
    not duplicate output. The file handler is only added when ``log_dir``
    is given.

    Returns:
        The configured root ``treehouse`` logger
    """
    numeric_level = logging.getLevelName(level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(numeric_level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if console_output:
        console_stream = stream if stream is not None else sys.stderr
        _attach(root, logging.StreamHandler(console_stream), numeric_level, console_stream.isatty())

    if file_output and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        _attach(root, logging.FileHandler(log_path / log_filename, encoding="utf-8"), numeric_level, False)

    root.propagate = False
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for a treehouse component, e.g. ``get_logger("store")``."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def _describe(details: Mapping[str, Any] | None) -> str:
    if not details:
        return ""
    return ", ".join(f"{key}={value}" for key, value in details.items())


def log_operation(
    logger: logging.Logger,
    operation: str,
    details: Mapping[str, Any] | None = None,
    level: int = logging.INFO,
) -> None:
    """Log ``operation: key=value, ...``."""
    described = _describe(details)
    logger.log(level, f"{operation}: {described}" if described else operation)


def log_error(
    logger: logging.Logger,
    operation: str,
    error: BaseException,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Log a failed operation with its traceback.

    Call from inside the ``except`` block so the traceback is attached.
    """
    message = f"{operation} failed ({type(error).__name__}: {error})"
    described = _describe(context)
    if described:
        message = f"{message} [{described}]"
    logger.error(message, exc_info=error)
