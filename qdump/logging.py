"""Logging utilities for qdump.

Loggers live under the ``qdump`` namespace, write to stderr and do not
propagate to the root logger. Rendered dumps never go through these
loggers; they are delivered to the message channel or file sink.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_PACKAGE = "qdump"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _attach_handler(
    logger: logging.Logger,
    stream: IO[str],
    formatter: logging.Formatter,
) -> None:
    for old in logger.handlers[:]:
        logger.removeHandler(old)
    handler = logging.StreamHandler(stream)
    handler.setLevel(_level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached qdump logger for a module.

    Args:
        name: Usually ``__name__``. Names outside the package are prefixed
            with ``qdump.``; None gives the package logger itself.

    Example:
        >>> from qdump.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("Dumping register")
    """
    if name is None or name == _PACKAGE:
        logger_name = _PACKAGE
    elif name.startswith(_PACKAGE + "."):
        logger_name = name
    else:
        logger_name = f"{_PACKAGE}.{name}"

    logger = _loggers.get(logger_name)
    if logger is None:
        logger = logging.getLogger(logger_name)
        if not logger.handlers:
            _attach_handler(logger, sys.stderr, logging.Formatter(_DEFAULT_FORMAT))
            logger.propagate = False
        _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every qdump logger, current and future.

    Args:
        level: A logging level or its name ('DEBUG', 'info', ...).
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Re-point every existing qdump logger at a new stream and format.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format. Defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from qdump.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG)
    """
    global _level
    _level = _coerce_level(level)

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    for logger in _loggers.values():
        _attach_handler(logger, stream if stream is not None else sys.stderr, formatter)
