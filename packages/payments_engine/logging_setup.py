"""Logging for the ``payments_engine`` package.

Diagnostics go to stderr through one handler on the ``payments_engine``
logger, because stdout carries the account table. Modules take their logger
from :func:`get_logger` and never attach handlers; until the CLI calls
:func:`configure_logging` the package logs nothing.
"""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "payments_engine"
LEVEL_ENV_VAR = "PAYMENTS_ENGINE_LOG_LEVEL"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_package_logger = logging.getLogger(PACKAGE_LOGGER)
_package_logger.addHandler(logging.NullHandler())
_handler: logging.Handler | None = None


def _resolve_level(level: str | None) -> int:
    raw = level if level is not None else os.getenv(LEVEL_ENV_VAR, "")
    name = raw.strip().upper()
    if not name:
        return logging.WARNING
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {raw!r}")
    return resolved


def configure_logging(level: str | None = None) -> None:
    """Send package logs at ``level`` (default: env, then ``WARNING``) to stderr.

    Raises ``ValueError`` for a level that is neither a number nor a known
    level name. Calling it again only changes the level.
    """

    global _handler
    resolved = _resolve_level(level)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(_FORMAT))
        _package_logger.addHandler(_handler)
    _package_logger.setLevel(resolved)
    _package_logger.propagate = False


def reset_logging() -> None:
    """Detach the stderr handler so the next :func:`configure_logging` starts fresh."""

    global _handler
    if _handler is not None:
        _package_logger.removeHandler(_handler)
        _handler = None
    _package_logger.setLevel(logging.NOTSET)
    _package_logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
