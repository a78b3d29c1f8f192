"""Logging utilities.

All package loggers live below the ``pdfscraper`` namespace.  The package
logger carries a :class:`logging.NullHandler` so that library use stays
silent unless the application configures logging.  The CLI calls
:func:`configure_logging` to route records to stderr.

Configuration is idempotent: repeated calls replace the handler installed by
a previous call instead of stacking new ones.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "pdfscraper"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_cli_handler: logging.Handler | None = None


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler writing to whatever ``sys.stderr`` is at emit time."""

    # Test runners such as typer's CliRunner swap sys.stderr per invocation
    # and close the old stream afterwards.
    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr
        super().emit(record)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` placed under the package namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send package log records to stderr.

    ``verbose`` lowers the threshold from ``WARNING`` to ``DEBUG``.
    """

    global _cli_handler

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _cli_handler is not None:
        logger.removeHandler(_cli_handler)
    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    _cli_handler = handler
    return logger


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging"]
