"""Logging utilities for the scmrev generator."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "scmrev"


class BuildLogFormatter(logging.Formatter):
    """Format records as ``scmrev: warning: message``, like compiler diagnostics.

    Build tools (make, ninja, MSBuild) surface lines in this shape, so a degraded
    fingerprint shows up in the build log instead of scrolling past.
    """

    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{_LOGGER_NAME}: {record.levelname.lower()}: {message}"
        return f"[{_LOGGER_NAME}] {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the scmrev hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send scmrev diagnostics to stderr and, optionally, to ``log_file``.

    Without ``verbose`` only warnings and errors reach the console: the build
    already gets one status line on stdout from the CLI.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Build systems may call main() repeatedly in one interpreter.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(BuildLogFormatter())
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["BuildLogFormatter", "configure_logging", "get_logger"]
