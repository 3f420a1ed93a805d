"""Logging utilities for cargo-fund."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ConfigError

_LOGGER_NAME = "cargo_fund"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cargo_fund hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _level_for(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(
    *, verbosity: int = 0, log_file: Path | None = None
) -> logging.Logger:
    """Configure the cargo_fund logger with stderr output and an optional file sink."""
    level = _level_for(verbosity)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[cargo-fund] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot open log file {log_file}: {exc}") from exc
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
