"""Logging setup shared by the pstatool CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

_LOGGER_NAME = "pstatool"

# Third-party loggers that are too chatty at debug level.
_QUIET_LOGGERS: Mapping[str, int] = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a child of the ``pstatool`` logger."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Install console (and optionally file) handlers on the pstatool logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers from a previous call so repeated runs do not double output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[pstatool] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    for name, module_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(module_level)

    return logger


__all__ = ["configure_logging", "get_logger"]
