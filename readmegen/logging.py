"""Logging utilities for readmegen."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

_LOGGER_NAME = "readmegen"

CONSOLE_FORMAT = "[%(name)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Loggers uvicorn writes to; ``serve`` hands them the readmegen handlers.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the readmegen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    adopt: Iterable[str] = (),
) -> logging.Logger:
    """Configure the readmegen logger and any ``adopt`` loggers with shared handlers.

    Console lines look like ``[readmegen.orchestrator] INFO ...`` and
    ``[uvicorn.access] INFO ...``; the optional file sink adds timestamps.
    Calling this again replaces the handlers instead of stacking them.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers = _build_handlers(level, log_file)

    logger = logging.getLogger(_LOGGER_NAME)
    for target in [logger, *(logging.getLogger(name) for name in adopt)]:
        _install(target, handlers, level)
    return logger


def _build_handlers(level: int, log_file: Path | None) -> List[logging.Handler]:
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [stream_handler]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)
    return handlers


def _install(logger: logging.Logger, handlers: List[logging.Handler], level: int) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


__all__ = [
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
    "UVICORN_LOGGERS",
    "configure_logging",
    "get_logger",
]
