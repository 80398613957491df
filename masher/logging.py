"""Logger setup shared by the masher CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "masher"
_CONSOLE_FORMAT = "[masher] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``masher.<name>``, or the ``masher`` logger itself."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send masher records to stderr and, with ``log_file``, append them to that file.

    Handlers from an earlier call are closed and replaced.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))

    if log_file is not None:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(log_path, encoding="utf-8"), level, _FILE_FORMAT)
        )

    return logger


__all__ = ["configure_logging", "get_logger"]
