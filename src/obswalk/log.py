"""
Logging helpers for obswalk.

Library modules only get a logger; the CLI decides where output goes.
"""

from __future__ import annotations

import logging

LOGGER_NAME = "obswalk"
_FORMAT = "[%(levelname)s] %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the obswalk namespace (or the package logger)."""
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """
    Send obswalk logs to stderr at the given level.

    Safe to call more than once: the console handler is installed only on
    the first call, later calls just change the level.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if getattr(h, "_obswalk_console", False)), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler._obswalk_console = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(level)
    return logger
