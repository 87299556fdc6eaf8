"""Loggers of the image worker. Everything is written to stderr, stdout belongs to MCP."""

import logging
import sys

_LOGGER_NAME = "image_worker_mcp"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the worker logger for a module.

    Args:
        name: Module name, usually ``__name__``. Bare names such as ``"runner"``
            are nested under ``image_worker_mcp``. None gives the top-level worker logger.

    Returns:
        The requested logger.
    """
    if name:
        if name.startswith(_LOGGER_NAME):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logging(
    level: int | str = logging.INFO, format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """Send worker logs (commands, progress, failures) to stderr.

    Called once by the CLI before the stdio transport starts. Repeated calls
    only change the level.

    Args:
        level: Logging level, as int or level name such as ``"debug"``.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if any(isinstance(h, logging.StreamHandler) and h.stream is sys.stderr for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)


# Library use (tests, embedding) stays silent until setup_logging is called.
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
