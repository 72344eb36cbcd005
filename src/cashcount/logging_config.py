"""Logging setup for cashcount."""

__all__ = ["configure_logging", "get_logger", "reset_logging"]

import logging
import sys

ROOT_LOGGER_NAME = "cashcount"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``cashcount`` namespace.

    ``get_logger("domain.statement")`` yields the ``cashcount.domain.statement`` logger.
    """
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.INFO, stream=None) -> logging.Logger:
    """Attach a single stream handler to the ``cashcount`` root logger.

    Calling this again only changes the level. Returns the root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root


def reset_logging() -> None:
    """Remove handlers installed by ``configure_logging`` (mainly for tests)."""
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)
    root.propagate = True
    _configured = False
