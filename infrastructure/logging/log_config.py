"""Logging setup shared by the entry points.

Usage:
    from infrastructure.logging.log_config import setup_logging
    setup_logging(settings.log_level)   # once, at startup
"""

import logging
import sys


# Third-party loggers that are chatty at INFO.
_QUIET_LOGGERS = (
    "uvicorn.access",
    "discord",
    "TeleBot",
)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger; safe to call more than once."""

    root_level = _parse_level(level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # uvicorn may already have installed a handler.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s")
        )
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(root_level))


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO
