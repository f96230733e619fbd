"""Logging configuration shared by the purchase tracker entry points."""

from __future__ import annotations

import logging
import logging.config

DEFAULT_LEVEL = "WARNING"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = DEFAULT_LEVEL) -> None:
    """Route all log records to stderr so stdout stays reserved for command output."""
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level}")

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": CONSOLE_FORMAT,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "stream": "ext://sys.stderr",
                    "level": level,
                }
            },
            "root": {
                "handlers": ["stderr"],
                "level": level,
            },
        }
    )


__all__ = ["configure_logging", "DEFAULT_LEVEL"]
