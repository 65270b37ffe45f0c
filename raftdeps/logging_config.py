"""Logging configuration for the raftdeps command line."""

import logging
import sys

# Simple message-only format for regular console output
MESSAGE_ONLY_FORMAT = "%(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send raftdeps log records to stdout.

    Progress lines are printed bare; DEBUG level adds timestamps and the
    emitting module.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG").

    Returns:
        The package logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            DEBUG_LOG_FORMAT if numeric_level <= logging.DEBUG else MESSAGE_ONLY_FORMAT
        )
    )

    logger = logging.getLogger("raftdeps")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    return logger


__all__ = ["configure_logging"]
