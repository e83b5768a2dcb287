"""Logging setup for the command-line front end.

Library modules only create loggers; handlers are installed here.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "api_doc_builder"


class HumanFormatter(logging.Formatter):
    """Format: [LEVEL] message"""

    def format(self, record: logging.LogRecord) -> str:
        return f"[{record.levelname}] {record.getMessage()}"


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure the package logger from CLI flags.

    Args:
        verbose: Show debug messages
        quiet: Show warnings and errors only
        stream: Output stream (default: stderr)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(HumanFormatter())
    logger.addHandler(handler)
