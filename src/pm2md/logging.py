"""Logging setup for the pm2md command."""

import logging
import sys

LOGGER_NAME = "pm2md"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Log to the current stderr through a single handler on the package logger.

    A handler left by an earlier call is replaced, so repeated CLI
    invocations in one process (e.g. tests) neither duplicate output nor
    write to a stale stream.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        if getattr(handler, "_pm2md_console", False):
            logger.removeHandler(handler)

    console = logging.StreamHandler(stream=sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    console._pm2md_console = True  # type: ignore[attr-defined]
    logger.addHandler(console)
    return logger
