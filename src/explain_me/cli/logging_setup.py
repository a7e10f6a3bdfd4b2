"""Logging configuration for the explain-me CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers;
handlers are installed here, once, by the CLI entry point.  Output
goes to stderr through Rich when available so it never mixes with
model answers on stdout.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "explain_me"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``explain_me`` logger.

    Args:
        verbose: Log at DEBUG level instead of WARNING.

    Returns:
        The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        from explain_me.cli.console import get_rich_console

        handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=verbose,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    handler.setLevel(level)
    logger.addHandler(handler)
    return logger
