"""
Logging configuration for typesafe code generation.

Usage in modules:
    from typesafe_codegen.logging_config import get_logger
    logger = get_logger(__name__)

All loggers live under the "typesafe_codegen" hierarchy. Nothing is emitted
until configure_logging() installs a handler (the CLI does this).
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "typesafe_codegen"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger under the typesafe_codegen hierarchy.

    Args:
        name: Module __name__, or None for the package root logger.

    Returns:
        logging.Logger instance
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name.rsplit('.', 1)[-1]}")


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the typesafe_codegen logger hierarchy.

    Levels:
        verbose -> DEBUG   (every resolution hop and template choice)
        default -> INFO    (per-run summaries)
        quiet   -> WARNING (warnings and errors only)

    Args:
        verbose: Enable DEBUG-level output.
        quiet: Suppress INFO output.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # Avoid duplicate handlers when called multiple times
    if root_logger.handlers:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
