"""Logging helpers.

Modules obtain loggers through :func:`get_logger`. Nothing is printed until the
application calls :func:`configure_logging`, which routes the ``cotimer``
logger tree to the shared rich console.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

CONSOLE = Console()
ROOT_LOGGER_NAME = "cotimer"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the ``cotimer`` namespace.

    Args:
        name: Usually the calling module's ``__name__``.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.INFO, console: Console | None = None) -> RichHandler:
    """Attach a RichHandler to the ``cotimer`` logger.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.

    Args:
        level: Logging level for the ``cotimer`` logger tree.
        console: Console to write to. Defaults to the shared CONSOLE.

    Returns:
        RichHandler: The installed handler.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console or CONSOLE, rich_tracebacks=True, show_path=False)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
