"""
Herald logging helpers.

Every module logs through `logging.getLogger(__name__)`, so everything lives
under the "herald" logger and stays silent until the host configures it.
These helpers give hosts a rich console handler in one call:

    from herald import logs
    logs.configure(logging.DEBUG)
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

NAME = "herald"


def handler(level=logging.INFO, /, *, console=None):
    """
    build a RichHandler writing to stderr (or to the given console).
    """
    console = console if console is not None else Console(file=sys.stderr)
    rich = RichHandler(
        level=level,
        console=console,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    rich.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    return rich


def configure(level=logging.INFO, /, *, console=None):
    """
    attach a rich handler to the "herald" logger and return that logger.

    calling it again replaces the handler installed by a previous call.
    """
    logger = logging.getLogger(NAME)
    for installed in list(logger.handlers):
        if getattr(installed, "_herald", False):
            logger.removeHandler(installed)

    installed = handler(level, console=console)
    installed._herald = True
    logger.addHandler(installed)
    logger.setLevel(level)
    return logger


__all__ = (
    "handler",
    "configure",
)
