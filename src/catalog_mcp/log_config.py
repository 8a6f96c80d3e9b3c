"""
Logging configuration.
"""

import logging
from typing import Union

from rich.logging import RichHandler


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Route all log output through a rich handler at the given level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )
