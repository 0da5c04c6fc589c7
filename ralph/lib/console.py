"""Console logging setup for the ralph CLI."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "RALPH_LOG_LEVEL"
LOG_FORMAT = "[Ralph] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Route all ralph loggers through a rich handler on stderr.

    Level precedence: explicit argument, then $RALPH_LOG_LEVEL, then INFO.
    """
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("ralph")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.propagate = False
