"""Logging setup shared by the CLI and the web app."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import config


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """
    Configure the root logger with a rich handler.

    Args:
        level: Log level name (defaults to LINGO_LOG_LEVEL)
        console: Console to log to (defaults to stderr)
    """
    level_name = (level or config.log_level).upper()
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
