"""
Logging configuration for the Outline AI command-line tools.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, by the entry points, never on import.
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: Union[int, str] = logging.WARNING, console: Optional[Console] = None) -> None:
    """Configure the root logger to write through rich.

    - Accepts a level number or name ("DEBUG", "info", ...)
    - Safe to call more than once; later calls only change the level
    """
    if isinstance(level, str):
        number = logging.getLevelName(level.upper())
        if not isinstance(number, int):
            raise ValueError(f"Unknown log level: {level}")
        level = number

    root_logger = logging.getLogger()
    if getattr(root_logger, "_outline_logging_configured", False):
        root_logger.setLevel(level)
        return

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    root_logger._outline_logging_configured = True  # type: ignore[attr-defined]

    logging.captureWarnings(True)
