"""Logging setup shared by all tools."""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_ROOT_NAME = "tools"

_console = Console(stderr=True)


def setup_logger(name: Optional[str] = None, level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Configure logging for a tool.

    Handlers are attached to the ``tools`` logger so every module logger
    created through ``get_logger`` shares them. Calling this again only
    changes the level.

    Args:
        name: Logger name to return (defaults to the tools root logger)
        level: Log level name or number

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(_ROOT_NAME)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=_console, show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
        root.propagate = False

    root.setLevel(level)

    return get_logger(name)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the tools hierarchy."""
    if not name or name == "__main__":
        return logging.getLogger(_ROOT_NAME)
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
