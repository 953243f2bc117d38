"""Logging setup shared by all openapi_wit modules.

Modules obtain their logger with ``get_logger(__name__)``. Output is only
configured when an entry point (the CLI) calls ``configure_logging``.
"""

import logging
from typing import Dict

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "openapi_wit"

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a cached logger placed under the ``openapi_wit`` namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def configure_logging(
    level: str | int = logging.WARNING, rich_output: bool = True
) -> logging.Logger:
    """Configure the package root logger.

    Args:
        level: Logging level name or number.
        rich_output: Use a rich handler writing to stderr; plain stream handler otherwise.

    Returns:
        The configured root package logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = get_logger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace handlers so repeated calls do not duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    return root
