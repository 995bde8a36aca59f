# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Logging setup for tmuxmcp.

All handlers write to stderr (or a file). stdout is reserved for the stdio
MCP transport.
"""

import logging
import os
import platform
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "tmuxmcp"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def is_debug_mode() -> bool:
    """Check if debug logging is requested via TMUXMCP_DEBUG."""
    return os.environ.get("TMUXMCP_DEBUG", "").lower() in ("1", "true", "yes")


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the tmuxmcp root logger.

    Args:
        name: Module name, usually __name__

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """Configure the tmuxmcp root logger.

    Args:
        level: Log level name, overridden to DEBUG by TMUXMCP_DEBUG
        log_file: Optional path for an additional plain-text log file
        force: Reconfigure even if logging was already set up

    Returns:
        The root tmuxmcp logger
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _configured and not force:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    resolved = "DEBUG" if is_debug_mode() else level.upper()
    logger.setLevel(resolved)
    logger.propagate = False

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    _configured = True
    return logger


def log_startup_info(logger: logging.Logger, version: str) -> None:
    """Log version and environment details at startup."""
    logger.info(f"tmuxmcp {version} starting")
    logger.debug(f"Python: {sys.version.split()[0]} on {platform.system()}")
    logger.debug(f"Working dir: {os.getcwd()}")
