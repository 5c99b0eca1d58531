"""Unified logging configuration for the CLI and the HTTP API."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

# Log directory — only used when a file handler is requested
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))

# Prevent duplicate handlers
_configured_loggers: set[str] = set()


def setup_logger(
    name: str,
    level: int = logging.INFO,
    filename: Optional[str] = None,
) -> logging.Logger:
    """Setup a logger with a console handler and an optional file handler.

    Args:
        name: Logger name (e.g., 'cascade', 'api')
        level: Minimum level for both handlers
        filename: Log file name under LOG_DIR (e.g., 'cascade.log'); None = console only

    Returns:
        Configured logger instance
    """
    if name in _configured_loggers:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs

    if filename:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(LOG_DIR / filename, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
        ))
        logger.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] %(message)s"
    ))
    logger.addHandler(sh)

    _configured_loggers.add(name)
    return logger


def get_cli_logger(verbose: bool = False) -> logging.Logger:
    """Logger for the command line tool; covers every cascade.* module logger."""
    return setup_logger(
        "cascade",
        level=logging.DEBUG if verbose else logging.WARNING,
        filename=os.getenv("CASCADE_LOG_FILE") or None,
    )


def get_api_logger() -> logging.Logger:
    """Logger for API requests."""
    return setup_logger("api", filename=os.getenv("CASCADE_API_LOG_FILE") or None)
