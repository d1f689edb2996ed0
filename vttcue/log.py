"""
vttcue/log.py

Logging setup for the command line tool. The library itself only emits records
to module loggers under "vttcue" and never installs handlers on import.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import LOG_LEVEL


def setup_logging(level: Optional[int] = None, log_file: Optional[Path] = None) -> logging.Logger:
    """Set up logging for the 'vttcue' package with a console handler and an optional file handler."""
    logger = logging.getLogger("vttcue")
    logger.setLevel(LOG_LEVEL if level is None else level)

    # Clear existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    )

    # Console handler (stderr)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
