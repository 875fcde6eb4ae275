"""
Core Log Utilities for OpenXform

Unified logging setup shared by scripts and host applications that embed
the transform engine.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

from openxform.constants.constants import DEFAULT_LOG_DIRECTORY_NAME

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def default_log_directory() -> Path:
    """Standard OpenXform log directory under the user's data home."""
    return Path.home() / ".local" / "share" / DEFAULT_LOG_DIRECTORY_NAME / "logs"


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None,
                  console: bool = True) -> Path:
    """
    Setup unified logging configuration for the OpenXform package.

    Replaces any handlers on the root logger with a file handler and,
    optionally, a console handler on stdout.

    Args:
        log_level: Name of the logging level (e.g. "DEBUG", "INFO")
        log_file: Log file path; a timestamped file in the default log
            directory is created when omitted
        console: Whether to also log to stdout

    Returns:
        Path of the log file in use

    Raises:
        ValueError: If ``log_level`` is not a known level name
    """
    log_level_obj = logging.getLevelName(log_level.upper())
    if not isinstance(log_level_obj, int):
        raise ValueError(f"Unknown log level: {log_level}")

    if log_file is None:
        log_dir = default_log_directory()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"openxform_{time.strftime('%Y%m%d_%H%M%S')}.log"
    else:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()

    # Clear any existing handlers to ensure clean state
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(console_handler)

    root_logger.setLevel(log_level_obj)
    logging.getLogger("openxform").setLevel(log_level_obj)

    logger = logging.getLogger("openxform.core.log_utils")
    logger.info(f"OpenXform logging started - Level: {logging.getLevelName(log_level_obj)}")
    logger.info(f"Log file: {log_file}")
    return log_file
