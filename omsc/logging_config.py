"""Centralized logging configuration for OMSC statistics."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'omsc'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# HTTP stack loggers that are noisy below WARNING
QUIET_LIBRARIES = ('urllib3', 'charset_normalizer')


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name ('debug', 'INFO') or number into a logging level.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f'Unknown log level: {level}')
    return resolved


def log_file_path(log_dir: Path, started: Optional[datetime] = None) -> Path:
    """Per-run log file, named after the run's start time."""
    started = started or datetime.now()
    return log_dir / f'{LOGGER_NAME}_{started.strftime("%Y%m%d_%H%M%S")}.log'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Union[int, str] = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the "omsc" logger that every module logs under.

    Handlers from an earlier call are closed and replaced, so the CLI and
    tests can call this repeatedly.

    Args:
        log_dir: Directory for the per-run log file (default: ./logs)
        level: Level number or name (default: INFO)
        log_to_file: Write a detailed, timestamped log file
        log_to_console: Write short "LEVEL: message" lines to stdout

    Returns:
        Configured logger instance
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path(log_dir), encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug(f'Logging configured at {logging.getLevelName(level)}')
    return logger
