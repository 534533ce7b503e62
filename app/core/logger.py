"""
Logging setup.

Everything logs through loguru's ``logger``; this module only decides where
the records go.  Level and file come from :mod:`app.core.config` unless the
caller overrides them.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from app.core.config import Settings, settings

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    config: Settings = settings,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "1 week",
    retention: str = "4 weeks",
) -> None:
    """
    Route loguru output to stderr and, when configured, a rotating file.

    Args:
        config: Settings providing ``LOG_LEVEL``, ``LOG_FILE`` and ``DEBUG``
        level: Overrides ``config.LOG_LEVEL``
        log_file: Overrides ``config.LOG_FILE``
        rotation: When the log file rolls over
        retention: How long rolled files are kept
    """
    level = (level or config.LOG_LEVEL).upper()
    log_file = log_file or config.LOG_FILE

    logger.remove()
    logger.add(sys.stderr, level=level,
               format=DEBUG_CONSOLE_FORMAT if config.DEBUG else CONSOLE_FORMAT)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        # variable values in tracebacks only in debug runs
        logger.add(path, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention,
                   backtrace=config.DEBUG, diagnose=config.DEBUG)

    logger.debug(f"{config.PROJECT_NAME} logging at {level}" + (f" to {log_file}" if log_file else ""))
