import os
import sys
from typing import Optional

from loguru import logger

STDERR_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Replace loguru's default sink with the dnsdirect sinks.

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional path for a rotating DEBUG file sink
    """
    logger.remove()  # Remove default handler

    # Add stderr handler only if available
    if sys.stderr:
        logger.add(sys.stderr, format=STDERR_FORMAT, level=level.upper())

    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file), exist_ok=True)
            logger.add(
                log_file,
                rotation="1 MB",
                retention="10 days",
                format=FILE_FORMAT,
                level="DEBUG",
            )
        except OSError as e:
            logger.warning(f"Could not open log file {log_file}: {e}")
