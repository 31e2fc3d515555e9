"""
Logging Setup
Console and rotating file sinks shared by every script
"""

import os
import sys
from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def configure_logging(log_file: str = "data/logs/deploy.log"):
    """
    Replace loguru's default sink

    Args:
        log_file: Path of the DEBUG file sink (None disables it)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=os.getenv('LOG_LEVEL', 'INFO')
    )

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format=FILE_FORMAT,
            level="DEBUG"
        )
