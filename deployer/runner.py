"""
Script Runner
Single catch-all around a script's entry function
"""

from typing import Callable
from loguru import logger


def run(main: Callable[[], None]) -> int:
    """
    Run a script entry point

    Args:
        main: Zero-argument entry function

    Returns:
        Process exit code (0 on success, 1 on any failure)
    """
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"❌ {main.__module__} failed: {e}")
        return 1

    return 0
