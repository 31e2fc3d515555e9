"""
Post-call Verification
Soft checks of on-chain state after a transaction
"""

from typing import Any
from web3 import Web3
from loguru import logger


def _matches(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str) and isinstance(expected, str) and Web3.is_address(expected):
        return actual.lower() == expected.lower()

    return actual == expected


def verify_expected(label: str, actual: Any, expected: Any) -> bool:
    """
    Compare an on-chain value with the expected one

    A mismatch is only logged; the caller decides whether to continue.

    Args:
        label: Getter name for log lines, e.g. "owner()"
        actual: Value read from the chain
        expected: Expected value (addresses compared case-insensitively)

    Returns:
        True if the values match
    """
    logger.info(f"{label} = {actual}")

    if _matches(actual, expected):
        return True

    logger.warning(f"⚠️ {label} on-chain differs from expected: {actual} != {expected}")
    return False
