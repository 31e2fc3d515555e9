"""
Content Hashing
keccak-256 helpers for token ids and document fingerprints
"""

from pathlib import Path
from hexbytes import HexBytes
from web3 import Web3


def content_id(text: str) -> HexBytes:
    """
    Derive a bytes32 content id from a human-readable identifier

    Args:
        text: Identifier such as "CERT-2025-0001"

    Returns:
        keccak-256 of the UTF-8 bytes
    """
    return Web3.keccak(text=text)


def keccak_file(path: str) -> HexBytes:
    """keccak-256 of a file's raw bytes"""
    data = Path(path).read_bytes()
    return Web3.keccak(data)
