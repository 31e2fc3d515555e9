"""
Utilities Package
Configuration, logging, hashing and RPC connection
"""

from .config import load_config, get_network_config, require_env, require_address
from .hashing import content_id, keccak_file
from .log_config import configure_logging
from .rpc_manager import RPCManager

__all__ = [
    'load_config',
    'get_network_config',
    'require_env',
    'require_address',
    'content_id',
    'keccak_file',
    'configure_logging',
    'RPCManager'
]
