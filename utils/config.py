"""
Configuration Loader
Reads network settings from config/network_config.json and values from .env
"""

import os
import json
from pathlib import Path
from typing import Dict, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "network_config.json"


def load_config(path: Optional[str] = None) -> Dict:
    """
    Load the JSON configuration file

    Args:
        path: Config file path (None = config/network_config.json)

    Returns:
        Configuration dict
    """
    config_path = Path(path) if path else CONFIG_PATH

    with open(config_path, 'r') as f:
        config = json.load(f)

    logger.debug(f"Configuration loaded from {config_path}")
    return config


def get_network_config(config: Dict, network: Optional[str] = None) -> Dict:
    """
    Select one network block from the configuration

    Args:
        config: Configuration dict
        network: Network key (None = NETWORK env var, then default_network)

    Returns:
        Network dict with its key added under 'key'
    """
    network_key = network or os.getenv('NETWORK') or config['default_network']

    if network_key not in config['networks']:
        raise ValueError(f"Unknown network: {network_key}")

    network_config = dict(config['networks'][network_key])
    network_config['key'] = network_key
    return network_config


def require_env(name: str) -> str:
    """Return an environment variable or raise if it is missing"""
    value = os.getenv(name)

    if not value:
        raise ValueError(f"Missing {name} in .env")

    return value


def get_env(name: str, default: str) -> str:
    """Return an environment variable, falling back to default when unset or empty"""
    return os.getenv(name) or default


def get_env_flag(name: str) -> bool:
    """Interpret an environment variable as a boolean flag"""
    return os.getenv(name, '').strip().lower() in ('1', 'true', 'yes')


def require_address(name: str, default: Optional[str] = None) -> str:
    """
    Read an address from the environment and checksum it

    Args:
        name: Environment variable name
        default: Fallback address (None = the variable is required)

    Returns:
        Checksummed address
    """
    value = require_env(name) if default is None else get_env(name, default)

    if not Web3.is_address(value):
        raise ValueError(f"{name} is not a valid address: {value}")

    return Web3.to_checksum_address(value)
