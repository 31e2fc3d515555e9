"""
RPC Manager
Connects to the configured network with an env override and a public fallback
"""

import os
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from .config import load_config, get_network_config


class RPCManager:
    """
    Endpoint selection for a single network

    Order:
    1. URL from the network's rpc_url_env variable (e.g. LUKSO_RPC_URL)
    2. Public rpc_url from network_config.json
    """

    def __init__(self, config: Optional[Dict] = None, network: Optional[str] = None):
        """
        Initialize RPC Manager

        Args:
            config: Configuration dict (None = load config/network_config.json)
            network: Network key (None = NETWORK env var or default)
        """
        self.config = config if config is not None else load_config()
        self.network = get_network_config(self.config, network)
        self.chain_id = self.network['chain_id']
        self.w3 = None

        logger.info(f"RPC Manager initialized for {self.network['name']} (chainId {self.chain_id})")

    def get_endpoints(self) -> List[str]:
        """Candidate HTTP endpoints in priority order"""
        endpoints = []

        override = os.getenv(self.network.get('rpc_url_env', ''))
        if override:
            endpoints.append(override)

        if self.network['rpc_url'] not in endpoints:
            endpoints.append(self.network['rpc_url'])

        return endpoints

    def connect(self) -> Web3:
        """
        Connect to the first endpoint that answers on the expected chain

        Returns:
            Web3 instance

        Raises:
            ConnectionError: No endpoint answered
        """
        for url in self.get_endpoints():
            w3 = self._create_web3(url)

            if not w3.is_connected():
                logger.warning(f"Failed to connect to {url}")
                continue

            remote_chain_id = w3.eth.chain_id
            if remote_chain_id != self.chain_id:
                logger.warning(
                    f"{url} reports chainId {remote_chain_id}, expected {self.chain_id}"
                )
                continue

            logger.success(f"Connected to {self.network['name']} via {url}")
            self.w3 = w3
            return w3

        raise ConnectionError(f"Could not connect to {self.network['name']}")

    def _create_web3(self, url: str) -> Web3:
        return Web3(Web3.HTTPProvider(url))

