"""
Deployment Context
Connection, signer and helpers shared by every script
"""

from dataclasses import dataclass
from typing import Dict, Optional
from web3 import Web3
from loguru import logger

from blockchain.contract_manager import ContractManager
from blockchain.transaction_builder import TransactionBuilder
from utils.config import load_config
from utils.rpc_manager import RPCManager
from .wallet_manager import WalletManager


@dataclass
class DeploymentContext:
    w3: Web3
    network: Dict
    wallet: WalletManager
    transactions: TransactionBuilder
    contracts: ContractManager

    @property
    def chain_id(self) -> int:
        return self.network['chain_id']


def create_context(config: Optional[Dict] = None, network: Optional[str] = None) -> DeploymentContext:
    """
    Load the signer, connect to the network and build the helpers

    The private key is checked before any RPC traffic.

    Args:
        config: Configuration dict (None = config/network_config.json)
        network: Network key (None = NETWORK env var or default)

    Returns:
        DeploymentContext
    """
    config = config if config is not None else load_config()

    wallet = WalletManager()
    rpc = RPCManager(config, network)
    w3 = rpc.connect()

    transactions = TransactionBuilder.from_config(w3, wallet, config, rpc.chain_id)
    contracts = ContractManager(w3, transactions, config.get('artifacts_dir', 'artifacts'))

    logger.info(f"Network: {rpc.network['key']} | chainId: {rpc.chain_id}")

    return DeploymentContext(w3, rpc.network, wallet, transactions, contracts)
