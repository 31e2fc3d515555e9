"""
Wallet Manager
Loads the deployer key that signs every script's transactions
"""

import os
from typing import Dict
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger
from dotenv import load_dotenv

load_dotenv()


class WalletManager:
    """
    Single signing wallet (the deployer EOA)
    """

    def __init__(self, private_key: str = None):
        """
        Initialize wallet manager

        Args:
            private_key: Hex private key (None = DEPLOYER_PRIVATE_KEY)
        """
        private_key = private_key or os.getenv('DEPLOYER_PRIVATE_KEY')

        if not private_key:
            raise ValueError("Missing DEPLOYER_PRIVATE_KEY in .env")

        self.account = Account.from_key(private_key)
        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3) -> Decimal:
        """Native balance in ether units"""
        balance_wei = w3.eth.get_balance(self.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))
