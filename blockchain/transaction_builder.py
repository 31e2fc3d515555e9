"""
Transaction Builder
Fills, signs and submits transactions one at a time and waits for confirmation
"""

from typing import Dict, Optional
from web3 import Web3
from web3.exceptions import ContractLogicError
from loguru import logger

from .call_descriptor import ContractCall


class TransactionFailedError(RuntimeError):
    """A transaction was mined with status 0"""

    def __init__(self, tx_hash: str, receipt):
        self.tx_hash = tx_hash
        self.receipt = receipt
        super().__init__(f"Transaction reverted: {tx_hash}")


class TransactionBuilder:
    """
    Builds and sends transactions for the deployer wallet

    Every send blocks until the receipt is available, so nonces are read
    from the node each time instead of being tracked locally.
    """

    def __init__(
        self,
        w3: Web3,
        wallet_manager,
        chain_id: int,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 3000000,
        confirmation_timeout: int = 300
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for signing
            chain_id: Chain id written into every transaction
            gas_buffer: Multiplier applied to gas estimates
            default_gas_limit: Gas limit used when estimation fails
            confirmation_timeout: Seconds to wait for a receipt
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.chain_id = chain_id
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit
        self.confirmation_timeout = confirmation_timeout

    @classmethod
    def from_config(cls, w3: Web3, wallet_manager, config: Dict, chain_id: int) -> 'TransactionBuilder':
        """Create a builder using the 'transactions' block of the config"""
        tx_config = config.get('transactions', {})

        return cls(
            w3,
            wallet_manager,
            chain_id,
            gas_buffer=tx_config.get('gas_buffer', 1.2),
            default_gas_limit=tx_config.get('default_gas_limit', 3000000),
            confirmation_timeout=tx_config.get('confirmation_timeout', 300)
        )

    def build_transaction(self, tx: Dict) -> Dict:
        """
        Complete a partial transaction

        Args:
            tx: Dict with at least 'data' (and 'to' unless it is a deployment)

        Returns:
            Transaction dict ready for signing
        """
        transaction = {
            'from': self.wallet_manager.address,
            'value': 0,
            **tx,
            'nonce': self.w3.eth.get_transaction_count(self.wallet_manager.address, 'pending'),
            'chainId': self.chain_id,
            'gasPrice': self.w3.eth.gas_price
        }

        transaction['gas'] = self._estimate_gas(transaction)

        logger.debug(
            f"Built transaction: nonce={transaction['nonce']} gas={transaction['gas']} "
            f"gasPrice={transaction['gasPrice']}"
        )
        return transaction

    def _estimate_gas(self, transaction: Dict) -> int:
        estimate_fields = {k: v for k, v in transaction.items() if k not in ('nonce', 'gasPrice', 'chainId')}

        try:
            gas_estimate = self.w3.eth.estimate_gas(estimate_fields)
            return int(gas_estimate * self.gas_buffer)
        except ContractLogicError:
            raise
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit

    def send_transaction(self, tx: Dict, description: str = "transaction"):
        """
        Build, sign, send and wait for a transaction

        Args:
            tx: Partial transaction dict
            description: Label used in log lines

        Returns:
            Transaction receipt

        Raises:
            TransactionFailedError: Receipt status is 0
        """
        transaction = self.build_transaction(tx)

        signed_tx = self.wallet_manager.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"{description} tx: {Web3.to_hex(tx_hash)}")

        return self.wait_for_receipt(tx_hash)

    def send_call(self, call: ContractCall, description: Optional[str] = None):
        """
        Submit a ContractCall as a transaction

        Args:
            call: Call descriptor (outermost layer when relayed)
            description: Label used in log lines

        Returns:
            Transaction receipt
        """
        return self.send_transaction(call.to_transaction(), description or str(call))

    def wait_for_receipt(self, tx_hash):
        """
        Block until the transaction is mined

        Args:
            tx_hash: Transaction hash

        Returns:
            Transaction receipt
        """
        tx_hex = Web3.to_hex(tx_hash)
        logger.info("Waiting for confirmation...")

        receipt = self.w3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=self.confirmation_timeout
        )

        if receipt['status'] != 1:
            logger.error(f"Transaction failed: {tx_hex}")
            raise TransactionFailedError(tx_hex, receipt)

        logger.success(f"Transaction confirmed in block {receipt['blockNumber']} (gas used: {receipt['gasUsed']})")
        return receipt
