"""
Blockchain Interaction Package
Call descriptors, contract loading/deployment and transaction submission
"""

from .call_descriptor import ContractCall, OperationType
from .contract_manager import ContractManager
from .transaction_builder import TransactionBuilder, TransactionFailedError

__all__ = ['ContractCall', 'OperationType', 'ContractManager', 'TransactionBuilder', 'TransactionFailedError']
