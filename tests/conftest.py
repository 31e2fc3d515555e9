"""
Shared fixtures
"""

import pytest
from unittest.mock import MagicMock
from hexbytes import HexBytes


# Hardhat's first default account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

UP_ADDRESS = "0x83cBE526D949A3AaaB4EF9a03E48dd862e81472C"
ASSET_ADDRESS = "0xA0EB23c4e8c08f6d497FD8B80fF9CC9B91452E0A"
ISSUER_ADDRESS = "0xAa18E265Bb38cD507eD018AF9abf0FeF16E685C9"
KEY_MANAGER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

TX_HASH = HexBytes("0x" + "ab" * 32)

ENV_VARS = [
    'DEPLOYER_PRIVATE_KEY',
    'UP_ADDRESS',
    'ASSET_ADDRESS',
    'ISSUER_ADDRESS',
    'OWNER_ADDRESS',
    'QUALITY_OFFICE_ADDRESS',
    'TOKEN_NAME',
    'TOKEN_SYMBOL',
    'LUKSO_RPC_URL',
    'NETWORK',
    'DOCUMENT_PATH',
    'DOCUMENT_URI',
    'CERTIFICATE_ID',
    'COMPANY_ID',
    'BATCH_ID',
    'STANDARD',
    'FREEZE_CONFORMITY'
]


@pytest.fixture
def clean_env(monkeypatch):
    """Start every test without values picked up from a local .env"""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def receipt():
    """Successful transaction receipt"""
    return {
        'status': 1,
        'blockNumber': 123,
        'gasUsed': 90000,
        'transactionHash': TX_HASH,
        'contractAddress': None
    }


@pytest.fixture
def w3(receipt):
    """Mock Web3 instance that mines everything"""
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.gas_price = 1000000000
    w3.eth.estimate_gas.return_value = 100000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = receipt
    return w3


@pytest.fixture
def wallet():
    from deployer.wallet_manager import WalletManager
    return WalletManager(TEST_PRIVATE_KEY)


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test"""
    from loguru import logger

    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)
