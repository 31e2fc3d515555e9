"""
Allow Issuer via Universal Profile
Calls setIssuerAllowed(issuer, true) on the asset through UP.execute,
then reads isIssuerAllowed(issuer) back
"""

import sys
from web3 import Web3
from loguru import logger

from blockchain.abis import ISSUER_ALLOWLIST_ABI
from blockchain.call_descriptor import ContractCall, OperationType, wrap_with_profile
from deployer.context import create_context
from deployer.runner import run
from deployer.verification import verify_expected
from utils.config import require_address
from utils.log_config import configure_logging


DEFAULT_UP_ADDRESS = "0x83cBE526D949A3AaaB4EF9a03E48dd862e81472C"
DEFAULT_ASSET_ADDRESS = "0xA0EB23c4e8c08f6d497FD8B80fF9CC9B91452E0A"
DEFAULT_ISSUER_ADDRESS = "0xAa18E265Bb38cD507eD018AF9abf0FeF16E685C9"


def build_allow_issuer_call(profile_address: str, asset_address: str, issuer: str) -> ContractCall:
    """UP.execute(CALL, asset, 0, setIssuerAllowed(issuer, true))"""
    allow_call = ContractCall.from_abi(
        asset_address,
        ISSUER_ALLOWLIST_ABI,
        'setIssuerAllowed',
        (issuer, True)
    )
    return wrap_with_profile(allow_call, profile_address, OperationType.CALL)


def main():
    up_address = require_address('UP_ADDRESS', DEFAULT_UP_ADDRESS)
    asset_address = require_address('ASSET_ADDRESS', DEFAULT_ASSET_ADDRESS)
    issuer = require_address('ISSUER_ADDRESS', DEFAULT_ISSUER_ADDRESS)

    ctx = create_context()

    logger.info(f"UP admin    : {up_address}")
    logger.info(f"Contract    : {asset_address}")
    logger.info(f"Issuer allow: {issuer}")

    call = build_allow_issuer_call(up_address, asset_address, issuer)
    receipt = ctx.transactions.send_call(call, description="UP.execute")
    logger.success(f"Issuer allowed: {Web3.to_hex(receipt['transactionHash'])}")

    asset = ctx.contracts.get_contract(asset_address, ISSUER_ALLOWLIST_ABI)
    allowed = asset.functions.isIssuerAllowed(issuer).call()
    verify_expected("isIssuerAllowed()", allowed, True)


if __name__ == "__main__":
    configure_logging()
    sys.exit(run(main))
