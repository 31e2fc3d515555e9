"""
Deploy BatteryCarbonCertificateLSP8
Collection owned by the Universal Profile admin
"""

import sys
from web3.exceptions import ABIFunctionNotFound, BadFunctionCallOutput, ContractLogicError
from loguru import logger

from deployer.context import create_context
from deployer.runner import run
from utils.config import require_address
from utils.log_config import configure_logging


CONTRACT_NAME = "BatteryCarbonCertificateLSP8"

# Universal Profile admin (contract owner)
DEFAULT_UP_OWNER = "0x83cBE526D949A3AaaB4EF9a03E48dd862e81472C"

# Collection metadata
NAME = "Battery Carbon Certificate"
SYMBOL = "BCC"


def main():
    up_owner = require_address('UP_ADDRESS', DEFAULT_UP_OWNER)

    ctx = create_context()

    contract = ctx.contracts.deploy(CONTRACT_NAME, NAME, SYMBOL, up_owner)

    logger.info("-" * 50)
    logger.success(f"{CONTRACT_NAME} deployed")
    logger.info(f"Contract address : {contract.address}")
    logger.info(f"Contract owner   : {up_owner}")
    logger.info("-" * 50)

    try:
        owner = contract.functions.owner().call()
        logger.info(f"owner() on-chain : {owner}")
    except (ABIFunctionNotFound, BadFunctionCallOutput, ContractLogicError):
        logger.info("owner() check skipped (method not exposed)")


if __name__ == "__main__":
    configure_logging()
    sys.exit(run(main))
