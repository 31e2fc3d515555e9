"""
Deploy SupplierQualityLSP8
Deploys the supplier quality collection and checks owner() and qualityOffice()
"""

import sys
from loguru import logger

from deployer.context import create_context
from deployer.runner import run
from deployer.verification import verify_expected
from utils.config import get_env, require_address
from utils.log_config import configure_logging


CONTRACT_NAME = "SupplierQualityLSP8"

DEFAULT_TOKEN_NAME = "Supplier Quality"
DEFAULT_TOKEN_SYMBOL = "SQ"
DEFAULT_OWNER = "0x83cBE526D949A3AaaB4EF9a03E48dd862e81472C"
DEFAULT_QUALITY_OFFICE = "0xAa18E265Bb38cD507eD018AF9abf0FeF16E685C9"


def main():
    token_name = get_env('TOKEN_NAME', DEFAULT_TOKEN_NAME)
    token_symbol = get_env('TOKEN_SYMBOL', DEFAULT_TOKEN_SYMBOL)
    owner = require_address('OWNER_ADDRESS', DEFAULT_OWNER)
    quality_office = require_address('QUALITY_OFFICE_ADDRESS', DEFAULT_QUALITY_OFFICE)

    ctx = create_context()

    logger.info("=" * 70)
    logger.info(f"Token: {token_name} ({token_symbol})")
    logger.info(f"Owner: {owner}")
    logger.info(f"QualityOffice: {quality_office}")
    logger.info("=" * 70)

    contract = ctx.contracts.deploy(
        CONTRACT_NAME,
        token_name,
        token_symbol,
        owner,
        quality_office
    )

    logger.success(f"✅ Deployed {CONTRACT_NAME} at: {contract.address}")

    verify_expected("owner()", contract.functions.owner().call(), owner)
    verify_expected("qualityOffice()", contract.functions.qualityOffice().call(), quality_office)

    logger.info("Done.")


if __name__ == "__main__":
    configure_logging()
    sys.exit(run(main))
