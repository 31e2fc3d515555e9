"""
Deploy the traceability collection owned by the Universal Profile
"""

import sys
from loguru import logger

from deployer.context import create_context
from deployer.runner import run
from utils.config import require_address
from utils.log_config import configure_logging


CONTRACT_NAME = "Traceability_test2"


def main():
    up_address = require_address('UP_ADDRESS')

    ctx = create_context()
    contract = ctx.contracts.deploy(CONTRACT_NAME, up_address)

    logger.success(f"{CONTRACT_NAME} deployed to: {contract.address}")


if __name__ == "__main__":
    configure_logging()
    sys.exit(run(main))
