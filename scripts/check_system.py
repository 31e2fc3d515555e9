"""
System Check Script
Verifies environment, RPC connection, deployer balance and compiled
artifacts before running the deployment scripts
"""

import os
import sys
from decimal import Decimal
from loguru import logger

from blockchain.contract_manager import ContractManager
from deployer.wallet_manager import WalletManager
from utils.config import load_config, get_network_config
from utils.log_config import configure_logging
from utils.rpc_manager import RPCManager


CONTRACTS = [
    'SupplierQualityLSP8',
    'ComplianceCertificateLSP8',
    'BatteryCarbonCertificateLSP8',
    'Traceability_test1',
    'Traceability_test2'
]

MIN_BALANCE = Decimal('0.01')


def check_environment_variables():
    """Check required and optional environment variables"""
    logger.info("Checking environment variables...")

    if not os.getenv('DEPLOYER_PRIVATE_KEY'):
        logger.error("  ✗ DEPLOYER_PRIVATE_KEY not set")
        return False

    for var in ('UP_ADDRESS', 'ASSET_ADDRESS'):
        if not os.getenv(var):
            logger.warning(f"  {var} not set (needed by relay and UP-owned deployments)")

    logger.success("✓ Required environment variables set")
    return True


def check_rpc_connection(w3):
    """Check that the connected node answers"""
    logger.info("Checking RPC connection...")

    if w3 is None:
        logger.error("  ✗ No endpoint answered on the expected chain")
        return False

    logger.success(f"  ✓ Connected (Block: {w3.eth.block_number})")
    return True


def check_wallet_balance(w3, network):
    """Check deployer balance"""
    logger.info("Checking deployer balance...")

    if w3 is None:
        logger.error("  ✗ Skipped, no RPC connection")
        return False

    wallet = WalletManager()
    balance = wallet.get_balance(w3)

    logger.info(f"  Deployer: {balance:.4f} {network['native_symbol']}")

    if balance < MIN_BALANCE:
        logger.warning(f"  ⚠ Deployer balance low (need at least {MIN_BALANCE} {network['native_symbol']})")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def check_artifacts(config):
    """Check that Hardhat artifacts exist for every deployable contract"""
    logger.info("Checking compiled artifacts...")

    contracts = ContractManager(None, artifacts_dir=config.get('artifacts_dir', 'artifacts'))
    missing = [name for name in CONTRACTS if contracts.find_artifact(name) is None]

    for name in CONTRACTS:
        if name in missing:
            logger.warning(f"  ✗ {name}")
        else:
            logger.success(f"  ✓ {name}")

    if missing:
        logger.info("  Run: npx hardhat compile")
        return False

    return True


def main():
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info("Deployment System Check")
    logger.info("=" * 70)

    config = load_config()
    network = get_network_config(config)

    try:
        w3 = RPCManager(config).connect()
    except ConnectionError as e:
        logger.error(str(e))
        w3 = None

    checks = [
        ("Environment Variables", check_environment_variables),
        ("RPC Connection", lambda: check_rpc_connection(w3)),
        ("Deployer Balance", lambda: check_wallet_balance(w3, network)),
        ("Compiled Artifacts", lambda: check_artifacts(config))
    ]

    results = []

    for name, check_func in checks:
        logger.info("")
        try:
            result = check_func()
            results.append((name, result))
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            results.append((name, False))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total:
        logger.success("✅ Ready to deploy")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    configure_logging(log_file=None)
    sys.exit(main())
