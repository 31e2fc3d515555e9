"""
Mint and Set Conformity via Universal Profile
Mints a certificate token and writes its conformity record, relaying both
calls KeyManager.execute -> UP.execute -> asset
"""

import sys
import time
from typing import Dict, List
from web3 import Web3
from loguru import logger

from blockchain.abis import TRACEABILITY_ABI, UNIVERSAL_PROFILE_ABI, find_function
from blockchain.call_descriptor import ContractCall, relay_through_key_manager
from deployer.context import create_context
from deployer.runner import run
from utils.config import get_env, get_env_flag, require_address
from utils.hashing import content_id, keccak_file
from utils.log_config import configure_logging


ASSET_CONTRACT_NAME = "Traceability_test1"

DEFAULT_CERTIFICATE_ID = "CERT-2025-0001"
DEFAULT_DOCUMENT_PATH = "metadata/conformita_demo.pdf"
DEFAULT_DOCUMENT_URI = "ipfs://CID_PLACEHOLDER"

# Salted identifiers, hashed before they go on-chain
DEFAULT_COMPANY_ID = "PIVA01234567890|saltXYZ"
DEFAULT_BATCH_ID = "LOT-2025-00018|saltABC"
DEFAULT_STANDARD = "MOCA"

STATUS_VALID = 0


def build_conformity_record(
    certificate_id: str,
    company_id: str,
    batch_id: str,
    standard: str,
    document_hash: bytes,
    document_uri: str,
    issued_at: int,
    valid_until: int = 0,
    status: int = STATUS_VALID
) -> Dict:
    """
    Conformity record keyed by struct field name

    Args:
        certificate_id: Human-readable certificate id
        company_id: Salted company identifier
        batch_id: Salted batch identifier
        standard: Standard name
        document_hash: keccak-256 of the certificate document
        document_uri: Where the document is published
        issued_at: Unix timestamp
        valid_until: Unix timestamp (0 = no expiry)
        status: Record status code

    Returns:
        Dict of struct fields
    """
    return {
        'certificateId': content_id(certificate_id),
        'companyIdHash': content_id(company_id),
        'batchIdHash': content_id(batch_id),
        'standardHash': content_id(standard),
        'issuedAt': issued_at,
        'validUntil': valid_until,
        'documentHash': document_hash,
        'documentURI': document_uri,
        'status': status
    }


def conformity_args(asset_abi: List[Dict], token_id: bytes, record: Dict) -> tuple:
    """Order the record by the struct components declared in the ABI"""
    entry = find_function(asset_abi, 'setConformityData')
    components = entry['inputs'][1]['components']

    return (token_id, tuple(record[c['name']] for c in components))


def main():
    up_address = require_address('UP_ADDRESS')
    asset_address = require_address('ASSET_ADDRESS')

    certificate_id = get_env('CERTIFICATE_ID', DEFAULT_CERTIFICATE_ID)
    document_path = get_env('DOCUMENT_PATH', DEFAULT_DOCUMENT_PATH)
    document_hash = keccak_file(document_path)

    ctx = create_context()

    profile = ctx.contracts.get_contract(up_address, UNIVERSAL_PROFILE_ABI)
    asset_abi = ctx.contracts.load_abi(ASSET_CONTRACT_NAME, fallback=TRACEABILITY_ABI)

    # The UP's owner is its KeyManager
    key_manager = profile.functions.owner().call()
    logger.info(f"KeyManager: {key_manager}")

    token_id = content_id(certificate_id)
    logger.info(f"Mint tokenId: {Web3.to_hex(token_id)}")

    # Recipient is the UP itself
    mint_call = ContractCall.from_abi(asset_address, asset_abi, 'mintCert', (token_id, up_address, b''))
    receipt = ctx.transactions.send_call(
        relay_through_key_manager(mint_call, up_address, key_manager),
        description="Mint"
    )
    logger.success(f"Mint OK: {Web3.to_hex(receipt['transactionHash'])}")

    record = build_conformity_record(
        certificate_id,
        get_env('COMPANY_ID', DEFAULT_COMPANY_ID),
        get_env('BATCH_ID', DEFAULT_BATCH_ID),
        get_env('STANDARD', DEFAULT_STANDARD),
        document_hash,
        get_env('DOCUMENT_URI', DEFAULT_DOCUMENT_URI),
        issued_at=int(time.time())
    )

    set_call = ContractCall.from_abi(
        asset_address,
        asset_abi,
        'setConformityData',
        conformity_args(asset_abi, token_id, record)
    )
    receipt = ctx.transactions.send_call(
        relay_through_key_manager(set_call, up_address, key_manager),
        description="setConformityData"
    )
    logger.success(f"Conformity set OK: {Web3.to_hex(receipt['transactionHash'])}")

    if get_env_flag('FREEZE_CONFORMITY'):
        freeze_call = ContractCall.from_abi(asset_address, asset_abi, 'freezeConformity')
        receipt = ctx.transactions.send_call(
            relay_through_key_manager(freeze_call, up_address, key_manager),
            description="freezeConformity"
        )
        logger.success(f"Conformity frozen: {Web3.to_hex(receipt['transactionHash'])}")


if __name__ == "__main__":
    configure_logging()
    sys.exit(run(main))
