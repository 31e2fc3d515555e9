"""
Contract Manager
Loads Hardhat artifacts, deploys contracts and binds ABIs at addresses
"""

import json
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger


class ContractManager:
    """
    Manages contract factories and instances
    """

    def __init__(self, w3: Web3, transaction_builder=None, artifacts_dir: str = "artifacts"):
        """
        Initialize Contract Manager

        Args:
            w3: Web3 instance
            transaction_builder: Builder used for deployments
            artifacts_dir: Hardhat artifacts directory
        """
        self.w3 = w3
        self.transaction_builder = transaction_builder
        self.artifacts_dir = Path(artifacts_dir)

    def find_artifact(self, contract_name: str) -> Optional[Path]:
        """
        Locate artifacts/**/<contract_name>.json

        Hardhat names the folder after the source file, which does not
        always match the contract name, so the whole tree is searched.
        """
        if not self.artifacts_dir.exists():
            return None

        for path in sorted(self.artifacts_dir.rglob(f"{contract_name}.json")):
            if 'build-info' not in path.parts:
                return path

        return None

    def load_artifact(self, contract_name: str) -> Dict:
        """
        Load a compiled artifact

        Args:
            contract_name: Contract name as compiled by Hardhat

        Returns:
            Artifact dict with 'abi' and 'bytecode'

        Raises:
            FileNotFoundError: Artifact missing (run 'npx hardhat compile')
        """
        path = self.find_artifact(contract_name)

        if path is None:
            raise FileNotFoundError(
                f"Contract artifact not found for {contract_name} in {self.artifacts_dir}. "
                "Run 'npx hardhat compile' first"
            )

        with open(path, 'r') as f:
            artifact = json.load(f)

        logger.debug(f"Loaded artifact {path}")
        return artifact

    def load_abi(self, contract_name: str, fallback: Optional[List[Dict]] = None) -> List[Dict]:
        """
        ABI from the compiled artifact, or fallback when it is missing

        Args:
            contract_name: Contract name
            fallback: Minimal ABI used if artifacts are not available

        Returns:
            JSON ABI
        """
        try:
            return self.load_artifact(contract_name)['abi']
        except FileNotFoundError:
            if fallback is None:
                raise

            logger.warning(f"Artifact for {contract_name} not found, using minimal ABI")
            return fallback

    def get_contract(self, address: str, abi: List[Dict]):
        """Bind an ABI at an address"""
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi
        )

    def deploy(self, contract_name: str, *constructor_args):
        """
        Deploy a compiled contract and wait for it to be mined

        Args:
            contract_name: Contract name
            constructor_args: Constructor arguments in order

        Returns:
            Contract instance bound at the deployed address
        """
        if self.transaction_builder is None:
            raise ValueError("ContractManager needs a transaction builder to deploy")

        artifact = self.load_artifact(contract_name)
        abi = artifact['abi']
        bytecode = artifact['bytecode']

        if not bytecode or bytecode == '0x':
            raise ValueError(f"{contract_name} has no bytecode (abstract contract or interface?)")

        factory = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        data = factory.constructor(*constructor_args).data_in_transaction

        logger.info(f"Deploying {contract_name}...")
        receipt = self.transaction_builder.send_transaction(
            {'data': data},
            description=f"Deploy {contract_name}"
        )

        contract_address = receipt['contractAddress']
        logger.success(f"Deployed {contract_name} at: {contract_address}")

        return self.get_contract(contract_address, abi)
