"""
Minimal ABIs
JSON ABI fragments used when compiled artifacts are not available,
plus canonical signature helpers
"""

from typing import Dict, List


# LSP0 / ERC725Account
UNIVERSAL_PROFILE_ABI = [
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "operationType", "type": "uint256"},
            {"name": "target", "type": "address"},
            {"name": "value", "type": "uint256"},
            {"name": "data", "type": "bytes"}
        ],
        "name": "execute",
        "outputs": [{"name": "", "type": "bytes"}],
        "stateMutability": "payable",
        "type": "function"
    }
]

# LSP6 KeyManager
KEY_MANAGER_ABI = [
    {
        "inputs": [{"name": "payload", "type": "bytes"}],
        "name": "execute",
        "outputs": [{"name": "", "type": "bytes"}],
        "stateMutability": "payable",
        "type": "function"
    }
]

OWNABLE_ABI = [
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]

ISSUER_ALLOWLIST_ABI = [
    {
        "inputs": [
            {"name": "issuer", "type": "address"},
            {"name": "allowed", "type": "bool"}
        ],
        "name": "setIssuerAllowed",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"name": "issuer", "type": "address"}],
        "name": "isIssuerAllowed",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    }
]

CONFORMITY_COMPONENTS = [
    {"name": "certificateId", "type": "bytes32"},
    {"name": "companyIdHash", "type": "bytes32"},
    {"name": "batchIdHash", "type": "bytes32"},
    {"name": "standardHash", "type": "bytes32"},
    {"name": "issuedAt", "type": "uint64"},
    {"name": "validUntil", "type": "uint64"},
    {"name": "documentHash", "type": "bytes32"},
    {"name": "documentURI", "type": "string"},
    {"name": "status", "type": "uint8"}
]

TRACEABILITY_ABI = OWNABLE_ABI + [
    {
        "inputs": [
            {"name": "tokenId", "type": "bytes32"},
            {"name": "to", "type": "address"},
            {"name": "data", "type": "bytes"}
        ],
        "name": "mintCert",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "tokenId", "type": "bytes32"},
            {
                "name": "data",
                "type": "tuple",
                "components": CONFORMITY_COMPONENTS
            }
        ],
        "name": "setConformityData",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "freezeConformity",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]


def canonical_type(param: Dict) -> str:
    """
    Canonical ABI type of one input, expanding tuples

    "tuple[]" with components (bytes32,string) becomes "(bytes32,string)[]"
    """
    abi_type = param['type']

    if not abi_type.startswith('tuple'):
        return abi_type

    inner = ','.join(canonical_type(c) for c in param['components'])
    return f"({inner}){abi_type[len('tuple'):]}"


def find_function(abi: List[Dict], name: str) -> Dict:
    """Return the function entry called name"""
    for entry in abi:
        if entry.get('type', 'function') == 'function' and entry.get('name') == name:
            return entry

    raise ValueError(f"Function {name} not found in ABI")


def function_signature(abi: List[Dict], name: str) -> str:
    """
    Canonical signature used for the 4-byte selector

    Args:
        abi: JSON ABI
        name: Function name

    Returns:
        e.g. "setIssuerAllowed(address,bool)"
    """
    entry = find_function(abi, name)
    types = ','.join(canonical_type(p) for p in entry['inputs'])
    return f"{name}({types})"
