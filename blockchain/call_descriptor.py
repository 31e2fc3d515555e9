"""
Call Descriptors
Immutable contract calls that can be relayed through a Universal Profile
and its KeyManager

A relayed call is built from the inside out:

    asset call            setIssuerAllowed(issuer, true)       -> asset
    UP.execute            execute(CALL, asset, 0, <asset call>) -> profile
    KeyManager.execute    execute(<UP.execute call>)           -> key manager

Each layer re-encodes the full inner calldata, so every wrap has a matching
unwrap that recovers the exact inner descriptor.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Sequence, Tuple
from eth_abi import encode, decode
from eth_abi.exceptions import ParseError
from eth_abi.grammar import ABIType, TupleType, parse
from hexbytes import HexBytes
from web3 import Web3

from .abis import KEY_MANAGER_ABI, UNIVERSAL_PROFILE_ABI, function_signature


PROFILE_EXECUTE_SIGNATURE = function_signature(UNIVERSAL_PROFILE_ABI, 'execute')
KEY_MANAGER_EXECUTE_SIGNATURE = function_signature(KEY_MANAGER_ABI, 'execute')


class OperationType(IntEnum):
    """ERC725X operation types accepted by UP.execute"""
    CALL = 0
    CREATE = 1
    CREATE2 = 2
    STATICCALL = 3
    DELEGATECALL = 4


def parse_signature(signature: str) -> Tuple[str, List[str]]:
    """Return (function name, argument types) of a canonical signature"""
    name, paren, rest = signature.partition('(')

    try:
        arguments = parse(paren + rest)
    except ParseError:
        raise ValueError(f"Invalid function signature: {signature}")

    if not name or not isinstance(arguments, TupleType) or arguments.is_array:
        raise ValueError(f"Invalid function signature: {signature}")

    return name, [c.to_type_str() for c in arguments.components]


def function_selector(signature: str) -> bytes:
    return bytes(Web3.keccak(text=signature)[:4])


def normalize_value(abi_type: str, value: Any) -> Any:
    """
    Bring an argument into the form eth_abi returns when decoding

    Addresses are checksummed, bytes values become bytes (fixed size ones
    right padded), arrays and tuples become tuples.
    """
    return _normalize(parse(abi_type), value)


def _normalize(abi_type: ABIType, value: Any) -> Any:
    if abi_type.is_array:
        return tuple(_normalize(abi_type.item_type, v) for v in value)

    if isinstance(abi_type, TupleType):
        components = abi_type.components

        if len(components) != len(value):
            raise ValueError(
                f"Tuple {abi_type.to_type_str()} expects {len(components)} fields, got {len(value)}"
            )

        return tuple(_normalize(t, v) for t, v in zip(components, value))

    if abi_type.base == 'address':
        return Web3.to_checksum_address(value)

    if abi_type.base == 'bytes':
        raw = bytes(HexBytes(value))

        if abi_type.sub is not None:
            if len(raw) > abi_type.sub:
                raise ValueError(f"Value too long for {abi_type.to_type_str()}: {len(raw)} bytes")
            raw = raw.ljust(abi_type.sub, b'\x00')

        return raw

    return value


@dataclass(frozen=True)
class ContractCall:
    """
    One contract function call: target, signature, arguments and value
    """

    target: str
    signature: str
    args: Tuple = ()
    value: int = 0

    def __post_init__(self):
        _, types = parse_signature(self.signature)

        if len(types) != len(self.args):
            raise ValueError(
                f"{self.signature} expects {len(types)} arguments, got {len(self.args)}"
            )

        object.__setattr__(self, 'target', Web3.to_checksum_address(self.target))
        object.__setattr__(
            self,
            'args',
            tuple(normalize_value(t, a) for t, a in zip(types, self.args))
        )

    @classmethod
    def from_abi(
        cls,
        target: str,
        abi: List[Dict],
        fn_name: str,
        args: Sequence = (),
        value: int = 0
    ) -> 'ContractCall':
        """
        Build a call from a JSON ABI entry

        Args:
            target: Contract address
            abi: JSON ABI containing fn_name
            fn_name: Function name
            args: Positional arguments (tuples for struct parameters)
            value: Native value in wei

        Returns:
            ContractCall
        """
        return cls(target, function_signature(abi, fn_name), tuple(args), value)

    @classmethod
    def decode(
        cls,
        target: str,
        signature: str,
        data,
        value: int = 0
    ) -> 'ContractCall':
        """
        Rebuild a call from calldata

        Args:
            target: Address the calldata is sent to
            signature: Expected function signature
            data: Calldata as bytes or 0x hex string
            value: Native value in wei

        Returns:
            ContractCall

        Raises:
            ValueError: Selector does not match the signature
        """
        raw = bytes(HexBytes(data))
        expected = function_selector(signature)

        if raw[:4] != expected:
            raise ValueError(
                f"Selector {Web3.to_hex(raw[:4])} does not match {signature} "
                f"({Web3.to_hex(expected)})"
            )

        _, types = parse_signature(signature)
        values = decode(types, raw[4:])

        return cls(target, signature, tuple(values), value)

    @property
    def function_name(self) -> str:
        return parse_signature(self.signature)[0]

    @property
    def arg_types(self) -> List[str]:
        return parse_signature(self.signature)[1]

    @property
    def selector(self) -> bytes:
        return function_selector(self.signature)

    def encode(self) -> bytes:
        """Calldata: 4-byte selector followed by the ABI encoded arguments"""
        return self.selector + encode(self.arg_types, list(self.args))

    def to_transaction(self) -> Dict:
        """Partial transaction dict (to, value, data)"""
        return {
            'to': self.target,
            'value': self.value,
            'data': Web3.to_hex(self.encode())
        }

    def __str__(self) -> str:
        return f"{self.function_name}@{self.target}"


def wrap_with_profile(
    call: ContractCall,
    profile_address: str,
    operation: OperationType = OperationType.CALL
) -> ContractCall:
    """
    Wrap a call as UP.execute(operation, target, value, data)

    Args:
        call: Inner call
        profile_address: Universal Profile that executes it
        operation: ERC725X operation type

    Returns:
        Call targeting the Universal Profile
    """
    return ContractCall(
        profile_address,
        PROFILE_EXECUTE_SIGNATURE,
        (int(operation), call.target, call.value, call.encode())
    )


def unwrap_profile_call(call: ContractCall, inner_signature: str) -> ContractCall:
    """
    Recover the call wrapped by wrap_with_profile

    Args:
        call: UP.execute call
        inner_signature: Signature of the wrapped function

    Returns:
        Inner ContractCall
    """
    if call.signature != PROFILE_EXECUTE_SIGNATURE:
        raise ValueError(f"Not a UP.execute call: {call.signature}")

    _, target, value, data = call.args
    return ContractCall.decode(target, inner_signature, data, value)


def wrap_with_key_manager(call: ContractCall, key_manager_address: str) -> ContractCall:
    """
    Wrap a UP.execute call as KeyManager.execute(payload)

    The KeyManager forwards the payload to its linked profile, so the
    wrapped call must already target that profile.
    """
    if call.signature != PROFILE_EXECUTE_SIGNATURE:
        raise ValueError(f"KeyManager payload must be a UP.execute call, got {call.signature}")

    return ContractCall(
        key_manager_address,
        KEY_MANAGER_EXECUTE_SIGNATURE,
        (call.encode(),),
        call.value
    )


def unwrap_key_manager_call(
    call: ContractCall,
    profile_address: str,
    inner_signature: str = PROFILE_EXECUTE_SIGNATURE
) -> ContractCall:
    """
    Recover the payload wrapped by wrap_with_key_manager

    Args:
        call: KeyManager.execute call
        profile_address: Profile the KeyManager forwards to
        inner_signature: Signature of the payload function

    Returns:
        Inner ContractCall targeting the profile
    """
    if call.signature != KEY_MANAGER_EXECUTE_SIGNATURE:
        raise ValueError(f"Not a KeyManager.execute call: {call.signature}")

    (payload,) = call.args
    return ContractCall.decode(profile_address, inner_signature, payload, call.value)


def relay_through_key_manager(
    call: ContractCall,
    profile_address: str,
    key_manager_address: str,
    operation: OperationType = OperationType.CALL
) -> ContractCall:
    """asset call -> UP.execute -> KeyManager.execute"""
    profile_call = wrap_with_profile(call, profile_address, operation)
    return wrap_with_key_manager(profile_call, key_manager_address)
