"""Encode typed call arguments into Soroban SCVal parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from stellar_sdk import Address, scval, xdr

from sorosave.errors import EncodingError

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
I128_MIN = -(2**127)
I128_MAX = 2**127 - 1


class ArgType(str, Enum):
    """Wire type of one contract argument."""

    ADDRESS = "address"
    STRING = "string"
    U32 = "u32"
    U64 = "u64"
    I128 = "i128"


@dataclass(frozen=True)
class ContractCall:
    """One encoded contract invocation."""

    function_name: str
    args: tuple[xdr.SCVal, ...]


# Argument names and wire types for every contract method, in call order.
CONTRACT_METHODS: dict[str, tuple[tuple[str, ArgType], ...]] = {
    "create_group": (
        ("admin", ArgType.ADDRESS),
        ("name", ArgType.STRING),
        ("token", ArgType.ADDRESS),
        ("contribution_amount", ArgType.I128),
        ("cycle_length", ArgType.U64),
        ("max_members", ArgType.U32),
    ),
    "join_group": (("member", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "leave_group": (("member", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "start_group": (("admin", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "contribute": (("member", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "distribute_payout": (("group_id", ArgType.U64),),
    "pause_group": (("admin", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "resume_group": (("admin", ArgType.ADDRESS), ("group_id", ArgType.U64)),
    "raise_dispute": (
        ("member", ArgType.ADDRESS),
        ("group_id", ArgType.U64),
        ("reason", ArgType.STRING),
    ),
    "get_group": (("group_id", ArgType.U64),),
    "get_round_status": (("group_id", ArgType.U64), ("round", ArgType.U32)),
    "get_member_groups": (("member", ArgType.ADDRESS),),
}

_INT_RANGES = {
    ArgType.U32: (0, U32_MAX),
    ArgType.U64: (0, U64_MAX),
    ArgType.I128: (I128_MIN, I128_MAX),
}


def encode_address(value: Any, argument: str = "address") -> xdr.SCVal:
    if isinstance(value, Address):
        return scval.to_address(value)
    if not isinstance(value, str):
        raise EncodingError(
            f"{argument}: expected address string, got {type(value).__name__}",
            argument=argument,
        )
    try:
        return scval.to_address(Address(value))
    except ValueError as exc:
        raise EncodingError(f"{argument}: invalid address {value!r}", argument=argument) from exc


def encode_string(value: Any, argument: str = "string") -> xdr.SCVal:
    if not isinstance(value, str):
        raise EncodingError(
            f"{argument}: expected str, got {type(value).__name__}",
            argument=argument,
        )
    return scval.to_string(value)


def encode_int(value: Any, arg_type: ArgType, argument: str = "value") -> xdr.SCVal:
    """Encode an integer, checking it fits ``arg_type`` first."""
    # bool is an int subclass but never a valid amount or id
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(
            f"{argument}: expected int, got {type(value).__name__}",
            argument=argument,
        )
    low, high = _INT_RANGES[arg_type]
    if not low <= value <= high:
        raise EncodingError(
            f"{argument}: {value} out of range for {arg_type.value}",
            argument=argument,
        )
    if arg_type is ArgType.U32:
        return scval.to_uint32(value)
    if arg_type is ArgType.U64:
        return scval.to_uint64(value)
    return scval.to_int128(value)


def encode_arg(value: Any, arg_type: ArgType, argument: str = "value") -> xdr.SCVal:
    if arg_type is ArgType.ADDRESS:
        return encode_address(value, argument)
    if arg_type is ArgType.STRING:
        return encode_string(value, argument)
    return encode_int(value, arg_type, argument)


def encode_call(function_name: str, *values: Any) -> ContractCall:
    """Encode ``values`` against the declared signature of ``function_name``.

    Raises EncodingError for an unknown method, wrong arity, or any value
    that does not fit its wire type.
    """
    signature = CONTRACT_METHODS.get(function_name)
    if signature is None:
        raise EncodingError(f"Unknown contract method: {function_name}")
    if len(values) != len(signature):
        raise EncodingError(
            f"{function_name} takes {len(signature)} arguments, got {len(values)}"
        )
    args = tuple(
        encode_arg(value, arg_type, name)
        for value, (name, arg_type) in zip(values, signature)
    )
    return ContractCall(function_name=function_name, args=args)
