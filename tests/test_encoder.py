"""Value encoder: typed arguments -> SCVal parameters."""

from __future__ import annotations

import pytest
from stellar_sdk import scval, xdr

from sorosave.errors import EncodingError
from sorosave.stellar.encoder import (
    CONTRACT_METHODS,
    ArgType,
    encode_arg,
    encode_call,
)

from tests.conftest import MEMBER_A, TEST_PUBLIC, TOKEN_ID

T = xdr.SCValType


def test_create_group_argument_types_in_order():
    call = encode_call(
        "create_group", TEST_PUBLIC, "Pool A", TOKEN_ID, 10_000_000, 604_800, 5,
    )
    assert call.function_name == "create_group"
    assert [a.type for a in call.args] == [
        T.SCV_ADDRESS, T.SCV_STRING, T.SCV_ADDRESS, T.SCV_I128, T.SCV_U64, T.SCV_U32,
    ]
    assert scval.from_address(call.args[0]).address == TEST_PUBLIC
    assert scval.from_int128(call.args[3]) == 10_000_000


def test_encoding_is_deterministic():
    a = encode_call("raise_dispute", MEMBER_A, 3, "late payout")
    b = encode_call("raise_dispute", MEMBER_A, 3, "late payout")
    assert [x.to_xdr() for x in a.args] == [x.to_xdr() for x in b.args]


def test_every_method_has_a_signature():
    assert set(CONTRACT_METHODS) == {
        "create_group", "join_group", "leave_group", "start_group", "contribute",
        "distribute_payout", "pause_group", "resume_group", "raise_dispute",
        "get_group", "get_round_status", "get_member_groups",
    }


@pytest.mark.parametrize(
    "value, arg_type",
    [
        (2**127, ArgType.I128),
        (-(2**127) - 1, ArgType.I128),
        (-1, ArgType.U64),
        (2**64, ArgType.U64),
        (2**32, ArgType.U32),
        (-1, ArgType.U32),
    ],
)
def test_out_of_range_integers_rejected(value, arg_type):
    with pytest.raises(EncodingError):
        encode_arg(value, arg_type, "amount")


def test_range_boundaries_accepted():
    assert scval.from_int128(encode_arg(2**127 - 1, ArgType.I128)) == 2**127 - 1
    assert scval.from_int128(encode_arg(-(2**127), ArgType.I128)) == -(2**127)
    assert scval.from_uint64(encode_arg(2**64 - 1, ArgType.U64)) == 2**64 - 1
    assert scval.from_uint32(encode_arg(0, ArgType.U32)) == 0


@pytest.mark.parametrize("value", [True, 1.5, "10", None])
def test_non_integers_rejected(value):
    with pytest.raises(EncodingError):
        encode_arg(value, ArgType.U64, "group_id")


def test_invalid_address_rejected():
    with pytest.raises(EncodingError) as exc_info:
        encode_call("join_group", "G_NOT_AN_ADDRESS", 1)
    assert exc_info.value.argument == "member"


def test_string_argument_must_be_str():
    with pytest.raises(EncodingError):
        encode_call("raise_dispute", MEMBER_A, 1, b"bytes reason")


def test_wrong_arity_rejected():
    with pytest.raises(EncodingError):
        encode_call("join_group", MEMBER_A)


def test_unknown_method_rejected():
    with pytest.raises(EncodingError):
        encode_call("drain_treasury", MEMBER_A)
