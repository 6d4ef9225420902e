"""Value decoder: SCVal -> native values -> domain records."""

from __future__ import annotations

import logging

import pytest
from stellar_sdk import scval, xdr

from sorosave.errors import DecodeError, SoroSaveError
from sorosave.models.group import GroupStatus
from sorosave.stellar.decoder import (
    decode_dispute,
    decode_group,
    decode_group_ids,
    decode_round,
    decode_status,
    to_native,
)

from tests.conftest import MEMBER_A, MEMBER_B, TEST_PUBLIC, TOKEN_ID
from tests.factories import make_group_scval, make_round_scval


def _group_native(**overrides) -> dict:
    raw = {
        "id": 7,
        "name": "Pool A",
        "admin": "G_ADMIN",
        "token": "TOKEN1",
        "contribution_amount": "10000000",
        "cycle_length": 604800,
        "max_members": 5,
        "members": ["G1", "G2"],
        "payout_order": [],
        "current_round": 0,
        "total_rounds": 5,
        "status": "Forming",
        "created_at": 1700000000,
    }
    raw.update(overrides)
    return raw


# ── Untagging ─────────────────────────────────────────────────────


def test_to_native_primitives():
    assert to_native(scval.to_uint32(5)) == 5
    assert to_native(scval.to_int128(-(2**100))) == -(2**100)
    assert to_native(scval.to_string("Pool A")) == b"Pool A"
    assert to_native(scval.to_symbol("Active")) == "Active"
    assert to_native(scval.to_bool(True)) is True
    assert to_native(scval.to_void()) is None
    assert to_native(scval.to_address(TEST_PUBLIC)) == TEST_PUBLIC
    assert to_native(scval.to_vec([scval.to_uint64(1), scval.to_uint64(2)])) == [1, 2]


def test_to_native_struct():
    native = to_native(make_group_scval())
    assert native["id"] == 7
    assert native["token"] == TOKEN_ID
    assert native["members"] == [MEMBER_A, MEMBER_B]
    assert native["status"] == ["Forming"]


# ── Group ─────────────────────────────────────────────────────────


def test_decode_group_from_plain_mapping():
    group = decode_group(_group_native())
    assert group.id == 7
    assert group.contribution_amount == 10_000_000
    assert isinstance(group.contribution_amount, int)
    assert group.status is GroupStatus.FORMING
    assert group.members == ("G1", "G2")
    assert group.created_at == 1_700_000_000


def test_decode_group_from_contract_struct():
    group = decode_group(to_native(make_group_scval(status="Active", payout_order=(MEMBER_B, MEMBER_A))))
    assert group.admin == TEST_PUBLIC
    assert group.status is GroupStatus.ACTIVE
    assert group.status_label == "Active"
    assert group.payout_order == (MEMBER_B, MEMBER_A)
    assert group.payout_round_for(MEMBER_A) == 2


def test_large_amount_is_exact():
    amount = 2**127 - 1
    group = decode_group(_group_native(contribution_amount=str(amount)))
    assert group.contribution_amount == amount


def test_invalid_utf8_string_rejected():
    """Contract strings are raw bytes; bad UTF-8 is a decode failure, not a crash."""
    bad_name = xdr.SCVal(xdr.SCValType.SCV_STRING, str=xdr.SCString(b"\xff\xfe"))
    raw = to_native(make_group_scval())
    raw["name"] = to_native(bad_name)

    with pytest.raises(DecodeError) as exc_info:
        decode_group(raw)

    assert isinstance(exc_info.value, SoroSaveError)
    assert exc_info.value.record == "SavingsGroup"
    assert exc_info.value.field == "name"


def test_float_amount_rejected():
    with pytest.raises(DecodeError) as exc_info:
        decode_group(_group_native(contribution_amount=1e7))
    assert exc_info.value.field == "contribution_amount"


def test_missing_field_rejected():
    raw = _group_native()
    del raw["total_rounds"]
    with pytest.raises(DecodeError) as exc_info:
        decode_group(raw)
    assert exc_info.value.record == "SavingsGroup"
    assert exc_info.value.field == "total_rounds"


def test_non_mapping_payload_rejected():
    with pytest.raises(DecodeError):
        decode_group(42)
    with pytest.raises(DecodeError):
        decode_round(["not", "a", "map"])


# ── Status ────────────────────────────────────────────────────────


@pytest.mark.parametrize("label", ["Forming", "Active", "Completed", "Disputed", "Paused"])
def test_known_status_labels(label):
    assert decode_status(label).value == label
    assert decode_status([label]).value == label


def test_unknown_status_falls_back_to_forming(caplog):
    with caplog.at_level(logging.WARNING, logger="sorosave.stellar.decoder"):
        assert decode_status("SomeUnknownLabel") is GroupStatus.FORMING
    assert "SomeUnknownLabel" in caplog.text


def test_unknown_status_strict_mode():
    assert decode_status("SomeUnknownLabel", strict=True) is GroupStatus.UNKNOWN
    group = decode_group(_group_native(status="Frozen"), strict_status=True)
    assert group.status is GroupStatus.UNKNOWN
    assert group.status_label == "Frozen"


# ── Round, dispute, ids ───────────────────────────────────────────


def test_decode_round_from_contract_struct():
    info = decode_round(to_native(make_round_scval()))
    assert info.round_number == 1
    assert info.recipient == MEMBER_A
    assert info.contributions == {MEMBER_A: True, MEMBER_B: False}
    assert info.total_contributed == 10_000_000
    assert info.is_complete is False
    assert info.pending_members == [MEMBER_B]


def test_decode_round_rejects_non_bool_contribution():
    raw = to_native(make_round_scval())
    raw["contributions"] = {MEMBER_A: "yes"}
    with pytest.raises(DecodeError):
        decode_round(raw)


def test_decode_dispute():
    dispute = decode_dispute({"raised_by": MEMBER_A, "reason": "missed payout", "raised_at": 1700000100})
    assert dispute.raised_by == MEMBER_A
    assert dispute.reason == "missed payout"
    assert dispute.raised_at == 1_700_000_100


def test_decode_group_ids():
    assert decode_group_ids([1, 4, 9]) == [1, 4, 9]
    assert decode_group_ids([]) == []
    with pytest.raises(DecodeError):
        decode_group_ids({"id": 1})
    with pytest.raises(DecodeError):
        decode_group_ids(["1"])
