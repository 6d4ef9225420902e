"""Decode contract return values into SoroSave domain records.

Decoding happens in two steps. ``to_native`` strips the SCVal tags with
the SDK's ``scval.to_native`` and renders addresses as strkey strings.
Contract strings stay as the raw bytes the SDK returns. The ``decode_*``
functions then reshape those values into records, coercing each field and
raising DecodeError for anything missing or mistyped.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from stellar_sdk import Address, scval, xdr

from sorosave.errors import DecodeError
from sorosave.models.group import Dispute, GroupStatus, RoundInfo, SavingsGroup

log = logging.getLogger(__name__)


def _addr_str(value: Any) -> Any:
    """Replace Address objects with their strkey, recursing into containers."""
    if isinstance(value, Address):
        return value.address
    if isinstance(value, list):
        return [_addr_str(item) for item in value]
    if isinstance(value, dict):
        return {_addr_str(k): _addr_str(v) for k, v in value.items()}
    return value


def to_native(val: xdr.SCVal) -> Any:
    """Convert an SCVal into plain Python values."""
    try:
        native = scval.to_native(val)
    except (ValueError, TypeError) as exc:
        raise DecodeError(f"Cannot decode SCVal of type {val.type}: {exc}") from exc
    return _addr_str(native)


# ── Field coercion ──────────────────────────────────────────


def _field(raw: Mapping[str, Any], name: str, record: str) -> Any:
    if name not in raw:
        raise DecodeError(f"{record}: missing field {name!r}", record=record, field=name)
    return raw[name]


def _int(raw: Mapping[str, Any], name: str, record: str) -> int:
    value = _field(raw, name, record)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise DecodeError(
        f"{record}: field {name!r} is not an integer: {value!r}",
        record=record,
        field=name,
    )


def _str(raw: Mapping[str, Any], name: str, record: str) -> str:
    value = _field(raw, name, record)
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"{record}: field {name!r} is not valid UTF-8",
                record=record,
                field=name,
            ) from exc
    if isinstance(value, str):
        return value
    raise DecodeError(
        f"{record}: field {name!r} is not a string: {value!r}",
        record=record,
        field=name,
    )


def _bool(raw: Mapping[str, Any], name: str, record: str) -> bool:
    value = _field(raw, name, record)
    if isinstance(value, bool):
        return value
    raise DecodeError(
        f"{record}: field {name!r} is not a bool: {value!r}",
        record=record,
        field=name,
    )


def _addresses(raw: Mapping[str, Any], name: str, record: str) -> tuple[str, ...]:
    value = _field(raw, name, record)
    if not isinstance(value, (list, tuple)) or not all(isinstance(a, str) for a in value):
        raise DecodeError(
            f"{record}: field {name!r} is not a list of addresses",
            record=record,
            field=name,
        )
    return tuple(value)


def _mapping(value: Any, record: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"{record}: expected a map, got {type(value).__name__}", record=record
        )
    return value


def _status_label(value: Any) -> str:
    # Contract enums arrive as a one-element vec holding the variant symbol
    if isinstance(value, (list, tuple)) and len(value) == 1:
        value = value[0]
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def decode_status(value: Any, strict: bool = False) -> GroupStatus:
    """Map a contract status value onto GroupStatus.

    Unrecognized labels fall back to FORMING, or to UNKNOWN when
    ``strict`` is set.
    """
    label = _status_label(value)
    fallback = GroupStatus.UNKNOWN if strict else GroupStatus.FORMING
    status = GroupStatus.from_label(label, default=fallback)
    if status is fallback and label != fallback.value:
        log.warning("Unrecognized group status %r, decoded as %s", label, status.value)
    return status


# ── Records ─────────────────────────────────────────────────


def decode_group(value: Any, strict_status: bool = False) -> SavingsGroup:
    """Decode a native group struct into a SavingsGroup."""
    raw = _mapping(value, "SavingsGroup")
    rec = "SavingsGroup"
    status_value = _field(raw, "status", rec)
    return SavingsGroup(
        id=_int(raw, "id", rec),
        name=_str(raw, "name", rec),
        admin=_str(raw, "admin", rec),
        token=_str(raw, "token", rec),
        contribution_amount=_int(raw, "contribution_amount", rec),
        cycle_length=_int(raw, "cycle_length", rec),
        max_members=_int(raw, "max_members", rec),
        members=_addresses(raw, "members", rec),
        payout_order=_addresses(raw, "payout_order", rec),
        current_round=_int(raw, "current_round", rec),
        total_rounds=_int(raw, "total_rounds", rec),
        status=decode_status(status_value, strict=strict_status),
        created_at=_int(raw, "created_at", rec),
        status_label=_status_label(status_value),
    )


def decode_round(value: Any) -> RoundInfo:
    """Decode a native round struct into a RoundInfo."""
    raw = _mapping(value, "RoundInfo")
    rec = "RoundInfo"
    contributions = _mapping(_field(raw, "contributions", rec), rec)
    for member, paid in contributions.items():
        if not isinstance(member, str) or not isinstance(paid, bool):
            raise DecodeError(
                f"{rec}: bad contribution entry {member!r}: {paid!r}",
                record=rec,
                field="contributions",
            )
    return RoundInfo(
        round_number=_int(raw, "round_number", rec),
        recipient=_str(raw, "recipient", rec),
        contributions=dict(contributions),
        total_contributed=_int(raw, "total_contributed", rec),
        is_complete=_bool(raw, "is_complete", rec),
        deadline=_int(raw, "deadline", rec),
    )


def decode_dispute(value: Any) -> Dispute:
    raw = _mapping(value, "Dispute")
    return Dispute(
        raised_by=_str(raw, "raised_by", "Dispute"),
        reason=_str(raw, "reason", "Dispute"),
        raised_at=_int(raw, "raised_at", "Dispute"),
    )


def decode_group_ids(value: Any) -> list[int]:
    """Decode the vec of group ids returned by get_member_groups()."""
    if not isinstance(value, (list, tuple)):
        raise DecodeError(
            f"member groups: expected a list, got {type(value).__name__}",
            record="member_groups",
        )
    ids = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise DecodeError(
                f"member groups: non-integer group id {item!r}", record="member_groups"
            )
        ids.append(item)
    return ids
