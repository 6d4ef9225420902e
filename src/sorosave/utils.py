"""Display helpers for amounts, addresses, and group state."""

from __future__ import annotations

from typing import Sequence

from sorosave.amounts import DEFAULT_SCALE, from_display, to_display
from sorosave.models.group import GroupStatus

_STATUS_LABELS = {
    GroupStatus.FORMING: "Accepting Members",
    GroupStatus.ACTIVE: "Active",
    GroupStatus.COMPLETED: "Completed",
    GroupStatus.DISPUTED: "Under Dispute",
    GroupStatus.PAUSED: "Paused",
    GroupStatus.UNKNOWN: "Unknown",
}


def format_amount(amount: int, decimals: int = DEFAULT_SCALE) -> str:
    return to_display(amount, decimals)


def parse_amount(amount: str, decimals: int = DEFAULT_SCALE) -> int:
    return from_display(amount, decimals)


def get_status_label(status: GroupStatus) -> str:
    return _STATUS_LABELS[status]


def shorten_address(address: str, chars: int = 4) -> str:
    """``GABCDEF...WXYZ`` -> ``GABC...WXYZ``."""
    return f"{address[:chars]}...{address[-chars:]}"


def calculate_pot_size(contribution_amount: int, member_count: int) -> int:
    """Total paid out per round, in base units."""
    return contribution_amount * member_count


def get_payout_round(payout_order: Sequence[str], member_address: str) -> int | None:
    """1-based round in which ``member_address`` is paid, or None."""
    try:
        return list(payout_order).index(member_address) + 1
    except ValueError:
        return None
