"""Domain records decoded from the SoroSave contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GroupStatus(str, Enum):
    """Lifecycle state of a savings group."""

    FORMING = "Forming"  # accepting members
    ACTIVE = "Active"
    COMPLETED = "Completed"
    DISPUTED = "Disputed"
    PAUSED = "Paused"
    UNKNOWN = "Unknown"  # only produced by strict decoding

    @classmethod
    def from_label(cls, label: str, default: GroupStatus | None = None) -> GroupStatus:
        """Look up a contract label, returning ``default`` if unrecognized.

        ``UNKNOWN`` is never matched by label.
        """
        for status in cls:
            if status is not cls.UNKNOWN and status.value == label:
                return status
        if default is None:
            raise ValueError(f"Unrecognized group status: {label!r}")
        return default


@dataclass(frozen=True)
class SavingsGroup:
    """Snapshot of one on-chain savings group."""

    id: int
    name: str
    admin: str  # Stellar address
    token: str  # token contract address
    contribution_amount: int  # base units, i128
    cycle_length: int  # seconds
    max_members: int
    members: tuple[str, ...]  # join order
    payout_order: tuple[str, ...]
    current_round: int
    total_rounds: int
    status: GroupStatus
    created_at: int  # unix seconds
    status_label: str = ""  # raw label as returned by the contract

    @property
    def pot_size(self) -> int:
        """Amount paid out each round once every member has contributed."""
        return self.contribution_amount * len(self.members)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.max_members

    def payout_round_for(self, member: str) -> int | None:
        """1-based round in which ``member`` receives the pot."""
        try:
            return self.payout_order.index(member) + 1
        except ValueError:
            return None


@dataclass(frozen=True)
class RoundInfo:
    """Snapshot of one contribution round."""

    round_number: int
    recipient: str
    contributions: dict[str, bool] = field(default_factory=dict)
    total_contributed: int = 0  # base units
    is_complete: bool = False
    deadline: int = 0  # unix seconds

    @property
    def pending_members(self) -> list[str]:
        return [m for m, paid in self.contributions.items() if not paid]


@dataclass(frozen=True)
class Dispute:
    """A dispute raised against a group."""

    raised_by: str
    reason: str
    raised_at: int


@dataclass(frozen=True)
class CreateGroupParams:
    """Arguments for create_group()."""

    admin: str
    name: str
    token: str
    contribution_amount: int  # base units
    cycle_length: int  # seconds
    max_members: int
