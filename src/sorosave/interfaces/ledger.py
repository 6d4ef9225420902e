"""LedgerServer protocol - the two Soroban RPC calls the pipeline needs."""

from __future__ import annotations

from typing import Any, Protocol

from stellar_sdk import Account, TransactionEnvelope


class LedgerServer(Protocol):
    """Subset of stellar_sdk.SorobanServerAsync used by the pipeline."""

    async def load_account(self, account_id: str) -> Account:
        """Fetch the account with its current sequence number."""
        ...

    async def simulate_transaction(self, transaction_envelope: TransactionEnvelope) -> Any:
        """Dry-run the envelope; the response exposes ``error``, ``results``,
        ``transaction_data`` and ``min_resource_fee``."""
        ...

    async def close(self) -> None:
        ...
