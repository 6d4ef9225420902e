"""SoroSave contract client - typed wrappers over the transaction pipeline."""

from __future__ import annotations

import logging

from stellar_sdk import SorobanServerAsync, TransactionEnvelope

from sorosave.interfaces.ledger import LedgerServer
from sorosave.models.config import SoroSaveConfig
from sorosave.models.group import CreateGroupParams, RoundInfo, SavingsGroup
from sorosave.stellar.decoder import decode_group, decode_group_ids, decode_round, to_native
from sorosave.stellar.encoder import encode_call
from sorosave.stellar.pipeline import Terminal, TransactionPipeline

log = logging.getLogger(__name__)


class SoroSaveClient:
    """Client for the SoroSave rotating-savings contract.

    Mutating methods return an assembled but unsigned TransactionEnvelope;
    signing and submission are left to the caller. Query methods simulate
    the call and return the decoded record.

    The client holds no per-call state, so concurrent calls are safe.
    """

    def __init__(
        self,
        config: SoroSaveConfig,
        server: LedgerServer | None = None,
        strict_status: bool = False,
    ) -> None:
        self._config = config
        self._server: LedgerServer = server or SorobanServerAsync(config.rpc_url)
        self._strict_status = strict_status
        self._pipeline = TransactionPipeline(
            self._server, config.contract_id, config.network_passphrase,
        )

    @property
    def config(self) -> SoroSaveConfig:
        return self._config

    async def close(self) -> None:
        """Close the underlying RPC session."""
        await self._server.close()

    async def __aenter__(self) -> SoroSaveClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _transact(self, function_name: str, source: str, *args) -> TransactionEnvelope:
        call = encode_call(function_name, *args)
        return await self._pipeline.run(call, Terminal.ASSEMBLE, source)

    async def _query(self, function_name: str, *args):
        call = encode_call(function_name, *args)
        result = await self._pipeline.run(call, Terminal.QUERY)
        return to_native(result)

    # ── Group lifecycle ────────────────────────────────────

    async def create_group(self, params: CreateGroupParams, source: str) -> TransactionEnvelope:
        """Create a new savings group."""
        return await self._transact(
            "create_group",
            source,
            params.admin,
            params.name,
            params.token,
            params.contribution_amount,
            params.cycle_length,
            params.max_members,
        )

    async def join_group(self, member: str, group_id: int, source: str) -> TransactionEnvelope:
        return await self._transact("join_group", source, member, group_id)

    async def leave_group(self, member: str, group_id: int, source: str) -> TransactionEnvelope:
        """Leave a group. The contract only allows this while forming."""
        return await self._transact("leave_group", source, member, group_id)

    async def start_group(self, admin: str, group_id: int, source: str) -> TransactionEnvelope:
        """Start the group (admin only)."""
        return await self._transact("start_group", source, admin, group_id)

    # ── Contributions and payouts ──────────────────────────

    async def contribute(self, member: str, group_id: int, source: str) -> TransactionEnvelope:
        """Contribute to the current round."""
        return await self._transact("contribute", source, member, group_id)

    async def distribute_payout(self, group_id: int, source: str) -> TransactionEnvelope:
        """Pay the pot to the current round's recipient."""
        return await self._transact("distribute_payout", source, group_id)

    # ── Admin ──────────────────────────────────────────────

    async def pause_group(self, admin: str, group_id: int, source: str) -> TransactionEnvelope:
        return await self._transact("pause_group", source, admin, group_id)

    async def resume_group(self, admin: str, group_id: int, source: str) -> TransactionEnvelope:
        return await self._transact("resume_group", source, admin, group_id)

    async def raise_dispute(
        self, member: str, group_id: int, reason: str, source: str
    ) -> TransactionEnvelope:
        return await self._transact("raise_dispute", source, member, group_id, reason)

    # ── Read-only queries ──────────────────────────────────

    async def get_group(self, group_id: int) -> SavingsGroup:
        """Query a group's current on-chain state."""
        raw = await self._query("get_group", group_id)
        return decode_group(raw, strict_status=self._strict_status)

    async def get_round_status(self, group_id: int, round_number: int) -> RoundInfo:
        raw = await self._query("get_round_status", group_id, round_number)
        return decode_round(raw)

    async def get_member_groups(self, member: str) -> list[int]:
        """Ids of every group ``member`` belongs to."""
        raw = await self._query("get_member_groups", member)
        return decode_group_ids(raw)
