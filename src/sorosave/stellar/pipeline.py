"""Transaction pipeline - build, simulate, then assemble or extract.

Every contract interaction goes through ``TransactionPipeline.run``. Both
protocols share the build and simulate stage and differ only in the
terminal step:

- ``Terminal.ASSEMBLE``: load the real source account, simulate, fold the
  simulated resources/fee/auth into the envelope, and return it unsigned.
- ``Terminal.QUERY``: simulate from a throwaway random account with
  sequence 0 and return the simulated SCVal. Nothing is ever submitted.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from stellar_sdk import (
    Account,
    InvokeHostFunction,
    Keypair,
    SorobanDataBuilder,
    TransactionBuilder,
    TransactionEnvelope,
    xdr,
)
from stellar_sdk.exceptions import AccountNotFoundException

from sorosave.errors import (
    AccountNotFoundError,
    EmptyResultError,
    EncodingError,
    SimulationFailedError,
)
from sorosave.interfaces.ledger import LedgerServer
from sorosave.stellar.encoder import ContractCall

log = logging.getLogger(__name__)

BASE_FEE = 100  # stroops
TX_TIMEOUT = 30  # seconds


class Terminal(str, Enum):
    """How a pipeline run ends once simulation succeeds."""

    ASSEMBLE = "assemble"
    QUERY = "query"


def assemble_transaction(
    envelope: TransactionEnvelope, simulation: Any, function_name: str | None = None
) -> TransactionEnvelope:
    """Fold simulation output into the envelope so it is valid for submission.

    Sets the Soroban resource footprint, replaces any earlier resource fee
    with the simulated minimum, and attaches simulated auth entries to the
    invoke operation. Raises SimulationFailedError when the simulation lacks
    the data needed to produce a submittable envelope.
    """
    results = simulation.results or []
    if len(results) != 1:
        raise SimulationFailedError(
            f"expected exactly one simulation result, got {len(results)}",
            function_name=function_name,
        )
    if not simulation.transaction_data or simulation.min_resource_fee is None:
        raise SimulationFailedError(
            "simulation returned no transaction data", function_name=function_name,
        )

    tx = envelope.transaction
    inclusion_fee = tx.fee
    if tx.soroban_data is not None:
        inclusion_fee -= tx.soroban_data.resource_fee.int64
    tx.soroban_data = SorobanDataBuilder.from_xdr(simulation.transaction_data).build()
    tx.fee = inclusion_fee + int(simulation.min_resource_fee)

    op = tx.operations[0]
    if isinstance(op, InvokeHostFunction) and not op.auth:
        op.auth = [
            xdr.SorobanAuthorizationEntry.from_xdr(entry)
            for entry in (results[0].auth or [])
        ]
    return envelope


def extract_return_value(simulation: Any, function_name: str) -> xdr.SCVal:
    """Pull the return SCVal out of a successful simulation."""
    results = simulation.results
    if not results or not results[0].xdr:
        raise EmptyResultError(function_name)
    return xdr.SCVal.from_xdr(results[0].xdr)


class TransactionPipeline:
    """Builds and simulates single-invocation transactions for one contract."""

    def __init__(
        self,
        server: LedgerServer,
        contract_id: str,
        network_passphrase: str,
    ) -> None:
        self._server = server
        self._contract_id = contract_id
        self._network_passphrase = network_passphrase

    async def run(
        self,
        call: ContractCall,
        terminal: Terminal,
        source: str | None = None,
    ) -> TransactionEnvelope | xdr.SCVal:
        """Run ``call`` through build and simulate, then the terminal step.

        ``source`` is required for ``Terminal.ASSEMBLE`` and ignored for
        ``Terminal.QUERY``.
        """
        account = await self._source_account(terminal, source)
        envelope = self._build(call, account)

        log.debug("Simulating %s (source=%s)", call.function_name, account.account.account_id[:16])
        simulation = await self._server.simulate_transaction(envelope)
        if simulation.error:
            log.warning("%s simulation failed: %s", call.function_name, simulation.error)
            raise SimulationFailedError(str(simulation.error), function_name=call.function_name)

        if terminal is Terminal.QUERY:
            return extract_return_value(simulation, call.function_name)

        envelope = assemble_transaction(envelope, simulation, call.function_name)
        log.info(
            "Built %s transaction (source=%s, fee=%d)",
            call.function_name,
            source[:16] if source else "?",
            envelope.transaction.fee,
        )
        return envelope

    async def _source_account(self, terminal: Terminal, source: str | None) -> Account:
        if terminal is Terminal.QUERY:
            # Simulation never reads the source account, so any key will do
            return Account(Keypair.random().public_key, 0)
        if not source:
            raise EncodingError("source address is required to build a transaction", argument="source")
        try:
            return await self._server.load_account(source)
        except AccountNotFoundException as exc:
            raise AccountNotFoundError(source) from exc

    def _build(self, call: ContractCall, account: Account) -> TransactionEnvelope:
        return (
            TransactionBuilder(
                source_account=account,
                network_passphrase=self._network_passphrase,
                base_fee=BASE_FEE,
            )
            .append_invoke_contract_function_op(
                contract_id=self._contract_id,
                function_name=call.function_name,
                parameters=list(call.args),
            )
            .set_timeout(TX_TIMEOUT)
            .build()
        )
