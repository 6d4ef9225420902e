"""Exception hierarchy for the SoroSave SDK.

Every error carries the pipeline ``stage`` it was raised from so callers
can decide whether a retry makes sense. Nothing is retried internally.
"""

from __future__ import annotations


class SoroSaveError(Exception):
    """Base class for all SDK errors."""

    stage: str = "unknown"


class InvalidFormatError(SoroSaveError, ValueError):
    """Amount text could not be parsed into base units."""

    stage = "encode"


class EncodingError(SoroSaveError, ValueError):
    """A call argument does not fit its contract wire type.

    Always a caller bug; raised before any network call is made.
    """

    stage = "encode"

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class AccountNotFoundError(SoroSaveError):
    """The source account does not exist on the ledger."""

    stage = "load_account"

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id


class SimulationFailedError(SoroSaveError):
    """The ledger rejected the invocation during simulation.

    ``reason`` is the simulator's error text, unmodified.
    """

    stage = "simulate"

    def __init__(self, reason: str, *, function_name: str | None = None) -> None:
        super().__init__(f"Simulation failed: {reason}")
        self.reason = reason
        self.function_name = function_name


class EmptyResultError(SoroSaveError):
    """Simulation succeeded but returned no value."""

    stage = "extract"

    def __init__(self, function_name: str | None = None) -> None:
        super().__init__(f"No result from simulation of {function_name or 'call'}")
        self.function_name = function_name


class DecodeError(SoroSaveError):
    """A returned value does not have the shape of the expected record."""

    stage = "decode"

    def __init__(
        self, message: str, *, record: str | None = None, field: str | None = None
    ) -> None:
        super().__init__(message)
        self.record = record
        self.field = field
