"""SoroSave SDK - typed client for the SoroSave rotating-savings contract."""

from sorosave.amounts import from_display, to_display
from sorosave.errors import (
    AccountNotFoundError,
    DecodeError,
    EmptyResultError,
    EncodingError,
    InvalidFormatError,
    SimulationFailedError,
    SoroSaveError,
)
from sorosave.models import (
    CreateGroupParams,
    Dispute,
    GroupStatus,
    RoundInfo,
    SavingsGroup,
    SoroSaveConfig,
)
from sorosave.stellar.client import SoroSaveClient
from sorosave.utils import (
    calculate_pot_size,
    format_amount,
    get_payout_round,
    get_status_label,
    parse_amount,
    shorten_address,
)

__all__ = [
    "SoroSaveClient",
    "to_display", "from_display",
    "SoroSaveError", "InvalidFormatError", "EncodingError", "AccountNotFoundError",
    "SimulationFailedError", "EmptyResultError", "DecodeError",
    "CreateGroupParams", "Dispute", "GroupStatus", "RoundInfo", "SavingsGroup",
    "SoroSaveConfig",
    "calculate_pot_size", "format_amount", "get_payout_round", "get_status_label",
    "parse_amount", "shorten_address",
]
