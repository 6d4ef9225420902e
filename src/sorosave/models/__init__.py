"""Data models for the SoroSave SDK."""

from sorosave.models.config import (
    NETWORK_PASSPHRASES,
    AppConfig,
    SoroSaveConfig,
    TelegramConfig,
)
from sorosave.models.group import (
    CreateGroupParams,
    Dispute,
    GroupStatus,
    RoundInfo,
    SavingsGroup,
)

__all__ = [
    "NETWORK_PASSPHRASES", "AppConfig", "SoroSaveConfig", "TelegramConfig",
    "CreateGroupParams", "Dispute", "GroupStatus", "RoundInfo", "SavingsGroup",
]
