"""Configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field

NETWORK_PASSPHRASES = {
    "testnet": "Test SDF Network ; September 2015",
    "mainnet": "Public Global Stellar Network ; September 2015",
    "futurenet": "Test SDF Future Network ; October 2022",
}


@dataclass(frozen=True)
class SoroSaveConfig:
    """Connection facts for one SoroSave contract deployment."""

    contract_id: str
    rpc_url: str
    network_passphrase: str


@dataclass
class TelegramConfig:
    """Notification relay bot configuration."""

    bot_token: str = ""  # loaded from env var TELEGRAM_BOT_TOKEN
    api_url: str = "https://api.telegram.org"
    poll_timeout: int = 30  # long-poll seconds for getUpdates
    error_backoff: int = 5  # seconds


@dataclass
class AppConfig:
    """Complete application configuration."""

    log_level: str = "info"

    # Stellar
    network: str = "testnet"
    rpc_url: str = "https://soroban-testnet.stellar.org"
    network_passphrase: str = ""  # derived from network when empty
    contract_id: str = ""

    # Client
    strict_status: bool = False

    # Telegram
    telegram: TelegramConfig = field(default_factory=TelegramConfig)

    @property
    def passphrase(self) -> str:
        return self.network_passphrase or NETWORK_PASSPHRASES.get(self.network, "")

    def to_client_config(self) -> SoroSaveConfig:
        return SoroSaveConfig(
            contract_id=self.contract_id,
            rpc_url=self.rpc_url,
            network_passphrase=self.passphrase,
        )
