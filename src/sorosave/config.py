"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from sorosave.models.config import AppConfig

# TOML section -> keys copied onto the matching config object
_STELLAR_KEYS = ("network", "rpc_url", "network_passphrase", "contract_id")
_TELEGRAM_KEYS = ("bot_token", "api_url", "poll_timeout", "error_backoff")

# env suffix -> AppConfig attribute
_ENV_OVERRIDES = {
    "NETWORK": "network",
    "RPC_URL": "rpc_url",
    "NETWORK_PASSPHRASE": "network_passphrase",
    "CONTRACT_ID": "contract_id",
}


def _read_toml(config_path: str | Path | None) -> dict[str, Any]:
    if config_path is None:
        return {}
    path = Path(config_path).expanduser()
    if not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


def _apply_section(target: Any, section: dict[str, Any], keys: tuple[str, ...]) -> None:
    """Copy non-empty ``keys`` from ``section``, coerced to the default's type."""
    for key in keys:
        value = section.get(key)
        if value in (None, ""):
            continue
        setattr(target, key, type(getattr(target, key))(value))


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "SOROSAVE_",
) -> AppConfig:
    """Load configuration from a TOML file and environment variables.

    Priority (highest wins):
        1. Environment variables (SOROSAVE_CONTRACT_ID, TELEGRAM_BOT_TOKEN, etc.)
        2. TOML config file
        3. Defaults from AppConfig

    Layout::

        log_level = "info"

        [stellar]
        network = "testnet"
        contract_id = "C..."

        [client]
        strict_status = false

        [telegram]
        bot_token = "..."
    """
    raw = _read_toml(config_path)
    cfg = AppConfig()

    _apply_section(cfg, raw, ("log_level",))
    _apply_section(cfg, raw.get("stellar", {}), _STELLAR_KEYS)
    _apply_section(cfg.telegram, raw.get("telegram", {}), _TELEGRAM_KEYS)

    client = raw.get("client", {})
    if "strict_status" in client:
        cfg.strict_status = bool(client["strict_status"])

    for suffix, attr in _ENV_OVERRIDES.items():
        if value := os.environ.get(f"{env_prefix}{suffix}"):
            setattr(cfg, attr, value)

    # The bot token is also accepted under its conventional unprefixed name
    if token := os.environ.get(f"{env_prefix}BOT_TOKEN") or os.environ.get("TELEGRAM_BOT_TOKEN"):
        cfg.telegram.bot_token = token

    return cfg
