"""Shared fixtures for sorosave tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from sorosave.models.config import SoroSaveConfig
from sorosave.stellar.client import SoroSaveClient

from tests.mocks import MockMessenger, MockSorobanServer

TEST_SECRET = "SBWVJTD3F5ETMVWCNI7MM4HUAPUSCUXXMUEJZJTPRWRJGXW2BF4SVQTK"
TEST_PUBLIC = "GDNAG4KFFVF5HCSGRWZIXZNL2SR2KBGJSHW2A6FI6DZI62XF6IBLO4GD"

MEMBER_A = "GB3MQVDOI6JGPQQF5IFXZPOTREQEDXDRJG2AXEMUTCOOYM7TO3R3UBGS"
MEMBER_B = "GDCK7OQBNBJISP3ZLFDAT5D7KFDRQJCXCFCJ2AV2EMX4GUOQ7JAW6AZM"

CONTRACT_ID = "CCEDYFIHUCJFITWEOT7BWUO2HBQQ72L244ZXQ4YNOC6FYRDN3MKDQFK7"
TOKEN_ID = "CACBN6G2EPPLAQORDB3LXN3SULGVYBAETFZTNYTNDQ77B7JFRIBT66V2"

RPC_URL = "https://soroban-testnet.stellar.org"
NETWORK_PASSPHRASE = "Test SDF Network ; September 2015"


def pytest_configure(config):
    """Add network info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Stellar Testnet (mocked RPC)"
    meta["SoroSave Contract"] = CONTRACT_ID


def make_client_config(**overrides) -> SoroSaveConfig:
    """Build a SoroSaveConfig suitable for testing."""
    defaults = dict(
        contract_id=CONTRACT_ID,
        rpc_url=RPC_URL,
        network_passphrase=NETWORK_PASSPHRASE,
    )
    defaults.update(overrides)
    return SoroSaveConfig(**defaults)


@pytest.fixture
def client_config():
    return make_client_config()


@pytest.fixture
def mock_server():
    return MockSorobanServer()


@pytest.fixture
def client(client_config, mock_server):
    """SoroSaveClient wired to the mock RPC server."""
    return SoroSaveClient(client_config, server=mock_server)


@pytest.fixture
def messenger():
    return MockMessenger()
