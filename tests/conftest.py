"""Shared fixtures: a fixed test key, signers, and an in-memory asset resolver."""

import pytest
from eth_account import Account

from hyperliquid_signing.core.config import Config
from hyperliquid_signing.execution.assets import MetaAssetResolver
from hyperliquid_signing.signing.signer import SignerKind, TypedDataSigner

# Well-known development key; never funded.
TEST_PRIVATE_KEY = "0x0123456789012345678901234567890123456789012345678901234567890123"

VAULT_ADDRESS = "0x1719884eb866cb12b2287399b15f7db5e7d775ea"

META = {
    "universe": [
        {"name": "BTC", "szDecimals": 5},
        {"name": "SOL", "szDecimals": 2},
        {"name": "ARB", "szDecimals": 1},
        {"name": "DOGE", "szDecimals": 0},
        {"name": "AVAX", "szDecimals": 2},
        {"name": "ETH", "szDecimals": 4},
    ]
}

SPOT_META = {
    "universe": [
        {"name": "PURR/USDC", "tokens": [1, 0], "index": 0},
        {"name": "@1", "tokens": [2, 0], "index": 1},
    ]
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep HL_* variables from the host shell out of Config()."""
    for name in ("HL_NETWORK", "HL_ADDRESS", "HL_SECRET_KEY", "HL_VAULT_ADDRESS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def account():
    return Account.from_key(TEST_PRIVATE_KEY)


@pytest.fixture
def direct_signer(account) -> TypedDataSigner:
    return TypedDataSigner.from_account(account, SignerKind.DIRECT)


@pytest.fixture
def client_signer(account) -> TypedDataSigner:
    return TypedDataSigner.from_account(account, SignerKind.CLIENT_STYLE)


@pytest.fixture
def resolver() -> MetaAssetResolver:
    return MetaAssetResolver(META, SPOT_META)


@pytest.fixture
def mainnet_config() -> Config:
    return Config.from_dict({"hyperliquid": {"network": "mainnet", "secret_key": TEST_PRIVATE_KEY}})


@pytest.fixture
def testnet_config() -> Config:
    return Config.from_dict({"hyperliquid": {"network": "testnet", "secret_key": TEST_PRIVATE_KEY}})
