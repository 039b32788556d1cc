"""
Configuration management for the signing core.

Network selection is an explicit value carried by Config and handed to the
typed-data assembler on every call; nothing in the package reads a
process-wide default network.

Supports loading from YAML/dicts and environment variable overrides.
"""

import logging
import os
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Literal, Optional

from hyperliquid.utils import constants


@dataclass
class MonitoringConfig:
    """Logging settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = "%(asctime)s %(levelname)8s | %(name)s | %(message)s"


@dataclass
class HyperliquidConfig:
    """Hyperliquid network and account settings."""

    network: Literal["testnet", "mainnet"] = "testnet"
    address: str = ""  # Main wallet address (from env)
    secret_key: str = ""  # API wallet private key (from env)
    vault_address: Optional[str] = None  # Trade on behalf of a vault/subaccount

    # API endpoint (auto-set by network)
    api_url: str = ""

    def __post_init__(self):
        """Set API URL based on network."""
        if self.network == "testnet":
            self.api_url = constants.TESTNET_API_URL
        else:
            self.api_url = constants.MAINNET_API_URL

    @property
    def is_mainnet(self) -> bool:
        return self.network == "mainnet"


def _build(dc_type, data):
    if not is_dataclass(dc_type):
        return data
    kwargs = {}
    for f in fields(dc_type):
        if f.name in data:
            val = data[f.name]
            if hasattr(f.type, "__dataclass_fields__"):
                kwargs[f.name] = _build(f.type, val)
            else:
                kwargs[f.name] = val
    return dc_type(**kwargs)


@dataclass
class Config:
    """
    Complete signing configuration.

    Environment variables (override config file):
    - HL_NETWORK: "testnet" or "mainnet"
    - HL_ADDRESS: Main wallet address
    - HL_SECRET_KEY: API wallet private key
    - HL_VAULT_ADDRESS: Vault/subaccount address to act for
    """

    hyperliquid: HyperliquidConfig = field(default_factory=HyperliquidConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def __post_init__(self):
        """Load environment variable overrides."""
        if os.getenv("HL_NETWORK"):
            self.hyperliquid.network = os.getenv("HL_NETWORK", "testnet")

        if os.getenv("HL_ADDRESS"):
            self.hyperliquid.address = os.getenv("HL_ADDRESS", "")

        if os.getenv("HL_SECRET_KEY"):
            self.hyperliquid.secret_key = os.getenv("HL_SECRET_KEY", "")

        if os.getenv("HL_VAULT_ADDRESS"):
            self.hyperliquid.vault_address = os.getenv("HL_VAULT_ADDRESS")

        # Re-initialize to set API URL
        self.hyperliquid.__post_init__()

    @property
    def is_mainnet(self) -> bool:
        return self.hyperliquid.is_mainnet

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load config from YAML file."""
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return _build(cls, data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Load config from dictionary."""
        return _build(cls, data)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Config":
        """Load a .env file (if present) and build config from defaults + env."""
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=dotenv_path or Path.cwd() / ".env")
        return cls()

    def validate(self) -> list[str]:
        """
        Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.hyperliquid.network not in ("testnet", "mainnet"):
            errors.append(f"hyperliquid.network must be 'testnet' or 'mainnet', got {self.hyperliquid.network!r}")

        if not self.hyperliquid.secret_key:
            errors.append("HL_SECRET_KEY environment variable required")

        for name in ("address", "vault_address"):
            value = getattr(self.hyperliquid, name)
            if value and not _looks_like_address(value):
                errors.append(f"hyperliquid.{name} is not a 20-byte hex address: {value!r}")

        if self.monitoring.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            errors.append(f"monitoring.log_level invalid: {self.monitoring.log_level!r}")

        return errors


def _looks_like_address(value: str) -> bool:
    from eth_utils import is_hex_address

    return is_hex_address(value)


def configure_logging(config: Config) -> None:
    """Apply the configured log level to the package logger."""
    logging.basicConfig(format=config.monitoring.log_format)
    logging.getLogger("hyperliquid_signing").setLevel(config.monitoring.log_level)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
