"""Core components: config, logging setup, error taxonomy."""

from hyperliquid_signing.core.config import Config, configure_logging
from hyperliquid_signing.core.errors import ErrorKind, SigningError

__all__ = [
    "Config",
    "configure_logging",
    "ErrorKind",
    "SigningError",
]
