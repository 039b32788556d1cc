"""Utilities: numeric wire encoding, nonces."""

from hyperliquid_signing.utils.precision import (
    amount_to_wire,
    float_to_int_for_hashing,
    float_to_usd_int,
    float_to_wire,
    slippage_price,
)
from hyperliquid_signing.utils.nonce import get_timestamp_ms

__all__ = [
    "amount_to_wire",
    "float_to_int_for_hashing",
    "float_to_usd_int",
    "float_to_wire",
    "slippage_price",
    "get_timestamp_ms",
]
