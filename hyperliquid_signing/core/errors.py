"""
Error taxonomy for action signing.

Every failure in the signing pipeline maps to exactly one ErrorKind.
Callers must treat any of these as "do not submit": none of them is
retried internally and none falls back to an alternate encoding.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure kinds surfaced by the signing core."""

    ROUNDING_LOSS = "rounding_loss"
    INVALID_ORDER_TYPE = "invalid_order_type"
    UNKNOWN_ASSET = "unknown_asset"
    UNSUPPORTED_SIGNER = "unsupported_signer"
    SERIALIZATION = "serialization"


class SigningError(Exception):
    """Base class for all signing failures."""

    kind: ErrorKind

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class RoundingLossError(SigningError):
    """Numeric encoding would silently lose precision."""

    kind = ErrorKind.ROUNDING_LOSS

    def __init__(self, value: float, detail: str = "float_to_wire"):
        super().__init__(f"{detail} causes rounding: {value!r}")
        self.value = value


class InvalidOrderTypeError(SigningError):
    """Order type has neither a limit nor a trigger leg."""

    kind = ErrorKind.INVALID_ORDER_TYPE


class UnknownAssetError(SigningError):
    """Symbol could not be resolved to an asset index."""

    kind = ErrorKind.UNKNOWN_ASSET

    def __init__(self, coin: str):
        super().__init__(f"Unknown asset: {coin}")
        self.coin = coin


class UnsupportedSignerError(SigningError):
    """Signer matches neither the direct nor the client-style shape."""

    kind = ErrorKind.UNSUPPORTED_SIGNER


class SerializationError(SigningError):
    """Action could not be encoded to its canonical binary form."""

    kind = ErrorKind.SERIALIZATION
