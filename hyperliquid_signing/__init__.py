"""
Action signing and wire protocol for Hyperliquid.

Builds canonical trading actions and signs them the way the venue verifies
them, byte for byte.

Components:
- Numeric Wire Encoder: canonical decimal strings and scaled integers
- Order Wire Mapper: logical orders -> compact wire orders
- Action Builder: canonical action objects for every action kind
- Action Hasher: msgpack + nonce + vault flag -> keccak256 connection id
- Typed-Data Assembler: EIP-712 phantom-agent and user-signed structures
- Signer Adapter: explicit direct/client-style signers, {r, s, v} normalization
- Payload Router: action -> signed, transport-ready payload
"""

__version__ = "0.1.0"

from hyperliquid_signing.core.config import Config
from hyperliquid_signing.core.errors import (
    ErrorKind,
    InvalidOrderTypeError,
    RoundingLossError,
    SerializationError,
    SigningError,
    UnknownAssetError,
    UnsupportedSignerError,
)
from hyperliquid_signing.execution.actions import build_order_action
from hyperliquid_signing.execution.router import PayloadRouter, SignedPayload
from hyperliquid_signing.signing.hashing import action_hash
from hyperliquid_signing.signing.signer import (
    Signature,
    SignerKind,
    TypedDataSigner,
    sign,
    split_signature,
)
from hyperliquid_signing.signing.typed_data import SigningMode, TypedData, build_typed_data

__all__ = [
    "Config",
    "ErrorKind",
    "InvalidOrderTypeError",
    "RoundingLossError",
    "SerializationError",
    "SigningError",
    "UnknownAssetError",
    "UnsupportedSignerError",
    "build_order_action",
    "PayloadRouter",
    "SignedPayload",
    "action_hash",
    "Signature",
    "SignerKind",
    "TypedDataSigner",
    "sign",
    "split_signature",
    "SigningMode",
    "TypedData",
    "build_typed_data",
]
