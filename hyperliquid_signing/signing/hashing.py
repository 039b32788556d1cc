"""
Action Hasher

The connection id signed by the phantom agent is

    keccak256(msgpack(action) || nonce:uint64be || vault_flag:uint8 [|| vault:20 bytes])

msgpack keeps dict insertion order, which is why the action builders fix
their key order. No other framing is allowed.
"""

from typing import Any, Optional

import msgpack
from eth_utils import is_hex_address, keccak

from hyperliquid_signing.core.errors import SerializationError

NONCE_BYTES = 8
ADDRESS_BYTES = 20


def address_to_bytes(address: str) -> bytes:
    """20 raw bytes of a hex address (0x prefix optional)."""
    if not isinstance(address, str) or not is_hex_address(address):
        raise SerializationError(f"Not a 20-byte hex address: {address!r}")
    return bytes.fromhex(address[2:] if address.startswith("0x") else address)


def serialize_action(action: Any) -> bytes:
    """Canonical msgpack encoding of an action."""
    try:
        return msgpack.packb(action, use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise SerializationError(f"Action is not msgpack-serializable: {e}") from e


def action_hash_payload(action: Any, vault_address: Optional[str], nonce: int) -> bytes:
    """
    Byte buffer that gets hashed.

    Length is len(serialize_action(action)) + 9, plus 20 when vault_address is set.
    """
    data = serialize_action(action)
    try:
        data += nonce.to_bytes(NONCE_BYTES, "big")
    except (AttributeError, OverflowError) as e:
        raise SerializationError(f"Nonce must fit in an unsigned 64-bit integer: {nonce!r}") from e

    if vault_address is None:
        data += b"\x00"
    else:
        data += b"\x01"
        data += address_to_bytes(vault_address)
    return data


def action_hash(action: Any, vault_address: Optional[str], nonce: int) -> bytes:
    """
    Keccak-256 digest of an L1 action.

    Args:
        action: Action dict from the action builders
        vault_address: Vault/subaccount acted for, or None
        nonce: Millisecond nonce sent with the request

    Returns:
        32-byte digest
    """
    return keccak(action_hash_payload(action, vault_address, nonce))
