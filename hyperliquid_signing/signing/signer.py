"""
Signer Adapter

Wraps a key-holding signer in one of two explicit shapes:

- DIRECT: sign_fn(domain, types, message), e.g. eth_account LocalAccount.sign_typed_data
- CLIENT_STYLE: sign_fn(full_message), e.g. a wallet client or remote custody API

The shape is chosen when the adapter is built, never guessed at call time.
Whatever the signer returns is normalized by split_signature into a
fixed-width {r, s, v} triple.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import to_bytes

from hyperliquid_signing.core.errors import UnsupportedSignerError
from hyperliquid_signing.signing.typed_data import (
    APPROVE_AGENT_SIGN_TYPES,
    SPOT_TRANSFER_SIGN_TYPES,
    USD_CLASS_TRANSFER_SIGN_TYPES,
    USD_SEND_SIGN_TYPES,
    WITHDRAW_SIGN_TYPES,
    TypedData,
    l1_typed_data,
    user_signed_typed_data,
)

logger = logging.getLogger(__name__)

_SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


@dataclass(frozen=True)
class Signature:
    """r and s are 0x-prefixed 32-byte hex strings; v is 27 or 28."""

    r: str
    s: str
    v: int

    def to_dict(self) -> Dict[str, Any]:
        return {"r": self.r, "s": self.s, "v": self.v}

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.r[2:]) + bytes.fromhex(self.s[2:]) + bytes([self.v])


def _scalar(value: Union[int, str, bytes]) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid signature scalar: {value!r}")
    if isinstance(value, int):
        scalar = value
    elif isinstance(value, (bytes, bytearray)):
        scalar = int.from_bytes(value, "big")
    elif isinstance(value, str):
        scalar = int(value, 16)
    else:
        raise ValueError(f"Invalid signature scalar: {value!r}")
    if not 0 <= scalar < 2 ** 256:
        raise ValueError("Signature scalar does not fit in 32 bytes")
    return scalar


def _normalize_v(v: int) -> int:
    if v in (0, 1):
        return v + 27
    if v in (27, 28):
        return v
    raise ValueError(f"Invalid signature recovery id: {v}")


def _from_components(r: Any, s: Any, v: Any) -> Signature:
    return Signature(
        r=f"0x{_scalar(r):064x}",
        s=f"0x{_scalar(s):064x}",
        v=_normalize_v(int(v)),
    )


def split_signature(sig: Any) -> Signature:
    """
    Normalize any signature representation into a Signature.

    Accepts a 65-byte r||s||v blob (hex string or bytes), a 64-byte compact
    (EIP-2098) blob, an eth_account SignedMessage, or a mapping with r, s, v.
    Hex strings and SignedMessage blobs go through the same byte splitting.
    """
    if isinstance(sig, Signature):
        return sig
    if isinstance(sig, Mapping):
        try:
            return _from_components(sig["r"], sig["s"], sig["v"])
        except KeyError as e:
            raise ValueError(f"Signature mapping missing component: {e}") from None
    if hasattr(sig, "signature") and not isinstance(sig, (str, bytes, bytearray)):
        sig = bytes(sig.signature)

    if isinstance(sig, str):
        try:
            raw = to_bytes(hexstr=sig)
        except ValueError as e:
            raise ValueError(f"Signature is not valid hex: {e}") from None
    elif isinstance(sig, (bytes, bytearray)):
        raw = bytes(sig)
    else:
        raise ValueError(f"Unsupported signature type: {type(sig).__name__}")

    if len(raw) == 65:
        return _from_components(raw[:32], raw[32:64], raw[64])
    if len(raw) == 64:
        y_parity_and_s = int.from_bytes(raw[32:], "big")
        return _from_components(raw[:32], y_parity_and_s & ((1 << 255) - 1), 27 + (y_parity_and_s >> 255))
    raise ValueError(f"Signature must be 64 or 65 bytes, got {len(raw)}")


class SignerKind(str, Enum):
    DIRECT = "direct"
    CLIENT_STYLE = "client_style"


class TypedDataSigner:
    """
    Typed-data signer with an explicit call shape.

    Example:
        signer = TypedDataSigner.from_key(secret_key)
        signature = sign(signer, l1_typed_data(action, None, nonce, is_mainnet=True))
    """

    def __init__(
        self,
        kind: Union[SignerKind, str],
        sign_fn: Callable[..., Any],
        address: Optional[str] = None,
        json_compatible: bool = False,
    ):
        """
        Args:
            kind: SignerKind.DIRECT or SignerKind.CLIENT_STYLE
            sign_fn: Signing callable matching kind
            address: Signer address, if known
            json_compatible: CLIENT_STYLE only; hex-encode byte fields before calling sign_fn
        """
        try:
            self.kind = SignerKind(kind)
        except ValueError:
            raise UnsupportedSignerError(f"Unsupported signer kind: {kind!r}") from None
        if not callable(sign_fn):
            raise UnsupportedSignerError(f"Signer is not callable: {sign_fn!r}")
        self.sign_fn = sign_fn
        self.address = address
        self.json_compatible = json_compatible

    @classmethod
    def from_account(cls, account, kind: Union[SignerKind, str] = SignerKind.DIRECT) -> "TypedDataSigner":
        """Wrap an eth_account LocalAccount (anything with sign_typed_data)."""
        sign_typed_data = getattr(account, "sign_typed_data", None)
        if not callable(sign_typed_data):
            raise UnsupportedSignerError(f"{type(account).__name__} has no sign_typed_data")

        if SignerKind(kind) is SignerKind.DIRECT:
            def sign_fn(domain, types, message):
                return sign_typed_data(domain, types, message)
        else:
            def sign_fn(full_message):
                return sign_typed_data(full_message=full_message)

        return cls(kind, sign_fn, address=getattr(account, "address", None))

    @classmethod
    def from_key(cls, private_key: str, kind: Union[SignerKind, str] = SignerKind.DIRECT) -> "TypedDataSigner":
        return cls.from_account(Account.from_key(private_key), kind)

    def sign_typed_data(self, typed_data: TypedData) -> Signature:
        logger.debug("[Signer] Signing %s (%s signer)", typed_data.primary_type, self.kind.value)
        if self.kind is SignerKind.DIRECT:
            raw = self.sign_fn(typed_data.domain, typed_data.types, typed_data.message)
        else:
            full_message = typed_data.to_json_dict() if self.json_compatible else typed_data.to_dict()
            raw = self.sign_fn(full_message)
        return split_signature(raw)

    def __repr__(self) -> str:
        return f"TypedDataSigner(kind={self.kind.value!r}, address={self.address!r})"


def sign(signer: TypedDataSigner, typed_data: TypedData) -> Signature:
    """Sign typed data; signer must be a TypedDataSigner."""
    if not isinstance(signer, TypedDataSigner):
        raise UnsupportedSignerError(
            f"Expected TypedDataSigner, got {type(signer).__name__}; "
            "wrap it with TypedDataSigner(SignerKind.DIRECT | SignerKind.CLIENT_STYLE, fn)"
        )
    return signer.sign_typed_data(typed_data)


def recover_signer(typed_data: TypedData, signature: Signature) -> str:
    """Checksum address that produced signature over typed_data."""
    signable = encode_typed_data(full_message=typed_data.to_dict())
    return Account.recover_message(
        signable,
        vrs=(signature.v, int(signature.r, 16), int(signature.s, 16)),
    )


def is_low_s(signature: Signature) -> bool:
    """EIP-2 canonical form check."""
    return int(signature.s, 16) <= _SECP256K1_N // 2


# ------------------------
# Convenience wrappers
# ------------------------

def sign_l1_action(
    signer: TypedDataSigner,
    action: Dict[str, Any],
    vault_address: Optional[str],
    nonce: int,
    is_mainnet: bool,
) -> Signature:
    return sign(signer, l1_typed_data(action, vault_address, nonce, is_mainnet))


def sign_user_signed_action(
    signer: TypedDataSigner,
    action: Dict[str, Any],
    payload_types: List[Dict[str, str]],
    primary_type: str,
    is_mainnet: bool,
) -> Signature:
    return sign(signer, user_signed_typed_data(action, payload_types, primary_type, is_mainnet))


def sign_usd_transfer_action(signer: TypedDataSigner, action: Dict[str, Any], is_mainnet: bool) -> Signature:
    return sign_user_signed_action(signer, action, USD_SEND_SIGN_TYPES, "HyperliquidTransaction:UsdSend", is_mainnet)


def sign_spot_transfer_action(signer: TypedDataSigner, action: Dict[str, Any], is_mainnet: bool) -> Signature:
    return sign_user_signed_action(signer, action, SPOT_TRANSFER_SIGN_TYPES, "HyperliquidTransaction:SpotSend", is_mainnet)


def sign_withdraw_from_bridge_action(signer: TypedDataSigner, action: Dict[str, Any], is_mainnet: bool) -> Signature:
    return sign_user_signed_action(signer, action, WITHDRAW_SIGN_TYPES, "HyperliquidTransaction:Withdraw", is_mainnet)


def sign_usd_class_transfer_action(signer: TypedDataSigner, action: Dict[str, Any], is_mainnet: bool) -> Signature:
    return sign_user_signed_action(
        signer, action, USD_CLASS_TRANSFER_SIGN_TYPES, "HyperliquidTransaction:UsdClassTransfer", is_mainnet
    )


def sign_agent(signer: TypedDataSigner, action: Dict[str, Any], is_mainnet: bool) -> Signature:
    return sign_user_signed_action(signer, action, APPROVE_AGENT_SIGN_TYPES, "HyperliquidTransaction:ApproveAgent", is_mainnet)
