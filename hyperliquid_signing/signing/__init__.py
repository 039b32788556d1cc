"""Signing: action hashing, EIP-712 assembly, signer adapter."""

from hyperliquid_signing.signing.hashing import action_hash
from hyperliquid_signing.signing.typed_data import SigningMode, TypedData, build_typed_data
from hyperliquid_signing.signing.signer import Signature, SignerKind, TypedDataSigner, sign, split_signature

__all__ = [
    "action_hash",
    "SigningMode",
    "TypedData",
    "build_typed_data",
    "Signature",
    "SignerKind",
    "TypedDataSigner",
    "sign",
    "split_signature",
]
