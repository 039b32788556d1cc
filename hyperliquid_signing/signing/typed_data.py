"""
Phantom Agent / Typed-Data Assembler

Two EIP-712 domains exist and are never mixed:

- Phantom agent ("Exchange", chainId 1337): venue-internal L1 actions. The
  message is {source, connectionId} where connectionId is the action hash.
- User-signed ("HyperliquidSignTransaction", chainId from the action's
  signatureChainId): chain-visible actions. The message is the action itself,
  typed by an explicit per-action field list.

Which domain applies is decided by the action type. Nothing here touches key
material; the result can go to a local key or a remote signer alike.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from eth_utils import to_hex

from hyperliquid_signing.signing.hashing import action_hash

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

PHANTOM_DOMAIN = {
    "name": "Exchange",
    "version": "1",
    "chainId": 1337,
    "verifyingContract": ZERO_ADDRESS,
}

AGENT_TYPES = {
    "Agent": [
        {"name": "source", "type": "string"},
        {"name": "connectionId", "type": "bytes32"},
    ],
}

USER_SIGNED_DOMAIN_NAME = "HyperliquidSignTransaction"

USD_SEND_SIGN_TYPES = [
    {"name": "hyperliquidChain", "type": "string"},
    {"name": "destination", "type": "string"},
    {"name": "amount", "type": "string"},
    {"name": "time", "type": "uint64"},
]

SPOT_TRANSFER_SIGN_TYPES = [
    {"name": "hyperliquidChain", "type": "string"},
    {"name": "destination", "type": "string"},
    {"name": "token", "type": "string"},
    {"name": "amount", "type": "string"},
    {"name": "time", "type": "uint64"},
]

WITHDRAW_SIGN_TYPES = [
    {"name": "hyperliquidChain", "type": "string"},
    {"name": "destination", "type": "string"},
    {"name": "amount", "type": "string"},
    {"name": "time", "type": "uint64"},
]

USD_CLASS_TRANSFER_SIGN_TYPES = [
    {"name": "hyperliquidChain", "type": "string"},
    {"name": "amount", "type": "string"},
    {"name": "toPerp", "type": "bool"},
    {"name": "nonce", "type": "uint64"},
]

APPROVE_AGENT_SIGN_TYPES = [
    {"name": "hyperliquidChain", "type": "string"},
    {"name": "agentAddress", "type": "address"},
    {"name": "agentName", "type": "string"},
    {"name": "nonce", "type": "uint64"},
]

USER_SIGNED_TYPES: Dict[str, List[Dict[str, str]]] = {
    "HyperliquidTransaction:UsdSend": USD_SEND_SIGN_TYPES,
    "HyperliquidTransaction:SpotSend": SPOT_TRANSFER_SIGN_TYPES,
    "HyperliquidTransaction:Withdraw": WITHDRAW_SIGN_TYPES,
    "HyperliquidTransaction:UsdClassTransfer": USD_CLASS_TRANSFER_SIGN_TYPES,
    "HyperliquidTransaction:ApproveAgent": APPROVE_AGENT_SIGN_TYPES,
}

# action "type" -> EIP-712 primary type
USER_SIGNED_PRIMARY_TYPES: Dict[str, str] = {
    "usdSend": "HyperliquidTransaction:UsdSend",
    "spotSend": "HyperliquidTransaction:SpotSend",
    "withdraw3": "HyperliquidTransaction:Withdraw",
    "usdClassTransfer": "HyperliquidTransaction:UsdClassTransfer",
    "approveAgent": "HyperliquidTransaction:ApproveAgent",
}


class SigningMode(str, Enum):
    L1 = "l1"
    USER_SIGNED = "user_signed"


@dataclass
class TypedData:
    """
    EIP-712 structure ready for signing.

    types excludes EIP712Domain (the shape direct signers expect); to_dict()
    adds it back for full-message signers.
    """

    domain: Dict[str, Any]
    types: Dict[str, List[Dict[str, str]]]
    primary_type: str
    message: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": dict(self.domain),
            "types": {"EIP712Domain": EIP712_DOMAIN_TYPE, **self.types},
            "primaryType": self.primary_type,
            "message": dict(self.message),
        }

    def to_json_dict(self) -> Dict[str, Any]:
        """Like to_dict() but with byte values hex-encoded, for JSON transport to remote signers."""
        data = self.to_dict()
        data["message"] = {
            k: to_hex(v) if isinstance(v, (bytes, bytearray)) else v
            for k, v in data["message"].items()
        }
        return data


def signing_mode_for(action: Dict[str, Any]) -> SigningMode:
    """Domain is fixed by the action kind, never by the caller."""
    if action.get("type") in USER_SIGNED_PRIMARY_TYPES:
        return SigningMode.USER_SIGNED
    return SigningMode.L1


def construct_phantom_agent(hash: bytes, is_mainnet: bool) -> Dict[str, Any]:
    return {"source": "a" if is_mainnet else "b", "connectionId": hash}


def l1_typed_data(action: Dict[str, Any], vault_address: Optional[str], nonce: int, is_mainnet: bool) -> TypedData:
    """Phantom-agent typed data wrapping the action hash."""
    hash = action_hash(action, vault_address, nonce)
    return TypedData(
        domain=dict(PHANTOM_DOMAIN),
        types=dict(AGENT_TYPES),
        primary_type="Agent",
        message=construct_phantom_agent(hash, is_mainnet),
    )


def user_signed_typed_data(
    action: Dict[str, Any],
    payload_types: List[Dict[str, str]],
    primary_type: str,
    is_mainnet: bool,
) -> TypedData:
    """
    User-signed typed data over the action's own fields.

    hyperliquidChain is stamped from is_mainnet on a copy; the caller's
    action is left untouched.
    """
    if "signatureChainId" not in action:
        raise ValueError(f"{primary_type} action is missing signatureChainId")

    message = dict(action)
    message["hyperliquidChain"] = "Mainnet" if is_mainnet else "Testnet"
    return TypedData(
        domain={
            "name": USER_SIGNED_DOMAIN_NAME,
            "version": "1",
            "chainId": int(action["signatureChainId"], 16),
            "verifyingContract": ZERO_ADDRESS,
        },
        types={primary_type: list(payload_types)},
        primary_type=primary_type,
        message=message,
    )


def build_typed_data(
    action: Dict[str, Any],
    mode: SigningMode,
    *,
    is_mainnet: bool,
    nonce: Optional[int] = None,
    vault_address: Optional[str] = None,
) -> TypedData:
    """
    Assemble typed data for either signing mode.

    Args:
        action: Action dict
        mode: Must match the action kind (see signing_mode_for)
        is_mainnet: Network; always explicit
        nonce: Required for L1 mode
        vault_address: L1 mode only

    Returns:
        TypedData
    """
    mode = SigningMode(mode)
    expected = signing_mode_for(action)
    if mode is not expected:
        raise ValueError(f"Action type {action.get('type')!r} is signed in {expected.value} mode, not {mode.value}")

    if mode is SigningMode.L1:
        if nonce is None:
            raise ValueError("L1 actions require a nonce")
        return l1_typed_data(action, vault_address, nonce, is_mainnet)

    if vault_address is not None:
        raise ValueError("User-signed actions cannot be sent on behalf of a vault")
    primary_type = USER_SIGNED_PRIMARY_TYPES[action["type"]]
    return user_signed_typed_data(action, USER_SIGNED_TYPES[primary_type], primary_type, is_mainnet)
