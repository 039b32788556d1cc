"""Unit tests for EIP-712 typed-data assembly."""

import pytest

from hyperliquid_signing.execution import actions
from hyperliquid_signing.signing.hashing import action_hash
from hyperliquid_signing.signing.typed_data import (
    AGENT_TYPES,
    EIP712_DOMAIN_TYPE,
    PHANTOM_DOMAIN,
    USER_SIGNED_TYPES,
    SigningMode,
    build_typed_data,
    l1_typed_data,
    signing_mode_for,
    user_signed_typed_data,
)

from .conftest import VAULT_ADDRESS

ORDER_ACTION = {
    "type": "order",
    "orders": [{"a": 5, "b": True, "p": "100", "s": "1", "r": False, "t": {"limit": {"tif": "Gtc"}}}],
    "grouping": "na",
}
DESTINATION = "0x5e9ee1089755c3435139848e47e6635505d5a13a"


def test_phantom_domain_constants() -> None:
    assert PHANTOM_DOMAIN == {
        "name": "Exchange",
        "version": "1",
        "chainId": 1337,
        "verifyingContract": "0x0000000000000000000000000000000000000000",
    }
    assert AGENT_TYPES == {
        "Agent": [
            {"name": "source", "type": "string"},
            {"name": "connectionId", "type": "bytes32"},
        ]
    }


@pytest.mark.parametrize("is_mainnet, source", [(True, "a"), (False, "b")])
def test_l1_typed_data(is_mainnet: bool, source: str) -> None:
    td = l1_typed_data(ORDER_ACTION, VAULT_ADDRESS, 42, is_mainnet)
    assert td.primary_type == "Agent"
    assert td.domain == PHANTOM_DOMAIN
    assert td.message == {"source": source, "connectionId": action_hash(ORDER_ACTION, VAULT_ADDRESS, 42)}


def test_user_signed_typed_data_does_not_mutate_action() -> None:
    action = actions.usd_send_action(DESTINATION, "1", True, time=1)
    td = user_signed_typed_data(
        action, USER_SIGNED_TYPES["HyperliquidTransaction:UsdSend"], "HyperliquidTransaction:UsdSend", False
    )
    assert td.message["hyperliquidChain"] == "Testnet"
    assert action["hyperliquidChain"] == "Mainnet"
    assert td.domain == {
        "name": "HyperliquidSignTransaction",
        "version": "1",
        "chainId": 0xA4B1,
        "verifyingContract": "0x0000000000000000000000000000000000000000",
    }


def test_user_signed_chain_id_from_action() -> None:
    action = actions.withdraw_action(DESTINATION, "1", False, time=1)
    td = build_typed_data(action, SigningMode.USER_SIGNED, is_mainnet=False)
    assert td.domain["chainId"] == 421614
    assert td.primary_type == "HyperliquidTransaction:Withdraw"


@pytest.mark.parametrize(
    "action, primary_type, names",
    [
        (
            actions.usd_class_transfer_action("1", True, True, nonce=1),
            "HyperliquidTransaction:UsdClassTransfer",
            ["hyperliquidChain", "amount", "toPerp", "nonce"],
        ),
        (
            actions.approve_agent_action(DESTINATION, True, "bot", nonce=1),
            "HyperliquidTransaction:ApproveAgent",
            ["hyperliquidChain", "agentAddress", "agentName", "nonce"],
        ),
        (
            actions.spot_send_action(DESTINATION, "PURR:0xc4bf", "1", True, time=1),
            "HyperliquidTransaction:SpotSend",
            ["hyperliquidChain", "destination", "token", "amount", "time"],
        ),
        (
            actions.usd_send_action(DESTINATION, "1", True, time=1),
            "HyperliquidTransaction:UsdSend",
            ["hyperliquidChain", "destination", "amount", "time"],
        ),
    ],
)
def test_user_signed_field_lists(action, primary_type, names) -> None:
    td = build_typed_data(action, SigningMode.USER_SIGNED, is_mainnet=True)
    assert td.primary_type == primary_type
    assert [f["name"] for f in td.types[primary_type]] == names


def test_signing_mode_is_fixed_by_action_kind() -> None:
    assert signing_mode_for(ORDER_ACTION) is SigningMode.L1
    assert signing_mode_for(actions.usd_send_action(DESTINATION, "1", True, time=1)) is SigningMode.USER_SIGNED

    with pytest.raises(ValueError):
        build_typed_data(ORDER_ACTION, SigningMode.USER_SIGNED, is_mainnet=True)
    with pytest.raises(ValueError):
        build_typed_data(actions.usd_send_action(DESTINATION, "1", True, time=1), SigningMode.L1, is_mainnet=True, nonce=1)


def test_l1_requires_nonce() -> None:
    with pytest.raises(ValueError):
        build_typed_data(ORDER_ACTION, SigningMode.L1, is_mainnet=True)


def test_user_signed_rejects_vault() -> None:
    with pytest.raises(ValueError):
        build_typed_data(
            actions.usd_send_action(DESTINATION, "1", True, time=1),
            SigningMode.USER_SIGNED,
            is_mainnet=True,
            vault_address=VAULT_ADDRESS,
        )


def test_to_dict_and_json_dict() -> None:
    td = build_typed_data(ORDER_ACTION, "l1", is_mainnet=True, nonce=7)
    full = td.to_dict()
    assert full["types"]["EIP712Domain"] == EIP712_DOMAIN_TYPE
    assert full["primaryType"] == "Agent"
    assert isinstance(full["message"]["connectionId"], bytes)

    as_json = td.to_json_dict()
    assert as_json["message"]["connectionId"] == "0x" + td.message["connectionId"].hex()
    assert isinstance(td.message["connectionId"], bytes)
