"""
Action Builder

Assembles the canonical action object for each action kind. Key sets and key
insertion order are fixed by the protocol: the L1 actions are msgpack-encoded
in insertion order before hashing, so reordering a literal here changes the
signature.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from hyperliquid_signing.execution.assets import AssetResolver, resolve_asset, resolve_assets
from hyperliquid_signing.execution.orders import (
    GROUPINGS,
    BuilderInfo,
    CancelByCloidRequest,
    CancelRequest,
    Cloid,
    Grouping,
    LimitOrderType,
    ModifyRequest,
    Order,
    OrderLike,
    OrderType,
    TriggerOrderType,
    as_order,
)
from hyperliquid_signing.execution.wire import OrderWire, builder_to_wire, order_to_wire
from hyperliquid_signing.utils.nonce import get_timestamp_ms
from hyperliquid_signing.utils.precision import amount_to_wire, float_to_usd_int, slippage_price

logger = logging.getLogger(__name__)

MAINNET_SIGNATURE_CHAIN_ID = "0xa4b1"
TESTNET_SIGNATURE_CHAIN_ID = "0x66eee"

DEFAULT_SLIPPAGE = 0.05


class ActionType:
    """Discriminator strings; each is part of the serialized action bytes."""

    ORDER = "order"
    CANCEL = "cancel"
    CANCEL_BY_CLOID = "cancelByCloid"
    MODIFY = "modify"
    BATCH_MODIFY = "batchModify"
    UPDATE_LEVERAGE = "updateLeverage"
    UPDATE_ISOLATED_MARGIN = "updateIsolatedMargin"
    USD_SEND = "usdSend"
    SPOT_SEND = "spotSend"
    WITHDRAW = "withdraw3"
    USD_CLASS_TRANSFER = "usdClassTransfer"
    VAULT_TRANSFER = "vaultTransfer"
    SCHEDULE_CANCEL = "scheduleCancel"
    SET_REFERRER = "setReferrer"
    APPROVE_AGENT = "approveAgent"


def hyperliquid_chain(is_mainnet: bool) -> str:
    return "Mainnet" if is_mainnet else "Testnet"


def signature_chain_id(is_mainnet: bool) -> str:
    return MAINNET_SIGNATURE_CHAIN_ID if is_mainnet else TESTNET_SIGNATURE_CHAIN_ID


# ------------------------
# L1 (phantom-agent) actions
# ------------------------

def order_wires_to_order_action(
    order_wires: List[OrderWire],
    grouping: Grouping = "na",
    builder: Optional[Union[BuilderInfo, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Wrap already-mapped wires; "builder" is present only when a builder fee is given."""
    if grouping not in GROUPINGS:
        raise ValueError(f"grouping must be one of {GROUPINGS}, got {grouping!r}")
    action: Dict[str, Any] = {
        "type": ActionType.ORDER,
        "orders": order_wires,
        "grouping": grouping,
    }
    builder_wire = builder_to_wire(builder)
    if builder_wire is not None:
        action["builder"] = builder_wire
    return action


def build_order_action(
    orders: Sequence[OrderLike],
    resolver: AssetResolver,
    grouping: Grouping = "na",
    builder: Optional[Union[BuilderInfo, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Build an order-batch action.

    Every coin is resolved once per call (repeated coins share a lookup)
    before any wire order is built.

    Args:
        orders: Orders in submission order
        resolver: coin -> asset index
        grouping: "na", "normalTpsl" or "positionTpsl"
        builder: Optional builder fee

    Returns:
        {"type": "order", "orders": [...], "grouping": ..., ["builder": {...}]}
    """
    parsed = [as_order(o) for o in orders]
    assets = resolve_assets([o.coin for o in parsed], resolver)
    order_wires = [order_to_wire(o, assets[o.coin]) for o in parsed]
    logger.debug("[ActionBuilder] order batch: %d orders, grouping=%s", len(order_wires), grouping)
    return order_wires_to_order_action(order_wires, grouping, builder)


def cancel_action(cancels: Sequence[CancelRequest], resolver: AssetResolver) -> Dict[str, Any]:
    assets = resolve_assets([c.coin for c in cancels], resolver)
    return {
        "type": ActionType.CANCEL,
        "cancels": [{"a": assets[c.coin], "o": c.oid} for c in cancels],
    }


def cancel_by_cloid_action(cancels: Sequence[CancelByCloidRequest], resolver: AssetResolver) -> Dict[str, Any]:
    assets = resolve_assets([c.coin for c in cancels], resolver)
    return {
        "type": ActionType.CANCEL_BY_CLOID,
        "cancels": [{"asset": assets[c.coin], "cloid": c.cloid.to_raw()} for c in cancels],
    }


def _modify_oid(oid: Union[int, Cloid]) -> Union[int, str]:
    return oid if isinstance(oid, int) else Cloid.coerce(oid).to_raw()


def modify_action(oid: Union[int, Cloid], order: OrderLike, resolver: AssetResolver) -> Dict[str, Any]:
    order = as_order(order)
    return {
        "type": ActionType.MODIFY,
        "oid": _modify_oid(oid),
        "order": order_to_wire(order, resolve_asset(order.coin, resolver)),
    }


def batch_modify_action(modifies: Sequence[ModifyRequest], resolver: AssetResolver) -> Dict[str, Any]:
    orders = [as_order(m.order) for m in modifies]
    assets = resolve_assets([o.coin for o in orders], resolver)
    return {
        "type": ActionType.BATCH_MODIFY,
        "modifies": [
            {"oid": _modify_oid(m.oid), "order": order_to_wire(o, assets[o.coin])}
            for m, o in zip(modifies, orders)
        ],
    }


def update_leverage_action(coin: str, leverage: int, is_cross: bool, resolver: AssetResolver) -> Dict[str, Any]:
    return {
        "type": ActionType.UPDATE_LEVERAGE,
        "asset": resolve_asset(coin, resolver),
        "isCross": is_cross,
        "leverage": leverage,
    }


def update_isolated_margin_action(coin: str, is_buy: bool, amount: float, resolver: AssetResolver) -> Dict[str, Any]:
    """amount is in USD; it is hashed as an integer scaled by 10**6 ("ntli")."""
    return {
        "type": ActionType.UPDATE_ISOLATED_MARGIN,
        "asset": resolve_asset(coin, resolver),
        "isBuy": is_buy,
        "ntli": float_to_usd_int(amount),
    }


def vault_transfer_action(vault_address: str, is_deposit: bool, usd: int) -> Dict[str, Any]:
    """usd is in raw units (1_000_000 == 1 USD)."""
    if isinstance(usd, bool) or not isinstance(usd, int):
        raise ValueError(f"usd must be an integer amount of raw units, got {usd!r}")
    return {
        "type": ActionType.VAULT_TRANSFER,
        "vaultAddress": vault_address,
        "isDeposit": is_deposit,
        "usd": usd,
    }


def schedule_cancel_action(time: Optional[int] = None) -> Dict[str, Any]:
    """time omitted clears a previously scheduled cancel."""
    action: Dict[str, Any] = {"type": ActionType.SCHEDULE_CANCEL}
    if time is not None:
        action["time"] = time
    return action


def set_referrer_action(code: str) -> Dict[str, Any]:
    return {"type": ActionType.SET_REFERRER, "code": code}


# ------------------------
# User-signed (chain-visible) actions
# ------------------------

def usd_send_action(destination: str, amount: Union[str, float], is_mainnet: bool, time: Optional[int] = None) -> Dict[str, Any]:
    return {
        "type": ActionType.USD_SEND,
        "hyperliquidChain": hyperliquid_chain(is_mainnet),
        "signatureChainId": signature_chain_id(is_mainnet),
        "destination": destination,
        "amount": amount_to_wire(amount),
        "time": get_timestamp_ms() if time is None else time,
    }


def spot_send_action(
    destination: str,
    token: str,
    amount: Union[str, float],
    is_mainnet: bool,
    time: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "type": ActionType.SPOT_SEND,
        "hyperliquidChain": hyperliquid_chain(is_mainnet),
        "signatureChainId": signature_chain_id(is_mainnet),
        "destination": destination,
        "token": token,
        "amount": amount_to_wire(amount),
        "time": get_timestamp_ms() if time is None else time,
    }


def withdraw_action(destination: str, amount: Union[str, float], is_mainnet: bool, time: Optional[int] = None) -> Dict[str, Any]:
    return {
        "type": ActionType.WITHDRAW,
        "hyperliquidChain": hyperliquid_chain(is_mainnet),
        "signatureChainId": signature_chain_id(is_mainnet),
        "destination": destination,
        "amount": amount_to_wire(amount),
        "time": get_timestamp_ms() if time is None else time,
    }


def usd_class_transfer_action(
    amount: Union[str, float],
    to_perp: bool,
    is_mainnet: bool,
    nonce: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "type": ActionType.USD_CLASS_TRANSFER,
        "hyperliquidChain": hyperliquid_chain(is_mainnet),
        "signatureChainId": signature_chain_id(is_mainnet),
        "amount": amount_to_wire(amount),
        "toPerp": to_perp,
        "nonce": get_timestamp_ms() if nonce is None else nonce,
    }


def approve_agent_action(
    agent_address: str,
    is_mainnet: bool,
    agent_name: str = "",
    nonce: Optional[int] = None,
) -> Dict[str, Any]:
    return {
        "type": ActionType.APPROVE_AGENT,
        "hyperliquidChain": hyperliquid_chain(is_mainnet),
        "signatureChainId": signature_chain_id(is_mainnet),
        "agentAddress": agent_address,
        "agentName": agent_name,
        "nonce": get_timestamp_ms() if nonce is None else nonce,
    }


def user_signed_nonce(action: Dict[str, Any]) -> int:
    """The field a user-signed action carries its own nonce in."""
    if "time" in action:
        return action["time"]
    return action["nonce"]


# ------------------------
# Order helpers
# ------------------------

def market_open_orders(
    coin: str,
    is_buy: bool,
    sz: float,
    px: float,
    slippage: float = DEFAULT_SLIPPAGE,
    triggers: Optional[Sequence[TriggerOrderType]] = None,
    is_spot: bool = False,
    cloid: Optional[Cloid] = None,
) -> Tuple[List[Order], Grouping]:
    """
    Orders for a market-style open with optional attached TP/SL legs.

    The opening leg is a FrontendMarket limit at px shifted by slippage. Each
    trigger becomes a reduce-only order on the opposite side with size 0
    (sized by the venue from the fill), priced at its trigger price shifted by
    slippage. Grouping is "normalTpsl" when triggers are attached.

    Args:
        coin: Coin symbol
        is_buy: Side of the opening leg
        sz: Size
        px: Reference price (e.g. current mid)
        slippage: Max slippage fraction
        triggers: TP/SL legs
        is_spot: Spot rounding rules
        cloid: Client order id for the opening leg

    Returns:
        (orders, grouping)
    """
    orders: List[Order] = [
        Order(
            coin=coin,
            is_buy=is_buy,
            sz=sz,
            limit_px=slippage_price(px, is_buy, slippage, is_spot),
            order_type=OrderType(limit=LimitOrderType(tif="FrontendMarket")),
            reduce_only=False,
            cloid=cloid,
        )
    ]
    for trigger in triggers or []:
        orders.append(
            Order(
                coin=coin,
                is_buy=not is_buy,
                sz=0.0,
                limit_px=slippage_price(trigger.trigger_px, not is_buy, slippage, is_spot),
                order_type=OrderType(trigger=trigger),
                reduce_only=True,
            )
        )
    grouping: Grouping = "normalTpsl" if triggers else "na"
    return orders, grouping
