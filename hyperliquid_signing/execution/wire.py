"""
Order wire mapping.

The wire form is what gets msgpack-encoded and hashed, so key names and key
insertion order here are part of the protocol and must not change.
"""

from typing import Any, Dict, Optional, TypedDict

from hyperliquid_signing.core.errors import InvalidOrderTypeError
from hyperliquid_signing.execution.orders import OrderLike, OrderType, as_order
from hyperliquid_signing.utils.precision import float_to_wire


class LimitWire(TypedDict):
    tif: str


class TriggerWire(TypedDict):
    isMarket: bool
    triggerPx: str
    tpsl: str


class OrderTypeWire(TypedDict, total=False):
    limit: LimitWire
    trigger: TriggerWire


class OrderWire(TypedDict, total=False):
    a: int
    b: bool
    p: str
    s: str
    r: bool
    t: OrderTypeWire
    c: str


def order_type_to_wire(order_type: OrderType) -> OrderTypeWire:
    """
    Encode an order type.

    Limit orders pass the time-in-force through; trigger orders re-encode the
    trigger price and keep isMarket/tpsl.
    """
    if isinstance(order_type, dict):
        order_type = OrderType.from_dict(order_type)

    if order_type.limit is not None:
        return {"limit": {"tif": order_type.limit.tif}}
    elif order_type.trigger is not None:
        return {
            "trigger": {
                "isMarket": order_type.trigger.is_market,
                "triggerPx": float_to_wire(order_type.trigger.trigger_px),
                "tpsl": order_type.trigger.tpsl,
            }
        }
    raise InvalidOrderTypeError("Invalid order type: neither limit nor trigger is set")


def order_to_wire(order: OrderLike, asset: int) -> OrderWire:
    """
    Build the wire struct for one order.

    Args:
        order: Order (or SDK-style dict)
        asset: Resolved asset index

    Returns:
        OrderWire; "c" is present only when the order has a cloid
    """
    order = as_order(order)
    order_wire: OrderWire = {
        "a": asset,
        "b": order.is_buy,
        "p": float_to_wire(order.limit_px),
        "s": float_to_wire(order.sz),
        "r": order.reduce_only,
        "t": order_type_to_wire(order.order_type),
    }
    if order.cloid is not None:
        order_wire["c"] = order.cloid.to_raw()
    return order_wire


def builder_to_wire(builder: Optional[Any]) -> Optional[Dict[str, Any]]:
    """Accept BuilderInfo or an already-wire {"b", "f"} dict."""
    if builder is None:
        return None
    if isinstance(builder, dict):
        return {"b": str(builder["b"]).lower(), "f": int(builder["f"])}
    return builder.to_wire()
