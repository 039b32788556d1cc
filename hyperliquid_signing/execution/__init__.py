"""Execution: order wire mapping, action building, payload routing."""

from hyperliquid_signing.execution.orders import Cloid, Order, OrderType, SigningReport
from hyperliquid_signing.execution.wire import order_to_wire, order_type_to_wire
from hyperliquid_signing.execution.assets import MetaAssetResolver, resolve_assets
from hyperliquid_signing.execution.actions import build_order_action
from hyperliquid_signing.execution.router import PayloadRouter, SignedPayload

__all__ = [
    "Cloid",
    "Order",
    "OrderType",
    "SigningReport",
    "order_to_wire",
    "order_type_to_wire",
    "MetaAssetResolver",
    "resolve_assets",
    "build_order_action",
    "PayloadRouter",
    "SignedPayload",
]
