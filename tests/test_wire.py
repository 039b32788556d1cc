"""Unit tests for order wire mapping."""

import pytest
from hyperliquid.utils import types

from hyperliquid_signing.core.errors import ErrorKind, InvalidOrderTypeError, RoundingLossError
from hyperliquid_signing.execution.orders import (
    Cloid,
    LimitOrderType,
    Order,
    OrderType,
    TriggerOrderType,
)
from hyperliquid_signing.execution.wire import order_to_wire, order_type_to_wire


@pytest.fixture
def eth_order() -> Order:
    return Order(
        coin="ETH",
        is_buy=True,
        sz=1.0,
        limit_px=2500.12345678,
        order_type=OrderType(limit=LimitOrderType(tif="Gtc")),
        reduce_only=False,
    )


def test_order_to_wire_eth_scenario(eth_order: Order) -> None:
    wire = order_to_wire(eth_order, 5)
    assert wire == {
        "a": 5,
        "b": True,
        "p": "2500.12345678",
        "s": "1",
        "r": False,
        "t": {"limit": {"tif": "Gtc"}},
    }
    assert list(wire) == ["a", "b", "p", "s", "r", "t"]


def test_order_to_wire_omits_absent_cloid(eth_order: Order) -> None:
    assert "c" not in order_to_wire(eth_order, 5)


def test_order_to_wire_includes_cloid_last() -> None:
    cloid = Cloid.from_int(1)
    order = Order(
        coin="BTC",
        is_buy=False,
        sz=0.001,
        limit_px=65000,
        order_type=OrderType(limit=LimitOrderType(tif="Alo")),
        reduce_only=True,
        cloid=cloid,
    )
    wire = order_to_wire(order, 0)
    assert wire["c"] == "0x00000000000000000000000000000001"
    assert list(wire)[-1] == "c"
    assert wire["s"] == "0.001"
    assert wire["p"] == "65000"


def test_order_to_wire_accepts_sdk_style_dict() -> None:
    wire = order_to_wire(
        {
            "coin": "ETH",
            "is_buy": False,
            "sz": 0.5,
            "limit_px": 3000,
            "order_type": {"limit": {"tif": "Ioc"}},
            "reduce_only": True,
            "cloid": "0x0000000000000000000000000000abcd",
        },
        5,
    )
    assert wire == {
        "a": 5,
        "b": False,
        "p": "3000",
        "s": "0.5",
        "r": True,
        "t": {"limit": {"tif": "Ioc"}},
        "c": "0x0000000000000000000000000000abcd",
    }


def test_trigger_order_type_to_wire() -> None:
    wire = order_type_to_wire(OrderType(trigger=TriggerOrderType(trigger_px=2400.0, is_market=True, tpsl="sl")))
    assert wire == {"trigger": {"isMarket": True, "triggerPx": "2400", "tpsl": "sl"}}
    assert list(wire["trigger"]) == ["isMarket", "triggerPx", "tpsl"]


def test_trigger_price_rounding_is_rejected() -> None:
    with pytest.raises(RoundingLossError):
        order_type_to_wire(OrderType(trigger=TriggerOrderType(trigger_px=1.123456789, is_market=False, tpsl="tp")))


def test_empty_order_type_is_invalid() -> None:
    with pytest.raises(InvalidOrderTypeError) as exc:
        order_type_to_wire(OrderType())
    assert exc.value.kind is ErrorKind.INVALID_ORDER_TYPE


def test_price_rounding_is_rejected(eth_order: Order) -> None:
    order = Order(
        coin="ETH",
        is_buy=True,
        sz=1.0,
        limit_px=2500.123456785,
        order_type=eth_order.order_type,
    )
    with pytest.raises(RoundingLossError):
        order_to_wire(order, 5)


@pytest.mark.parametrize(
    "raw", ["0x123", "123456789012345678901234567890123456", "0x" + "zz" * 16, "0x" + "1_" * 16, 42]
)
def test_cloid_validation(raw) -> None:
    with pytest.raises(TypeError):
        Cloid(raw)


def test_cloid_equality() -> None:
    assert Cloid.from_int(255) == Cloid.from_str("0x000000000000000000000000000000ff")


def test_cloid_extends_sdk_cloid() -> None:
    sdk_cloid = types.Cloid.from_int(255)
    cloid = Cloid.from_int(255)
    assert isinstance(cloid, types.Cloid)
    assert cloid.to_raw() == sdk_cloid.to_raw()
    assert cloid == sdk_cloid
    assert Cloid.coerce(sdk_cloid) == cloid
    assert isinstance(Cloid.coerce(sdk_cloid), Cloid)


def test_order_from_dict_accepts_sdk_cloid() -> None:
    raw = "0x00000000000000000000000000000001"
    request = {
        "coin": "ETH",
        "is_buy": True,
        "sz": 1.0,
        "limit_px": 2500.12345678,
        "order_type": {"limit": {"tif": "Gtc"}},
        "cloid": types.Cloid.from_str(raw),
    }
    assert order_to_wire(request, 5)["c"] == raw


@pytest.mark.parametrize(
    "request_dict, message",
    [
        ({"coin": "ETH", "is_buy": True, "sz": 1.0, "order_type": {"limit": {"tif": "Gtc"}}}, "limit_px"),
        ({"coin": "ETH", "is_buy": True, "sz": None, "limit_px": 1.0, "order_type": {"limit": {"tif": "Gtc"}}}, "sz"),
        ({"coin": "ETH", "is_buy": True, "sz": "x", "limit_px": 1.0, "order_type": {"limit": {"tif": "Gtc"}}}, "numeric"),
        ({"coin": "ETH", "is_buy": True, "sz": 1.0, "limit_px": 1.0, "order_type": {"limit": {"when": 1}}}, "order_type"),
        ({"coin": "ETH", "is_buy": True, "sz": 1.0, "limit_px": 1.0, "order_type": {"limit": {"tif": "Gtc"}}, "cloid": "0x1"}, "cloid"),
    ],
)
def test_order_from_dict_rejects_malformed_requests(request_dict, message) -> None:
    with pytest.raises(ValueError, match=message):
        Order.from_dict(request_dict)
