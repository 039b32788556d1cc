"""
Order data structures (Order, OrderType, Cloid, BuilderInfo, requests, SigningReport).
"""

import string
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union

from hyperliquid.utils import types

from hyperliquid_signing.core.errors import ErrorKind

Tif = Literal["Alo", "Ioc", "Gtc", "FrontendMarket"]
Tpsl = Literal["tp", "sl"]
Grouping = Literal["na", "normalTpsl", "positionTpsl"]

GROUPINGS = ("na", "normalTpsl", "positionTpsl")

ORDER_REQUEST_FIELDS = ("coin", "is_buy", "sz", "limit_px", "order_type")


class Cloid(types.Cloid):
    """
    Client order id: 0x followed by 32 hex characters (16 bytes).

    The SDK class checks prefix and length; the body must also be hex, and
    ids compare and hash by value.
    """

    def _validate(self):
        if not isinstance(self._raw_cloid, str):
            raise TypeError("cloid is not a hex string")
        super()._validate()
        if not all(c in string.hexdigits for c in self._raw_cloid[2:]):
            raise TypeError("cloid is not a hex string")

    @classmethod
    def coerce(cls, cloid: Union[str, types.Cloid]) -> "Cloid":
        """Accept a raw string or any SDK Cloid."""
        if isinstance(cloid, cls):
            return cloid
        if isinstance(cloid, types.Cloid):
            return cls(cloid.to_raw())
        return cls(cloid)

    @staticmethod
    def from_int(cloid: int) -> "Cloid":
        return Cloid(f"{cloid:#034x}")

    @staticmethod
    def from_str(cloid: str) -> "Cloid":
        return Cloid(cloid)

    def __eq__(self, other) -> bool:
        return isinstance(other, types.Cloid) and other.to_raw() == self._raw_cloid

    def __hash__(self) -> int:
        return hash(self._raw_cloid)

    def __repr__(self) -> str:
        return f"Cloid({self._raw_cloid!r})"


@dataclass(frozen=True)
class LimitOrderType:
    tif: Tif = "Gtc"


@dataclass(frozen=True)
class TriggerOrderType:
    trigger_px: float
    is_market: bool
    tpsl: Tpsl


@dataclass(frozen=True)
class OrderType:
    """Exactly one of limit/trigger is expected to be set."""

    limit: Optional[LimitOrderType] = None
    trigger: Optional[TriggerOrderType] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderType":
        """Accept SDK-style {"limit": {"tif": ...}} / {"trigger": {"triggerPx", "isMarket", "tpsl"}}."""
        limit = data.get("limit")
        trigger = data.get("trigger")
        return cls(
            limit=LimitOrderType(tif=limit["tif"]) if limit else None,
            trigger=TriggerOrderType(
                trigger_px=float(trigger["triggerPx"]),
                is_market=bool(trigger["isMarket"]),
                tpsl=trigger["tpsl"],
            ) if trigger else None,
        )


@dataclass(frozen=True)
class Order:
    """
    Logical order before asset resolution.

    Ephemeral: built per call, mapped to its wire form, then discarded.
    """

    coin: str
    is_buy: bool
    sz: float
    limit_px: float
    order_type: OrderType
    reduce_only: bool = False
    cloid: Optional[Cloid] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        """Build from an SDK-style order request; malformed requests raise ValueError."""
        missing = [name for name in ORDER_REQUEST_FIELDS if data.get(name) is None]
        if missing:
            raise ValueError(f"order request is missing field(s): {', '.join(missing)}")

        order_type = data["order_type"]
        if isinstance(order_type, dict):
            try:
                order_type = OrderType.from_dict(order_type)
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"malformed order_type {order_type!r}: {e!r}") from None
        cloid = data.get("cloid")
        if cloid is not None:
            try:
                cloid = Cloid.coerce(cloid)
            except TypeError as e:
                raise ValueError(f"invalid cloid {cloid!r}: {e}") from None
        try:
            sz = float(data["sz"])
            limit_px = float(data["limit_px"])
        except (TypeError, ValueError):
            raise ValueError(f"sz and limit_px must be numeric: {data['sz']!r}, {data['limit_px']!r}") from None
        return cls(
            coin=data["coin"],
            is_buy=bool(data["is_buy"]),
            sz=sz,
            limit_px=limit_px,
            order_type=order_type,
            reduce_only=bool(data.get("reduce_only", False)),
            cloid=cloid,
        )


@dataclass(frozen=True)
class BuilderInfo:
    """Builder fee attached to an order batch; fee is in tenths of a basis point."""

    address: str
    fee: int

    def to_wire(self) -> Dict[str, Any]:
        return {"b": self.address.lower(), "f": self.fee}


@dataclass(frozen=True)
class CancelRequest:
    coin: str
    oid: int


@dataclass(frozen=True)
class CancelByCloidRequest:
    coin: str
    cloid: Cloid


@dataclass(frozen=True)
class ModifyRequest:
    oid: Union[int, Cloid]
    order: Order


OrderLike = Union[Order, Dict[str, Any]]


def as_order(order: OrderLike) -> Order:
    return order if isinstance(order, Order) else Order.from_dict(order)


@dataclass
class SigningReport:
    """
    Result of a signing request.

    status is "signed" with payload set, or "rejected" with error_kind and
    error_msg set. Never both.
    """

    status: Literal["signed", "rejected"] = "signed"
    payload: Optional[Any] = None  # SignedPayload on success
    error_kind: Optional[ErrorKind] = None
    error_msg: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "signed"
