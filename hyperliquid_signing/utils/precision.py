"""
Numeric wire encoding for Hyperliquid actions.

Prices and sizes travel as canonical decimal strings with at most 8
fractional digits; USD and asset-native amounts that are hashed as integers
are scaled by 10**6 and 10**8. Any conversion that would silently change
the value raises RoundingLossError instead.
"""

import math
from decimal import Decimal
from typing import Union

from hyperliquid_signing.core.errors import RoundingLossError

WIRE_DECIMALS = 8
USD_DECIMALS = 6


def float_to_wire(x: float) -> str:
    """
    Format a price or size for the wire.

    Rules:
    - Finite and exactly representable at 8 decimals (within 1e-12), else
      RoundingLossError
    - Trailing zeros and a trailing decimal point are stripped
    - "-0" becomes "0"

    Args:
        x: Price or size

    Returns:
        Canonical decimal string
    """
    if not math.isfinite(x):
        raise RoundingLossError(x)

    rounded = f"{x:.{WIRE_DECIMALS}f}"
    if abs(float(rounded) - x) >= 1e-12:
        raise RoundingLossError(x)

    normalized = rounded.rstrip("0").rstrip(".")
    if normalized == "-0":
        normalized = "0"
    return normalized


def float_to_int(x: float, power: int) -> int:
    """
    Scale x by 10**power and return it as an integer.

    Raises RoundingLossError if the scaled value is not within 1e-3 of an integer.
    """
    if not math.isfinite(x):
        raise RoundingLossError(x, detail="float_to_int")
    with_decimals = x * 10 ** power
    if abs(round(with_decimals) - with_decimals) >= 1e-3:
        raise RoundingLossError(x, detail="float_to_int")
    return round(with_decimals)


def float_to_int_for_hashing(x: float) -> int:
    return float_to_int(x, WIRE_DECIMALS)


def float_to_usd_int(x: float) -> int:
    return float_to_int(x, USD_DECIMALS)


def amount_to_wire(amount: Union[str, int, float]) -> str:
    """
    Canonical string for a transfer amount.

    Strings are passed through unchanged (the caller already chose the
    representation); ints use their decimal form; floats go through
    float_to_wire so 1.0 becomes "1" rather than "1.0".
    """
    if isinstance(amount, bool):
        raise ValueError(f"amount must be numeric, got {amount!r}")
    if isinstance(amount, str):
        if not amount.strip():
            raise ValueError("amount must not be empty")
        return amount.strip()
    if isinstance(amount, int):
        return str(amount)
    return float_to_wire(float(amount))


def slippage_price(px: float, is_buy: bool, slippage: float, is_spot: bool = False) -> float:
    """
    Aggressive limit price for a market-style order.

    Shifts px by the slippage fraction against the taker, then rounds to
    8 decimals for spot or to one fewer decimal than px carries for perps.

    Args:
        px: Reference (mid) price
        is_buy: Order side
        slippage: Fraction, e.g. 0.05 for 5%
        is_spot: Spot market rounding

    Returns:
        Adjusted price
    """
    if not math.isfinite(px) or px <= 0:
        raise ValueError(f"price must be finite and > 0, got {px}")

    # fixed-point text; repr() switches to exponent form below 1e-4
    text = format(Decimal(repr(float(px))), "f")
    frac = text.split(".")[1] if "." in text else ""
    decimals = len(frac) if frac and frac != "0" else 1

    px *= (1 + slippage) if is_buy else (1 - slippage)
    slipped = round(px, WIRE_DECIMALS if is_spot else decimals - 1)
    if slipped <= 0:
        raise ValueError(f"slippage price rounds to {slipped}")
    return slipped
