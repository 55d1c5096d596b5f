"""
Input validators for order parameters.

Every public function raises ``ValueError`` with a human-readable message
when validation fails.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

# BitMEX symbols are uppercase alphanumeric (e.g. XBTUSD, ETHUSD, XBTZ24).
_SYMBOL_RE = re.compile(r"^[A-Z0-9]{2,20}$")

VALID_SIDES = ("Buy", "Sell")
VALID_ORDER_TYPES = ("Market", "Limit")


def _canonical(value: str, choices: tuple) -> Optional[str]:
    lowered = value.strip().lower()
    for choice in choices:
        if choice.lower() == lowered:
            return choice
    return None


def validate_symbol(symbol: str) -> str:
    """Return the uppercased symbol or raise on invalid format."""
    symbol = symbol.strip().upper()
    if not _SYMBOL_RE.match(symbol):
        raise ValueError(
            f"Invalid symbol '{symbol}'. "
            "Expected uppercase alphanumeric (e.g. XBTUSD)."
        )
    return symbol


def validate_side(side: str) -> str:
    """Return ``Buy`` or ``Sell`` (any case accepted) or raise."""
    canonical = _canonical(side, VALID_SIDES)
    if canonical is None:
        raise ValueError(
            f"Invalid side '{side.strip()}'. Must be one of: {', '.join(VALID_SIDES)}."
        )
    return canonical


def validate_order_type(order_type: str) -> str:
    """Return ``Market`` or ``Limit`` (any case accepted) or raise."""
    canonical = _canonical(order_type, VALID_ORDER_TYPES)
    if canonical is None:
        raise ValueError(
            f"Invalid order type '{order_type.strip()}'. "
            f"Must be one of: {', '.join(VALID_ORDER_TYPES)}."
        )
    return canonical


def validate_quantity(quantity: Union[str, int]) -> int:
    """
    Return a positive integer contract quantity or raise.

    Raises
    ------
    ValueError
        If *quantity* is not a whole positive number.
    """
    try:
        qty = Decimal(str(quantity).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid quantity '{quantity}'. Must be a positive integer.")
    if not qty.is_finite() or qty != qty.to_integral_value():
        raise ValueError(f"Invalid quantity '{quantity}'. Must be a positive integer.")
    if qty <= 0:
        raise ValueError(f"Quantity must be positive, got {qty}.")
    return int(qty)


def validate_price(price: Union[str, float, None], order_type: str) -> Optional[Decimal]:
    """
    Validate *price* given an *order_type*.

    - For Limit orders, price is **required** and must be positive.
    - For Market orders, price is ignored (returns ``None``).

    Raises
    ------
    ValueError
        If *price* is missing or invalid for a Limit order.
    """
    if order_type == "Market":
        return None

    if price is None:
        raise ValueError("Price is required for Limit orders.")

    try:
        p = Decimal(str(price).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid price '{price}'. Must be a positive number.")
    if not p.is_finite() or p <= 0:
        raise ValueError(f"Price must be positive, got {p}.")
    return p
