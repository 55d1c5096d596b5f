"""
Typed request and response records for the BitMEX endpoints we use.

Requests are validated when built, so ``to_payload`` always yields a body
the API accepts structurally. Responses keep the raw dict alongside the
handful of typed fields callers need.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from .validators import (
    validate_order_type,
    validate_price,
    validate_quantity,
    validate_side,
    validate_symbol,
)

# ── Requests ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OrderRequest:
    """Body of ``POST /order``."""

    symbol: str
    side: str
    order_qty: int
    ord_type: str = "Market"
    price: Optional[Decimal] = None
    cl_ord_id: Optional[str] = None
    time_in_force: Optional[str] = None

    @classmethod
    def create(
        cls,
        symbol: str,
        side: str,
        order_qty: Union[str, int],
        ord_type: str = "Market",
        price: Union[str, float, None] = None,
        cl_ord_id: Optional[str] = None,
    ) -> "OrderRequest":
        """Validate raw user input and return an ``OrderRequest``.

        Raises ``ValueError`` on any invalid field.
        """
        v_type = validate_order_type(ord_type)
        return cls(
            symbol=validate_symbol(symbol),
            side=validate_side(side),
            order_qty=validate_quantity(order_qty),
            ord_type=v_type,
            price=validate_price(price, v_type),
            cl_ord_id=cl_ord_id,
            time_in_force="GoodTillCancel" if v_type == "Limit" else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "symbol": self.symbol,
            "side": self.side,
            "orderQty": self.order_qty,
            "ordType": self.ord_type,
        }
        if self.price is not None:
            payload["price"] = float(self.price)
        if self.time_in_force:
            payload["timeInForce"] = self.time_in_force
        if self.cl_ord_id:
            payload["clOrdID"] = self.cl_ord_id
        return payload


@dataclass(frozen=True)
class AmendOrderRequest:
    """Body of ``PUT /order``."""

    order_id: str
    order_qty: Optional[int] = None
    price: Optional[Decimal] = None

    @classmethod
    def create(
        cls,
        order_id: str,
        order_qty: Union[str, int, None] = None,
        price: Union[str, float, None] = None,
    ) -> "AmendOrderRequest":
        if not order_id or not order_id.strip():
            raise ValueError("order_id is required to amend an order.")
        if order_qty is None and price is None:
            raise ValueError("Nothing to amend: give a new quantity and/or price.")
        return cls(
            order_id=order_id.strip(),
            order_qty=validate_quantity(order_qty) if order_qty is not None else None,
            price=validate_price(price, "Limit") if price is not None else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"orderID": self.order_id}
        if self.order_qty is not None:
            payload["orderQty"] = self.order_qty
        if self.price is not None:
            payload["price"] = float(self.price)
        return payload


# ── Responses ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Position:
    symbol: str
    current_qty: int
    avg_entry_price: Optional[float]
    unrealised_pnl: Optional[int]
    is_open: bool
    raw: Dict[str, Any] = field(repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Position":
        return cls(
            symbol=data.get("symbol", ""),
            current_qty=data.get("currentQty") or 0,
            avg_entry_price=data.get("avgEntryPrice"),
            unrealised_pnl=data.get("unrealisedPnl"),
            is_open=bool(data.get("isOpen", False)),
            raw=data,
        )


@dataclass(frozen=True)
class Instrument:
    symbol: str
    state: Optional[str]
    last_price: Optional[float]
    tick_size: Optional[float]
    lot_size: Optional[float]
    raw: Dict[str, Any] = field(repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Instrument":
        return cls(
            symbol=data.get("symbol", ""),
            state=data.get("state"),
            last_price=data.get("lastPrice"),
            tick_size=data.get("tickSize"),
            lot_size=data.get("lotSize"),
            raw=data,
        )


@dataclass(frozen=True)
class Order:
    order_id: str
    symbol: str
    side: Optional[str]
    ord_type: Optional[str]
    ord_status: Optional[str]
    order_qty: Optional[int]
    cum_qty: Optional[int]
    price: Optional[float]
    avg_px: Optional[float]
    raw: Dict[str, Any] = field(repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            order_id=data.get("orderID", ""),
            symbol=data.get("symbol", ""),
            side=data.get("side"),
            ord_type=data.get("ordType"),
            ord_status=data.get("ordStatus"),
            order_qty=data.get("orderQty"),
            cum_qty=data.get("cumQty"),
            price=data.get("price"),
            avg_px=data.get("avgPx"),
            raw=data,
        )
