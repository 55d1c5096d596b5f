"""
Order-placement logic.

Bridges raw user input and the low-level ``BitMEXClient``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .client import BitMEXClient
from .models import Order, OrderRequest

logger = logging.getLogger("bmxclient")


def place_order(
    client: BitMEXClient,
    symbol: str,
    side: str,
    order_type: str,
    quantity: Union[str, int],
    price: Union[str, float, None] = None,
) -> Order:
    """
    Validate the parameters and submit the order.

    Raises
    ------
    ValueError
        If any parameter is invalid; nothing is sent in that case.
    """
    request = OrderRequest.create(symbol, side, quantity, order_type, price)

    logger.info(
        "Placing %s %s order: %s %s @ %s",
        request.side,
        request.ord_type,
        request.order_qty,
        request.symbol,
        request.price if request.price is not None else "MARKET",
    )

    order = client.create_order(request)

    logger.info("Order placed  – orderID=%s status=%s", order.order_id, order.ord_status)
    logger.debug("Full order response: %s", order.raw)

    return order


def format_order_response(order: Order) -> str:
    """Return a human-friendly multi-line summary of an order."""
    lines = [
        "─── Order Response ───────────────────────────",
        f"  Order ID      : {order.order_id}",
        f"  Symbol        : {order.symbol}",
        f"  Side          : {order.side}",
        f"  Type          : {order.ord_type}",
        f"  Status        : {order.ord_status}",
        f"  Order Qty     : {order.order_qty}",
        f"  Filled Qty    : {order.cum_qty}",
        f"  Avg Price     : {order.avg_px if order.avg_px is not None else 'N/A'}",
        f"  Price         : {order.price if order.price is not None else 'N/A'}",
        "───────────────────────────────────────────────",
    ]
    return "\n".join(lines)
