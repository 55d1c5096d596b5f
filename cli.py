#!/usr/bin/env python3
"""
CLI entry point for the BitMEX REST client.

Usage examples
--------------
Fetch positions and the XBTUSD instrument (default)::

    python cli.py

List open orders::

    python cli.py orders --symbol XBTUSD --open

Limit order::

    python cli.py order --symbol XBTUSD --side Sell --type Limit --quantity 100 --price 65000
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# ── Bootstrap ──────────────────────────────────────────────────────────────
# Ensure the project root is on sys.path so ``bmxclient`` can be imported when
# this script is executed directly (``python cli.py …``).
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
if SCRIPT_DIR not in sys.path:
    sys.path.insert(0, SCRIPT_DIR)

from bmxclient.client import BitMEXClient
from bmxclient.config import load_config
from bmxclient.errors import BitMEXError
from bmxclient.logging_config import setup_logging
from bmxclient.orders import format_order_response, place_order

# ── Argument parser ────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Query and trade on BitMEX (testnet unless BITMEX_TESTNET=false).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python cli.py positions\n"
            "  python cli.py instruments --symbol XBTUSD\n"
            "  python cli.py order --symbol XBTUSD --side Buy --type Market --quantity 100\n"
        ),
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("demo", help="Fetch positions and the XBTUSD instrument (default)")
    sub.add_parser("positions", help="List current positions")

    p_instr = sub.add_parser("instruments", help="Show instrument details")
    p_instr.add_argument("--symbol", default=None, help="Instrument symbol (e.g. XBTUSD)")

    p_orders = sub.add_parser("orders", help="List orders")
    p_orders.add_argument("--symbol", default=None, help="Filter by symbol")
    p_orders.add_argument("--open", action="store_true", help="Only open orders")

    p_order = sub.add_parser("order", help="Place a new order")
    p_order.add_argument("--symbol", required=True, help="Instrument symbol (e.g. XBTUSD)")
    p_order.add_argument("--side", required=True, help="Buy or Sell")
    p_order.add_argument("--type", dest="order_type", default="Market", help="Market or Limit")
    p_order.add_argument("--quantity", required=True, help="Order quantity in contracts")
    p_order.add_argument("--price", default=None, help="Limit price (required for Limit orders)")

    p_cancel = sub.add_parser("cancel", help="Cancel an open order")
    p_cancel.add_argument("--order-id", required=True, help="orderID to cancel")

    return parser


# ── Commands ───────────────────────────────────────────────────────────────


def run_command(client: BitMEXClient, args: argparse.Namespace) -> None:
    command = args.command or "demo"

    if command in ("demo", "positions"):
        positions = client.get_positions()
        print(f"Positions ({len(positions)}):")
        for pos in positions:
            print(f"  {pos.symbol:<10} qty={pos.current_qty:<8} entry={pos.avg_entry_price}")

    if command == "demo":
        args.symbol = "XBTUSD"

    if command in ("demo", "instruments"):
        instruments = client.get_instruments(symbol=args.symbol)
        print(f"Instruments ({len(instruments)}):")
        for inst in instruments:
            print(f"  {inst.symbol:<10} state={inst.state} last={inst.last_price}")

    elif command == "orders":
        orders = client.get_orders(symbol=args.symbol, open_only=args.open)
        print(f"Orders ({len(orders)}):")
        for order in orders:
            print(
                f"  {order.order_id}  {order.symbol:<8} {order.side or '-':<4} "
                f"{order.order_qty} @ {order.price}  {order.ord_status}"
            )

    elif command == "order":
        order = place_order(
            client=client,
            symbol=args.symbol,
            side=args.side,
            order_type=args.order_type,
            quantity=args.quantity,
            price=args.price,
        )
        print(format_order_response(order))
        print("✓ Order placed successfully!\n")

    elif command == "cancel":
        for order in client.cancel_order(args.order_id):
            print(f"Cancelled {order.order_id}: {order.ord_status}")


# ── Main ───────────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv(os.path.join(SCRIPT_DIR, ".env"))

    logger = setup_logging()

    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ValueError as exc:
        logger.error("Configuration error: %s", exc)
        sys.exit(1)

    setup_logging(secrets=[config.credentials.secret])

    logger.info(
        "Using %s (%s)",
        config.base_url,
        "testnet" if config.is_testnet else "MAINNET",
    )

    with BitMEXClient.from_config(config) as client:
        try:
            run_command(client, args)
        except ValueError as exc:
            logger.error("Validation error: %s", exc)
            sys.exit(1)
        except BitMEXError as exc:
            logger.error("%s", exc)
            print(f"\n✗ Request FAILED – {exc}")
            sys.exit(1)
        except Exception as exc:
            logger.exception("Unexpected error while running '%s'", args.command or "demo")
            print(f"\n✗ Request FAILED – {exc}")
            sys.exit(1)


if __name__ == "__main__":
    main()
