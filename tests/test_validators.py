"""Tests for order-parameter validators and typed request records."""

from decimal import Decimal

import pytest

from bmxclient.models import AmendOrderRequest, Order, OrderRequest
from bmxclient.validators import (
    validate_order_type,
    validate_price,
    validate_quantity,
    validate_side,
    validate_symbol,
)


class TestValidators:

    def test_symbol_uppercased(self):
        assert validate_symbol(" xbtusd ") == "XBTUSD"

    @pytest.mark.parametrize("symbol", ["X", "XBT-USD", ""])
    def test_bad_symbol(self, symbol):
        with pytest.raises(ValueError, match="Invalid symbol"):
            validate_symbol(symbol)

    def test_side_any_case(self):
        assert validate_side("BUY") == "Buy"
        assert validate_side("sell") == "Sell"

    def test_bad_side(self):
        with pytest.raises(ValueError, match="Must be one of: Buy, Sell"):
            validate_side("long")

    def test_order_type(self):
        assert validate_order_type("LIMIT") == "Limit"
        with pytest.raises(ValueError):
            validate_order_type("Stop")

    def test_quantity(self):
        assert validate_quantity("100") == 100
        assert validate_quantity(5) == 5

    @pytest.mark.parametrize("qty", ["0", "-1", "1.5", "abc", "nan"])
    def test_bad_quantity(self, qty):
        with pytest.raises(ValueError):
            validate_quantity(qty)

    def test_price_ignored_for_market(self):
        assert validate_price("123", "Market") is None

    def test_price_required_for_limit(self):
        with pytest.raises(ValueError, match="required"):
            validate_price(None, "Limit")
        assert validate_price("65000.5", "Limit") == Decimal("65000.5")

    @pytest.mark.parametrize("price", ["0", "-3", "x"])
    def test_bad_price(self, price):
        with pytest.raises(ValueError):
            validate_price(price, "Limit")


class TestOrderRequest:

    def test_market_payload(self):
        request = OrderRequest.create("xbtusd", "buy", "10")
        assert request.to_payload() == {
            "symbol": "XBTUSD",
            "side": "Buy",
            "orderQty": 10,
            "ordType": "Market",
        }

    def test_limit_payload_with_client_id(self):
        request = OrderRequest.create("XBTUSD", "Sell", 5, "Limit", "70000", cl_ord_id="my-1")
        payload = request.to_payload()
        assert payload["price"] == 70000.0
        assert payload["timeInForce"] == "GoodTillCancel"
        assert payload["clOrdID"] == "my-1"

    def test_invalid_input_rejected_before_serialization(self):
        with pytest.raises(ValueError):
            OrderRequest.create("XBTUSD", "Buy", "10", "Limit")


class TestAmendOrderRequest:

    def test_requires_change(self):
        with pytest.raises(ValueError, match="Nothing to amend"):
            AmendOrderRequest.create("o-1")

    def test_requires_order_id(self):
        with pytest.raises(ValueError, match="order_id"):
            AmendOrderRequest.create(" ", price="1")

    def test_payload(self):
        assert AmendOrderRequest.create("o-1", order_qty="20").to_payload() == {
            "orderID": "o-1",
            "orderQty": 20,
        }


def test_order_from_api_keeps_raw():
    data = {"orderID": "o-1", "symbol": "XBTUSD", "ordStatus": "Filled", "extra": 1}
    order = Order.from_api(data)
    assert order.order_id == "o-1"
    assert order.side is None
    assert order.raw["extra"] == 1
