"""
bmxclient — minimal authenticated client for the BitMEX REST API.

Submodules
----------
auth            Canonical-message construction, HMAC-SHA256 signing, headers.
client          REST client: signed dispatch, typed endpoint methods.
errors          RemoteAPIError / NetworkError and the error normalizer.
config          Credentials and base-URL/timeout configuration.
endpoints       API-relative endpoint paths.
models          Typed order requests and response records.
orders          Order-placement helper and response formatting.
validators      Input validation for order parameters.
logging_config  Dual-output logging (console + rotating file).
"""

from bmxclient.auth import build_headers, sign
from bmxclient.client import BitMEXClient
from bmxclient.config import Config, Credentials, load_config
from bmxclient.errors import BitMEXError, NetworkError, RemoteAPIError
from bmxclient.models import AmendOrderRequest, Instrument, Order, OrderRequest, Position
from bmxclient.orders import format_order_response, place_order

__all__ = [
    "AmendOrderRequest",
    "BitMEXClient",
    "BitMEXError",
    "Config",
    "Credentials",
    "Instrument",
    "NetworkError",
    "Order",
    "OrderRequest",
    "Position",
    "RemoteAPIError",
    "build_headers",
    "format_order_response",
    "load_config",
    "place_order",
    "sign",
]
