"""
Low-level BitMEX REST client.

Handles authentication (HMAC-SHA256 header signing), request dispatch, and
raw response parsing. All public methods return parsed JSON or typed
records, or raise ``RemoteAPIError`` / ``NetworkError``.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import urlencode, urlsplit

import requests

from . import endpoints
from .auth import build_headers
from .config import DEFAULT_TIMEOUT_MS, TESTNET_URL, Config, Credentials
from .errors import RemoteAPIError, normalize_error
from .models import AmendOrderRequest, Instrument, Order, OrderRequest, Position

logger = logging.getLogger("bmxclient")

JSON = Union[Dict[str, Any], List[Any]]


def serialize_body(payload: Optional[Dict[str, Any]]) -> str:
    """Serialize a JSON body once; the result is both signed and sent."""
    if payload is None:
        return ""
    return json.dumps(payload, separators=(",", ":"))


def _has_shape(data: Any, expect: type) -> bool:
    if expect is list:
        return isinstance(data, list) and all(isinstance(item, dict) for item in data)
    return isinstance(data, expect)


# ── Client ─────────────────────────────────────────────────────────────────


class BitMEXClient:
    """Thin authenticated wrapper around the BitMEX REST API."""

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = TESTNET_URL,
        timeout: int = DEFAULT_TIMEOUT_MS,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        # Path prefix the server sees, e.g. "/api/v1"; part of every signature.
        self._path_prefix = urlsplit(self.base_url).path
        self.timeout = timeout
        self._clock = clock
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> "BitMEXClient":
        return cls(config.credentials, config.base_url, config.timeout, **kwargs)

    # ── context-manager support ────────────────────────────────────────

    def __enter__(self) -> "BitMEXClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    # ── internal helpers ───────────────────────────────────────────────

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        expect: Optional[type] = None,
    ) -> JSON:
        """
        Send a signed HTTP request to the BitMEX API.

        Parameters
        ----------
        method : str
            HTTP verb (``GET``, ``POST``, ``PUT``, ``DELETE``).
        path : str
            Endpoint path relative to the base URL, e.g. ``/order``.
        params : dict, optional
            Query parameters; ``None`` values are dropped.
        payload : dict, optional
            JSON body. Serialized exactly once.
        expect : type, optional
            ``list`` (of objects) or ``dict``; any other 2xx shape is rejected.

        Returns
        -------
        dict or list
            Parsed JSON response body.

        Raises
        ------
        RemoteAPIError
            On any non-2xx response, or a 2xx body that is not JSON or
            not of the expected shape.
        NetworkError
            When no response arrives (timeout, DNS, connection refused).
        """
        method = method.upper()
        query = urlencode({k: v for k, v in (params or {}).items() if v is not None})
        if query:
            path = f"{path}?{query}"
        url = f"{self.base_url}{path}"
        body = serialize_body(payload)

        headers = build_headers(
            self.credentials.key,
            self.credentials.secret,
            method,
            f"{self._path_prefix}{path}",
            body,
            clock=self._clock,
        )

        logger.debug("API request  -> %s %s body=%d bytes", method, url, len(body))

        try:
            response = self._session.request(
                method,
                url,
                data=body.encode("utf-8") if body else None,
                headers=headers,
                timeout=self.timeout / 1000,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            error = normalize_error(exc)
            logger.debug("API failure  <- %s %s: %s", method, url, error)
            raise error from exc

        logger.debug(
            "API response <- %s (%.1f KB)",
            response.status_code,
            len(response.content) / 1024,
        )

        try:
            data = response.json()
        except ValueError:
            raise RemoteAPIError(response.status_code, "Response body is not valid JSON")

        if expect is not None and not _has_shape(data, expect):
            raise RemoteAPIError(
                response.status_code,
                f"Unexpected response shape: expected {expect.__name__}, got {type(data).__name__}",
            )
        return data

    # ── generic verbs ──────────────────────────────────────────────────

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> JSON:
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: Dict[str, Any]) -> JSON:
        return self._request("POST", path, payload=payload)

    def put(self, path: str, payload: Dict[str, Any]) -> JSON:
        return self._request("PUT", path, payload=payload)

    def delete(self, path: str, payload: Optional[Dict[str, Any]] = None) -> JSON:
        return self._request("DELETE", path, payload=payload)

    # ── public API methods ─────────────────────────────────────────────

    def get_positions(self, symbol: Optional[str] = None) -> List[Position]:
        """Fetch current positions (``GET /position``)."""
        params = {"filter": json.dumps({"symbol": symbol})} if symbol else None
        data = self._request("GET", endpoints.POSITION, params, expect=list)
        return [Position.from_api(p) for p in data]

    def get_instruments(self, symbol: Optional[str] = None) -> List[Instrument]:
        """Fetch instrument details (``GET /instrument``)."""
        params = {"symbol": symbol} if symbol else None
        data = self._request("GET", endpoints.INSTRUMENT, params, expect=list)
        return [Instrument.from_api(i) for i in data]

    def get_orders(self, symbol: Optional[str] = None, open_only: bool = False) -> List[Order]:
        """List orders (``GET /order``), optionally only those still open."""
        params: Dict[str, Any] = {"symbol": symbol, "reverse": "true"}
        if open_only:
            params["filter"] = json.dumps({"open": True})
        data = self._request("GET", endpoints.ORDER, params, expect=list)
        return [Order.from_api(o) for o in data]

    def create_order(self, order: OrderRequest) -> Order:
        """Submit a new order (``POST /order``)."""
        data = self._request("POST", endpoints.ORDER, payload=order.to_payload(), expect=dict)
        return Order.from_api(data)

    def amend_order(self, amend: AmendOrderRequest) -> Order:
        """Amend quantity and/or price of an open order (``PUT /order``)."""
        data = self._request("PUT", endpoints.ORDER, payload=amend.to_payload(), expect=dict)
        return Order.from_api(data)

    def cancel_order(self, order_id: str) -> List[Order]:
        """Cancel an open order (``DELETE /order``)."""
        data = self._request("DELETE", endpoints.ORDER, payload={"orderID": order_id}, expect=list)
        return [Order.from_api(o) for o in data]

    def get_quotes(self, symbol: str, count: int = 10) -> List[Dict[str, Any]]:
        """Latest quotes for *symbol* (``GET /quote``)."""
        return self.get(endpoints.QUOTE, {"symbol": symbol, "count": count, "reverse": "true"})

    def get_trades(self, symbol: str, count: int = 10) -> List[Dict[str, Any]]:
        """Recent public trades for *symbol* (``GET /trade``)."""
        return self.get(endpoints.TRADE, {"symbol": symbol, "count": count, "reverse": "true"})

    def get_user(self) -> Dict[str, Any]:
        """Account details of the key owner (``GET /user``)."""
        return self.get(endpoints.USER)
