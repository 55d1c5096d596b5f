"""
Request signing for the BitMEX REST API.

BitMEX authenticates every private call with three headers:

  - ``api-key``       : the public key id
  - ``api-expires``   : unix timestamp (seconds) after which the request is void
  - ``api-signature`` : hex HMAC-SHA256 of ``verb + path + expires + body``

*path* is the full URL path the server sees, including the ``/api/v1``
prefix and any query string.
"""

from __future__ import annotations

import hashlib
import hmac
import time
from typing import Callable, Dict

# Seconds a signed request stays valid.
EXPIRES_IN = 60


def sign(secret: str, verb: str, path: str, expires: int, body: str = "") -> str:
    """Return the lowercase hex signature for one request.

    The message is the plain concatenation of *verb*, *path*, *expires* and
    *body*. *body* must be the exact string that goes on the wire.
    """
    message = f"{verb}{path}{int(expires)}{body}"
    return hmac.new(
        secret.strip().encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def build_headers(
    key: str,
    secret: str,
    verb: str,
    path: str,
    body: str = "",
    clock: Callable[[], float] = time.time,
) -> Dict[str, str]:
    """
    Build the full authentication header set for a request.

    Parameters
    ----------
    key, secret : str
        API credentials.
    verb : str
        HTTP method, upper case.
    path : str
        Signed path (``/api/v1/order?symbol=XBTUSD``).
    body : str
        Serialized JSON payload, empty for GET.
    clock : callable
        Returns the current unix time; injectable for tests.
    """
    expires = int(clock()) + EXPIRES_IN
    return {
        "api-expires": str(expires),
        "api-key": key,
        "api-signature": sign(secret, verb, path, expires, body),
        "Content-Type": "application/json",
    }
