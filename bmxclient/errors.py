"""
Normalized error types for the BitMEX client.

Callers only ever see ``RemoteAPIError`` (the server answered with a
non-2xx status) or ``NetworkError`` (no response at all); both derive from
``BitMEXError``. ``requests`` exception types never escape the client.
"""

from __future__ import annotations

from typing import Optional

import requests

# ── Custom exceptions ──────────────────────────────────────────────────────


class BitMEXError(Exception):
    """Base class for every error raised by the client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RemoteAPIError(BitMEXError):
    """Raised when the BitMEX API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str, name: Optional[str] = None):
        self.status_code = status_code
        self.name = name
        super().__init__(message)

    def __str__(self) -> str:
        return f"BitMEX API error [HTTP {self.status_code}]: {self.message}"

    @classmethod
    def from_response(cls, response: requests.Response, fallback: str) -> "RemoteAPIError":
        """Build from an error response, preferring ``error.message`` in the body."""
        message = fallback
        name = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message") or fallback
            name = body["error"].get("name")
        return cls(response.status_code, message, name)


class NetworkError(BitMEXError):
    """Raised when no response was received (timeout, DNS, refused).

    ``message`` carries the "Network error: " prefix; ``cause`` is the bare
    transport text.
    """

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


# ── Normalizer ─────────────────────────────────────────────────────────────


def normalize_error(exc: requests.RequestException) -> BitMEXError:
    """Map a ``requests`` failure onto ``RemoteAPIError`` or ``NetworkError``."""
    response = getattr(exc, "response", None)
    if response is not None:
        return RemoteAPIError.from_response(response, fallback=str(exc))
    return NetworkError(str(exc))
