"""
Client configuration, resolved once at start-up.

Environment variables
---------------------
BITMEX_API_KEY, BITMEX_API_SECRET   API credentials (required)
BITMEX_TESTNET                      ``false`` selects mainnet; anything else,
                                    or unset, keeps testnet
BITMEX_BASE_URL                     optional override of the base URL
BITMEX_TIMEOUT_MS                   request timeout in milliseconds
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

MAINNET_URL = "https://www.bitmex.com/api/v1"
TESTNET_URL = "https://testnet.bitmex.com/api/v1"

DEFAULT_TIMEOUT_MS = 10000


@dataclass(frozen=True)
class Credentials:
    """API key pair. The secret is kept out of ``repr``."""

    key: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class Config:
    credentials: Credentials
    base_url: str
    timeout: int = DEFAULT_TIMEOUT_MS
    is_testnet: bool = True


def _is_testnet(value: Optional[str]) -> bool:
    # Only an explicit "false" opts into mainnet.
    return value is None or value.strip().lower() != "false"


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build a ``Config`` from *environ* (defaults to ``os.environ``).

    Raises
    ------
    ValueError
        If credentials are missing or the timeout is not a positive integer.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get("BITMEX_API_KEY") or "").strip()
    api_secret = (env.get("BITMEX_API_SECRET") or "").strip()
    if not api_key or not api_secret:
        raise ValueError(
            "Missing API credentials. Set BITMEX_API_KEY and BITMEX_API_SECRET "
            "in a .env file or as environment variables."
        )

    is_testnet = _is_testnet(env.get("BITMEX_TESTNET"))
    base_url = env.get("BITMEX_BASE_URL") or (TESTNET_URL if is_testnet else MAINNET_URL)

    raw_timeout = env.get("BITMEX_TIMEOUT_MS")
    if raw_timeout is None or raw_timeout == "":
        timeout = DEFAULT_TIMEOUT_MS
    else:
        try:
            timeout = int(raw_timeout)
        except ValueError:
            raise ValueError(f"Invalid BITMEX_TIMEOUT_MS '{raw_timeout}'. Must be an integer.")
        if timeout <= 0:
            raise ValueError(f"BITMEX_TIMEOUT_MS must be positive, got {timeout}.")

    return Config(
        credentials=Credentials(api_key, api_secret),
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        is_testnet=is_testnet,
    )
