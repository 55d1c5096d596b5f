"""Shared fixtures: credentials, a frozen clock and a mocked HTTP session."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from bmxclient.client import BitMEXClient
from bmxclient.config import Credentials

API_KEY = "test-key-id"
API_SECRET = "s3cr3t-VALUE-never-logged"
FROZEN_NOW = 1700000000.4


def make_response(status_code, payload=None, text=None, url="https://testnet.bitmex.com/api/v1/x"):
    """Build a real ``requests.Response`` without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = {200: "OK", 400: "Bad Request", 401: "Unauthorized", 503: "Service Unavailable"}.get(
        status_code, "Error"
    )
    response.url = url
    if text is not None:
        response._content = text.encode("utf-8")
    else:
        response._content = json.dumps(payload).encode("utf-8")
    return response


@pytest.fixture
def credentials():
    return Credentials(API_KEY, API_SECRET)


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(credentials, session):
    return BitMEXClient(
        credentials,
        base_url="https://testnet.bitmex.com/api/v1",
        timeout=10000,
        session=session,
        clock=lambda: FROZEN_NOW,
    )
