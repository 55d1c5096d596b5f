"""Tests for the error normalizer."""

import requests

from bmxclient.errors import BitMEXError, NetworkError, RemoteAPIError, normalize_error

from conftest import make_response


def http_error(response):
    return requests.HTTPError(f"{response.status_code} Client Error: {response.reason}", response=response)


def test_server_message_preferred():
    response = make_response(400, {"error": {"message": "Invalid expiry", "name": "HTTPError"}})

    error = normalize_error(http_error(response))

    assert isinstance(error, RemoteAPIError)
    assert error.message == "Invalid expiry"
    assert str(error) == "BitMEX API error [HTTP 400]: Invalid expiry"


def test_fallback_when_error_has_no_message():
    response = make_response(503, {"error": {"name": "HTTPError"}})

    error = normalize_error(http_error(response))

    assert error.message == "503 Client Error: Service Unavailable"
    assert error.name == "HTTPError"


def test_fallback_when_body_is_not_an_error_object():
    response = make_response(400, ["unexpected"])
    assert normalize_error(http_error(response)).message.startswith("400")


def test_no_response_is_network_error():
    error = normalize_error(requests.exceptions.ConnectTimeout("timed out"))

    assert isinstance(error, NetworkError)
    assert isinstance(error, BitMEXError)
    assert str(error) == "Network error: timed out"
    assert error.message == "Network error: timed out"
    assert error.args == ("Network error: timed out",)
    assert error.cause == "timed out"
