import json
from unittest.mock import MagicMock

import pytest
import requests

from frankly import FranklyClient, KeySecret

BASE_URL = "https://api.example.com/"
APP_KEY = "test-app-key"
APP_SECRET = "test-app-secret-0123456789abcdef0123456789"


def make_response(status_code=200, body=None, cookies=None, raw=None):
    """Build a real requests.Response with the given status, JSON body and cookies."""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    response.encoding = "utf-8"
    for name, value in (cookies or {}).items():
        response.cookies.set(name, value)
    return response


def call_kwargs(http, index=-1):
    """(method, url, kwargs) of a recorded http.request call."""
    call = http.request.call_args_list[index]
    method, url = call.args
    return method, url, call.kwargs


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return FranklyClient(base_url=BASE_URL, http=http)


@pytest.fixture
def open_client(client, http):
    """Client that completed the key/secret handshake with a session token."""
    http.request.side_effect = [
        make_response(body="nonce-123"),
        make_response(body={"token": "session-abc", "app_id": 7, "role": "admin"}),
    ]
    client.open(KeySecret(APP_KEY, APP_SECRET))
    http.request.reset_mock()
    http.request.side_effect = None
    return client
