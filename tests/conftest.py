"""
Shared fixtures for the proxy tests.

Outbound HTTP goes through a MagicMock session, so no test touches the network.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from music_proxy.api_backend import create_app
from music_proxy.config import ProxyConfig, SpotifyCredentials


def make_response(status_code=200, json_data=None, text="", reason="OK"):
    """Build a stand-in for ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.reason = reason
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    return resp


def real_response(status_code, body):
    """Build a real ``requests.Response`` carrying a JSON body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def credentials():
    return SpotifyCredentials(client_id="test_client_id", client_secret="test_client_secret")


@pytest.fixture
def proxy_config(credentials):
    return ProxyConfig(credentials=credentials, port=3000, upstream_timeout=5.0)


@pytest.fixture
def mock_session():
    return MagicMock()


@pytest.fixture
def app(proxy_config, mock_session):
    app = create_app(proxy_config, session=mock_session)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
