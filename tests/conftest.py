"""Shared fixtures for polljoy tests."""

import json
from unittest import mock

import pytest
from flask import Flask

from polljoy import Connect
from polljoy.config import config

CHROME_UA = "Mozilla/5.0 (Windows NT 10.0) Chrome/120"
IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"


def backend_reply(payload, status_code=200):
    """Fake requests.Response with a JSON (or raw string) body."""
    reply = mock.Mock()
    reply.status_code = status_code
    reply.text = payload if isinstance(payload, str) else json.dumps(payload)
    reply.json.side_effect = lambda: json.loads(reply.text)
    return reply


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    for name in ("POLLJOY_APP_ID", "POLLJOY_BACKEND_URL", "POLLJOY_TIMEOUT",
                 "POLLJOY_DEBUG", "POLLJOY_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    config.reset()
    yield
    config.reset()


@pytest.fixture
def app():
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    app.polljoy = Connect("app-123")
    app.polljoy.create_endpoints(app, "/polljoy")
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def backend():
    with mock.patch("polljoy.api.requests.post") as mock_post:
        yield mock_post
