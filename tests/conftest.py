"""Pytest shared fixtures for the Identity Toolkit client tests."""
import json
import pathlib
import sys
from types import SimpleNamespace

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from identity_admin.core.toolkit import UserManager


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Prevent unit tests from reaching live Google endpoints.

    Tests that exercise the HTTP client patch requests.post themselves.
    """

    def _stub_post(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    def _stub_get(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP GET in unit test: {url}")

    monkeypatch.setattr(requests, "post", _stub_post)
    monkeypatch.setattr(requests, "get", _stub_get)


# ─────────────────────────────────────────────────────────────────────────────
# Fake Transport
# ─────────────────────────────────────────────────────────────────────────────
class FakeTransport:
    """Records posted payloads and answers with canned bodies keyed by path suffix."""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def respond(self, suffix: str, body):
        self.responses[suffix] = body
        return self

    def post(self, path, payload):
        self.calls.append((path, payload))
        for suffix, body in self.responses.items():
            if path.endswith(suffix):
                return SimpleNamespace(status_code=200, body=body)
        raise AssertionError(f"No canned response for {path}")

    def paths(self):
        return [path for path, _ in self.calls]

    def payload_for(self, suffix: str):
        return next(payload for path, payload in self.calls if path.endswith(suffix))


@pytest.fixture()
def transport():
    return FakeTransport()


@pytest.fixture()
def manager(transport):
    return UserManager("demo-project", transport)


def make_user(uid="test-uid", **fields):
    """Build a raw user map as returned by accounts:lookup."""
    user = {"localId": uid}
    user.update(fields)
    return user


def lookup_body(*users):
    return {"kind": "identitytoolkit#GetAccountInfoResponse", "users": list(users)}


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, url: str = "", text: str | None = None):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        if text is not None:
            self.text = text
        elif payload is None:
            self.text = ""
        else:
            self.text = json.dumps(payload)
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload
