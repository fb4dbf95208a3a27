"""
tests/conftest.py — Shared fixtures and path setup for all tests.

Adds the project root to sys.path so unit tests can import:
    from airflow_checks.settings import CheckSettings
    from airflow_checks.health import CheckResult, Severity

The fake_airflow fixture replaces urllib.request.urlopen with a route table
keyed by request path (query string excluded) and records every request.
"""
from __future__ import annotations

import io
import json
import pathlib
import sys
import urllib.error
import urllib.parse
import urllib.request

import pytest

# Make project root importable without installing as a package
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FakeResponse:
    """Mimics http.client.HTTPResponse; length is the unread Content-Length (None if unknown)."""

    def __init__(self, status: int, body: bytes, reason: str = "OK", length: int | None = None) -> None:
        self.status = status
        self.reason = reason
        self.length = length
        self._chunks = [body] if body else []

    def read1(self, n: int = -1) -> bytes:
        if not self._chunks:
            return b""
        return self._chunks.pop(0)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


class FakeAirflow:
    """Routes: path -> payload | callable(query) -> payload | Exception | (status, payload)."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.requests: list[urllib.request.Request] = []
        self.timeouts: list[float] = []

    @property
    def urls(self) -> list[str]:
        return [r.full_url for r in self.requests]

    def urlopen(self, req, timeout=None):
        self.requests.append(req)
        self.timeouts.append(timeout)
        parts = urllib.parse.urlsplit(req.full_url)
        query = {k: v[0] for k, v in urllib.parse.parse_qs(parts.query).items()}

        if parts.path not in self.routes:
            raise urllib.error.HTTPError(req.full_url, 404, "NOT FOUND", {}, io.BytesIO(b""))
        route = self.routes[parts.path]
        if callable(route):
            route = route(query)
        if isinstance(route, Exception):
            raise route
        if hasattr(route, "read1"):
            return route
        status, payload = route if isinstance(route, tuple) else (200, route)
        if status >= 400:
            raise urllib.error.HTTPError(req.full_url, status, "ERROR", {}, io.BytesIO(b""))
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        return FakeResponse(status, body)


@pytest.fixture
def fake_airflow(monkeypatch):
    fake = FakeAirflow()
    monkeypatch.setattr(urllib.request, "urlopen", fake.urlopen)
    return fake


@pytest.fixture
def fake_response():
    return FakeResponse
