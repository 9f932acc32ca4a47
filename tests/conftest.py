from __future__ import annotations

import os
import socket
from typing import Any, List

import pytest

from debatehub import create_app, socketio


class NetworkBlockedError(RuntimeError):
    pass


def _blocked(*_args: Any, **_kwargs: Any) -> Any:
    raise NetworkBlockedError(
        "Network access is disabled during tests. "
        "Mark the test with @pytest.mark.integration/@pytest.mark.network or set ALLOW_NETWORK=1."
    )


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch: pytest.MonkeyPatch, request: pytest.FixtureRequest) -> None:
    """Prevent accidental outbound network calls in unit tests."""

    if os.getenv("ALLOW_NETWORK") == "1":
        return

    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("network"):
        return

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket, "getaddrinfo", _blocked)


class StubFactChecker:
    """Records requests and answers with a canned result, or raises ``error``."""

    def __init__(self, result: str = "That claim is accurate.", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.checked: List[str] = []
        self.verified: List[tuple] = []
        self.verdict = {"isFactual": True, "explanation": "Checks out.", "sources": ["encyclopedia"]}

    def check(self, text: str) -> str:
        self.checked.append(text)
        if self.error is not None:
            raise self.error
        return self.result

    def verify(self, statement: str, topic: str | None = None) -> dict:
        self.verified.append((statement, topic))
        if self.error is not None:
            raise self.error
        return dict(self.verdict)


@pytest.fixture
def fact_checker() -> StubFactChecker:
    return StubFactChecker()


@pytest.fixture
def app(fact_checker):
    return create_app({"TESTING": True}, fact_checker=fact_checker)


@pytest.fixture
def coordinator(app):
    return app.extensions["debate"]


@pytest.fixture
def make_client(app):
    clients = []

    def _make():
        client = socketio.test_client(app)
        assert client.is_connected()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        if client.is_connected():
            client.disconnect()

