"""Shared test fixtures for all test modules."""

import socket
from typing import List, Optional, Tuple

import pytest
import requests

from gauge_sdk.config import Credentials, TransportConfig
from gauge_sdk.transport import Transport


class FakeSocket:
    """Socket double recording what is written to it."""

    def __init__(self, sent: Optional[int] = None, error: Optional[OSError] = None) -> None:
        self.sent = sent
        self.error = error
        self.data = b""
        self.closed = False

    def send(self, data: bytes) -> int:
        if self.error is not None:
            raise self.error
        self.data += data
        return len(data) if self.sent is None else self.sent

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeSocket":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class FakeSSLContext:
    """SSL context double handing out FakeSockets instead of TLS sockets."""

    def __init__(self) -> None:
        self.tls_socket = FakeSocket()
        self.handshake_error: Optional[OSError] = None
        self.server_hostname: Optional[str] = None

    def wrap_socket(self, raw: FakeSocket, server_hostname: Optional[str] = None) -> FakeSocket:
        self.server_hostname = server_hostname
        if self.handshake_error is not None:
            raise self.handshake_error
        return self.tls_socket


@pytest.fixture
def fake_ssl() -> FakeSSLContext:
    """Provide an SSL context that never touches the network."""
    return FakeSSLContext()


@pytest.fixture
def connections(monkeypatch: pytest.MonkeyPatch) -> List[Tuple[tuple, float, FakeSocket]]:
    """Record socket.create_connection calls instead of connecting."""
    calls = []

    def create_connection(address, timeout=None):
        raw = FakeSocket()
        calls.append((address, timeout, raw))
        return raw

    monkeypatch.setattr(socket, "create_connection", create_connection)
    return calls


@pytest.fixture
def transport_config() -> TransportConfig:
    return TransportConfig(host="metrics.example.com", timeout=2, async_default=True)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="ops@example.com", token="s3cret-token")


@pytest.fixture
def transport(
    transport_config: TransportConfig, credentials: Credentials, fake_ssl: FakeSSLContext
) -> Transport:
    """Provide a Transport wired to fake sockets."""
    return Transport(transport_config, credentials, ssl_context=fake_ssl)


def make_response(body: bytes, status_code: int = 200) -> requests.Response:
    """Build a real requests.Response carrying the given body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    return response


@pytest.fixture
def response_factory():
    """Provide make_response to tests."""
    return make_response
