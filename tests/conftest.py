from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple, Union

import pytest

from models.records import AgentConfig, AgentContext
from settings import get_settings

Chunk = Union[bytes, BaseException]


class FakeSocket:
    """Socket double that replays scripted ``recv`` results."""

    def __init__(self, chunks: Sequence[Chunk] = ()) -> None:
        self._chunks: List[Chunk] = list(chunks)
        self.sent = b""
        self.timeout: Optional[float] = None
        self.closed = False

    def settimeout(self, timeout: float) -> None:
        self.timeout = timeout

    def sendall(self, data: bytes) -> None:
        self.sent += data

    def recv(self, _size: int) -> bytes:
        if not self._chunks:
            return b""
        item = self._chunks.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


class FakeSocketFactory:
    """Stands in for ``socket.create_connection`` and records every call."""

    def __init__(self, sock: Optional[FakeSocket] = None, error: Optional[Exception] = None) -> None:
        self.sock = sock or FakeSocket([b"HTTP/1.1 200 OK\r\n"])
        self.error = error
        self.calls: List[Tuple[Tuple[str, int], float]] = []

    def __call__(self, address: Tuple[str, int], timeout: float) -> FakeSocket:
        self.calls.append((address, timeout))
        if self.error is not None:
            raise self.error
        return self.sock


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def config() -> AgentConfig:
    return AgentConfig(
        protocol="HTTP",
        endpoint="http://api.example.com/v1/log",
        username="operator",
        override_username="Medion",
        password="iot@medion",
        sensor_name="TEMP001",
        send_interval_seconds=10.0,
        recap_interval_minutes=5,
    )


@pytest.fixture()
def context(config: AgentConfig) -> AgentContext:
    return AgentContext(config)


@pytest.fixture()
def clean_settings(monkeypatch) -> Iterator[None]:
    for name in (
        "LOGGER_PROTOCOL",
        "LOGGER_ENDPOINT",
        "LOGGER_USERNAME",
        "LOGGER_ERP_URL",
        "LOGGER_ERP_USERNAME",
        "LOGGER_ERP_PASSWORD",
        "LOGGER_SENSOR_NAME",
        "LOGGER_SEND_INTERVAL",
        "LOGGER_RECAP_INTERVAL",
        "LOGGER_READ_TIMEOUT",
        "LOGGER_USER_AGENT",
        "LOGGER_LINK_INTERFACE",
        "LOGGER_IDLE_SLEEP",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
