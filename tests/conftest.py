"""Shared pytest fixtures for the comterm test suite.

Copyright BINGO Collaboration
Last Modified: 2026-10-19
"""

from __future__ import annotations

import queue
import time

import pytest


class FakePort:
    """In-memory port handle with scripted reads and recorded writes."""

    def __init__(self, timeout: float = 0.01) -> None:
        self.timeout = timeout
        self.written: list[bytes] = []
        self.closed = False
        self.read_calls = 0
        self.write_error: Exception | None = None
        self.write_result: int | None = None
        self._incoming: queue.Queue[bytes | Exception] = queue.Queue()

    def feed(self, data: bytes) -> None:
        self._incoming.put(data)

    def fail_read(self, exc: Exception) -> None:
        self._incoming.put(exc)

    def read(self, size: int = 1) -> bytes:
        if self.closed:
            raise OSError("port closed")
        self.read_calls += 1
        try:
            item = self._incoming.get(timeout=self.timeout)
        except queue.Empty:
            return b""
        if isinstance(item, Exception):
            raise item
        if len(item) > size:
            self._incoming.put(item[size:])
            item = item[:size]
        return item

    def write(self, data: bytes) -> int | None:
        if self.closed:
            raise OSError("port closed")
        if self.write_error is not None:
            raise self.write_error
        self.written.append(bytes(data))
        return len(data) if self.write_result is None else self.write_result

    def close(self) -> None:
        self.closed = True


class FakeOpener:
    """Port opener handing out :class:`FakePort` objects."""

    def __init__(self) -> None:
        self.ports: list[FakePort] = []
        self.calls: list[tuple[str, int, float]] = []
        self.error: Exception | None = None

    def __call__(self, port: str, baudrate: int, timeout: float) -> FakePort:
        self.calls.append((port, baudrate, timeout))
        if self.error is not None:
            raise self.error
        handle = FakePort(timeout=timeout or 0.01)
        self.ports.append(handle)
        return handle

    @property
    def last(self) -> FakePort:
        return self.ports[-1]


def wait_for(predicate, timeout: float = 2.0, interval: float = 0.005) -> bool:
    """Poll ``predicate`` until it is true or ``timeout`` elapses."""

    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


@pytest.fixture
def fake_opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def log_lines():
    """Capture ``logprintf``-style calls as ``(level, message)`` tuples."""

    lines: list[tuple[int, str]] = []

    def logger(level: int, fmt: str, *args: object) -> None:
        lines.append((level, fmt % args if args else fmt))

    logger.lines = lines  # type: ignore[attr-defined]
    return logger
