from __future__ import annotations

import queue

from conftest import FakePort, wait_for

from comterm.application.reader import ReaderWorker


def _drain(channel: queue.Queue[str]) -> str:
    parts = []
    while True:
        try:
            parts.append(channel.get_nowait())
        except queue.Empty:
            return "".join(parts)


def test_reader_forwards_chunks_in_order(log_lines) -> None:
    port = FakePort()
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, poll_interval=0.001)
    worker.start()
    try:
        for chunk in (b"AB", b"CD", b"EF"):
            port.feed(chunk)
        collected: list[str] = []
        assert wait_for(lambda: (collected.append(_drain(channel)), "".join(collected))[1] == "ABCDEF")
    finally:
        worker.stop()
        assert worker.join(timeout=1.0)


def test_reader_keeps_looping_on_timeouts(log_lines) -> None:
    port = FakePort(timeout=0.001)
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, poll_interval=0.0)
    worker.start()
    try:
        assert wait_for(lambda: port.read_calls >= 5)
        assert worker.is_alive()
        assert channel.empty()
    finally:
        worker.stop()
        assert worker.join(timeout=1.0)


def test_reader_replaces_invalid_utf8(log_lines) -> None:
    port = FakePort()
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, poll_interval=0.001)
    worker.start()
    try:
        port.feed(b"ok\xff\xfe!")
        collected: list[str] = []
        assert wait_for(lambda: (collected.append(_drain(channel)), "".join(collected))[1] == "ok\ufffd\ufffd!")
        assert worker.is_alive()
    finally:
        worker.stop()
        worker.join(timeout=1.0)


def test_reader_joins_split_multibyte_characters(log_lines) -> None:
    port = FakePort()
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, poll_interval=0.001)
    worker.start()
    try:
        data = "温度=21°C".encode("utf-8")
        port.feed(data[:2])
        port.feed(data[2:])
        collected: list[str] = []
        assert wait_for(lambda: (collected.append(_drain(channel)), "".join(collected))[1] == "温度=21°C")
    finally:
        worker.stop()
        worker.join(timeout=1.0)


def test_reader_respects_chunk_size(log_lines) -> None:
    port = FakePort()
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, chunk_size=4, poll_interval=0.001)
    worker.start()
    try:
        port.feed(b"0123456789")
        assert wait_for(lambda: channel.qsize() == 3)
        assert [channel.get_nowait() for _ in range(3)] == ["0123", "4567", "89"]
    finally:
        worker.stop()
        worker.join(timeout=1.0)


def test_reader_exits_on_hard_error(log_lines) -> None:
    port = FakePort()
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines, poll_interval=0.001)
    worker.start()

    port.feed(b"bye")
    port.fail_read(OSError(5, "Input/output error"))

    assert worker.join(timeout=1.0)
    assert isinstance(worker.error, OSError)
    assert _drain(channel) == "bye"
    assert any(level == 1 and "Input/output error" in msg for level, msg in log_lines.lines)


def test_reader_stops_within_timeout_and_publishes_nothing_after(log_lines) -> None:
    port = FakePort(timeout=0.01)
    channel: queue.Queue[str] = queue.Queue()
    worker = ReaderWorker(port, channel, log_lines)
    worker.start()

    worker.stop()
    assert worker.join(timeout=0.5)
    assert worker.error is None

    port.feed(b"ignored")
    assert channel.empty()


def test_join_before_start_returns_true(log_lines) -> None:
    worker = ReaderWorker(FakePort(), queue.Queue(), log_lines)
    assert worker.join(timeout=0.01) is True
    assert not worker.is_alive()
