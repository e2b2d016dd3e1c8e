"""comterm/application/reader.py

Background reader feeding decoded text from an open port into a queue.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import codecs
import queue
import threading
from typing import Callable

from ..constants import DEFAULT_CHUNK_SIZE, DEFAULT_POLL_INTERVAL
from ..ports import PortHandle


class ReaderWorker:
    """Read loop running on a dedicated daemon thread.

    The worker is the only reader of ``handle`` and the only producer of
    ``channel``. It exits when :meth:`stop` is called or on the first
    hard I/O error reported by the handle; a read that times out with
    zero bytes is the normal idle state and simply loops.

    Received bytes are decoded as UTF-8 with invalid sequences replaced
    by U+FFFD. Decoding is incremental, so a multi-byte character split
    across two reads comes out whole.
    """

    def __init__(
        self,
        handle: PortHandle,
        channel: queue.Queue[str],
        logger: Callable[..., None],
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        name: str = "comterm-reader",
    ) -> None:
        self._handle = handle
        self._channel = channel
        self._logger = logger
        self._chunk_size = int(chunk_size)
        self._poll_interval = max(0.0, float(poll_interval))
        self._stop_event = threading.Event()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self.error: Exception | None = None

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        """Ask the loop to exit; it does so within one read timeout."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread; return ``True`` when it has exited."""
        if self._thread.ident is None:
            return True
        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _publish(self, text: str) -> None:
        if text and not self._stop_event.is_set():
            self._channel.put(text)

    def _run(self) -> None:
        self._logger(3, "Reader thread started")
        while not self._stop_event.is_set():
            try:
                data = self._handle.read(self._chunk_size)
            except Exception as exc:
                # Closed handle, unplugged device, driver failure: all end
                # the session's read side.
                if not self._stop_event.is_set():
                    self.error = exc
                    self._logger(1, "Serial read failed, reader stopping: %s", exc)
                break

            if data:
                self._publish(self._decoder.decode(bytes(data)))

            if self._poll_interval:
                self._stop_event.wait(self._poll_interval)

        self._publish(self._decoder.decode(b"", final=True))
        self._logger(3, "Reader thread exited")


__all__ = ["ReaderWorker"]
