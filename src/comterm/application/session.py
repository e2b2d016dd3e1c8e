"""comterm/application/session.py

Connection lifecycle for one serial port.

:class:`PortSession` owns the open port handle and the reader thread
started for it. The foreground (presentation layer) is the only caller
of :meth:`PortSession.send`, :meth:`PortSession.disconnect` and
:meth:`PortSession.drain_into`; the reader thread only reads from the
handle and only writes into the session's queue.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import queue
from typing import Callable

from ..constants import CONNECTED, DISCONNECTED, STATE_NAMES, WORKER_JOIN_TIMEOUT
from ..domain import SessionBuffer, SessionConfig
from ..errors import AlreadyConnectedError, ConnectError, IoError, NotConnectedError
from ..infrastructure.serial_backend import open_serial_port
from ..logging_utils import logprintf
from ..ports import PortHandle, PortOpener
from .reader import ReaderWorker


class PortSession:
    """Manage one serial connection and its background reader.

    Connecting while already connected raises
    :class:`~comterm.errors.AlreadyConnectedError`; the caller has to
    :meth:`disconnect` first. Failed calls leave the session in the state
    it had before the call.
    """

    def __init__(
        self,
        opener: PortOpener = open_serial_port,
        logger: Callable[..., None] = logprintf,
        *,
        join_timeout: float = WORKER_JOIN_TIMEOUT,
    ) -> None:
        self._opener = opener
        self._logger = logger
        self._join_timeout = join_timeout
        self._state = DISCONNECTED
        self._config: SessionConfig | None = None
        self._handle: PortHandle | None = None
        self._worker: ReaderWorker | None = None
        self._channel: queue.Queue[str] = queue.Queue()

    # --- state ---------------------------------------------------------------

    @property
    def state(self) -> int:
        return self._state

    @property
    def state_name(self) -> str:
        return STATE_NAMES[self._state]

    @property
    def is_connected(self) -> bool:
        return self._state == CONNECTED

    @property
    def config(self) -> SessionConfig | None:
        """Configuration of the live connection, ``None`` when disconnected."""
        return self._config

    @property
    def reader_alive(self) -> bool:
        """``True`` while the reader thread of this session is running."""
        return self._worker is not None and self._worker.is_alive()

    @property
    def reader_error(self) -> Exception | None:
        """Read error that ended the reader thread, if any."""
        return self._worker.error if self._worker is not None else None

    # --- lifecycle -----------------------------------------------------------

    def connect(self, config: SessionConfig) -> None:
        """Open ``config.port`` and start reading from it.

        Raises
        ------
        AlreadyConnectedError
            The session already holds an open port.
        ConnectError
            The port could not be opened; nothing was started.
        """

        if self._state == CONNECTED:
            raise AlreadyConnectedError(
                f"Already connected to {self._config.port if self._config else '?'}"
            )

        try:
            handle = self._opener(config.port, config.baudrate, config.read_timeout)
        except Exception as exc:
            error = ConnectError.from_exception(config.port, exc)
            self._logger(0, "Error opening port %s: %s", config.port, exc)
            raise error from exc

        channel: queue.Queue[str] = queue.Queue()
        worker = ReaderWorker(
            handle,
            channel,
            self._logger,
            chunk_size=config.chunk_size,
            poll_interval=config.poll_interval,
            name=f"comterm-reader[{config.port}]",
        )
        try:
            worker.start()
        except RuntimeError as exc:  # pragma: no cover - thread exhaustion
            self._close_handle(handle)
            raise ConnectError(config.port, str(exc)) from exc

        self._handle = handle
        self._channel = channel
        self._worker = worker
        self._config = config
        self._state = CONNECTED
        self._logger(2, "Connected to %s at %d baud", config.port, config.baudrate)

    def disconnect(self) -> None:
        """Stop the reader and close the port; no-op when disconnected."""

        if self._state == DISCONNECTED:
            return

        worker, handle, config = self._worker, self._handle, self._config
        self._worker = None
        self._handle = None
        self._config = None
        self._state = DISCONNECTED

        if worker is not None:
            worker.stop()
            if not worker.join(timeout=self._join_timeout):
                # Closing the handle below unblocks a read stuck in the driver.
                self._logger(1, "Reader thread did not stop within %.1fs", self._join_timeout)
        if handle is not None:
            self._close_handle(handle)
        if worker is not None and worker.is_alive():
            worker.join(timeout=self._join_timeout)

        self._logger(2, "Disconnected from %s", config.port if config else "?")

    def _close_handle(self, handle: PortHandle) -> None:
        try:
            handle.close()
        except Exception as exc:
            self._logger(1, "Error closing serial port: %s", exc)

    # --- I/O -----------------------------------------------------------------

    def send(self, data: bytes) -> int:
        """Write ``data`` verbatim to the port.

        Short writes are not retried: any write that does not raise is a
        success for the caller. Returns the count reported by the handle
        (``len(data)`` when the handle reports nothing).

        Raises
        ------
        NotConnectedError
            The session is disconnected; no handle was touched.
        IoError
            The write failed. The session stays connected.
        """

        if self._state != CONNECTED or self._handle is None:
            raise NotConnectedError("Not connected")

        payload = bytes(data)
        try:
            written = self._handle.write(payload)
        except Exception as exc:
            self._logger(0, "Write to %s failed: %s", self._config.port if self._config else "?", exc)
            raise IoError(str(exc)) from exc

        if written is None:
            written = len(payload)
        elif written < len(payload):
            self._logger(1, "Short write: %d of %d bytes accepted", written, len(payload))
        self._logger(3, "Sent %d bytes", written)
        return written

    def drain_into(self, buffer: SessionBuffer) -> int:
        """Move every queued chunk into ``buffer``; never blocks.

        Returns the number of chunks moved. Chunks read before a
        disconnect remain available until the next :meth:`connect`.
        """

        moved = 0
        while True:
            try:
                chunk = self._channel.get_nowait()
            except queue.Empty:
                break
            buffer.append(chunk)
            moved += 1
        return moved

    # --- context manager -----------------------------------------------------

    def __enter__(self) -> "PortSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def __repr__(self) -> str:
        port = self._config.port if self._config else None
        return f"PortSession(state={self.state_name!r}, port={port!r})"


__all__ = ["PortSession"]
