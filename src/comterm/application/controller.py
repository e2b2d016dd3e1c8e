"""comterm/application/controller.py

Presentation-facing state of the terminal.

:class:`TerminalController` keeps what a terminal front end shows (the
port list, the selected port and baud rate, the pending input line, the
received-output window) and forwards user actions into an explicitly
owned :class:`~comterm.application.session.PortSession`. Errors from the
core are turned into status messages; the controller never lets them
escape, so the front end stays usable after any failure.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Callable

from ..domain import PortDescriptor, SessionBuffer
from ..errors import ComTermError, EnumerationError, SendError
from ..logging_utils import logprintf
from ..ports import PortEnumerator
from ..settings import TerminalSettings
from .session import PortSession


class TerminalController:
    """Drive a :class:`PortSession` from a redraw-driven front end.

    Call :meth:`tick` once per redraw: it drains received text into the
    output window and returns the part the front end has not shown yet.
    """

    def __init__(
        self,
        session: PortSession,
        registry: PortEnumerator,
        settings: TerminalSettings | None = None,
        logger: Callable[..., None] = logprintf,
    ) -> None:
        self._session = session
        self._registry = registry
        self._settings = settings or TerminalSettings()
        self._logger = logger

        self.available_ports: list[PortDescriptor] = []
        self.selected_port: str | None = self._settings.port
        self.baud_rates: list[int] = list(self._settings.baud_rates)
        self.selected_baud_rate: int = self._settings.baudrate
        self.input_line: str = ""
        self.output = SessionBuffer(self._settings.buffer_capacity)

        self._rendered_mark = 0
        self._messages: list[str] = []

    @property
    def session(self) -> PortSession:
        return self._session

    @property
    def is_connected(self) -> bool:
        return self._session.is_connected

    # --- status messages ---------------------------------------------------

    def _notify(self, message: str) -> None:
        self._messages.append(message)

    def pop_messages(self) -> list[str]:
        """Return and forget the status messages raised since the last call."""
        messages, self._messages = self._messages, []
        return messages

    # --- port / baud selection -----------------------------------------------

    def refresh_ports(self) -> list[PortDescriptor]:
        try:
            self.available_ports = list(self._registry.list())
        except EnumerationError as exc:
            self.available_ports = []
            self._notify(f"Could not list serial ports: {exc}")
        return self.available_ports

    def select_port(self, name: str) -> None:
        name = name.strip()
        if not name:
            self._notify("Port name must not be empty")
            return
        self.selected_port = name

    def select_baud_rate(self, rate: int) -> bool:
        if rate <= 0:
            self._notify(f"Invalid baud rate: {rate}")
            return False
        self.selected_baud_rate = int(rate)
        return True

    # --- connection ----------------------------------------------------------

    def connect(self) -> bool:
        if not self.selected_port:
            self._notify("No port selected")
            return False
        config = self._settings.session_config(
            port=self.selected_port, baudrate=self.selected_baud_rate
        )
        try:
            self._session.connect(config)
        except ComTermError as exc:
            self._notify(str(exc))
            return False
        self._notify(f"Connected to {config.port} at {config.baudrate} baud")
        return True

    def disconnect(self) -> None:
        if not self._session.is_connected:
            return
        self._session.disconnect()
        self._notify("Disconnected")

    def toggle_connection(self) -> bool:
        """Connect when disconnected and vice versa; return the new state."""
        if self._session.is_connected:
            self.disconnect()
        else:
            self.connect()
        return self._session.is_connected

    # --- input / output ------------------------------------------------------

    def send_line(self, text: str | None = None) -> bool:
        """Send ``text`` (or the pending input line) to the device.

        The input line is cleared only when the write succeeds; on failure
        it is kept so nothing typed is lost silently.
        """

        if text is not None:
            self.input_line = text
        payload = (self.input_line + self._settings.eol).encode("utf-8")
        try:
            self._session.send(payload)
        except SendError as exc:
            self._notify(str(exc))
            return False
        self.input_line = ""
        return True

    def tick(self) -> str:
        """Drain received data and return the text not yet rendered."""

        self._session.drain_into(self.output)

        if self._session.is_connected and not self._session.reader_alive:
            error = self._session.reader_error
            config = self._session.config
            self._logger(1, "Lost connection to %s: %s", config.port if config else "?", error)
            self._session.disconnect()
            self._session.drain_into(self.output)
            self._notify(f"Connection lost: {error}" if error else "Connection lost")

        new_text = self.output.tail_since(self._rendered_mark)
        self._rendered_mark = self.output.total_appended
        return new_text

    def clear_output(self) -> None:
        self.output.clear()
        self._rendered_mark = self.output.total_appended


__all__ = ["TerminalController"]
