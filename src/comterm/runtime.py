"""Interactive console front end for the terminal.

The console runs two loops:

* a daemon thread blocking on ``stdin`` that forwards typed lines into a
  queue, and
* the foreground redraw loop which, every ``poll_interval``, drains the
  session into the output window, prints what is new and then handles
  the queued input lines.

Lines starting with ``:`` are local commands (see ``:help``); any other
line is sent to the device.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import queue
import sys
import threading
from typing import TextIO

from .application.controller import TerminalController
from .constants import COMMAND_PREFIX, DEFAULT_POLL_INTERVAL

HELP_TEXT = """\
Local commands:
  :help             show this help
  :ports            list available serial ports
  :port NAME        select the port used by :connect
  :baud N           select the baud rate used by :connect
  :connect          open the selected port
  :disconnect       close the port
  :status           show the connection state
  :clear            clear the output window
  :resend           retry the last line whose send failed
  :quit             disconnect and exit (also Ctrl+D)
Any other line is sent to the device; start a line with '::' to send a
leading ':'.
"""


class ConsoleRuntime:
    """Line-oriented console bound to a :class:`TerminalController`."""

    def __init__(
        self,
        controller: TerminalController,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._controller = controller
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._poll_interval = max(0.001, float(poll_interval))
        self._input: queue.Queue[str | None] = queue.Queue()
        self._stop_event = threading.Event()

    # --- output ----------------------------------------------------------------

    def _write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    def _status(self, message: str) -> None:
        self._write(f"\n[{message}]\n")

    def _render(self) -> None:
        text = self._controller.tick()
        if text:
            self._write(text)
        for message in self._controller.pop_messages():
            self._status(message)

    # --- input -----------------------------------------------------------------

    def _stdin_worker(self) -> None:
        try:
            for line in iter(self._stdin.readline, ""):
                self._input.put(line.rstrip("\r\n"))
        except (OSError, ValueError):
            # stdin closed underneath us
            pass
        self._input.put(None)

    def _show_ports(self) -> None:
        ports = self._controller.refresh_ports()
        if not ports:
            self._status("No serial ports found")
            return
        lines = []
        for p in ports:
            marker = "*" if p.name == self._controller.selected_port else " "
            lines.append(f"{marker} {p.name}" + (f"  {p.description}" if p.description else ""))
        self._write("\n" + "\n".join(lines) + "\n")

    def _show_status(self) -> None:
        session = self._controller.session
        if session.is_connected and session.config is not None:
            self._status(f"Connected to {session.config.port} at {session.config.baudrate} baud")
        else:
            port = self._controller.selected_port or "no port selected"
            self._status(f"Disconnected ({port}, {self._controller.selected_baud_rate} baud)")

    def handle_line(self, line: str) -> bool:
        """Process one typed line; return ``False`` when the console should exit."""

        if line.startswith(COMMAND_PREFIX * 2):
            self._controller.send_line(line[1:])
            return True
        if not line.startswith(COMMAND_PREFIX):
            self._controller.send_line(line)
            return True

        cmd, _, arg = line[1:].strip().partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        if cmd in ("quit", "exit", "q"):
            return False
        if cmd in ("help", "h", "?"):
            self._write(HELP_TEXT)
        elif cmd == "ports":
            self._show_ports()
        elif cmd == "port":
            self._controller.select_port(arg)
        elif cmd == "baud":
            try:
                rate = int(arg)
            except ValueError:
                self._status(f"Invalid baud rate: {arg or '(missing)'}")
            else:
                self._controller.select_baud_rate(rate)
        elif cmd == "connect":
            if self._controller.is_connected:
                self._status("Already connected; use :disconnect first")
            else:
                self._controller.connect()
        elif cmd == "disconnect":
            self._controller.disconnect()
        elif cmd == "resend":
            if self._controller.input_line:
                self._controller.send_line()
            else:
                self._status("Nothing to resend")
        elif cmd == "status":
            self._show_status()
        elif cmd == "clear":
            self._controller.clear_output()
            self._write("\033[2J\033[H")
        else:
            self._status(f"Unknown command :{cmd} (try :help)")
        return True

    # --- main loop -------------------------------------------------------------

    def stop(self) -> None:
        self._stop_event.set()

    def run(self, connect: bool = False) -> int:
        """Run until EOF on stdin, ``:quit`` or :meth:`stop`; return an exit code."""

        if connect:
            self._controller.connect()

        reader = threading.Thread(target=self._stdin_worker, name="comterm-stdin", daemon=True)
        reader.start()

        try:
            while not self._stop_event.is_set():
                self._render()
                while True:
                    try:
                        line = self._input.get_nowait()
                    except queue.Empty:
                        break
                    if line is None or not self.handle_line(line):
                        self._stop_event.set()
                        break
                self._stop_event.wait(self._poll_interval)
        except KeyboardInterrupt:
            self._status("Interrupted")
        finally:
            self._render()
            self._controller.disconnect()
            for message in self._controller.pop_messages():
                self._status(message)
        return 0


__all__ = ["ConsoleRuntime", "HELP_TEXT"]
