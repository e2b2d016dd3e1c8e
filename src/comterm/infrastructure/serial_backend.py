"""comterm/infrastructure/serial_backend.py

pyserial adapter opening port handles for the session core.

Ports are opened through :func:`serial.serial_for_url`, so besides
device paths (``/dev/ttyUSB0``, ``COM3``) the pyserial URL handlers
(``loop://``, ``socket://host:port``, ``rfc2217://``) are accepted as
port names as well.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import serial

from ..ports import PortHandle

# Seconds a write may block before it is reported as a failure.
DEFAULT_WRITE_TIMEOUT: float = 1.0


def open_serial_port(
    port: str,
    baudrate: int,
    timeout: float,
    *,
    write_timeout: float | None = DEFAULT_WRITE_TIMEOUT,
) -> PortHandle:
    """Open ``port`` and return the live :class:`serial.Serial` object.

    Raises
    ------
    serial.SerialException
        The port does not exist, is busy or cannot be accessed.
    ValueError
        A parameter (e.g. ``baudrate``) is out of range.
    """

    return serial.serial_for_url(
        port,
        baudrate=baudrate,
        timeout=timeout,
        write_timeout=write_timeout,
    )


__all__ = ["DEFAULT_WRITE_TIMEOUT", "open_serial_port"]
