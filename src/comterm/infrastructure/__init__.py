"""comterm/infrastructure/__init__.py

Infrastructure layer: concrete adapters connecting the session core to
the operating system's serial ports through pyserial.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from .registry import PortRegistry  # noqa: F401
from .serial_backend import DEFAULT_WRITE_TIMEOUT, open_serial_port  # noqa: F401

__all__ = [
    "DEFAULT_WRITE_TIMEOUT",
    "PortRegistry",
    "open_serial_port",
]
