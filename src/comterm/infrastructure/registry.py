"""comterm/infrastructure/registry.py

Enumeration of the serial ports attached to the host.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from serial.tools import list_ports

from ..domain import PortDescriptor
from ..errors import EnumerationError
from ..logging_utils import logprintf


class PortRegistry:
    """Stateless query over the host's serial ports.

    ``comports`` defaults to :func:`serial.tools.list_ports.comports`;
    any callable returning objects with ``device``/``description``/
    ``hwid`` attributes can be supplied instead.
    """

    def __init__(
        self,
        comports: Callable[[], Iterable[Any]] | None = None,
        logger: Callable[..., None] = logprintf,
    ) -> None:
        self._comports = comports or list_ports.comports
        self._logger = logger

    def list(self) -> list[PortDescriptor]:
        try:
            infos = list(self._comports())
        except Exception as exc:
            self._logger(0, "Serial port enumeration failed: %s", exc)
            raise EnumerationError(str(exc)) from exc

        ports: list[PortDescriptor] = []
        for info in infos:
            name = getattr(info, "device", None) or getattr(info, "name", None)
            if not name:
                continue
            description = getattr(info, "description", None)
            # pyserial reports "n/a" when the driver gives nothing useful
            if description in ("", "n/a"):
                description = None
            hwid = getattr(info, "hwid", None)
            if hwid in ("", "n/a"):
                hwid = None
            ports.append(PortDescriptor(name=name, description=description, hwid=hwid))

        ports.sort(key=lambda p: p.name)
        self._logger(3, "Found %d serial port(s)", len(ports))
        return ports


__all__ = ["PortRegistry"]
