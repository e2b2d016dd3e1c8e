"""comterm/ports/__init__.py

Hexagonal architecture ports (abstract interfaces).

This module defines the contracts the session core uses to reach the
operating system's serial layer. Adapters in
:mod:`comterm.infrastructure` provide the concrete pyserial
implementations; tests provide in-memory fakes.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ..domain import PortDescriptor


@runtime_checkable
class PortHandle(Protocol):
    """Capability set of an open port.

    Concrete implementation: :class:`serial.Serial` as returned by
    :func:`comterm.infrastructure.serial_backend.open_serial_port`.
    """

    def read(self, size: int = 1) -> bytes:  # pragma: no cover - structural
        """Read up to ``size`` bytes, returning early on timeout."""

    def write(self, data: bytes) -> int | None:  # pragma: no cover - structural
        """Write ``data`` and return the number of bytes accepted."""

    def close(self) -> None:  # pragma: no cover - structural
        """Release the OS resource."""


@runtime_checkable
class PortOpener(Protocol):
    """Factory opening a :class:`PortHandle` by name.

    Concrete implementation:
    :func:`comterm.infrastructure.serial_backend.open_serial_port`.
    """

    def __call__(
        self, port: str, baudrate: int, timeout: float
    ) -> PortHandle:  # pragma: no cover - structural
        """Open ``port`` at ``baudrate`` with a read ``timeout`` in seconds."""


@runtime_checkable
class PortEnumerator(Protocol):
    """Source of the currently attached serial ports.

    Concrete implementation:
    :class:`comterm.infrastructure.registry.PortRegistry`.
    """

    def list(self) -> Sequence[PortDescriptor]:  # pragma: no cover - structural
        """Return the ports currently reported by the OS."""


__all__ = [
    "PortEnumerator",
    "PortHandle",
    "PortOpener",
]
