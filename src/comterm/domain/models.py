"""comterm/domain/models.py

Pydantic domain models describing ports and session configuration.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import (
    DEFAULT_BAUD_RATE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READ_TIMEOUT,
)


class PortDescriptor(BaseModel):
    """Serial interface reported by the host OS.

    Attributes
    ----------
    name:
        Identifier used to open the port (``/dev/ttyUSB0``, ``COM3``).
    description:
        Free-form description, when the OS provides one.
    hwid:
        Hardware id string (USB VID:PID, serial number, ...).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    hwid: Optional[str] = None


class SessionConfig(BaseModel):
    """Parameters of one connection; immutable once the session starts.

    Changing any value requires a disconnect followed by a new connect.
    ``baudrate`` accepts any positive integer, not only the offered set
    in :data:`comterm.constants.BAUD_RATES`.
    """

    model_config = ConfigDict(frozen=True)

    port: str = Field(min_length=1)
    baudrate: int = Field(default=DEFAULT_BAUD_RATE, gt=0)
    read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT, ge=0.0)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, ge=0.0)
