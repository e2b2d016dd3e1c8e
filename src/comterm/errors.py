"""comterm/errors.py

Exception hierarchy raised by the session core.

Every error raised by :mod:`comterm.application` and
:mod:`comterm.infrastructure` derives from :class:`ComTermError`, so a
presentation layer can catch a single base class at its boundary and
keep the interface usable.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import errno


class ComTermError(Exception):
    """Base class for all terminal errors."""


class EnumerationError(ComTermError):
    """Listing the host's serial ports failed (non-fatal for callers)."""


class ConnectError(ComTermError):
    """Opening a port failed; the session stays disconnected.

    Attributes
    ----------
    reason:
        Human readable description reported by the OS layer.
    kind:
        One of ``not_found``, ``busy``, ``permission``,
        ``invalid_parameter`` or ``io``.
    """

    NOT_FOUND = "not_found"
    BUSY = "busy"
    PERMISSION = "permission"
    INVALID_PARAMETER = "invalid_parameter"
    IO = "io"

    def __init__(self, port: str, reason: str, kind: str = IO) -> None:
        super().__init__(f"Cannot open {port}: {reason}")
        self.port = port
        self.reason = reason
        self.kind = kind

    @classmethod
    def from_exception(cls, port: str, exc: BaseException) -> "ConnectError":
        """Classify ``exc`` raised while opening ``port``."""

        if isinstance(exc, ValueError):
            return cls(port, str(exc), cls.INVALID_PARAMETER)

        code = getattr(exc, "errno", None)
        if code is None and exc.__cause__ is not None:
            code = getattr(exc.__cause__, "errno", None)
        if code == errno.ENOENT:
            kind = cls.NOT_FOUND
        elif code == errno.EBUSY:
            kind = cls.BUSY
        elif code in (errno.EACCES, errno.EPERM):
            kind = cls.PERMISSION
        else:
            text = str(exc).lower()
            if "no such file" in text or "cannot find" in text or "filenotfound" in text:
                kind = cls.NOT_FOUND
            elif "busy" in text or "in use" in text:
                kind = cls.BUSY
            elif "permission" in text or "access is denied" in text:
                kind = cls.PERMISSION
            else:
                kind = cls.IO
        return cls(port, str(exc), kind)


class AlreadyConnectedError(ComTermError):
    """``connect`` was called on a session that is already connected."""


class SendError(ComTermError):
    """Base class for failures of :meth:`PortSession.send`."""


class NotConnectedError(SendError):
    """The operation requires a connected session."""


class IoError(SendError):
    """Writing to the open port failed; the session stays connected."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Write failed: {reason}")
        self.reason = reason


__all__ = [
    "ComTermError",
    "EnumerationError",
    "ConnectError",
    "AlreadyConnectedError",
    "SendError",
    "NotConnectedError",
    "IoError",
]
