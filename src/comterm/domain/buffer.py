"""comterm/domain/buffer.py

Bounded display buffer for received text.
"""

from __future__ import annotations

from ..constants import DEFAULT_BUFFER_CAPACITY


class SessionBuffer:
    """Rolling window over the most recently received characters.

    The buffer never holds more than ``max_length`` characters; when an
    append overflows it, the oldest characters are dropped so only the
    newest ``max_length`` remain, in order.
    """

    def __init__(self, max_length: int = DEFAULT_BUFFER_CAPACITY) -> None:
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self._max_length = int(max_length)
        self._text = ""
        self._total_appended = 0

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def text(self) -> str:
        return self._text

    @property
    def total_appended(self) -> int:
        """Number of characters ever appended, trimmed ones included."""
        return self._total_appended

    def append(self, text: str) -> None:
        if not text:
            return
        self._total_appended += len(text)
        combined = self._text + text
        if len(combined) > self._max_length:
            combined = combined[-self._max_length :]
        self._text = combined

    def tail_since(self, mark: int) -> str:
        """Return text appended after ``mark`` that is still retained.

        ``mark`` is a previous value of :attr:`total_appended`.
        """

        new = self._total_appended - max(0, int(mark))
        if new <= 0:
            return ""
        return self._text[-new:] if new < len(self._text) else self._text

    def clear(self) -> None:
        self._text = ""

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"SessionBuffer(max_length={self._max_length}, len={len(self._text)})"
