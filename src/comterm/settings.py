"""
Configuration settings for the comterm terminal.
Path: src/comterm/settings.py
Copyright BINGO Collaboration
Last Modified: 2026-10-19
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .constants import (
    BAUD_RATES,
    DEFAULT_BAUD_RATE,
    DEFAULT_BUFFER_CAPACITY,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READ_TIMEOUT,
    LINE_ENDINGS,
)
from .domain import SessionConfig


class TerminalSettings(BaseSettings):
    """Serial terminal configuration."""

    port: Optional[str] = Field(
        default=None,
        description="Port selected at startup (device path or pyserial URL)",
    )
    baudrate: int = Field(default=DEFAULT_BAUD_RATE, gt=0)
    baud_rates: list[int] = Field(
        default_factory=lambda: list(BAUD_RATES),
        description="Baud rates offered for selection",
    )
    read_timeout: float = Field(
        default=DEFAULT_READ_TIMEOUT,
        ge=0.0,
        description="Serial read timeout in seconds",
    )
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    buffer_capacity: int = Field(default=DEFAULT_BUFFER_CAPACITY, gt=0)
    poll_interval: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        ge=0.0,
        description="Reader throttle and console redraw interval in seconds",
    )
    line_ending: Literal["none", "cr", "lf", "crlf"] = Field(
        default="none",
        description="Terminator appended to every sent line",
    )
    debug: bool = Field(default=False)
    logdir: Optional[str] = Field(default=None, description="Directory for comterm.log")

    model_config = {
        "env_prefix": "COMTERM_",
        "env_file": ".env",
        "extra": "ignore",
        "case_sensitive": False,
    }

    @field_validator("line_ending", mode="before")
    @classmethod
    def _normalize_line_ending(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("baud_rates")
    @classmethod
    def _positive_rates(cls, value: list[int]) -> list[int]:
        if any(rate <= 0 for rate in value):
            raise ValueError("baud rates must be positive")
        return value

    @property
    def eol(self) -> str:
        return LINE_ENDINGS[self.line_ending]

    def session_config(self, port: str | None = None, baudrate: int | None = None) -> SessionConfig:
        """Build the immutable :class:`SessionConfig` for a new connection."""

        return SessionConfig(
            port=port if port is not None else (self.port or ""),
            baudrate=baudrate if baudrate is not None else self.baudrate,
            read_timeout=self.read_timeout,
            chunk_size=self.chunk_size,
            poll_interval=self.poll_interval,
        )
