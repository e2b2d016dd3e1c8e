"""comterm/application/config_loader.py

Loader for ``comterm.cfg`` configuration files.

The file uses one ``[key]=value`` pair per line, with ``#`` and ``//``
comments::

    [port]=/dev/ttyUSB0
    [baudrate]=115200      // any positive rate
    [baudrates]=9600,115200
    [lineending]=crlf

Values are mapped onto :class:`comterm.settings.TerminalSettings`.
Precedence, lowest first: defaults, the file, ``.env``, the process
environment (``COMTERM_*``).

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from __future__ import annotations

import os
import re
from typing import Mapping

from dotenv import dotenv_values
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ..logging_utils import logprintf
from ..settings import TerminalSettings

_KEY_VALUE_RE = re.compile(r"^\[(?P<key>[^\]]+)\]\s*=\s*(?P<value>.*)$")

_ENV_PREFIX = "COMTERM_"

_ALIAS_MAP: dict[str, str] = {
    "port": "port",
    "comport": "port",
    "rxcomport": "port",
    "baudrate": "baudrate",
    "rxbaudrate": "baudrate",
    "baudrates": "baud_rates",
    "baud_rates": "baud_rates",
    "readtimeout": "read_timeout",
    "read_timeout": "read_timeout",
    "chunksize": "chunk_size",
    "chunk_size": "chunk_size",
    "buffersize": "buffer_capacity",
    "buffercapacity": "buffer_capacity",
    "buffer_capacity": "buffer_capacity",
    "pollinterval": "poll_interval",
    "poll_interval": "poll_interval",
    "lineending": "line_ending",
    "line_ending": "line_ending",
    "eol": "line_ending",
    "debug": "debug",
    "logpath": "logdir",
    "logdir": "logdir",
}


def _strip_inline_comment(value: str) -> str:
    for sep in ("//", "#"):
        if sep in value:
            value = value.split(sep, 1)[0]
    return value.strip()


def _coerce_value(field: str, text: str) -> object:
    """Prepare ``text`` for validation of ``TerminalSettings.field``.

    Scalars are left to pydantic's lax coercion; only the list-valued
    ``baud_rates`` needs splitting here.
    """

    text = text.strip()
    if field == "baud_rates":
        parts = [p.strip() for p in text.strip("[]").split(",") if p.strip()]
        try:
            return [int(float(p)) for p in parts]
        except ValueError:
            return parts
    if field == "debug":
        lowered = text.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off", ""}:
            return False
    return text


def parse_config_lines(lines) -> dict[str, object]:
    """Return the recognised ``field -> value`` pairs found in ``lines``."""

    values: dict[str, object] = {}
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("//"):
            continue
        m = _KEY_VALUE_RE.match(line)
        if not m:
            continue
        field = _ALIAS_MAP.get(m.group("key").strip().lower())
        if field is None:
            logprintf(3, "Ignoring unknown config key %r", m.group("key"))
            continue
        raw_value = _strip_inline_comment(m.group("value"))
        if raw_value == "" and field not in ("port", "logdir"):
            continue
        values[field] = _coerce_value(field, raw_value)
    return values


def _env_overrides(env: Mapping[str, str]) -> dict[str, object]:
    overrides: dict[str, object] = {}
    fields = set(TerminalSettings.model_fields)
    for key, value in env.items():
        if not key.upper().startswith(_ENV_PREFIX):
            continue
        field = key[len(_ENV_PREFIX):].lower()
        if field in fields:
            overrides[field] = _coerce_value(field, value)
    return overrides


class _ResolvedSettings(TerminalSettings):
    """Settings built only from values already resolved by :func:`load_settings`."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


def _ambient_env(env_file: str | None) -> dict[str, str]:
    """Merge ``env_file`` and :data:`os.environ`, the process winning."""

    merged: dict[str, str] = {}
    if env_file and os.path.isfile(env_file):
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    merged.update(os.environ)
    return merged


def load_settings(
    path: str,
    *,
    base_dir: str | None = None,
    env: Mapping[str, str] | None = None,
    env_file: str | None = ".env",
) -> TerminalSettings:
    """Load :class:`TerminalSettings` from a ``comterm.cfg``-style file.

    Parameters
    ----------
    path:
        Path to the configuration file. If it does not exist, defaults
        are returned and only environment overrides are applied.
    base_dir:
        Base directory used to resolve a relative ``logpath``, defaults
        to the directory of ``path``.
    env:
        Environment mapping applied over the file. When given it is the
        only environment consulted; by default ``env_file`` and
        :data:`os.environ` are merged, the process environment winning.
    env_file:
        dotenv file read when ``env`` is not given.

    Raises
    ------
    pydantic.ValidationError
        A value does not validate (e.g. a non-positive baud rate).
    """

    env = _ambient_env(env_file) if env is None else dict(env)

    if base_dir is None:
        base_dir = os.path.dirname(os.path.abspath(path)) or os.getcwd()

    values: dict[str, object] = {}
    if os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            values = parse_config_lines(f)
        logprintf(3, "Loaded %d setting(s) from %s", len(values), path)

    logdir = values.get("logdir")
    if isinstance(logdir, str) and logdir and not os.path.isabs(logdir):
        values["logdir"] = os.path.join(base_dir, logdir)

    values.update(_env_overrides(env))
    if values.get("port") == "":
        values["port"] = None
    if values.get("logdir") == "":
        values["logdir"] = None

    return _ResolvedSettings(**values)
