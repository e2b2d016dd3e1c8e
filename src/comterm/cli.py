"""Command-line interface for the serial terminal.

This thin wrapper parses CLI options, loads the configuration and then
delegates to :mod:`comterm.runtime`.

Configuration files follow the ``[key]=value`` format read by
:func:`comterm.application.config_loader.load_settings`. By default,
``comterm`` looks for a ``comterm.cfg`` file in the current working
directory; a different file can be selected via ``--config``.

Subcommands
-----------
``comterm ports``
    List the serial ports attached to this machine.
``comterm open [PORT]``
    Open an interactive console on ``PORT`` (or the configured port).
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

from pydantic import ValidationError

from .application.config_loader import load_settings
from .application.controller import TerminalController
from .application.session import PortSession
from .constants import LINE_ENDINGS
from .errors import EnumerationError
from .infrastructure.registry import PortRegistry
from .logging_utils import logprintf, set_debug, setup_file_logging
from .runtime import ConsoleRuntime
from .settings import TerminalSettings


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="comterm", description="Minimal interactive serial port terminal"
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        default="comterm.cfg",
        help="Path to comterm.cfg configuration file (default: ./comterm.cfg)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("ports", help="List available serial ports")

    open_p = sub.add_parser("open", help="Open an interactive console on a port")
    open_p.add_argument(
        "port",
        nargs="?",
        default=None,
        help="Port name or pyserial URL (default: [port] from the config)",
    )
    open_p.add_argument(
        "-b",
        "--baud",
        type=int,
        default=None,
        metavar="RATE",
        help="Baud rate (default: [baudrate] from the config)",
    )
    open_p.add_argument(
        "--eol",
        choices=sorted(LINE_ENDINGS),
        default=None,
        help="Line ending appended to every sent line",
    )
    return parser


def _configure_logging(settings: TerminalSettings) -> None:
    set_debug(settings.debug)
    if settings.logdir:
        try:
            logfile = setup_file_logging(settings.logdir)
            logprintf(3, "File logging initialised at %s", logfile)
        except Exception as exc:  # pragma: no cover - depends on FS/permissions
            logprintf(1, "File logging disabled: %s", exc)


def _list_ports(registry: PortRegistry) -> int:
    try:
        ports = registry.list()
    except EnumerationError as exc:
        logprintf(1, "Could not list serial ports: %s", exc)
        return 0
    for p in ports:
        print(f"{p.name}  {p.description}" if p.description else p.name)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by the ``comterm`` script."""

    parser = _build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = load_settings(os.path.abspath(args.config))
        overrides: dict[str, object] = {}
        if args.debug:
            overrides["debug"] = True
        if getattr(args, "port", None):
            overrides["port"] = args.port
        if getattr(args, "baud", None) is not None:
            overrides["baudrate"] = args.baud
        if getattr(args, "eol", None):
            overrides["line_ending"] = args.eol
        if overrides:
            settings = TerminalSettings(**{**settings.model_dump(), **overrides})
    except ValidationError as exc:
        print(f"comterm: invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    _configure_logging(settings)
    registry = PortRegistry()

    if args.command == "ports":
        return _list_ports(registry)

    if args.command is None:
        parser.print_help()
        return 0

    with PortSession() as session:
        controller = TerminalController(session, registry, settings)
        console = ConsoleRuntime(controller, poll_interval=settings.poll_interval)
        if not settings.port:
            print("No port given; use :ports and :port NAME, then :connect.")
        return console.run(connect=bool(settings.port))
