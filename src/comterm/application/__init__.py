"""comterm/application/__init__.py

Application services: the port session, its reader thread and the
terminal controller used by front ends.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from .controller import TerminalController
from .reader import ReaderWorker
from .session import PortSession

__all__ = ["PortSession", "ReaderWorker", "TerminalController"]
