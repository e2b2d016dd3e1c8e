"""comterm/domain/__init__.py

Domain models and entities for the serial terminal.

Copyright BINGO Collaboration
Last modified: 2026-10-19
"""

from .buffer import SessionBuffer
from .models import PortDescriptor, SessionConfig

__all__ = [
    "PortDescriptor",
    "SessionBuffer",
    "SessionConfig",
]
