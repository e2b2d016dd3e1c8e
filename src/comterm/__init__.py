"""comterm: a minimal interactive terminal for serial (COM) ports."""

__version__ = "0.1.0"
