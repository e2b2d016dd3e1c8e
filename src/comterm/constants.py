"""Terminal defaults and session states.

Reads are 1000 bytes with a 10 ms timeout and poll throttle; the output
window keeps the last 1000 characters.
"""

BAUD_RATES: tuple[int, ...] = (9600, 19200, 38400, 57600, 115200)
DEFAULT_BAUD_RATE: int = 9600

DEFAULT_READ_TIMEOUT: float = 0.010
DEFAULT_POLL_INTERVAL: float = 0.010
DEFAULT_CHUNK_SIZE: int = 1000
DEFAULT_BUFFER_CAPACITY: int = 1000

# Upper bound for waiting on the reader thread during disconnect.
WORKER_JOIN_TIMEOUT: float = 2.0

LINE_ENDINGS: dict[str, str] = {
    "none": "",
    "cr": "\r",
    "lf": "\n",
    "crlf": "\r\n",
}

COMMAND_PREFIX: str = ":"

DISCONNECTED: int = 0
CONNECTED: int = 1

STATE_NAMES: dict[int, str] = {
    DISCONNECTED: "disconnected",
    CONNECTED: "connected",
}
