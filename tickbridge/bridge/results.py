"""Explicit result values for socket operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IoStatus(Enum):
    """Outcome of a connect, send or read on the bridge socket."""
    OK = "ok"
    WOULD_BLOCK = "would_block"     # Nothing to read right now
    FAILED = "failed"               # Transient failure, now Disconnected
    CLOSED = "closed"               # Not connected, or peer closed the stream
    INVALID = "invalid"             # Payload could not be encoded, nothing sent


@dataclass
class IoResult:
    """Result of a socket operation."""
    status: IoStatus
    data: bytes = b""
    message: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == IoStatus.OK
