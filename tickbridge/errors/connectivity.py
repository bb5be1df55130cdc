"""
Connectivity error classifications for the TCP link to the consumer.

Every connectivity failure is transient: the connection manager records it,
drops to Disconnected and lets the fixed-interval reconnect policy recover.
"""

from typing import Any, Optional

from .recovery import RecoverableError


class ConnectivityError(RecoverableError):
    """Base class for transient socket failures."""

    def __init__(self, message: str, endpoint: Optional[str] = None,
                 context: Optional[dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.endpoint = endpoint
        self.context = context or {}


class ConnectFailedError(ConnectivityError):
    """Connection attempt refused, timed out or failed name resolution."""


class SendFailedError(ConnectivityError):
    """Write on a closed or broken socket."""

    def __init__(self, message: str, byte_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.byte_count = byte_count


class ReceiveFailedError(ConnectivityError):
    """Read error on the inbound side of the socket."""


class PeerClosedError(ConnectivityError):
    """The consumer closed its end of the connection (EOF on read)."""
