"""
Error classification for the TickBridge bridge.

Connectivity errors are transient and only ever travel inside I/O result
values; command errors describe a single malformed inbound line; nothing in
this hierarchy is allowed to unwind past the driver loop.
"""

from .commands import (
    CommandError,
    TooFewTokensError,
    InvalidLotSizeError,
    UnknownCommandError,
)
from .connectivity import (
    ConnectivityError,
    ConnectFailedError,
    SendFailedError,
    ReceiveFailedError,
    PeerClosedError,
)
from .configuration import ConfigurationError
from .recovery import RecoverableError

__all__ = [
    # Command Errors
    "CommandError",
    "TooFewTokensError",
    "InvalidLotSizeError",
    "UnknownCommandError",
    # Connectivity
    "ConnectivityError",
    "ConnectFailedError",
    "SendFailedError",
    "ReceiveFailedError",
    "PeerClosedError",
    # Configuration
    "ConfigurationError",
    # Recovery Categories
    "RecoverableError",
]
