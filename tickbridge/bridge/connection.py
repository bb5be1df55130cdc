"""
TCP connection lifecycle for the consumer link.

The ConnectionManager is the only owner of the socket. Every socket failure
is caught here, logged, and turned into a transition to Disconnected plus a
result value; nothing is raised to the caller. Reconnects are driven by the
caller comparing clock readings, never by sleeping.
"""

import select
import socket
import time
from contextlib import suppress
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..config.defaults import EndpointParams, ReconnectParams
from ..errors import (
    ConnectFailedError,
    PeerClosedError,
    ReceiveFailedError,
    SendFailedError,
)
from ..logging.config import get_bridge_logger, log_host_diagnostic
from ..utils.time import elapsed_seconds
from .results import IoResult, IoStatus

if TYPE_CHECKING:
    from ..host.ports import TradingHost

SocketFactory = Callable[..., socket.socket]


class ConnectionState(str, Enum):
    """Connection lifecycle states."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class ConnectionManager:
    """Owns the TCP socket: connect, liveness, send, non-blocking read, close."""

    def __init__(
        self,
        endpoint: EndpointParams,
        reconnect: Optional[ReconnectParams] = None,
        host: Optional["TradingHost"] = None,
        socket_factory: SocketFactory = socket.create_connection,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.endpoint = endpoint
        self.reconnect = reconnect or ReconnectParams()
        self.host = host
        self.logger = get_bridge_logger(__name__).bind(endpoint=endpoint.address)
        self._socket_factory = socket_factory
        self._clock = clock
        self._sock: Optional[socket.socket] = None

        self.state = ConnectionState.DISCONNECTED
        self.last_attempt_time: Optional[float] = None
        self.consecutive_failures = 0
        self._exhausted_logged = False

        self._attempt_count = 0
        self._connect_count = 0
        self._failure_count = 0
        self._bytes_sent = 0
        self._bytes_received = 0

    def connect(self) -> IoResult:
        """
        Close any existing connection and open a new one.

        Records the attempt time first so a failed attempt still starts the
        reconnect interval. Failures are logged and returned, never raised.
        """
        self.last_attempt_time = self._clock()
        self._attempt_count += 1
        self.close()

        try:
            sock = self._socket_factory(
                (self.endpoint.host, self.endpoint.port),
                timeout=self.endpoint.connect_timeout_seconds
            )
        except OSError as e:
            self._failure_count += 1
            self.consecutive_failures += 1
            error = ConnectFailedError(
                f"Connect failed: {e}",
                endpoint=self.endpoint.address,
                retry_count=self.consecutive_failures,
                max_retries=self.reconnect.max_attempts
            )
            log_host_diagnostic(
                self.logger, self.host, "warning", str(error), "connect_failed",
                context={
                    "error_type": type(e).__name__,
                    "consecutive_failures": self.consecutive_failures
                }
            )
            return IoResult(status=IoStatus.FAILED, message=str(error), error=error)

        sock.settimeout(self.endpoint.io_timeout_seconds)
        with suppress(OSError):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        self._sock = sock
        self.state = ConnectionState.CONNECTED
        self.consecutive_failures = 0
        self._exhausted_logged = False
        self._connect_count += 1

        log_host_diagnostic(
            self.logger, self.host, "info",
            f"Connected to {self.endpoint.address}", "connected"
        )
        return IoResult(status=IoStatus.OK, message="Connected")

    def is_connected(self) -> bool:
        """True only while in Connected state with a live socket handle."""
        return (
            self.state == ConnectionState.CONNECTED
            and self._sock is not None
            and self._sock.fileno() != -1
        )

    def close(self) -> None:
        """Release the socket. Idempotent; close errors are suppressed."""
        sock, self._sock = self._sock, None
        was_connected = self.state == ConnectionState.CONNECTED
        self.state = ConnectionState.DISCONNECTED

        if sock is None:
            return

        with suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)
        with suppress(OSError):
            sock.close()

        if was_connected:
            self.logger.info("Connection closed")

    def reconnect_due(self) -> bool:
        """
        Whether the fixed reconnect interval has elapsed since the last attempt.

        With ``max_attempts`` set, returns False once that many consecutive
        attempts have failed, until ``reset_attempts`` is called.
        """
        max_attempts = self.reconnect.max_attempts
        if max_attempts is not None and self.consecutive_failures >= max_attempts:
            if not self._exhausted_logged:
                self._exhausted_logged = True
                log_host_diagnostic(
                    self.logger, self.host, "error",
                    f"Reconnect attempts exhausted after {self.consecutive_failures} failures",
                    "reconnect_exhausted",
                    context={"max_attempts": max_attempts}
                )
            return False

        if self.last_attempt_time is None:
            return True

        elapsed = elapsed_seconds(self.last_attempt_time, self._clock())
        return elapsed >= self.reconnect.interval_seconds

    def reset_attempts(self) -> None:
        """Clear the consecutive failure count so reconnects resume."""
        self.consecutive_failures = 0
        self._exhausted_logged = False

    def send(self, data: bytes) -> IoResult:
        """Write all bytes to the socket; any failure forces Disconnected."""
        if not self.is_connected():
            return IoResult(status=IoStatus.CLOSED, message="Not connected")

        assert self._sock is not None
        try:
            self._sock.sendall(data)
        except OSError as e:
            error = SendFailedError(
                f"Send failed: {e}",
                byte_count=len(data),
                endpoint=self.endpoint.address
            )
            log_host_diagnostic(
                self.logger, self.host, "warning", str(error), "send_failed",
                context={"error_type": type(e).__name__}
            )
            self.close()
            return IoResult(status=IoStatus.FAILED, message=str(error), error=error)

        self._bytes_sent += len(data)
        return IoResult(status=IoStatus.OK)

    def read_chunk(self, max_bytes: int) -> IoResult:
        """
        Read up to ``max_bytes`` only if data is already waiting.

        Never blocks: a zero-timeout readiness check runs before the read.
        EOF from the peer forces Disconnected.
        """
        if not self.is_connected():
            return IoResult(status=IoStatus.CLOSED, message="Not connected")

        assert self._sock is not None
        try:
            readable, _, _ = select.select([self._sock], [], [], 0)
            if not readable:
                return IoResult(status=IoStatus.WOULD_BLOCK)

            data = self._sock.recv(max_bytes)
        except (BlockingIOError, InterruptedError, TimeoutError):
            return IoResult(status=IoStatus.WOULD_BLOCK)
        except (OSError, ValueError) as e:
            error = ReceiveFailedError(f"Read failed: {e}", endpoint=self.endpoint.address)
            log_host_diagnostic(
                self.logger, self.host, "warning", str(error), "read_failed",
                context={"error_type": type(e).__name__}
            )
            self.close()
            return IoResult(status=IoStatus.FAILED, message=str(error), error=error)

        if not data:
            error = PeerClosedError("Connection closed by peer", endpoint=self.endpoint.address)
            log_host_diagnostic(self.logger, self.host, "warning", str(error), "peer_closed")
            self.close()
            return IoResult(status=IoStatus.CLOSED, message=str(error), error=error)

        self._bytes_received += len(data)
        return IoResult(status=IoStatus.OK, data=data)

    def get_stats(self) -> dict[str, Any]:
        """Get connection statistics."""
        return {
            "state": self.state.value,
            "connect_attempts": self._attempt_count,
            "connects": self._connect_count,
            "connect_failures": self._failure_count,
            "consecutive_failures": self.consecutive_failures,
            "bytes_sent": self._bytes_sent,
            "bytes_received": self._bytes_received,
        }
