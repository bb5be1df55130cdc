"""Outbound tick publishing."""

from typing import TYPE_CHECKING, Any, Optional

from ..config.defaults import PublisherParams
from ..logging.config import get_bridge_logger, log_host_diagnostic
from ..models.trading import Tick
from ..wire.framing import encode_line
from ..wire.tick_codec import encode_tick
from .connection import ConnectionManager
from .results import IoResult, IoStatus

if TYPE_CHECKING:
    from ..host.ports import TradingHost


class TickPublisher:
    """
    Serializes ticks to JSON lines and writes them to the connection.

    Ticks are lossy while disconnected: a tick published without a live
    connection is skipped, never buffered or retried.
    """

    def __init__(
        self,
        connection: ConnectionManager,
        params: Optional[PublisherParams] = None,
        host: Optional["TradingHost"] = None,
    ):
        self.connection = connection
        self.params = params or PublisherParams()
        self.host = host
        self.logger = get_bridge_logger(__name__)
        self.sent_count = 0
        self._skipped_count = 0
        self._failed_count = 0

    def publish(self, tick: Tick) -> IoResult:
        """Send one tick line if connected; log the 1st and every Nth sent tick."""
        if not self.connection.is_connected():
            self._skipped_count += 1
            return IoResult(status=IoStatus.CLOSED, message="Not connected, tick skipped")

        try:
            line = encode_tick(tick, self.params.price_digits)
        except ValueError as e:
            self._failed_count += 1
            self.logger.warning(
                "Tick encoding failed",
                symbol=tick.symbol,
                bid=str(tick.bid),
                ask=str(tick.ask),
                error=str(e)
            )
            return IoResult(status=IoStatus.INVALID, message=str(e), error=e)

        result = self.connection.send(encode_line(line))

        if not result.ok:
            self._failed_count += 1
            return result

        self.sent_count += 1
        if self.sent_count == 1 or self.sent_count % self.params.log_every == 0:
            log_host_diagnostic(
                self.logger, self.host, "info",
                f"Sent tick {self.sent_count}: {line}", "tick_progress",
                context={"tick_count": self.sent_count, "symbol": tick.symbol}
            )

        return result

    def get_stats(self) -> dict[str, Any]:
        """Get publishing statistics."""
        return {
            "ticks_sent": self.sent_count,
            "ticks_skipped": self._skipped_count,
            "ticks_failed": self._failed_count,
        }
