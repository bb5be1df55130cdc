"""
Per-tick driver for the bridge.

Coordinates one bridge cycle per upstream tick event:
liveness check → reconnect-if-due → publish tick → drain inbound commands.
All socket I/O happens synchronously inside ``on_tick``; nothing escapes it.
"""

import time
from typing import Any, Callable, Optional

from ..config.defaults import BridgeConfig, get_default_config
from ..host.ports import TradingHost
from ..logging.config import get_bridge_logger
from ..models.trading import Tick
from .connection import ConnectionManager, SocketFactory
from .interpreter import CommandInterpreter
from .publisher import TickPublisher


class BridgeSession:
    """
    Single session object holding all bridge state.

    Implements the start/tick/stop lifecycle a tick event source drives. The
    host must not call ``on_tick`` reentrantly; no locking is done.
    """

    def __init__(
        self,
        host: TradingHost,
        config: Optional[BridgeConfig] = None,
        socket_factory: Optional[SocketFactory] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the bridge session and its components."""
        self.host = host
        self.config = config or get_default_config()
        self.symbol = self.config.trading.symbol
        self.logger = get_bridge_logger(__name__).bind(symbol=self.symbol)

        connection_kwargs: dict[str, Any] = {"clock": clock}
        if socket_factory is not None:
            connection_kwargs["socket_factory"] = socket_factory

        self.connection = ConnectionManager(
            self.config.endpoint,
            self.config.reconnect,
            host=host,
            **connection_kwargs
        )
        self.publisher = TickPublisher(self.connection, self.config.publisher, host=host)
        self.interpreter = CommandInterpreter(
            self.connection,
            host,
            self.config.trading,
            self.config.interpreter
        )

        self.tick_count = 0
        self._cycle_errors = 0
        self._started = False

    def on_start(self) -> None:
        """Open the initial connection. A failure leaves the session retrying."""
        self._started = True
        self.connection.reset_attempts()
        self.logger.info(
            "Bridge session starting",
            endpoint=self.config.endpoint.address,
            reconnect_seconds=self.config.reconnect.interval_seconds,
            label=self.config.trading.position_label
        )
        self._connect()

    def on_tick(self) -> None:
        """Run one bridge cycle. Never raises to the host."""
        self.tick_count += 1

        try:
            self._run_cycle()
        except Exception as e:
            self._cycle_errors += 1
            self.logger.error(
                "Unexpected error during bridge cycle",
                tick_count=self.tick_count,
                error=str(e),
                error_type=type(e).__name__
            )

    def on_stop(self) -> None:
        """Release the connection once at shutdown."""
        self.connection.close()
        self._started = False
        self.logger.info("Bridge session stopped", **self.get_stats())

    def _run_cycle(self) -> None:
        if not self.connection.is_connected():
            if self.connection.reconnect_due():
                self._connect()
            return

        quote = self.host.current_tick(self.symbol)
        self.publisher.publish(Tick.from_quote(self.symbol, quote))

        self.interpreter.poll_and_dispatch()

    def _connect(self) -> bool:
        result = self.connection.connect()
        if result.ok:
            self.interpreter.reset()
        return result.ok

    @property
    def is_started(self) -> bool:
        return self._started

    def get_stats(self) -> dict[str, Any]:
        """Get aggregated session statistics."""
        return {
            "ticks_seen": self.tick_count,
            "cycle_errors": self._cycle_errors,
            **self.connection.get_stats(),
            **self.publisher.get_stats(),
            **self.interpreter.get_stats(),
        }
