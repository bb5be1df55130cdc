"""
Timer-driven tick event source.

Stands in for a trading platform's tick callback: calls ``on_start`` once,
``on_tick`` on a fixed cadence, and ``on_stop`` once on the way out.
"""

import time
from typing import Callable, Optional

import structlog

from .host.ports import BridgeLifecycle

logger = structlog.get_logger(__name__)


class TimerTickSource:
    """Drives a BridgeLifecycle from a fixed-interval timer."""

    def __init__(
        self,
        interval_seconds: float = 0.25,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval_seconds = interval_seconds
        self._sleep = sleep
        self.ticks_delivered = 0

    def run(self, session: BridgeLifecycle, max_ticks: Optional[int] = None) -> int:
        """
        Run the lifecycle until ``max_ticks`` ticks or Ctrl-C.

        Returns:
            Number of ticks delivered
        """
        self.ticks_delivered = 0
        session.on_start()

        try:
            while max_ticks is None or self.ticks_delivered < max_ticks:
                session.on_tick()
                self.ticks_delivered += 1
                self._sleep(self.interval_seconds)
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping tick source", ticks_delivered=self.ticks_delivered)
        finally:
            session.on_stop()

        return self.ticks_delivered
