"""Capability set the bridge consumes from a trading host.

Only the minimal surface actually required by the bridge is defined here.
Any object with these methods can be wired in, which keeps the bridge
independent of a particular trading platform and lets tests use fakes.
"""

from decimal import Decimal
from typing import Optional, Protocol, Sequence, runtime_checkable

from ..models.trading import OrderResult, Position, Quote, Side


@runtime_checkable
class TradingHost(Protocol):
    def current_tick(self, symbol: str) -> Quote: ...

    def quantity_to_volume(self, symbol: str, lots: Decimal) -> Decimal: ...

    def execute_market_order(
        self,
        side: Side,
        symbol: str,
        volume: Decimal,
        label: str,
        stop_loss_pips: Optional[Decimal] = None,
        take_profit_pips: Optional[Decimal] = None,
    ) -> OrderResult: ...

    def find_open_positions(self, label: str, symbol: str) -> Sequence[Position]: ...

    def close_position(self, position: Position) -> OrderResult: ...

    def log(self, message: str) -> None: ...


@runtime_checkable
class BridgeLifecycle(Protocol):
    """Callbacks a tick event source drives: start once, tick repeatedly, stop once."""

    def on_start(self) -> None: ...

    def on_tick(self) -> None: ...

    def on_stop(self) -> None: ...


__all__ = ["TradingHost", "BridgeLifecycle"]
