"""In-memory paper trading host.

Simulates the host capability set: a seeded random-walk quote per symbol,
market orders that open positions at the current quote, and position closes.
Nothing is persisted.
"""

import itertools
import random
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Sequence

import structlog

from ..models.trading import OrderResult, Position, Quote, Side, to_decimal
from ..utils.time import get_server_time

logger = structlog.get_logger(__name__)

DEFAULT_LOT_SIZE = Decimal("100000")
DEFAULT_START_PRICE = Decimal("1.10000")
DEFAULT_SPREAD = Decimal("0.00015")
PRICE_QUANTUM = Decimal("0.00001")


class PaperTradingHost:
    """
    Simulated trading host implementing the TradingHost capability set.

    Quotes follow a bounded random walk; each ``current_tick`` call advances
    the walk by one step for that symbol.
    """

    def __init__(
        self,
        lot_size: Decimal = DEFAULT_LOT_SIZE,
        start_price: Decimal = DEFAULT_START_PRICE,
        spread: Decimal = DEFAULT_SPREAD,
        step: Decimal = Decimal("0.00010"),
        seed: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.lot_size = to_decimal(lot_size)
        self.start_price = to_decimal(start_price)
        self.spread = to_decimal(spread)
        self.step = to_decimal(step)
        self.logger = logger
        self._random = random.Random(seed)
        self._clock = clock or get_server_time
        self._mid_prices: dict[str, Decimal] = {}
        self._position_ids = itertools.count(1)

        self.positions: list[Position] = []
        self.closed_positions: list[Position] = []
        self.messages: list[str] = []

    def current_tick(self, symbol: str) -> Quote:
        """Advance the random walk for ``symbol`` and return the new quote."""
        mid = self._mid_prices.get(symbol, self.start_price)
        move = self.step * Decimal(self._random.randint(-2, 2))
        mid = max(mid + move, self.spread)
        self._mid_prices[symbol] = mid

        half_spread = self.spread / 2
        return Quote(
            bid=(mid - half_spread).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP),
            ask=(mid + half_spread).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP),
            server_time=self._clock(),
        )

    def quantity_to_volume(self, symbol: str, lots: Decimal) -> Decimal:
        """Convert lots to units, rounded to whole units."""
        return (to_decimal(lots) * self.lot_size).quantize(Decimal(1), rounding=ROUND_HALF_UP)

    def execute_market_order(
        self,
        side: Side,
        symbol: str,
        volume: Decimal,
        label: str,
        stop_loss_pips: Optional[Decimal] = None,
        take_profit_pips: Optional[Decimal] = None,
    ) -> OrderResult:
        """Open a simulated position at the current mid price."""
        if volume <= 0:
            self.logger.warning(
                "Paper order rejected",
                symbol=symbol,
                side=side.value,
                volume=str(volume),
                reason="non_positive_volume"
            )
            return OrderResult(is_successful=False, error="Volume must be positive")

        position = Position(
            position_id=next(self._position_ids),
            symbol=symbol,
            label=label,
            side=side,
            volume=volume,
            entry_price=self._mid_prices.get(symbol, self.start_price),
            stop_loss_pips=stop_loss_pips,
            take_profit_pips=take_profit_pips,
        )
        self.positions.append(position)

        self.logger.info(
            "PAPER ORDER (SIMULATED)",
            position_id=position.position_id,
            symbol=symbol,
            side=side.value,
            volume=str(volume),
            label=label,
            stop_loss_pips=str(stop_loss_pips) if stop_loss_pips is not None else None,
            take_profit_pips=str(take_profit_pips) if take_profit_pips is not None else None
        )

        return OrderResult(is_successful=True, position=position)

    def find_open_positions(self, label: str, symbol: str) -> Sequence[Position]:
        return [p for p in self.positions if p.label == label and p.symbol == symbol]

    def close_position(self, position: Position) -> OrderResult:
        if position not in self.positions:
            return OrderResult(is_successful=False, error="Position not found", position=position)

        self.positions.remove(position)
        self.closed_positions.append(position)

        self.logger.info(
            "PAPER CLOSE (SIMULATED)",
            position_id=position.position_id,
            symbol=position.symbol,
            label=position.label
        )

        return OrderResult(is_successful=True, position=position)

    def log(self, message: str) -> None:
        self.messages.append(message)
