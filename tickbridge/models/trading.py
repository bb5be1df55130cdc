"""
Trading data models exchanged with the trading host.

Prices and lot sizes are Decimal so the fixed 5-decimal wire formatting is
exact; host-supplied floats are converted through ``str()``.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from ..utils.time import get_server_time

Number = Union[Decimal, float, int, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a host number to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Side(str, Enum):
    """Market order direction."""
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Quote:
    """Current bid/ask reported by the host for one symbol."""
    bid: Decimal
    ask: Decimal
    server_time: Optional[datetime] = None     # Host server clock; None if not reported


@dataclass(frozen=True)
class Tick:
    """Single bid/ask price update, transmitted once and discarded."""
    symbol: str
    timestamp: datetime             # UTC, millisecond precision on the wire
    bid: Decimal
    ask: Decimal

    @classmethod
    def from_quote(cls, symbol: str, quote: Quote) -> "Tick":
        return cls(
            symbol=symbol,
            timestamp=get_server_time(quote.server_time),
            bid=to_decimal(quote.bid),
            ask=to_decimal(quote.ask),
        )

    @property
    def spread(self) -> Decimal:
        return self.ask - self.bid


@dataclass(frozen=True)
class Position:
    """Open trade held by the trading host."""
    position_id: int
    symbol: str
    label: str
    side: Side
    volume: Decimal
    entry_price: Optional[Decimal] = None
    stop_loss_pips: Optional[Decimal] = None
    take_profit_pips: Optional[Decimal] = None


@dataclass
class OrderResult:
    """Outcome of an order or close request on the host."""
    is_successful: bool
    error: Optional[str] = None
    position: Optional[Position] = None
