"""
Typed commands decoded from inbound text lines.

Commands are transient: built from one line, dispatched, then discarded.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from .trading import Side


@dataclass(frozen=True)
class CloseCommand:
    """Close every open position with the configured label and symbol."""


@dataclass(frozen=True)
class OrderCommand:
    """Market order request."""
    side: Side
    lots: Decimal
    stop_loss_pips: Optional[Decimal] = None
    take_profit_pips: Optional[Decimal] = None


@dataclass(frozen=True)
class InvalidCommand:
    """Line that could not be turned into an actionable command."""
    raw_text: str
    reason: str
    error_type: Optional[str] = None   # CommandError subclass name


Command = Union[CloseCommand, OrderCommand, InvalidCommand]
