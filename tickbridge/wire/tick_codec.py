"""
Outbound tick wire format.

One JSON object per line with keys in a fixed order and no whitespace:

    {"symbol":"EURUSD","time":"2025-01-01T00:00:00.000Z","bid":1.23456,"ask":1.23478}

Bid and ask are bare JSON numbers rendered with a fixed number of decimals,
so the line is assembled by hand rather than through a generic serializer;
orjson escapes the symbol string and parses lines on the way back.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import orjson

from ..models.trading import Number, Tick, to_decimal
from ..utils.time import format_wire_timestamp, parse_wire_timestamp

DEFAULT_PRICE_DIGITS = 5


class TickDecodeError(ValueError):
    """Raised when a line is not a valid tick record."""


def format_price(value: Number, digits: int = DEFAULT_PRICE_DIGITS) -> str:
    """
    Format a price as a fixed-point string with '.' as decimal separator.

    Halves round away from zero, matching the host's native fixed-point
    formatting.

    Raises:
        ValueError: If the price is NaN or infinite
    """
    price = to_decimal(value)
    if not price.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")

    quantum = Decimal(1).scaleb(-digits)
    return f"{price.quantize(quantum, rounding=ROUND_HALF_UP):f}"


def encode_tick(tick: Tick, digits: int = DEFAULT_PRICE_DIGITS) -> str:
    """Render a tick as a single JSON line without the terminator."""
    symbol = orjson.dumps(tick.symbol).decode("utf-8")
    time_str = format_wire_timestamp(tick.timestamp)
    bid = format_price(tick.bid, digits)
    ask = format_price(tick.ask, digits)
    return f'{{"symbol":{symbol},"time":"{time_str}","bid":{bid},"ask":{ask}}}'


def decode_tick(line: str, digits: int = DEFAULT_PRICE_DIGITS) -> Tick:
    """
    Parse a tick line produced by ``encode_tick``.

    Used by consumers and tests; prices come back quantized to ``digits``.

    Raises:
        TickDecodeError: If the line is not a well-formed tick record
    """
    try:
        payload: Any = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        raise TickDecodeError(f"Invalid JSON in tick line: {e}") from e

    if not isinstance(payload, dict):
        raise TickDecodeError("Tick line must be a JSON object")

    missing = [key for key in ("symbol", "time", "bid", "ask") if key not in payload]
    if missing:
        raise TickDecodeError(f"Tick line missing fields: {', '.join(missing)}")

    try:
        quantum = Decimal(1).scaleb(-digits)
        return Tick(
            symbol=str(payload["symbol"]),
            timestamp=parse_wire_timestamp(payload["time"]),
            bid=to_decimal(payload["bid"]).quantize(quantum, rounding=ROUND_HALF_UP),
            ask=to_decimal(payload["ask"]).quantize(quantum, rounding=ROUND_HALF_UP),
        )
    except (ArithmeticError, AttributeError, TypeError, ValueError) as e:
        raise TickDecodeError(f"Invalid tick field: {e}") from e
