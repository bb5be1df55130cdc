"""
Inbound command parsing.

One command per line, tokens separated by single spaces, keyword matched
case-insensitively:

    CLOSE
    BUY <lots> [<sl_pips>] [<tp_pips>]
    SELL <lots> [<sl_pips>] [<tp_pips>]

Parsing never raises: malformed lines become an ``InvalidCommand`` carrying
the reason that gets logged.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from ..errors import (
    CommandError,
    InvalidLotSizeError,
    TooFewTokensError,
    UnknownCommandError,
)
from ..models.commands import CloseCommand, Command, InvalidCommand, OrderCommand
from ..models.trading import Side

TOKEN_SEPARATOR = " "
CLOSE_KEYWORD = "CLOSE"
ORDER_KEYWORDS = {"BUY": Side.BUY, "SELL": Side.SELL}


def parse_decimal(token: str) -> Optional[Decimal]:
    """
    Parse a culture-invariant decimal token.

    Accepts an optional sign, '.' as decimal separator and exponent notation.
    Returns None for anything else, including NaN and infinities.
    """
    if not token or "," in token:
        return None

    try:
        value = Decimal(token)
    except (InvalidOperation, ValueError):
        return None

    if not value.is_finite():
        return None

    return value


def _optional_pips(tokens: list[str], index: int) -> Optional[Decimal]:
    """Read an optional pip distance; missing or malformed means unset."""
    if len(tokens) <= index:
        return None
    return parse_decimal(tokens[index])


def _parse_order(side: Side, tokens: list[str], line: str) -> OrderCommand:
    lots = parse_decimal(tokens[1])
    if lots is None:
        raise InvalidLotSizeError(
            f"Invalid lot size: {tokens[1]}",
            token=tokens[1],
            raw_text=line
        )

    return OrderCommand(
        side=side,
        lots=lots,
        stop_loss_pips=_optional_pips(tokens, 2),
        take_profit_pips=_optional_pips(tokens, 3),
    )


def _parse_tokens(line: str) -> Command:
    tokens = line.split(TOKEN_SEPARATOR)
    keyword = tokens[0].upper()

    # CLOSE takes no parameters and is matched before the token count check
    if keyword == CLOSE_KEYWORD:
        return CloseCommand()

    if len(tokens) < 2:
        raise TooFewTokensError(
            f"Invalid command: {line}",
            token_count=len(tokens),
            raw_text=line
        )

    if keyword in ORDER_KEYWORDS:
        return _parse_order(ORDER_KEYWORDS[keyword], tokens, line)

    raise UnknownCommandError(
        f"Unknown command: {line}",
        keyword=keyword,
        raw_text=line
    )


def parse_command(line: str) -> Command:
    """
    Decode one trimmed inbound line into a typed command.

    Args:
        line: Complete command line without its terminator

    Returns:
        CloseCommand, OrderCommand, or InvalidCommand describing the problem
    """
    line = line.strip()
    if not line:
        return InvalidCommand(raw_text=line, reason="Invalid command: empty line",
                              error_type=TooFewTokensError.__name__)

    try:
        return _parse_tokens(line)
    except CommandError as e:
        return InvalidCommand(raw_text=line, reason=str(e), error_type=type(e).__name__)


def format_command(command: Command) -> str:
    """Render a command back to its wire text, e.g. for consumer-side clients."""
    if isinstance(command, CloseCommand):
        return CLOSE_KEYWORD

    if isinstance(command, InvalidCommand):
        return command.raw_text

    tokens = [command.side.value, f"{command.lots:f}"]
    if command.stop_loss_pips is not None or command.take_profit_pips is not None:
        tokens.append(f"{command.stop_loss_pips:f}" if command.stop_loss_pips is not None else "-")
    if command.take_profit_pips is not None:
        tokens.append(f"{command.take_profit_pips:f}")
    return TOKEN_SEPARATOR.join(tokens)
