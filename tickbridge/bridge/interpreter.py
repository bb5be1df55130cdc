"""
Inbound command interpretation and dispatch to the trading host.

Each driver cycle reads at most one chunk of waiting bytes, reassembles
complete lines in the receive buffer and dispatches them in arrival order.
A bad line is logged and dropped; it never affects the connection.
"""

from decimal import Decimal
from typing import Any, Optional

from ..config.defaults import InterpreterParams, TradingParams
from ..host.ports import TradingHost
from ..logging.config import get_bridge_logger, log_host_diagnostic
from ..models.commands import CloseCommand, Command, InvalidCommand, OrderCommand
from ..wire.commands import parse_command
from ..wire.framing import LineFramer
from .connection import ConnectionManager


def _format_pips(value: Optional[Decimal]) -> str:
    return "none" if value is None else f"{value:f}"


class CommandInterpreter:
    """Polls the connection for command lines and executes them on the host."""

    def __init__(
        self,
        connection: ConnectionManager,
        host: TradingHost,
        trading: Optional[TradingParams] = None,
        params: Optional[InterpreterParams] = None,
    ):
        self.connection = connection
        self.host = host
        self.trading = trading or TradingParams()
        self.params = params or InterpreterParams()
        self.logger = get_bridge_logger(__name__).bind(
            symbol=self.trading.symbol, label=self.trading.position_label
        )
        self.framer = LineFramer()

        self._dispatched_count = 0
        self._invalid_count = 0
        self._orders_sent = 0
        self._orders_failed = 0
        self._positions_closed = 0
        self._error_count = 0

    def reset(self) -> None:
        """Drop any partial line left over from a previous connection."""
        if self.framer.buffer:
            self.logger.debug("Discarding partial command line", pending=self.framer.pending)
        self.framer.reset()

    def poll_and_dispatch(self) -> int:
        """
        Read one chunk of waiting bytes, if any, and dispatch complete lines.

        Returns:
            Number of complete lines dispatched this cycle
        """
        if not self.connection.is_connected():
            return 0

        result = self.connection.read_chunk(self.params.read_chunk_size)
        if not result.ok or not result.data:
            return 0

        lines = self.framer.feed(result.data)
        for line in lines:
            self.handle_command(line)

        return len(lines)

    def handle_command(self, line: str) -> Optional[Command]:
        """
        Parse and execute one command line.

        Any error is logged at the line level so processing continues with
        the next line and later ticks.

        Returns:
            The parsed command, or None if parsing itself failed
        """
        command: Optional[Command] = None
        try:
            command = parse_command(line)
            self._dispatch(command)
            self._dispatched_count += 1
        except Exception as e:
            self._error_count += 1
            log_host_diagnostic(
                self.logger, self.host, "error",
                f"Command error: {e}", "command_error",
                context={"line": line, "error_type": type(e).__name__}
            )

        return command

    def _dispatch(self, command: Command) -> None:
        if isinstance(command, CloseCommand):
            self._close_positions()
        elif isinstance(command, OrderCommand):
            self._execute_order(command)
        elif isinstance(command, InvalidCommand):
            self._invalid_count += 1
            log_host_diagnostic(
                self.logger, self.host, "warning", command.reason, "invalid_command",
                context={"line": command.raw_text, "error_type": command.error_type}
            )

    def _close_positions(self) -> None:
        label = self.trading.position_label
        positions = list(self.host.find_open_positions(label, self.trading.symbol))

        closed_count = 0
        for position in positions:
            result = self.host.close_position(position)
            if result.is_successful:
                closed_count += 1
            else:
                self.logger.warning(
                    "Position close failed",
                    position_id=position.position_id,
                    error=result.error
                )

        self._positions_closed += closed_count
        log_host_diagnostic(
            self.logger, self.host, "info",
            f"Close command executed: {closed_count} position(s) closed with label '{label}'",
            "close_executed",
            context={"closed_count": closed_count, "matched_count": len(positions)}
        )

    def _execute_order(self, command: OrderCommand) -> None:
        symbol = self.trading.symbol
        label = self.trading.position_label
        volume = self.host.quantity_to_volume(symbol, command.lots)

        result = self.host.execute_market_order(
            command.side,
            symbol,
            volume,
            label,
            command.stop_loss_pips,
            command.take_profit_pips,
        )

        log_host_diagnostic(
            self.logger, self.host, "info",
            f"Order sent: {command.side.value} {command.lots:f} lots "
            f"SL={_format_pips(command.stop_loss_pips)} "
            f"TP={_format_pips(command.take_profit_pips)} Label={label}",
            "order_sent",
            context={"side": command.side.value, "volume": str(volume)}
        )

        if result.is_successful:
            self._orders_sent += 1
        else:
            self._orders_failed += 1
            log_host_diagnostic(
                self.logger, self.host, "warning",
                f"Order rejected: {result.error}", "order_rejected",
                context={"side": command.side.value, "volume": str(volume)}
            )

    def get_stats(self) -> dict[str, Any]:
        """Get command statistics."""
        return {
            "commands_dispatched": self._dispatched_count,
            "commands_invalid": self._invalid_count,
            "orders_sent": self._orders_sent,
            "orders_failed": self._orders_failed,
            "positions_closed": self._positions_closed,
            "command_errors": self._error_count,
            "lines_extracted": self.framer.lines_extracted,
        }
