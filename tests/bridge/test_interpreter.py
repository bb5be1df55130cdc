"""Tests for command interpretation and dispatch."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from tickbridge.bridge.connection import ConnectionManager
from tickbridge.bridge.interpreter import CommandInterpreter
from tickbridge.bridge.results import IoResult, IoStatus
from tickbridge.config.defaults import InterpreterParams, TradingParams
from tickbridge.host.paper import PaperTradingHost
from tickbridge.models.commands import CloseCommand, InvalidCommand, OrderCommand
from tickbridge.models.trading import OrderResult, Side


@pytest.fixture
def connection():
    conn = MagicMock(spec=ConnectionManager)
    conn.is_connected.return_value = True
    conn.read_chunk.return_value = IoResult(status=IoStatus.WOULD_BLOCK)
    return conn


@pytest.fixture
def interpreter(connection, fake_host) -> CommandInterpreter:
    return CommandInterpreter(connection, fake_host)


def feed_chunks(connection, *chunks: bytes) -> None:
    connection.read_chunk.side_effect = [
        IoResult(status=IoStatus.OK, data=chunk) for chunk in chunks
    ]


class TestOrders:
    """Test BUY and SELL dispatch."""

    def test_buy_with_stop_loss_and_take_profit(self, interpreter, fake_host):
        command = interpreter.handle_command("BUY 1.5 10 20")

        assert isinstance(command, OrderCommand)
        assert fake_host.orders == [
            (Side.BUY, "EURUSD", Decimal("150000"), "XXX", Decimal("10"), Decimal("20"))
        ]
        assert fake_host.messages == ["Order sent: BUY 1.5 lots SL=10 TP=20 Label=XXX"]

    def test_sell_without_protection(self, interpreter, fake_host):
        interpreter.handle_command("SELL 0.1")

        assert fake_host.orders == [
            (Side.SELL, "EURUSD", Decimal("10000"), "XXX", None, None)
        ]
        assert fake_host.messages == ["Order sent: SELL 0.1 lots SL=none TP=none Label=XXX"]

    def test_uses_configured_symbol_and_label(self, connection, fake_host):
        interpreter = CommandInterpreter(
            connection, fake_host, TradingParams(symbol="GBPUSD", position_label="BOT1")
        )

        interpreter.handle_command("BUY 2")

        side, symbol, _, label, _, _ = fake_host.orders[0]
        assert (side, symbol, label) == (Side.BUY, "GBPUSD", "BOT1")

    def test_rejected_order_is_logged(self, interpreter, fake_host):
        fake_host.execute_market_order = MagicMock(
            return_value=OrderResult(is_successful=False, error="Market closed")
        )

        interpreter.handle_command("BUY 1")

        assert fake_host.messages[-1] == "Order rejected: Market closed"
        assert interpreter.get_stats()["orders_failed"] == 1

    def test_zero_lots_reach_host_and_host_rejects(self, connection):
        host = PaperTradingHost(seed=1)
        interpreter = CommandInterpreter(connection, host)

        command = interpreter.handle_command("SELL 0")

        assert isinstance(command, OrderCommand)
        assert host.positions == []
        assert host.messages[-1] == "Order rejected: Volume must be positive"
        assert interpreter.get_stats()["orders_failed"] == 1


class TestInvalidLines:
    """Test malformed lines are logged and dropped."""

    def test_invalid_lot_size(self, interpreter, fake_host):
        command = interpreter.handle_command("BUY abc")

        assert isinstance(command, InvalidCommand)
        assert fake_host.orders == []
        assert fake_host.messages == ["Invalid lot size: abc"]

    def test_unknown_command(self, interpreter, fake_host):
        interpreter.handle_command("HOLD 1")

        assert fake_host.messages == ["Unknown command: HOLD 1"]
        assert interpreter.get_stats()["commands_invalid"] == 1

    def test_too_few_tokens(self, interpreter, fake_host):
        interpreter.handle_command("SELL")
        assert fake_host.messages == ["Invalid command: SELL"]


class TestClose:
    """Test CLOSE dispatch."""

    def test_closes_only_matching_label_and_symbol(self, interpreter, fake_host, make_position):
        first = make_position()
        second = make_position(side=Side.SELL)
        other_label = make_position(label="OTHER")
        other_symbol = make_position(symbol="USDJPY")
        fake_host.positions = [first, other_label, second, other_symbol]

        command = interpreter.handle_command("CLOSE")

        assert command == CloseCommand()
        assert fake_host.closed == [first, second]
        assert fake_host.positions == [other_label, other_symbol]
        assert fake_host.messages == [
            "Close command executed: 2 position(s) closed with label 'XXX'"
        ]

    def test_close_with_nothing_open(self, interpreter, fake_host):
        interpreter.handle_command("close")
        assert fake_host.messages == [
            "Close command executed: 0 position(s) closed with label 'XXX'"
        ]

    def test_failed_close_not_counted(self, interpreter, fake_host, make_position):
        fake_host.positions = [make_position(), make_position()]
        results = iter([
            OrderResult(is_successful=False, error="Locked"),
            OrderResult(is_successful=True),
        ])
        fake_host.close_position = MagicMock(side_effect=lambda position: next(results))

        interpreter.handle_command("CLOSE")

        assert fake_host.close_position.call_count == 2
        assert fake_host.messages == [
            "Close command executed: 1 position(s) closed with label 'XXX'"
        ]


class TestHostErrors:
    """Test host failures stay at the line level."""

    def test_host_exception_logged_and_next_line_runs(self, connection, interpreter, fake_host):
        fake_host.quantity_to_volume = MagicMock(side_effect=[RuntimeError("symbol not loaded"),
                                                              Decimal("100000")])
        feed_chunks(connection, b"BUY 1\nSELL 1\n")

        dispatched = interpreter.poll_and_dispatch()

        assert dispatched == 2
        assert fake_host.messages[0] == "Command error: symbol not loaded"
        assert fake_host.orders[0][0] == Side.SELL
        assert interpreter.get_stats()["command_errors"] == 1


class TestPollAndDispatch:
    """Test reading and reassembling inbound lines."""

    def test_lines_dispatched_in_arrival_order(self, connection, interpreter, fake_host):
        feed_chunks(connection, b"BUY 1\nSELL 2\n")

        assert interpreter.poll_and_dispatch() == 2
        assert [order[0] for order in fake_host.orders] == [Side.BUY, Side.SELL]

    def test_partial_line_completed_on_later_cycle(self, connection, interpreter, fake_host):
        feed_chunks(connection, b"BUY 1\nSE", b"LL 2\n")

        assert interpreter.poll_and_dispatch() == 1
        assert interpreter.framer.buffer == b"SE"
        assert interpreter.poll_and_dispatch() == 1
        assert [order[0] for order in fake_host.orders] == [Side.BUY, Side.SELL]

    def test_reads_one_chunk_per_cycle(self, connection, interpreter):
        interpreter.poll_and_dispatch()
        connection.read_chunk.assert_called_once_with(1024)

    def test_custom_chunk_size(self, connection, fake_host):
        interpreter = CommandInterpreter(connection, fake_host,
                                         params=InterpreterParams(read_chunk_size=64))
        interpreter.poll_and_dispatch()
        connection.read_chunk.assert_called_once_with(64)

    def test_blank_lines_never_dispatched(self, connection, interpreter, fake_host):
        feed_chunks(connection, b"\n   \r\n\n")
        interpreter.handle_command = MagicMock()

        assert interpreter.poll_and_dispatch() == 0
        interpreter.handle_command.assert_not_called()

    def test_nothing_waiting(self, interpreter, fake_host):
        assert interpreter.poll_and_dispatch() == 0
        assert fake_host.messages == []

    def test_not_connected_skips_read(self, connection, interpreter):
        connection.is_connected.return_value = False

        assert interpreter.poll_and_dispatch() == 0
        connection.read_chunk.assert_not_called()

    def test_peer_closed_read(self, connection, interpreter):
        connection.read_chunk.return_value = IoResult(status=IoStatus.CLOSED)
        assert interpreter.poll_and_dispatch() == 0

    def test_reset_drops_partial_line(self, connection, interpreter, fake_host):
        feed_chunks(connection, b"BUY", b" 1\nCLOSE\n")
        interpreter.poll_and_dispatch()

        interpreter.reset()
        interpreter.poll_and_dispatch()

        assert fake_host.orders == []
        assert fake_host.messages == [
            "Invalid command: 1",
            "Close command executed: 0 position(s) closed with label 'XXX'",
        ]
