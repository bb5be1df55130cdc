"""Pytest configuration and shared fixtures."""

import socket
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from tickbridge.config.defaults import BridgeConfig, EndpointParams, get_default_config
from tickbridge.models.trading import OrderResult, Position, Quote, Side


class FakeTradingHost:
    """Recording trading host with a fixed quote."""

    def __init__(self, quote: Optional[Quote] = None, lot_size: Decimal = Decimal("100000")):
        self.quote = quote or Quote(
            bid=Decimal("1.23456"),
            ask=Decimal("1.23478"),
            server_time=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        self.lot_size = lot_size
        self.quote_requests = 0
        self.orders: list[tuple] = []
        self.positions: list[Position] = []
        self.closed: list[Position] = []
        self.messages: list[str] = []

    def current_tick(self, symbol: str) -> Quote:
        self.quote_requests += 1
        return self.quote

    def quantity_to_volume(self, symbol: str, lots: Decimal) -> Decimal:
        return lots * self.lot_size

    def execute_market_order(self, side, symbol, volume, label,
                             stop_loss_pips=None, take_profit_pips=None) -> OrderResult:
        self.orders.append((side, symbol, volume, label, stop_loss_pips, take_profit_pips))
        return OrderResult(is_successful=True)

    def find_open_positions(self, label: str, symbol: str) -> list[Position]:
        return [p for p in self.positions if p.label == label and p.symbol == symbol]

    def close_position(self, position: Position) -> OrderResult:
        self.positions.remove(position)
        self.closed.append(position)
        return OrderResult(is_successful=True, position=position)

    def log(self, message: str) -> None:
        self.messages.append(message)


class ManualClock:
    """Monotonic clock stand-in advanced by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ConsumerServer:
    """Loopback TCP listener playing the consumer process."""

    def __init__(self) -> None:
        self.listener = socket.create_server(("127.0.0.1", 0))
        self.listener.settimeout(2.0)
        self.port = self.listener.getsockname()[1]
        self.connections: list[socket.socket] = []

    def accept(self) -> socket.socket:
        conn, _ = self.listener.accept()
        conn.settimeout(2.0)
        self.connections.append(conn)
        return conn

    def close(self) -> None:
        for conn in self.connections:
            conn.close()
        self.listener.close()


def recv_lines(conn: socket.socket, count: int) -> list[str]:
    """Read from a consumer-side socket until ``count`` lines arrived."""
    data = b""
    while data.count(b"\n") < count:
        chunk = conn.recv(4096)
        if not chunk:
            break
        data += chunk
    return data.decode("utf-8").splitlines()


@pytest.fixture
def fake_host() -> FakeTradingHost:
    return FakeTradingHost()


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def consumer_server():
    server = ConsumerServer()
    yield server
    server.close()


@pytest.fixture
def make_position():
    """Factory for host positions."""
    counter = iter(range(1, 1000))

    def _make(label: str = "XXX", symbol: str = "EURUSD", side: Side = Side.BUY,
              volume: Decimal = Decimal("100000")) -> Position:
        return Position(position_id=next(counter), symbol=symbol, label=label,
                        side=side, volume=volume)

    return _make


@pytest.fixture
def bridge_config(consumer_server) -> BridgeConfig:
    """Default config pointed at the loopback consumer."""
    config = get_default_config()
    return replace(
        config,
        endpoint=EndpointParams(host="127.0.0.1", port=consumer_server.port,
                                connect_timeout_seconds=1.0, io_timeout_seconds=1.0),
    )


@pytest.fixture
def read_lines():
    return recv_lines
