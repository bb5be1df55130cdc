#!/usr/bin/env python3
"""
Tick Consumer Example - TickBridge

Minimal consumer process for the bridge. It listens for the bridge's TCP
connection, prints incoming ticks, and after a few ticks sends a BUY command
followed later by a CLOSE. It shows how to:
- Accept the bridge connection
- Decode tick lines
- Send text commands back

Run in one terminal:   python examples/tick_consumer.py
Then in another:       python -m tickbridge --max-ticks 40 --tick-interval 0.1
"""

import socket
from decimal import Decimal

from tickbridge.models.commands import CloseCommand, OrderCommand
from tickbridge.models.trading import Side
from tickbridge.wire.commands import format_command
from tickbridge.wire.framing import LineFramer, encode_line
from tickbridge.wire.tick_codec import TickDecodeError, decode_tick

HOST = "127.0.0.1"
PORT = 9001
BUY_AFTER_TICKS = 5
CLOSE_AFTER_TICKS = 20


def send_command(conn: socket.socket, command) -> None:
    text = format_command(command)
    conn.sendall(encode_line(text))
    print(f"➡️  Sent command: {text}")


def serve_once() -> None:
    """Accept one bridge connection and consume ticks until it closes."""
    with socket.create_server((HOST, PORT)) as server:
        print(f"🔌 Waiting for bridge on {HOST}:{PORT}...")
        conn, address = server.accept()

        with conn:
            print(f"✅ Bridge connected from {address[0]}:{address[1]}")
            framer = LineFramer()
            tick_count = 0

            while True:
                data = conn.recv(4096)
                if not data:
                    print("🔚 Bridge disconnected")
                    break

                for line in framer.feed(data):
                    try:
                        tick = decode_tick(line)
                    except TickDecodeError as e:
                        print(f"⚠️  Bad line: {e}")
                        continue

                    tick_count += 1
                    print(f"📈 {tick.symbol} {tick.timestamp.isoformat()} "
                          f"bid={tick.bid} ask={tick.ask} spread={tick.spread}")

                    if tick_count == BUY_AFTER_TICKS:
                        send_command(conn, OrderCommand(
                            side=Side.BUY,
                            lots=Decimal("0.10"),
                            stop_loss_pips=Decimal("10"),
                            take_profit_pips=Decimal("20"),
                        ))
                    elif tick_count == CLOSE_AFTER_TICKS:
                        send_command(conn, CloseCommand())


def main() -> None:
    print("🚀 TickBridge consumer example")
    try:
        serve_once()
    except KeyboardInterrupt:
        print("\n👋 Stopped")


if __name__ == "__main__":
    main()
