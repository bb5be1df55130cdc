"""Command line entry point: ``python -m tickbridge``.

Runs a bridge session against the in-memory paper host, driven by a timer.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from .bridge.session import BridgeSession
from .config.loader import ConfigLoader
from .errors import ConfigurationError
from .host.paper import PaperTradingHost
from .logging.config import configure_logging
from .runner import TimerTickSource


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tickbridge",
        description="Stream ticks to a TCP consumer and execute the commands it sends back",
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML config file (default: config/bridge.yaml)")
    parser.add_argument("--host", default=None, help="Consumer host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="Consumer port (default: 9001)")
    parser.add_argument("--reconnect-seconds", type=int, default=None,
                        help="Fixed reconnect interval in seconds (default: 3)")
    parser.add_argument("--max-reconnects", type=int, default=None,
                        help="Stop reconnecting after this many consecutive failures")
    parser.add_argument("--symbol", default=None, help="Instrument symbol (default: EURUSD)")
    parser.add_argument("--label", default=None, help="Position label (default: XXX)")
    parser.add_argument("--tick-interval", type=float, default=0.25,
                        help="Seconds between synthetic ticks (default: 0.25)")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks (default: run until Ctrl-C)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the paper quote feed")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit JSON log lines")
    parser.add_argument("--check", action="store_true",
                        help="Validate the configuration and exit")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Map command line flags onto config sections, skipping unset flags."""
    mapping = {
        "endpoint": {"host": args.host, "port": args.port},
        "reconnect": {"interval_seconds": args.reconnect_seconds, "max_attempts": args.max_reconnects},
        "trading": {"symbol": args.symbol, "position_label": args.label},
        "logging": {"level": args.log_level, "format_json": args.json_logs},
    }
    return {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in mapping.items()
        if any(value is not None for value in values.values())
    }


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config).load(overrides_from_args(args))
    except ConfigurationError as e:
        print(f"Configuration invalid: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error.field}: {error.message} (value: {error.value!r})", file=sys.stderr)
        return 1

    if args.check:
        print(f"Configuration valid: {config.endpoint.address} "
              f"symbol={config.trading.symbol} label={config.trading.position_label}")
        return 0

    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    host = PaperTradingHost(seed=args.seed)
    session = BridgeSession(host, config)
    ticks = TimerTickSource(args.tick_interval).run(session, max_ticks=args.max_ticks)

    structlog.get_logger(__name__).info("Bridge finished", ticks_delivered=ticks)
    return 0


if __name__ == "__main__":
    sys.exit(main())
