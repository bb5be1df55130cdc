"""Default configuration parameters for the TickBridge bridge."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EndpointParams:
    """TCP endpoint of the consumer process."""
    host: str = "127.0.0.1"
    port: int = 9001
    connect_timeout_seconds: float = 2.0           # Keep the tick callback from stalling
    io_timeout_seconds: float = 1.0                # Applied to send/recv once connected

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ReconnectParams:
    """Fixed-interval reconnect policy."""
    interval_seconds: int = 3
    max_attempts: Optional[int] = None             # None retries forever


@dataclass(frozen=True)
class TradingParams:
    """Instrument and position tagging on the trading host."""
    symbol: str = "EURUSD"
    position_label: str = "XXX"


@dataclass(frozen=True)
class PublisherParams:
    """Outbound tick publishing parameters."""
    log_every: int = 50                            # Progress log cadence in sent ticks
    price_digits: int = 5


@dataclass(frozen=True)
class InterpreterParams:
    """Inbound command reading parameters."""
    read_chunk_size: int = 1024                    # Bytes read per driver cycle


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class BridgeConfig:
    """Complete bridge configuration."""
    endpoint: EndpointParams
    reconnect: ReconnectParams
    trading: TradingParams
    publisher: PublisherParams
    interpreter: InterpreterParams
    logging: LoggingParams


def get_default_config() -> BridgeConfig:
    """Get the default configuration instance."""
    return BridgeConfig(
        endpoint=EndpointParams(),
        reconnect=ReconnectParams(),
        trading=TradingParams(),
        publisher=PublisherParams(),
        interpreter=InterpreterParams(),
        logging=LoggingParams(),
    )
