"""
Centralized logging configuration for the TickBridge bridge.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the bridge should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

if TYPE_CHECKING:
    from ..host.ports import TradingHost


def configure_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_bridge_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound with bridge context.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for bridge components
    """
    logger = get_logger(name)

    return logger.bind(subsystem="bridge")


def log_host_diagnostic(
    logger: FilteringBoundLogger,
    host: Optional["TradingHost"],
    level: str,
    message: str,
    event_name: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log an operator diagnostic and mirror it to the host's log stream.

    The structured event goes through structlog; the plain message is
    forwarded to ``host.log`` so it shows up where the host operator looks.

    Args:
        logger: Structlog logger instance
        host: Trading host whose log capability receives the message, if any
        level: Logger method name (debug, info, warning, error)
        message: Human-readable diagnostic line
        event_name: Short machine-friendly name of the diagnostic
        context: Additional context data
    """
    bound_logger = logger.bind(diagnostic=event_name)

    if context:
        bound_logger = bound_logger.bind(**context)

    getattr(bound_logger, level)(message)

    if host is None:
        return

    try:
        host.log(message)
    except Exception as e:
        logger.warning(
            "Host log forwarding failed",
            diagnostic=event_name,
            error=str(e),
            error_type=type(e).__name__
        )
