"""
Logging configuration and utilities for the TickBridge bridge.
"""
from .config import configure_logging, get_bridge_logger, get_logger, log_host_diagnostic

__all__ = ["configure_logging", "get_bridge_logger", "get_logger", "log_host_diagnostic"]
