"""
Configuration error raised before the bridge starts.
"""

from typing import Any, Optional


class ConfigurationError(Exception):
    """Merged configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = errors or []
        self.recoverable = False
