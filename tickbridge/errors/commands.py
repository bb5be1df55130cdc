"""
Command error classifications for inbound text commands.

These are data-quality errors for a single inbound line. The parser raises
them internally and converts them to an InvalidCommand; the offending line is
logged and dropped while the connection stays up.
"""

from typing import Optional


class CommandError(Exception):
    """Base class for malformed inbound command lines."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text
        self.recoverable = True


class TooFewTokensError(CommandError):
    """Command keyword that needs parameters arrived without them."""

    def __init__(self, message: str, token_count: int = 0, **kwargs):
        super().__init__(message, **kwargs)
        self.token_count = token_count


class InvalidLotSizeError(CommandError):
    """Lot size token is not a finite decimal."""

    def __init__(self, message: str, token: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.token = token


class UnknownCommandError(CommandError):
    """Keyword is not one of CLOSE, BUY or SELL."""

    def __init__(self, message: str, keyword: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.keyword = keyword
