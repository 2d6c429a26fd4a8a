"""
Trade validation error classifications.

Raised by the trade workflow when a draft cannot be submitted. The message
text is what the dialog shows to the user.
"""

from typing import Any, Optional


class TradeValidationError(Exception):
    """Base class for user-correctable trade draft problems."""

    def __init__(self, message: str, ticker: Optional[str] = None,
                 shares_requested: Any = None):
        super().__init__(message)
        self.ticker = ticker
        self.shares_requested = shares_requested
        self.recoverable = True


class InvalidQuantity(TradeValidationError):
    """Requested share count is not a positive integer."""

    def __init__(self, ticker: Optional[str] = None, shares_requested: Any = None):
        super().__init__("Invalid number", ticker=ticker,
                         shares_requested=shares_requested)


class InsufficientShares(TradeValidationError):
    """Sell request exceeds the shares currently held."""

    def __init__(self, ticker: Optional[str] = None, shares_requested: Any = None,
                 available: Optional[int] = None):
        super().__init__("Not enough shares", ticker=ticker,
                         shares_requested=shares_requested)
        self.available = available
