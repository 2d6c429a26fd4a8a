"""
Error classification for the portfolio client.

Inbound payload problems, session and state faults, and user-correctable
trade validation failures each have their own branch of the hierarchy so
callers can decide whether to drop, surface, or correct.
"""

from .payload import (
    PayloadError,
    MalformedPayloadError,
    MissingFieldError,
)
from .session import (
    SessionError,
    HandshakeError,
    NotConnectedError,
    SnapshotError,
    DialogStateError,
    ConfigurationError,
)
from .trade import (
    TradeValidationError,
    InvalidQuantity,
    InsufficientShares,
)

__all__ = [
    # Payload Errors
    "PayloadError",
    "MalformedPayloadError",
    "MissingFieldError",
    # Session Errors
    "SessionError",
    "HandshakeError",
    "NotConnectedError",
    "SnapshotError",
    "DialogStateError",
    "ConfigurationError",
    # Trade Validation
    "TradeValidationError",
    "InvalidQuantity",
    "InsufficientShares",
]
