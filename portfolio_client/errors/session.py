"""
Session and state error classifications.

These exceptions represent faults in the connection lifecycle or misuse of
the stateful components. They are not retried by the client.
"""

from typing import Optional, Dict, Any


class SessionError(Exception):
    """Base class for unrecoverable session and state faults."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class HandshakeError(SessionError):
    """The transport rejected or failed the connection handshake."""

    def __init__(self, message: str, reason: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.reason = reason


class NotConnectedError(SessionError):
    """An operation needed a live session but none was established."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation


class SnapshotError(SessionError):
    """A snapshot was loaded into a book that already holds positions."""

    def __init__(self, message: str, ticker: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.ticker = ticker


class DialogStateError(SessionError):
    """Invalid trade dialog transition."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class ConfigurationError(SessionError):
    """Client configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
