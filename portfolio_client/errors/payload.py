"""
Inbound payload error classifications.

These exceptions describe messages that arrive over a subscription but cannot
be turned into records. They are recoverable: the offending message is dropped
and dispatch continues.
"""

from typing import Optional, Dict, Any


class PayloadError(Exception):
    """Base class for inbound payload issues that can be handled gracefully."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedPayloadError(PayloadError):
    """Payload exists but is not valid JSON or has the wrong shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class MissingFieldError(PayloadError):
    """Payload decoded but required fields are absent."""

    def __init__(self, message: str, missing_fields: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing_fields = missing_fields or []
