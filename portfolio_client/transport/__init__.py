"""
Transport module.

The abstract publish/subscribe contract the client core relies on, plus an
in-memory loopback implementation for tests and local demos.
"""

from .base import BaseTransport, MessageHandler, Subscription
from .memory import InMemoryTransport

__all__ = ["BaseTransport", "MessageHandler", "Subscription", "InMemoryTransport"]
