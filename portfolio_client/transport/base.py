"""Base classes for publish/subscribe transports."""

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..config.defaults import SessionParams
from ..data.models import Session

MessageHandler = Callable[[bytes], None]
SessionCallback = Callable[[Session], None]
FailureCallback = Callable[[Any], None]

_subscription_ids = itertools.count(1)


@dataclass
class Subscription:
    """Handle for one active channel subscription."""
    channel: str
    handler: MessageHandler
    subscription_id: int = field(default_factory=lambda: next(_subscription_ids))
    active: bool = True
    _on_unsubscribe: Optional[Callable[["Subscription"], None]] = field(
        default=None, repr=False, compare=False
    )

    def unsubscribe(self) -> None:
        """Stop delivery to this handler. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        if self._on_unsubscribe is not None:
            self._on_unsubscribe(self)


class BaseTransport(ABC):
    """
    Contract between the client core and the messaging session layer.

    Handshake, credentials, reconnect policy and framing belong to the
    transport. Deliveries within one channel arrive in order; no ordering is
    promised across channels.
    """

    @abstractmethod
    def connect(
        self,
        on_success: SessionCallback,
        on_failure: FailureCallback,
        session_params: Optional[SessionParams] = None
    ) -> None:
        """
        Perform the handshake and report the outcome through a callback.

        ``session_params`` names the handshake headers that carry the
        identity and the routing suffix.
        """
        pass

    @abstractmethod
    def subscribe(self, channel: str, handler: MessageHandler) -> Subscription:
        """Deliver every frame body on the channel to the handler."""
        pass

    @abstractmethod
    def send(self, channel: str, payload: bytes) -> None:
        """Publish one frame body on the channel."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Tear down the session."""
        pass
