"""In-memory loopback transport."""

from fnmatch import fnmatchcase
from typing import Any, Mapping, Optional, Union

import structlog

from ..config.defaults import SessionParams
from ..data.models import Session
from .base import (
    BaseTransport,
    FailureCallback,
    MessageHandler,
    SessionCallback,
    Subscription,
)

logger = structlog.get_logger(__name__)


class InMemoryTransport(BaseTransport):
    """
    Transport that delivers published frames synchronously to local handlers.

    Subscriptions may use ``*`` wildcards, matched against the published
    channel name. Frames sent by the client are recorded in ``sent`` rather
    than looped back.
    """

    def __init__(
        self,
        headers: Optional[Mapping[str, Any]] = None,
        handshake_error: Optional[Any] = None
    ) -> None:
        self.headers = dict(headers or {"user-name": "guest", "queue-suffix": "-guest"})
        self.handshake_error = handshake_error
        self.connected = False
        self.subscriptions: list[Subscription] = []
        self.sent: list[tuple[str, bytes]] = []
        self.logger = logger

    def connect(
        self,
        on_success: SessionCallback,
        on_failure: FailureCallback,
        session_params: Optional[SessionParams] = None
    ) -> None:
        if self.handshake_error is not None:
            self.logger.debug("Loopback handshake rejected", error=str(self.handshake_error))
            on_failure(self.handshake_error)
            return

        self.connected = True
        on_success(Session.from_headers(self.headers, session_params))

    def subscribe(self, channel: str, handler: MessageHandler) -> Subscription:
        subscription = Subscription(
            channel=channel,
            handler=handler,
            _on_unsubscribe=self._remove,
        )
        self.subscriptions.append(subscription)
        return subscription

    def send(self, channel: str, payload: bytes) -> None:
        self.sent.append((channel, payload))

    def disconnect(self) -> None:
        self.connected = False
        for subscription in list(self.subscriptions):
            subscription.unsubscribe()

    def publish(self, channel: str, payload: Union[bytes, str]) -> int:
        """
        Deliver a frame to every active subscription matching the channel.

        Returns:
            Number of handlers the frame was delivered to
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")

        delivered = 0
        for subscription in list(self.subscriptions):
            if subscription.active and fnmatchcase(channel, subscription.channel):
                subscription.handler(payload)
                delivered += 1
        return delivered

    def channels(self) -> list[str]:
        """Channels with an active subscription, in subscription order."""
        return [s.channel for s in self.subscriptions if s.active]

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self.subscriptions:
            self.subscriptions.remove(subscription)
