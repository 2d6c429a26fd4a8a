"""
Session controller.

Owns the transport session and routes inbound messages to the position book
and the notification log:

    positions snapshot → PositionBook.load_snapshot (first message only)
    price quote        → PositionBook.apply_quote
    position update    → PositionBook.apply_position_update + NotificationLog
    errors             → NotificationLog

Handlers run one at a time on the transport's delivery thread, so the book
and the log need no locking.
"""

from typing import Any, Callable, Optional

from .config.defaults import ClientConfig, get_default_config
from .data.models import Session, TradeRequest
from .data.parsers import (
    decode_text,
    encode_trade_request,
    parse_position_update,
    parse_quote,
    parse_snapshot,
)
from .errors import HandshakeError, NotConnectedError, PayloadError, SnapshotError
from .logging.config import get_session_logger
from .portfolio.book import PositionBook
from .portfolio.notifications import NotificationLog
from .transport.base import BaseTransport, MessageHandler, Subscription
from .view.base import PortfolioView

session_logger = get_session_logger(__name__)

POSITION_UPDATE_PREFIX = "Position update "
ERROR_PREFIX = "Error "


class SessionController:
    """
    Connection lifecycle and message routing for one client.

    The controller is the only component that talks to the transport. It is
    constructed by the caller with its collaborators and passed by reference
    to the trade workflow.
    """

    def __init__(
        self,
        transport: BaseTransport,
        view: Optional[PortfolioView] = None,
        config: Optional[ClientConfig] = None,
        book: Optional[PositionBook] = None,
        notifications: Optional[NotificationLog] = None
    ) -> None:
        self.logger = session_logger
        self.transport = transport
        self.view = view or PortfolioView()
        self.config = config or get_default_config()
        self.book = book or PositionBook(view=self.view, display=self.config.display)
        self.notifications = notifications or NotificationLog()

        self._session: Optional[Session] = None
        self._subscriptions: list[Subscription] = []
        self._snapshot_received = False
        self.last_error: Optional[HandshakeError] = None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def username(self) -> Optional[str]:
        return self._session.identity if self._session else None

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    def connect(self) -> None:
        """Start the handshake; subscriptions are issued once it succeeds."""
        self.logger.info("Connecting to transport")
        self.transport.connect(
            self._on_connected,
            self._on_connect_failed,
            session_params=self.config.session
        )

    def disconnect(self) -> None:
        """
        Tear down the transport session and stop dispatch.

        Book and notification state are left in place for display; the next
        successful handshake rebuilds the book from a fresh snapshot.
        """
        session = self._session
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []
        self._session = None

        self.transport.disconnect()
        self.logger.info(
            "Disconnected",
            identity=session.identity if session else None
        )

    def logout(self) -> None:
        """End the session; navigation away is the caller's concern."""
        self.disconnect()

    def submit_trade(self, request: TradeRequest) -> None:
        """
        Send a trade request on the outbound channel.

        Fire-and-forget: any effect arrives later as a position update or
        error on the session's own channels.

        Raises:
            NotConnectedError: If there is no live session
        """
        if self._session is None:
            raise NotConnectedError(
                "Cannot submit trade without a live session",
                operation="submit_trade",
                context=request.to_payload()
            )

        self.transport.send(self.config.channels.trade_request, encode_trade_request(request))
        self.logger.info(
            "Trade request sent",
            channel=self.config.channels.trade_request,
            action=request.action.value,
            ticker=request.ticker,
            shares=request.shares
        )

    def push_notification(self, text: str) -> None:
        self.notifications.push(text)
        self.view.on_notification(text)

    def _on_connected(self, session: Session) -> None:
        # A repeated handshake replaces the previous subscriptions
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

        self._session = session
        self.last_error = None
        self._snapshot_received = False
        self.book.reset()

        self.logger.info(
            "Connected",
            identity=session.identity,
            routing_suffix=session.routing_suffix
        )

        channels = self.config.channels
        self._subscribe(session, channels.positions_snapshot, self._handle_snapshot)
        self._subscribe(session, channels.price_quote, self._handle_quote)
        self._subscribe(
            session,
            channels.position_update_for(session.routing_suffix),
            self._handle_position_update
        )
        self._subscribe(
            session,
            channels.errors_for(session.routing_suffix),
            self._handle_error
        )

    def _on_connect_failed(self, error: Any) -> None:
        # No retry here; reconnecting means calling connect() again.
        self.last_error = HandshakeError(
            f"Transport handshake failed: {error}",
            reason=error
        )
        self.logger.error(
            "Transport protocol error",
            error=str(error),
            error_type=type(error).__name__
        )

    def _subscribe(
        self,
        session: Session,
        channel: str,
        handler: Callable[[bytes], None]
    ) -> None:
        subscription = self.transport.subscribe(channel, self._guarded(session, channel, handler))
        self._subscriptions.append(subscription)
        self.logger.debug("Subscribed", channel=channel)

    def _guarded(
        self,
        session: Session,
        channel: str,
        handler: Callable[[bytes], None]
    ) -> MessageHandler:
        """Wrap a handler so it only runs for the session that subscribed it."""
        def dispatch(payload: bytes) -> None:
            if self._session is not session:
                self.logger.debug("Dropped message for stale session", channel=channel)
                return
            try:
                handler(payload)
            except PayloadError as e:
                self.logger.warning(
                    "Dropped malformed message",
                    channel=channel,
                    error=str(e),
                    error_type=type(e).__name__,
                    context=e.context
                )
        return dispatch

    def _handle_snapshot(self, payload: bytes) -> None:
        if self._snapshot_received:
            self.logger.warning("Ignoring repeated positions snapshot")
            return

        records = parse_snapshot(payload)
        try:
            self.book.load_snapshot(records)
        except SnapshotError as e:
            self.logger.error(
                "Rejected positions snapshot",
                error=str(e),
                ticker=e.ticker
            )
            return
        self._snapshot_received = True

    def _handle_quote(self, payload: bytes) -> None:
        quote = parse_quote(payload)
        self.book.apply_quote(quote.ticker, quote.price)

    def _handle_position_update(self, payload: bytes) -> None:
        text = decode_text(payload)
        update = parse_position_update(payload)
        self.push_notification(POSITION_UPDATE_PREFIX + text)
        self.book.apply_position_update(update.ticker, update.shares)

    def _handle_error(self, payload: bytes) -> None:
        self.push_notification(ERROR_PREFIX + decode_text(payload))
