"""Unit tests for the session controller."""

import pytest
from decimal import Decimal

import orjson

from portfolio_client.config.defaults import ChannelParams, get_default_config
from portfolio_client.config.loader import ConfigLoader
from portfolio_client.data.models import Session, TradeAction, TradeRequest
from portfolio_client.errors import HandshakeError, NotConnectedError
from portfolio_client.session import SessionController
from portfolio_client.transport.memory import InMemoryTransport


class TestConnect:
    """Test handshake and subscriptions."""

    def test_connect_exposes_session(self, controller):
        controller.connect()

        assert controller.is_connected
        assert controller.session == Session(identity="fabrice", routing_suffix="-user123")
        assert controller.username == "fabrice"

    def test_connect_issues_four_subscriptions(self, controller, transport):
        controller.connect()

        assert transport.channels() == [
            "/app/positions",
            "/topic/price.stock.*",
            "/queue/position-updates-user123",
            "/queue/errors-user123",
        ]

    def test_handshake_failure_is_logged_not_raised(self, view):
        transport = InMemoryTransport(handshake_error="Bad credentials")
        controller = SessionController(transport=transport, view=view)

        controller.connect()

        assert not controller.is_connected
        assert isinstance(controller.last_error, HandshakeError)
        assert controller.last_error.reason == "Bad credentials"
        assert transport.subscriptions == []

    def test_configured_channel_names(self, transport, tmp_path):
        config = ConfigLoader.create(tmp_path).load({
            "channels": {"position_update": "/user/queue/updates", "errors": "/user/queue/errors"}
        })
        controller = SessionController(transport=transport, config=config)

        controller.connect()

        assert "/user/queue/updates-user123" in transport.channels()
        assert "/user/queue/errors-user123" in transport.channels()

    def test_configured_handshake_headers(self, tmp_path):
        config = ConfigLoader.create(tmp_path).load({
            "session": {"identity_header": "login", "suffix_header": "route"}
        })
        transport = InMemoryTransport(headers={"login": "bob", "route": "-b7"})
        controller = SessionController(transport=transport, config=config)

        controller.connect()

        assert controller.username == "bob"
        assert "/queue/errors-b7" in transport.channels()

    def test_repeated_connect_keeps_four_subscriptions(self, controller, transport):
        controller.connect()
        first = list(transport.subscriptions)

        controller.connect()

        assert len(transport.channels()) == 4
        assert all(not s.active for s in first)


class TestRouting:
    """Test inbound message routing."""

    def test_snapshot_loads_book(self, connected_controller, view):
        rows = list(connected_controller.book.rows())

        assert [p.ticker for p in rows] == ["ABC", "XYZ", "QQQ"]
        assert rows[1].price == Decimal("25.5")
        view.on_positions_loaded.assert_called_once()

    def test_repeated_snapshot_is_ignored(self, connected_controller, transport):
        transport.publish("/app/positions", orjson.dumps([
            {"ticker": "NEW", "company": "New Co", "price": 1.0, "shares": 1}
        ]))

        assert "NEW" not in connected_controller.book
        assert len(connected_controller.book) == 3

    def test_quote_matches_wildcard_channel(self, connected_controller, transport):
        delivered = transport.publish(
            "/topic/price.stock.ABC", orjson.dumps({"ticker": "ABC", "price": 12.0})
        )

        assert delivered == 1
        position = connected_controller.book.get("ABC")
        assert position.price == Decimal("12.0")
        assert position.formatted_change == "20.00"

    def test_quote_is_not_logged(self, connected_controller, transport):
        transport.publish("/topic/price.stock.ABC", orjson.dumps({"ticker": "ABC", "price": 12.0}))

        assert len(connected_controller.notifications) == 0

    def test_position_update_applies_and_logs(self, connected_controller, transport, view):
        body = '{"ticker":"ABC","shares":8}'

        transport.publish("/queue/position-updates-user123", body)

        assert connected_controller.book.get("ABC").shares == 8
        assert connected_controller.notifications.texts() == ["Position update " + body]
        view.on_notification.assert_called_once_with("Position update " + body)
        view.on_position_changed.assert_called_once_with("ABC", 8)

    def test_position_update_for_unknown_ticker_is_logged_only(self, connected_controller,
                                                               transport):
        transport.publish("/queue/position-updates-user123", '{"ticker":"ZZZ","shares":8}')

        assert "ZZZ" not in connected_controller.book
        assert len(connected_controller.notifications) == 1

    def test_error_is_logged_only(self, connected_controller, transport):
        before = [(p.price, p.shares) for p in connected_controller.book.rows()]

        transport.publish("/queue/errors-user123", "Trade rejected: market closed")

        assert connected_controller.notifications.texts() == [
            "Error Trade rejected: market closed"
        ]
        assert [(p.price, p.shares) for p in connected_controller.book.rows()] == before

    def test_other_sessions_private_channels_not_received(self, connected_controller, transport):
        delivered = transport.publish("/queue/errors-someoneelse", "not for us")

        assert delivered == 0
        assert len(connected_controller.notifications) == 0

    def test_malformed_message_is_dropped(self, connected_controller, transport):
        transport.publish("/topic/price.stock.ABC", b"{not json")
        transport.publish("/topic/price.stock.ABC", orjson.dumps({"ticker": "ABC"}))
        transport.publish("/queue/position-updates-user123", orjson.dumps(
            {"ticker": "ABC", "shares": -3}
        ))

        position = connected_controller.book.get("ABC")
        assert position.price == Decimal("10.0")
        assert position.shares == 5
        assert len(connected_controller.notifications) == 0

        transport.publish("/topic/price.stock.ABC", orjson.dumps({"ticker": "ABC", "price": 11}))
        assert position.price == Decimal("11")

    def test_malformed_snapshot_can_be_followed_by_valid_one(self, controller, transport,
                                                             snapshot_payload):
        controller.connect()

        transport.publish("/app/positions", b'{"not": "a list"}')
        transport.publish("/app/positions", snapshot_payload)

        assert len(controller.book) == 3


class TestDisconnect:
    """Test teardown and reconnect."""

    def test_disconnect_stops_dispatch_and_keeps_state(self, connected_controller, transport):
        connected_controller.disconnect()

        delivered = transport.publish(
            "/topic/price.stock.ABC", orjson.dumps({"ticker": "ABC", "price": 99.0})
        )

        assert delivered == 0
        assert not connected_controller.is_connected
        assert connected_controller.session is None
        assert connected_controller.book.get("ABC").price == Decimal("10.0")
        assert not transport.connected

    def test_stale_handler_drops_message(self, connected_controller, transport):
        handlers = [s.handler for s in transport.subscriptions]
        connected_controller.disconnect()

        handlers[1](orjson.dumps({"ticker": "ABC", "price": 99.0}))

        assert connected_controller.book.get("ABC").price == Decimal("10.0")

    def test_reconnect_rebuilds_from_new_snapshot(self, connected_controller, transport):
        connected_controller.push_notification("kept")
        connected_controller.disconnect()

        connected_controller.connect()
        assert len(connected_controller.book) == 0

        transport.publish("/app/positions", orjson.dumps([
            {"ticker": "ABC", "company": "Acme", "price": 11.0, "shares": 2}
        ]))

        assert [p.ticker for p in connected_controller.book.rows()] == ["ABC"]
        assert connected_controller.notifications.texts() == ["kept"]

    def test_logout_disconnects(self, connected_controller):
        connected_controller.logout()

        assert not connected_controller.is_connected


class TestSubmitTrade:
    """Test outbound trade requests."""

    def test_submit_sends_json(self, connected_controller, transport):
        request = TradeRequest(action=TradeAction.SELL, ticker="XYZ", shares=4)

        connected_controller.submit_trade(request)

        assert transport.sent == [
            ("/app/trade", orjson.dumps({"action": "Sell", "ticker": "XYZ", "shares": 4}))
        ]

    def test_submit_does_not_touch_state(self, connected_controller):
        connected_controller.submit_trade(
            TradeRequest(action=TradeAction.SELL, ticker="XYZ", shares=4)
        )

        assert connected_controller.book.get("XYZ").shares == 10

    def test_submit_without_session_raises(self, controller, transport):
        with pytest.raises(NotConnectedError):
            controller.submit_trade(TradeRequest(action=TradeAction.BUY, ticker="ABC", shares=1))

        assert transport.sent == []


def test_default_channels_match_config():
    assert get_default_config().channels == ChannelParams()
