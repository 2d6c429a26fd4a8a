"""Tests for transport payload parsing."""

import pytest
from decimal import Decimal

import orjson

from portfolio_client.data.models import PositionRecord, PositionUpdate, Quote, TradeAction, TradeRequest
from portfolio_client.data.parsers import (
    decode_text,
    encode_trade_request,
    parse_json_payload,
    parse_position_update,
    parse_quote,
    parse_snapshot,
)
from portfolio_client.errors import MalformedPayloadError, MissingFieldError, PayloadError


class TestParseSnapshot:
    """Test snapshot parsing."""

    def test_parses_records_in_order(self, snapshot_payload):
        records = parse_snapshot(snapshot_payload)

        assert [r.ticker for r in records] == ["ABC", "XYZ", "QQQ"]
        assert records[0] == PositionRecord(
            ticker="ABC", company="Acme", price=Decimal("10.0"), shares=5
        )

    def test_empty_snapshot(self):
        assert parse_snapshot(b"[]") == []

    def test_snapshot_must_be_array(self):
        with pytest.raises(MalformedPayloadError) as exc_info:
            parse_snapshot(b'{"ticker": "ABC"}')

        assert exc_info.value.expected_format == "json array"

    def test_entry_missing_fields(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_snapshot(orjson.dumps([{"ticker": "ABC", "price": 1.0}]))

        assert exc_info.value.missing_fields == ["company", "shares"]

    def test_accepts_string_prices(self):
        records = parse_snapshot(orjson.dumps(
            [{"ticker": "ABC", "company": "Acme", "price": "10.25", "shares": 1}]
        ))

        assert records[0].price == Decimal("10.25")


class TestParseQuote:
    """Test price quote parsing."""

    def test_valid_quote(self):
        quote = parse_quote(b'{"ticker": "ABC", "price": 12.5}')

        assert quote == Quote(ticker="ABC", price=Decimal("12.5"))

    def test_float_price_keeps_its_short_form(self):
        quote = parse_quote(b'{"ticker": "ABC", "price": 0.1}')

        assert quote.price == Decimal("0.1")

    @pytest.mark.parametrize("price", ["abc", True, None, -1, [1]])
    def test_invalid_prices(self, price):
        with pytest.raises(MalformedPayloadError):
            parse_quote(orjson.dumps({"ticker": "ABC", "price": price}))

    def test_empty_ticker(self):
        with pytest.raises(MalformedPayloadError):
            parse_quote(b'{"ticker": "", "price": 1}')

    def test_invalid_json(self):
        with pytest.raises(MalformedPayloadError):
            parse_quote(b"{oops")


class TestParsePositionUpdate:
    """Test position update parsing."""

    def test_valid_update(self):
        assert parse_position_update(b'{"ticker": "ABC", "shares": 3}') == PositionUpdate(
            ticker="ABC", shares=3
        )

    def test_integral_float_shares(self):
        assert parse_position_update(b'{"ticker": "ABC", "shares": 3.0}').shares == 3

    @pytest.mark.parametrize("shares", [-1, 2.5, "3", True])
    def test_invalid_shares(self, shares):
        with pytest.raises(MalformedPayloadError):
            parse_position_update(orjson.dumps({"ticker": "ABC", "shares": shares}))

    def test_missing_shares(self):
        with pytest.raises(MissingFieldError):
            parse_position_update(b'{"ticker": "ABC"}')


class TestTextAndEncoding:
    """Test raw text decoding and outbound encoding."""

    def test_decode_text(self):
        assert decode_text("Error text".encode("utf-8")) == "Error text"
        assert decode_text("already text") == "already text"

    def test_decode_invalid_utf8(self):
        with pytest.raises(PayloadError):
            decode_text(b"\xff\xfe\xfa")

    def test_parse_json_accepts_str(self):
        assert parse_json_payload('{"a": 1}') == {"a": 1}

    def test_encode_trade_request(self):
        payload = encode_trade_request(TradeRequest(action=TradeAction.BUY, ticker="ABC", shares=3))

        assert orjson.loads(payload) == {"action": "Buy", "ticker": "ABC", "shares": 3}
