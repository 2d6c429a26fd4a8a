"""
Payload parsers for converting raw transport frames to records.

Every inbound channel delivers UTF-8 JSON except the error channel, whose
body is plain text. Parsing failures raise PayloadError subclasses so the
session controller can drop the one message and keep dispatching.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Union

import orjson

from ..errors import MalformedPayloadError, MissingFieldError
from .models import PositionRecord, PositionUpdate, Quote, TradeRequest

RawPayload = Union[bytes, bytearray, memoryview, str]


def decode_text(raw_data: RawPayload) -> str:
    """Decode a raw frame body as UTF-8 text."""
    if isinstance(raw_data, str):
        return raw_data
    try:
        return bytes(raw_data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError(
            f"Payload is not valid UTF-8: {e}",
            raw_data=repr(bytes(raw_data)[:100]),
            expected_format="utf-8 text"
        )


def parse_json_payload(raw_data: RawPayload) -> Any:
    """
    Parse a raw JSON frame body.

    Raises:
        MalformedPayloadError: If the body is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedPayloadError(
            f"Invalid JSON: {e}",
            raw_data=str(raw_data)[:100],
            expected_format="json"
        )


def _require_fields(payload: Any, fields: tuple, kind: str) -> None:
    if not isinstance(payload, dict):
        raise MalformedPayloadError(
            f"{kind} payload must be an object, got {type(payload).__name__}",
            raw_data=str(payload)[:100],
            expected_format="json object"
        )
    missing = [name for name in fields if name not in payload]
    if missing:
        raise MissingFieldError(
            f"{kind} payload missing fields: {', '.join(missing)}",
            missing_fields=missing,
            context={"payload": payload}
        )


def _parse_ticker(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise MalformedPayloadError(
            f"Ticker must be a non-empty string, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="string"
        )
    return value


def _parse_price(value: Any) -> Decimal:
    # bool is an int subclass and never a price
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise MalformedPayloadError(
            f"Price must be numeric, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="decimal"
        )
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise MalformedPayloadError(
            f"Price must be numeric, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="decimal"
        )
    if not price.is_finite() or price < 0:
        raise MalformedPayloadError(
            f"Price must be a finite non-negative number, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="decimal"
        )
    return price


def _parse_shares(value: Any) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedPayloadError(
            f"Shares must be a non-negative integer, got {value!r}",
            raw_data=str(value)[:100],
            expected_format="integer"
        )
    return value


def parse_position_record(payload: Any) -> PositionRecord:
    """Parse one snapshot entry."""
    _require_fields(payload, ("ticker", "company", "price", "shares"), "Position")
    return PositionRecord(
        ticker=_parse_ticker(payload["ticker"]),
        company=str(payload["company"]),
        price=_parse_price(payload["price"]),
        shares=_parse_shares(payload["shares"]),
    )


def parse_snapshot(raw_data: RawPayload) -> list[PositionRecord]:
    """Parse the positions snapshot frame into records, in payload order."""
    payload = parse_json_payload(raw_data)
    if not isinstance(payload, list):
        raise MalformedPayloadError(
            f"Snapshot payload must be an array, got {type(payload).__name__}",
            raw_data=str(raw_data)[:100],
            expected_format="json array"
        )
    return [parse_position_record(entry) for entry in payload]


def parse_quote(raw_data: RawPayload) -> Quote:
    """Parse a price quote frame."""
    payload = parse_json_payload(raw_data)
    _require_fields(payload, ("ticker", "price"), "Quote")
    return Quote(
        ticker=_parse_ticker(payload["ticker"]),
        price=_parse_price(payload["price"]),
    )


def parse_position_update(raw_data: RawPayload) -> PositionUpdate:
    """Parse a position update frame."""
    payload = parse_json_payload(raw_data)
    _require_fields(payload, ("ticker", "shares"), "Position update")
    return PositionUpdate(
        ticker=_parse_ticker(payload["ticker"]),
        shares=_parse_shares(payload["shares"]),
    )


def encode_trade_request(request: TradeRequest) -> bytes:
    """Serialize a trade request for the outbound channel."""
    return orjson.dumps(request.to_payload())
