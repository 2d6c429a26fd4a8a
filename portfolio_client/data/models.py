"""
Canonical data models for the portfolio client.

Inbound records are immutable and created by the parsers from raw payloads.
``Position`` is the one mutable structure: it is owned by the PositionBook
and updated in place so that views and the trade dialog always read live
values.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union

from ..config.defaults import DisplayParams, SessionParams
from ..utils.formatting import format_money, format_percent, round_cents
from ..utils.time import to_epoch_ms

ZERO_CHANGE = Decimal("0.00")


class Direction(str, Enum):
    """Direction of the last price move."""
    UP = "up"
    DOWN = "down"


class TradeAction(str, Enum):
    """Trade request actions, valued as they go on the wire."""
    BUY = "Buy"
    SELL = "Sell"


@dataclass(frozen=True)
class Session:
    """Identity of one successful handshake. Discarded on disconnect."""
    identity: str
    routing_suffix: str

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any],
                     params: Optional[SessionParams] = None) -> "Session":
        """Build a session from handshake frame headers."""
        params = params or SessionParams()
        return cls(
            identity=str(headers.get(params.identity_header, "")),
            routing_suffix=str(headers.get(params.suffix_header, "")),
        )


@dataclass(frozen=True)
class PositionRecord:
    """One entry of the positions snapshot."""
    ticker: str
    company: str
    price: Decimal
    shares: int


@dataclass(frozen=True)
class Quote:
    """Broadcast price update for one ticker."""
    ticker: str
    price: Decimal


@dataclass(frozen=True)
class PositionUpdate:
    """Session-private absolute share count for one ticker."""
    ticker: str
    shares: int


@dataclass(frozen=True)
class PriceSample:
    """Time-series point handed to the chart collaborator."""
    timestamp: datetime
    price: Decimal

    @property
    def epoch_ms(self) -> int:
        """Timestamp in epoch milliseconds for chart x-axes."""
        return to_epoch_ms(self.timestamp)


@dataclass(frozen=True)
class TradeRequest:
    """Outbound trade request."""
    action: TradeAction
    ticker: str
    shares: Union[int, str]

    def to_payload(self) -> dict[str, Any]:
        """Wire representation of the request."""
        return {
            "action": self.action.value,
            "ticker": self.ticker,
            "shares": self.shares,
        }


@dataclass
class Position:
    """Live per-ticker position state."""

    ticker: str
    company: str
    price: Decimal
    shares: int

    # Derived from the last price move
    change_percent: Decimal = ZERO_CHANGE
    direction: Optional[Direction] = None

    display: DisplayParams = field(default_factory=DisplayParams, repr=False, compare=False)

    @classmethod
    def from_record(cls, record: PositionRecord,
                    display: Optional[DisplayParams] = None) -> "Position":
        """Create a position from a snapshot record, direction unset."""
        return cls(
            ticker=record.ticker,
            company=record.company,
            price=record.price,
            shares=record.shares,
            display=display or DisplayParams(),
        )

    @property
    def value(self) -> Decimal:
        """Market value of the position."""
        return self.price * self.shares

    @property
    def formatted_price(self) -> str:
        return format_money(self.price, self.display.currency_symbol,
                            self.display.decimal_places)

    @property
    def formatted_value(self) -> str:
        return format_money(self.value, self.display.currency_symbol,
                            self.display.decimal_places)

    @property
    def formatted_change(self) -> str:
        return format_percent(self.change_percent)

    def update_price(self, new_price: Decimal) -> None:
        """
        Apply a new price and derive direction and percent change.

        The delta is rounded to cents before its sign is taken so the arrow
        agrees with the displayed change; a zero delta counts as up. The
        change is measured against the price before this update.
        """
        delta = round_cents(new_price - self.price)
        if delta == 0:
            delta = abs(delta)  # no "-0.00"
        self.direction = Direction.DOWN if delta < 0 else Direction.UP

        if self.price == 0:
            self.change_percent = ZERO_CHANGE
        else:
            self.change_percent = round_cents(delta / self.price * 100)

        self.price = new_price

    def update_shares(self, shares: int) -> None:
        """Set the absolute share count."""
        self.shares = shares


@dataclass(frozen=True)
class PortfolioAggregates:
    """Totals over every position in the book, computed on read."""
    total_shares: int
    total_value: Decimal
    display: DisplayParams = field(default_factory=DisplayParams, repr=False, compare=False)

    @property
    def formatted_total_value(self) -> str:
        return format_money(self.total_value, self.display.currency_symbol,
                            self.display.decimal_places)
