"""
Position book: authoritative per-ticker state for one session.

Rows are created only by the snapshot. Quotes and position updates for
tickers the snapshot did not introduce are absorbed without effect, which
lets the book tolerate stale or out-of-order delivery across channels.
Each event handler writes a single field (quotes the price, updates the
share count), so cross-channel interleaving can leave derived values stale
until the next event but never corrupts a row.
"""

from decimal import Decimal
from typing import Iterable, Iterator, Optional

import structlog

from ..config.defaults import DisplayParams
from ..data.models import Position, PositionRecord, PortfolioAggregates, PriceSample
from ..errors import SnapshotError
from ..utils.time import now_utc
from ..view.base import PortfolioView

logger = structlog.get_logger(__name__)


class PositionBook:
    """Keyed collection of positions with derived aggregates."""

    def __init__(
        self,
        view: Optional[PortfolioView] = None,
        display: Optional[DisplayParams] = None
    ) -> None:
        self.logger = logger
        self.view = view or PortfolioView()
        self.display = display or DisplayParams()

        # dict preserves insertion order, which is the display order
        self._positions: dict[str, Position] = {}

    def load_snapshot(self, records: Iterable[PositionRecord]) -> list[Position]:
        """
        Register one position per snapshot record.

        Raises:
            SnapshotError: If the book already holds positions or the
                snapshot repeats a ticker
        """
        if self._positions:
            raise SnapshotError(
                "Snapshot loaded into a non-empty position book",
                context={"existing_tickers": list(self._positions)}
            )

        loaded: dict[str, Position] = {}
        for record in records:
            if record.ticker in loaded:
                raise SnapshotError(
                    f"Snapshot repeats ticker {record.ticker}",
                    ticker=record.ticker
                )
            loaded[record.ticker] = Position.from_record(record, self.display)

        self._positions = loaded

        self.logger.info(
            "Loaded position snapshot",
            position_count=len(loaded),
            tickers=list(loaded)
        )
        self.view.on_positions_loaded(list(loaded.values()))
        return list(loaded.values())

    def apply_quote(self, ticker: str, price: Decimal) -> Optional[PriceSample]:
        """Apply a price quote; unknown tickers are ignored."""
        position = self._positions.get(ticker)
        if position is None:
            self.logger.debug("Quote for unknown ticker absorbed", ticker=ticker)
            return None

        position.update_price(price)
        sample = PriceSample(timestamp=now_utc(), price=price)

        self.logger.debug(
            "Applied quote",
            ticker=ticker,
            price=str(price),
            change_percent=str(position.change_percent),
            direction=position.direction.value
        )
        self.view.on_quote(ticker, sample)
        return sample

    def apply_position_update(self, ticker: str, shares: int) -> bool:
        """Set the absolute share count; unknown tickers are ignored."""
        position = self._positions.get(ticker)
        if position is None:
            self.logger.debug("Position update for unknown ticker absorbed", ticker=ticker)
            return False

        previous_shares = position.shares
        position.update_shares(shares)

        self.logger.info(
            "Applied position update",
            ticker=ticker,
            previous_shares=previous_shares,
            shares=shares
        )
        self.view.on_position_changed(ticker, shares)
        return True

    def aggregates(self) -> PortfolioAggregates:
        """Totals over the current rows."""
        total_shares = 0
        total_value = Decimal("0")
        for position in self._positions.values():
            total_shares += position.shares
            total_value += position.value

        return PortfolioAggregates(
            total_shares=total_shares,
            total_value=total_value,
            display=self.display
        )

    def rows(self) -> "PositionRows":
        """Restartable view of the positions in snapshot order."""
        return PositionRows(self)

    def get(self, ticker: str) -> Optional[Position]:
        return self._positions.get(ticker)

    def reset(self) -> None:
        """Drop every row so a new session can load its own snapshot."""
        if self._positions:
            self.logger.info("Reset position book", dropped=len(self._positions))
        self._positions = {}

    def is_loaded(self) -> bool:
        return bool(self._positions)

    def __contains__(self, ticker: object) -> bool:
        return ticker in self._positions

    def __len__(self) -> int:
        return len(self._positions)


class PositionRows:
    """Lazy sequence of live positions; every iteration starts over."""

    def __init__(self, book: PositionBook) -> None:
        self._book = book

    def __iter__(self) -> Iterator[Position]:
        return iter(list(self._book._positions.values()))

    def __len__(self) -> int:
        return len(self._book)
