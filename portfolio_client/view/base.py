"""Base class for the view/chart collaborator."""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..data.models import Position, PriceSample, TradeAction


class PortfolioView:
    """
    Receiver for observable side effects of the client core.

    Every callback is a no-op here; renderers override the ones they need.
    Callbacks must not feed back into core state synchronously.
    """

    def on_positions_loaded(self, positions: Sequence["Position"]) -> None:
        """Snapshot rows are available, in display order."""

    def on_quote(self, ticker: str, sample: "PriceSample") -> None:
        """A price sample for the ticker's time-series chart."""

    def on_position_changed(self, ticker: str, shares: int) -> None:
        """Held share count changed for a known ticker."""

    def on_notification(self, text: str) -> None:
        """A notification was pushed to the log."""

    def on_trade_dialog_opened(self, action: "TradeAction", position: "Position") -> None:
        """The trade dialog should be shown for the position."""

    def on_trade_dialog_closed(self) -> None:
        """The trade dialog should be hidden."""
