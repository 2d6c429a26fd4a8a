"""
Trade dialog state machine.

    CLOSED --open()--> OPEN --submit() ok--> CLOSED
                       OPEN --cancel()-----> CLOSED
                       OPEN --submit() invalid--> OPEN (error shown)

Submission is synchronous from the caller's point of view; delivery of the
request is fire-and-forget through the session controller.
"""

import re
from typing import TYPE_CHECKING, Any, Optional

from ..data.models import Position, TradeAction, TradeRequest
from ..errors import (
    DialogStateError,
    InsufficientShares,
    InvalidQuantity,
    TradeValidationError,
)
from ..logging.config import get_trade_logger, log_dialog_transition, log_validation_decision
from ..view.base import PortfolioView
from .models import DialogState, TradeDraft

if TYPE_CHECKING:
    from ..session import SessionController

trade_logger = get_trade_logger(__name__)

QUANTITY_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def coerce_quantity(value: Any) -> Optional[int]:
    """
    Interpret user input as a share count.

    Integers, integral floats and digit strings are accepted; anything else
    yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        match = QUANTITY_PATTERN.fullmatch(value.strip())
        if match:
            return int(match.group())
    return None


class TradeWorkflow:
    """Composes, validates and submits one trade at a time."""

    def __init__(
        self,
        controller: "SessionController",
        view: Optional[PortfolioView] = None
    ) -> None:
        self.logger = trade_logger
        self.controller = controller
        self.view = view or controller.view
        self._state = DialogState.CLOSED
        self._draft: Optional[TradeDraft] = None

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def draft(self) -> Optional[TradeDraft]:
        return self._draft

    @property
    def is_open(self) -> bool:
        return self._state == DialogState.OPEN

    @property
    def error_message(self) -> str:
        return self._draft.error_message if self._draft else ""

    @property
    def shares_requested(self) -> Any:
        return self._draft.shares_requested if self._draft else None

    @shares_requested.setter
    def shares_requested(self, value: Any) -> None:
        self._require_open("set_shares")
        self._draft.shares_requested = value

    @property
    def suppress_validation(self) -> bool:
        return self._draft.suppress_validation if self._draft else False

    @suppress_validation.setter
    def suppress_validation(self, value: bool) -> None:
        self._require_open("suppress_validation")
        self._draft.suppress_validation = bool(value)

    def open(self, action: TradeAction, position: Position) -> TradeDraft:
        """Open the dialog for a position with a fresh draft."""
        action = TradeAction(action)
        from_state = self._state

        self._draft = TradeDraft(action=action, position=position)
        self._state = DialogState.OPEN

        log_dialog_transition(
            self.logger,
            ticker=position.ticker,
            from_state=from_state.value,
            to_state=DialogState.OPEN.value,
            trigger="open",
            context={"action": action.value, "held_shares": position.shares}
        )
        self.view.on_trade_dialog_opened(action, position)
        return self._draft

    def show_buy(self, position: Position) -> TradeDraft:
        return self.open(TradeAction.BUY, position)

    def show_sell(self, position: Position) -> TradeDraft:
        return self.open(TradeAction.SELL, position)

    def validate(self) -> int:
        """
        Check the draft against the bound position's current share count.

        Returns:
            The requested share count as an integer

        Raises:
            InvalidQuantity: If the request is not a positive integer
            InsufficientShares: If a sale exceeds the shares currently held
        """
        draft = self._require_open("validate")
        ticker = draft.ticker

        shares = coerce_quantity(draft.shares_requested)
        if shares is None or shares < 1:
            log_validation_decision(
                self.logger, "quantity", False, ticker,
                reason="Requested shares is not a positive integer",
                context={"shares_requested": repr(draft.shares_requested)}
            )
            raise InvalidQuantity(ticker=ticker, shares_requested=draft.shares_requested)
        log_validation_decision(
            self.logger, "quantity", True, ticker,
            reason="Requested shares is a positive integer"
        )

        if draft.action == TradeAction.SELL:
            available = draft.position.shares
            if shares > available:
                log_validation_decision(
                    self.logger, "holdings", False, ticker,
                    reason="Sell quantity exceeds held shares",
                    context={"shares_requested": shares, "available": available}
                )
                raise InsufficientShares(
                    ticker=ticker, shares_requested=shares, available=available
                )
            log_validation_decision(
                self.logger, "holdings", True, ticker,
                reason="Sell quantity covered by held shares",
                context={"shares_requested": shares, "available": available}
            )

        return shares

    def submit(self) -> Optional[TradeRequest]:
        """
        Validate and send the draft, closing the dialog on success.

        With ``suppress_validation`` set, validation is skipped and the draft
        is sent as entered: the coerced count when the input is a whole number,
        otherwise its text.

        Returns:
            The request that was sent, or None when validation failed (the
            dialog stays open and ``error_message`` is set)

        Raises:
            DialogStateError: If the dialog is not open
        """
        draft = self._require_open("submit")

        if draft.suppress_validation:
            self.logger.warning(
                "Submitting trade without validation",
                ticker=draft.ticker,
                shares_requested=repr(draft.shares_requested)
            )
            coerced = coerce_quantity(draft.shares_requested)
            shares = coerced if coerced is not None else str(draft.shares_requested)
        else:
            try:
                shares = self.validate()
            except TradeValidationError as e:
                draft.error = e
                return None

        draft.error = None
        request = TradeRequest(action=draft.action, ticker=draft.ticker, shares=shares)
        self.controller.submit_trade(request)

        self._close("submit", context=request.to_payload())
        return request

    def cancel(self) -> None:
        """Close the dialog without side effects."""
        if self._state == DialogState.CLOSED:
            self.logger.debug("Cancel on closed trade dialog ignored")
            return
        self._close("cancel")

    def _close(self, trigger: str, context: Optional[dict] = None) -> None:
        ticker = self._draft.ticker if self._draft else None
        self._draft = None
        self._state = DialogState.CLOSED

        log_dialog_transition(
            self.logger,
            ticker=ticker,
            from_state=DialogState.OPEN.value,
            to_state=DialogState.CLOSED.value,
            trigger=trigger,
            context=context
        )
        self.view.on_trade_dialog_closed()

    def _require_open(self, operation: str) -> TradeDraft:
        if self._state != DialogState.OPEN or self._draft is None:
            raise DialogStateError(
                f"Cannot {operation} while trade dialog is {self._state.value}",
                current_state=self._state.value,
                attempted_transition=operation
            )
        return self._draft
