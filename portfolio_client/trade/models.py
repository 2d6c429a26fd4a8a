"""
Trade dialog data models.

The draft binds to a live Position by reference: validation reads the
position's share count at validation time, not at the time the dialog was
opened.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..data.models import Position, TradeAction
from ..errors import TradeValidationError


class DialogState(str, Enum):
    """Trade dialog states."""
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class TradeDraft:
    """In-progress trade being composed by the user."""

    action: TradeAction
    position: Position
    shares_requested: Any = 0                   # Raw user input until validated
    error: Optional[TradeValidationError] = None
    suppress_validation: bool = False

    @property
    def ticker(self) -> str:
        return self.position.ticker

    @property
    def error_message(self) -> str:
        """Text shown in the dialog, empty when there is no error."""
        return str(self.error) if self.error else ""
