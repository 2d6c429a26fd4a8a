"""
Trade dialog module.

Draft composition, validation against live position state, and the
Closed → Open → Closed dialog state machine that submits trade requests.
"""

from .models import DialogState, TradeDraft
from .workflow import TradeWorkflow

__all__ = ["DialogState", "TradeDraft", "TradeWorkflow"]
