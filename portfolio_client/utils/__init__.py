"""
Utility functions module.

Time helpers for chart samples and display formatting for prices, values
and percent changes.
"""

from .formatting import format_money, format_percent, round_cents
from .time import format_timestamp, now_utc, to_epoch_ms

__all__ = [
    "format_money",
    "format_percent",
    "round_cents",
    "format_timestamp",
    "now_utc",
    "to_epoch_ms",
]
