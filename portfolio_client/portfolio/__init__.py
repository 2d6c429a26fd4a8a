"""
Portfolio state module.

The PositionBook holds per-ticker reconciled state and the NotificationLog
keeps the bounded record of user-visible events.
"""

from .book import PositionBook
from .notifications import NOTIFICATION_CAPACITY, NotificationLog

__all__ = ["PositionBook", "NotificationLog", "NOTIFICATION_CAPACITY"]
