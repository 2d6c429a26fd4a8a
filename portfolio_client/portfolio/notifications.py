"""Bounded FIFO log of user-visible notifications."""

from collections import deque
from dataclasses import dataclass

import structlog

NOTIFICATION_CAPACITY = 5

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Notification:
    """One user-visible event line."""
    text: str


class NotificationLog:
    """Keeps the most recent notifications, oldest evicted first."""

    def __init__(self) -> None:
        self._entries: deque[Notification] = deque(maxlen=NOTIFICATION_CAPACITY)

    def push(self, text: str) -> Notification:
        """Append a notification at the tail, evicting from the head when full."""
        notification = Notification(text=text)
        self._entries.append(notification)
        logger.debug("Notification pushed", text=text, size=len(self._entries))
        return notification

    def all(self) -> list[Notification]:
        """Snapshot of the log, oldest first."""
        return list(self._entries)

    def texts(self) -> list[str]:
        return [entry.text for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
