"""Tests for the bounded notification log."""

from portfolio_client.portfolio.notifications import (
    NOTIFICATION_CAPACITY,
    Notification,
    NotificationLog,
)


class TestNotificationLog:
    """Test NotificationLog class."""

    def test_capacity_is_five(self):
        assert NOTIFICATION_CAPACITY == 5

    def test_push_appends_in_order(self):
        log = NotificationLog()

        log.push("first")
        log.push("second")

        assert log.texts() == ["first", "second"]
        assert log.all() == [Notification("first"), Notification("second")]

    def test_seven_pushes_keep_last_five_oldest_first(self):
        log = NotificationLog()

        for i in range(7):
            log.push(f"event {i}")

        assert len(log) == 5
        assert log.texts() == ["event 2", "event 3", "event 4", "event 5", "event 6"]

    def test_no_deduplication(self):
        log = NotificationLog()

        log.push("same")
        log.push("same")

        assert log.texts() == ["same", "same"]

    def test_all_is_a_snapshot(self):
        log = NotificationLog()
        log.push("one")

        snapshot = log.all()
        log.push("two")

        assert [n.text for n in snapshot] == ["one"]
