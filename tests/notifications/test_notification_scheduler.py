import threading
import unittest
from unittest.mock import patch

from notifications import (
    DesktopNotificationScheduler,
    NotificationError,
    NullNotificationScheduler,
)


class _NotifySpy:
    def __init__(self, error: Exception | None = None):
        self.calls: list[dict[str, object]] = []
        self.delivered = threading.Event()
        self._error = error

    def __call__(self, **kwargs) -> None:
        self.calls.append(kwargs)
        self.delivered.set()
        if self._error is not None:
            raise self._error


class DesktopNotificationSchedulerTests(unittest.TestCase):
    def test_scheduled_alert_fires_through_backend(self) -> None:
        spy = _NotifySpy()
        scheduler = DesktopNotificationScheduler(app_name="Focus", notify_fn=spy)

        handle = scheduler.schedule(0, "Break is over", "Time to focus.")

        self.assertTrue(spy.delivered.wait(2.0))
        self.assertEqual("Break is over", handle.title)
        self.assertEqual(
            {
                "title": "Break is over",
                "message": "Time to focus.",
                "app_name": "Focus",
                "timeout": 10,
            },
            spy.calls[0],
        )

    def test_cancel_all_prevents_delivery(self) -> None:
        spy = _NotifySpy()
        scheduler = DesktopNotificationScheduler(notify_fn=spy)

        scheduler.schedule(60, "a", "b")
        scheduler.schedule(120, "c", "d")
        self.assertEqual(2, scheduler.pending_count)
        scheduler.cancel_all()

        self.assertEqual(0, scheduler.pending_count)
        self.assertFalse(spy.delivered.wait(0.1))

    def test_missing_backend_is_reported_as_notification_error(self) -> None:
        scheduler = DesktopNotificationScheduler(notify_fn=_NotifySpy(NotImplementedError()))
        with self.assertRaises(NotificationError):
            scheduler.deliver("a", "b")

    def test_backend_failure_on_fire_is_logged_only(self) -> None:
        spy = _NotifySpy(PermissionError("denied"))
        scheduler = DesktopNotificationScheduler(notify_fn=spy)

        with self.assertLogs("notifications", level="WARNING"):
            scheduler.schedule(0, "a", "b")
            self.assertTrue(spy.delivered.wait(2.0))
            # Let the timer thread finish logging.
            for thread in threading.enumerate():
                if thread.name.startswith("notification-"):
                    thread.join(2.0)

    def test_defaults_to_plyer_backend(self) -> None:
        with patch("notifications.scheduler.notification") as plyer_notification:
            scheduler = DesktopNotificationScheduler(app_name="Focus")
            scheduler.deliver("Title", "Body")

        plyer_notification.notify.assert_called_once_with(
            title="Title",
            message="Body",
            app_name="Focus",
            timeout=10,
        )


class NullNotificationSchedulerTests(unittest.TestCase):
    def test_schedule_returns_handle_and_cancel_is_silent(self) -> None:
        scheduler = NullNotificationScheduler()
        first = scheduler.schedule(10, "a", "b")
        second = scheduler.schedule(10, "a", "b")
        scheduler.cancel_all()
        self.assertNotEqual(first.id, second.id)


if __name__ == "__main__":
    unittest.main()
