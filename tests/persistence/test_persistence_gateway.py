import datetime as dt
import json
import unittest

from persistence import (
    KEY_DAILY_COUNT,
    KEY_DARK_MODE,
    KEY_LAST_RESET_DATE,
    KEY_TASKS,
    InMemoryKeyValueStore,
    PersistenceGateway,
    StorageWriteError,
)
from tasks import Task


class _FixedClock:
    def __init__(self, now: dt.datetime):
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now


class _FailingStore(InMemoryKeyValueStore):
    def set(self, key, value) -> None:
        raise StorageWriteError("disk full")

    def set_many(self, values) -> None:
        raise StorageWriteError("disk full")


def _gateway(store, now: dt.datetime) -> PersistenceGateway:
    return PersistenceGateway(store, now_fn=_FixedClock(now))


class DailyCountTests(unittest.TestCase):
    def setUp(self) -> None:
        self.today = dt.datetime(2026, 3, 14, 9, 30)

    def test_absent_count_loads_as_zero(self) -> None:
        gateway = _gateway(InMemoryKeyValueStore(), self.today)
        self.assertEqual(0, gateway.load_daily_count())

    def test_same_day_count_is_returned_unchanged(self) -> None:
        store = InMemoryKeyValueStore(
            {
                KEY_DAILY_COUNT: 6,
                KEY_LAST_RESET_DATE: "2026-03-14T07:00:00",
            }
        )
        gateway = _gateway(store, self.today)

        self.assertEqual(6, gateway.load_daily_count())
        self.assertEqual("2026-03-14T07:00:00", store.get(KEY_LAST_RESET_DATE))

    def test_prior_day_count_resets_and_persists_zero(self) -> None:
        store = InMemoryKeyValueStore(
            {
                KEY_DAILY_COUNT: 6,
                KEY_LAST_RESET_DATE: "2026-03-13T23:59:59",
            }
        )
        gateway = _gateway(store, self.today)

        with self.assertLogs("persistence", level="INFO"):
            self.assertEqual(0, gateway.load_daily_count())
        self.assertEqual(0, store.get(KEY_DAILY_COUNT))
        self.assertEqual("2026-03-14T09:30:00", store.get(KEY_LAST_RESET_DATE))

    def test_unreadable_reset_date_counts_as_prior_day(self) -> None:
        store = InMemoryKeyValueStore({KEY_DAILY_COUNT: 4, KEY_LAST_RESET_DATE: "yesterday"})
        gateway = _gateway(store, self.today)

        with self.assertLogs("persistence", level="INFO"):
            self.assertEqual(0, gateway.load_daily_count())

    def test_malformed_count_loads_as_zero(self) -> None:
        store = InMemoryKeyValueStore({KEY_DAILY_COUNT: "many"})
        gateway = _gateway(store, self.today)
        with self.assertLogs("persistence", level="WARNING"):
            self.assertEqual(0, gateway.load_daily_count())

    def test_save_writes_count_and_timestamp_together(self) -> None:
        store = InMemoryKeyValueStore()
        gateway = _gateway(store, self.today)

        gateway.save_daily_count(3)

        self.assertEqual(3, store.get(KEY_DAILY_COUNT))
        self.assertEqual("2026-03-14T09:30:00", store.get(KEY_LAST_RESET_DATE))

    def test_save_then_load_next_day_resets(self) -> None:
        store = InMemoryKeyValueStore()
        clock = _FixedClock(self.today)
        gateway = PersistenceGateway(store, now_fn=clock)
        gateway.save_daily_count(5)

        clock.now = self.today + dt.timedelta(days=1)

        with self.assertLogs("persistence", level="INFO"):
            self.assertEqual(0, gateway.load_daily_count())

    def test_write_failures_are_logged_not_raised(self) -> None:
        gateway = _gateway(_FailingStore(), self.today)
        with self.assertLogs("persistence", level="ERROR"):
            gateway.save_daily_count(1)


class DarkModeTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        store = InMemoryKeyValueStore()
        gateway = PersistenceGateway(store)

        self.assertFalse(gateway.load_dark_mode())
        gateway.save_dark_mode(True)
        self.assertTrue(gateway.load_dark_mode())
        self.assertIs(True, store.get(KEY_DARK_MODE))

    def test_non_boolean_flag_reads_false(self) -> None:
        gateway = PersistenceGateway(InMemoryKeyValueStore({KEY_DARK_MODE: "yes"}))
        with self.assertLogs("persistence", level="WARNING"):
            self.assertFalse(gateway.load_dark_mode())


class TaskPersistenceTests(unittest.TestCase):
    def test_round_trip_preserves_order_and_ids(self) -> None:
        gateway = PersistenceGateway(InMemoryKeyValueStore())
        for tasks in (
            [],
            [Task(name="Write report", pomodoros_needed=3)],
            [
                Task(name="a", pomodoros_needed=1),
                Task(name="a", pomodoros_needed=1),
                Task(name="Review", pomodoros_needed=10),
            ],
        ):
            with self.subTest(count=len(tasks)):
                gateway.save_tasks(tasks)
                self.assertEqual(tasks, gateway.load_tasks())

    def test_saved_blob_is_json_record_array(self) -> None:
        store = InMemoryKeyValueStore()
        gateway = PersistenceGateway(store)
        task = Task(name="Write report", pomodoros_needed=3, id="fixed-id")

        gateway.save_tasks([task])

        self.assertEqual(
            [{"id": "fixed-id", "name": "Write report", "pomodorosNeeded": 3}],
            json.loads(store.get(KEY_TASKS)),
        )

    def test_absent_tasks_load_as_empty(self) -> None:
        gateway = PersistenceGateway(InMemoryKeyValueStore())
        self.assertEqual([], gateway.load_tasks())

    def test_corrupt_blobs_load_as_empty(self) -> None:
        blobs = [
            "{not json",
            json.dumps({"id": "a"}),
            json.dumps([{"id": "a", "name": "x"}]),
            42,
        ]
        for blob in blobs:
            with self.subTest(blob=blob):
                gateway = PersistenceGateway(InMemoryKeyValueStore({KEY_TASKS: blob}))
                with self.assertLogs("persistence", level="WARNING"):
                    self.assertEqual([], gateway.load_tasks())


if __name__ == "__main__":
    unittest.main()
