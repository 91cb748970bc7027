import threading
import unittest

from persistence import (
    KEY_DAILY_COUNT,
    BackgroundWriter,
    InMemoryKeyValueStore,
    PersistenceGateway,
    StorageWriteError,
)


class BackgroundWriterTests(unittest.TestCase):
    def test_jobs_run_in_submission_order(self) -> None:
        writer = BackgroundWriter()
        seen: list[int] = []
        try:
            for index in range(20):
                writer.submit(lambda index=index: seen.append(index))
            writer.flush(timeout_seconds=5.0)
        finally:
            writer.shutdown()

        self.assertEqual(list(range(20)), seen)

    def test_submit_returns_before_job_finishes(self) -> None:
        writer = BackgroundWriter()
        release = threading.Event()
        done = threading.Event()

        def slow_job() -> None:
            release.wait(5.0)
            done.set()

        try:
            writer.submit(slow_job)
            self.assertFalse(done.is_set())
            release.set()
            writer.flush(timeout_seconds=5.0)
            self.assertTrue(done.is_set())
        finally:
            writer.shutdown()

    def test_failed_job_is_logged(self) -> None:
        writer = BackgroundWriter()

        def failing_job() -> None:
            raise StorageWriteError("disk full")

        try:
            with self.assertLogs("persistence", level="ERROR") as logs:
                writer.submit(failing_job, description="task save")
                writer.flush(timeout_seconds=5.0)
                writer.shutdown()
        finally:
            writer.shutdown()

        self.assertIn("task save", "\n".join(logs.output))

    def test_submit_after_shutdown_is_dropped(self) -> None:
        writer = BackgroundWriter()
        writer.shutdown()
        ran: list[bool] = []

        with self.assertLogs("persistence", level="WARNING"):
            writer.submit(lambda: ran.append(True))

        self.assertEqual([], ran)

    def test_gateway_saves_through_writer(self) -> None:
        store = InMemoryKeyValueStore()
        writer = BackgroundWriter()
        gateway = PersistenceGateway(store, writer=writer)
        try:
            gateway.save_daily_count(2)
            writer.flush(timeout_seconds=5.0)
        finally:
            writer.shutdown()

        self.assertEqual(2, store.get(KEY_DAILY_COUNT))


if __name__ == "__main__":
    unittest.main()
