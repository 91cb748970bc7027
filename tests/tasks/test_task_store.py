import unittest

from tasks import Task, TaskStore


class TaskStoreTests(unittest.TestCase):
    def test_add_assigns_fresh_ids_and_keeps_order(self) -> None:
        store = TaskStore()

        first = store.add_task("Write report", 3)
        second = store.add_task("Write report", 3)

        self.assertNotEqual(first.id, second.id)
        self.assertNotEqual(first, second)
        self.assertEqual((first, second), store.tasks)

    def test_add_then_delete_restores_prior_list(self) -> None:
        existing = (
            Task(name="Inbox zero", pomodoros_needed=1),
            Task(name="Review PR", pomodoros_needed=2),
        )
        store = TaskStore(existing)

        added = store.add_task("Write report", 3)
        removed = store.delete_task(added.id)

        self.assertTrue(removed)
        self.assertEqual(existing, store.tasks)

    def test_delete_preserves_order_of_remaining_tasks(self) -> None:
        store = TaskStore()
        a = store.add_task("a", 1)
        b = store.add_task("b", 2)
        c = store.add_task("c", 3)

        store.delete_task(b.id)

        self.assertEqual((a, c), store.tasks)

    def test_delete_unknown_id_is_a_no_op(self) -> None:
        changes: list[tuple[Task, ...]] = []
        store = TaskStore(on_change=changes.append)
        store.add_task("a", 1)

        removed = store.delete_task("missing")

        self.assertFalse(removed)
        self.assertEqual(1, len(store))
        self.assertEqual(1, len(changes))

    def test_store_performs_no_validation(self) -> None:
        store = TaskStore()
        for index in range(5):
            store.add_task("", 42 + index)
        self.assertEqual(5, len(store))

    def test_every_mutation_reports_the_new_list(self) -> None:
        changes: list[tuple[Task, ...]] = []
        store = TaskStore(on_change=changes.append)

        task = store.add_task("Plan sprint", 2)
        store.delete_task(task.id)

        self.assertEqual([(task,), ()], changes)

    def test_tasks_snapshot_is_immutable(self) -> None:
        store = TaskStore()
        store.add_task("a", 1)
        snapshot = store.tasks
        store.add_task("b", 1)
        self.assertEqual(1, len(snapshot))

    def test_get_finds_task_by_id(self) -> None:
        store = TaskStore()
        task = store.add_task("a", 1)
        self.assertIs(task, store.get(task.id))
        self.assertIsNone(store.get("nope"))


class TaskRecordTests(unittest.TestCase):
    def test_record_uses_wire_field_names(self) -> None:
        task = Task(name="Write report", pomodoros_needed=3, id="abc")
        self.assertEqual(
            {"id": "abc", "name": "Write report", "pomodorosNeeded": 3},
            task.to_record(),
        )

    def test_from_record_rejects_bad_shapes(self) -> None:
        bad_records = [
            [],
            {"name": "x", "pomodorosNeeded": 1},
            {"id": "a", "name": 5, "pomodorosNeeded": 1},
            {"id": "a", "name": "x", "pomodorosNeeded": "1"},
            {"id": "a", "name": "x", "pomodorosNeeded": True},
        ]
        for record in bad_records:
            with self.subTest(record=record):
                with self.assertRaises(ValueError):
                    Task.from_record(record)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
